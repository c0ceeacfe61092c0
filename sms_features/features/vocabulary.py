"""
Vocabulary building and persistence for bag-of-words features.

The vocabulary maps each distinct token to a column index of the feature
matrix. Indices are assigned in first-occurrence order while scanning the
corpus record by record, token by token, so the same corpus always yields
the same mapping. A fitted model's coefficients are indexed by these
positions, which is why the vocabulary is read-only once built and is
never extended at inference time.

The exchange format is a JSON object mapping token -> index. Key order in
the file does not matter, only the index values do.
"""

from __future__ import annotations

import json
import os
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping, Optional, Sequence

from sms_features.utils.training_utils import ensure_dir_exists


DEFAULT_VOCAB_FILENAME = "vocabulary.json"


class Vocabulary(Mapping[str, int]):
    """
    Frozen token -> index mapping with dense indices in [0, len).

    Behaves like a read-only dict. Use build_vocabulary() or
    Vocabulary.from_json() to construct one.
    """

    __slots__ = ("_token_to_id",)

    def __init__(self, token_to_id: Mapping[str, int]) -> None:
        _check_dense_indices(token_to_id)
        self._token_to_id = MappingProxyType(dict(token_to_id))

    def __getitem__(self, token: str) -> int:
        return self._token_to_id[token]

    def __iter__(self) -> Iterator[str]:
        return iter(self._token_to_id)

    def __len__(self) -> int:
        return len(self._token_to_id)

    def __repr__(self) -> str:
        return f"Vocabulary(size={len(self)})"

    def __reduce__(self):
        # mappingproxy cannot be pickled; rebuild from a plain dict.
        return (self.__class__, (dict(self._token_to_id),))

    @property
    def size(self) -> int:
        return len(self._token_to_id)

    def tokens(self) -> Sequence[str]:
        """Tokens ordered by index (column order of the feature matrix)."""
        ordered = [""] * len(self)
        for token, idx in self._token_to_id.items():
            ordered[idx] = token
        return tuple(ordered)

    def to_json(self) -> Dict[str, int]:
        """
        Serialize the vocabulary to a JSON-serializable dictionary.
        """
        return dict(self._token_to_id)

    @classmethod
    def from_json(cls, data: Mapping[str, int]) -> "Vocabulary":
        """
        Construct a Vocabulary from a token -> index mapping as produced
        by to_json(). Index values must form a dense range.
        """
        return cls({str(tok): idx for tok, idx in data.items()})


def _check_dense_indices(token_to_id: Mapping[str, int]) -> None:
    """
    Validate that the indices of a mapping are exactly 0..n-1.

    Raises
    ------
    ValueError
        If an index is duplicated, negative or out of range.
    """
    n = len(token_to_id)
    seen = set()
    for token, idx in token_to_id.items():
        if isinstance(idx, bool) or not isinstance(idx, int):
            raise ValueError(f"Index for token {token!r} is not an integer: {idx!r}")
        if idx < 0 or idx >= n:
            raise ValueError(
                f"Index {idx} for token {token!r} is outside the range [0, {n})."
            )
        if idx in seen:
            raise ValueError(f"Duplicate vocabulary index: {idx}")
        seen.add(idx)


def build_vocabulary(token_sequences: Iterable[Iterable[str]]) -> Vocabulary:
    """
    Build a vocabulary from a corpus of token sequences.

    Tokens get increasing indices starting at 0 in the order they are
    first seen; repeated tokens keep their first index. No sorting or
    frequency cut-off is applied.

    Parameters
    ----------
    token_sequences : Iterable[Iterable[str]]
        One token sequence per record, in dataset row order.

    Returns
    -------
    Vocabulary
        Frozen vocabulary.
    """
    token_to_id: Dict[str, int] = {}
    next_id = 0
    for tokens in token_sequences:
        for token in tokens:
            if token not in token_to_id:
                token_to_id[token] = next_id
                next_id += 1
    return Vocabulary(token_to_id)


def save_vocabulary(
    vocab: Vocabulary,
    artifacts_dir: str,
    filename: str = DEFAULT_VOCAB_FILENAME,
) -> str:
    """
    Save the vocabulary to a JSON file.

    Parameters
    ----------
    vocab : Vocabulary
        Vocabulary instance to save.
    artifacts_dir : str
        Directory where the vocabulary is stored.
    filename : str
        File name for the JSON file.

    Returns
    -------
    str
        Path of the written file.
    """
    ensure_dir_exists(artifacts_dir)
    path = os.path.join(artifacts_dir, filename)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(vocab.to_json(), f, ensure_ascii=False)
    return path


def load_vocabulary(
    artifacts_dir: Optional[str] = None,
    filename: str = DEFAULT_VOCAB_FILENAME,
    path: Optional[str] = None,
) -> Vocabulary:
    """
    Load a vocabulary previously written by save_vocabulary().

    Either `path` or `artifacts_dir` must be given.

    Raises
    ------
    FileNotFoundError
        If the vocabulary file does not exist.
    ValueError
        If the file does not hold a valid dense token -> index mapping.
    """
    if path is None:
        if artifacts_dir is None:
            raise ValueError("Either artifacts_dir or path must be provided.")
        path = os.path.join(artifacts_dir, filename)

    if not os.path.exists(path):
        raise FileNotFoundError(f"Vocabulary not found at: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Vocabulary file must contain a JSON object: {path}")

    return Vocabulary.from_json(data)
