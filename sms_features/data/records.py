"""
Immutable record and dataset types for the SMS pipeline.

The training path is a chain of stage transforms; each stage consumes
the previous value and returns a new one:

    RawDataset.lowercase()
        .without_punctuation()
        .tokenize()              -> Dataset
        .remove_stopwords(...)
        .to_training_input(...)  -> TrainingInput

Nothing is mutated in place, and labels stay aligned with their records
through every stage.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import FrozenSet, Iterable, NamedTuple, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from sms_features.exceptions import LabelError
from sms_features.features.bag_of_words import DEFAULT_DTYPE, encode_corpus
from sms_features.features.preprocessing import (
    lowercase,
    remove_stopwords,
    strip_punctuation,
    tokenize,
)
from sms_features.features.vocabulary import Vocabulary, build_vocabulary


# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------


class Label(enum.Enum):
    HAM = "ham"
    SPAM = "spam"

    @classmethod
    def from_str(cls, value: str, line_number: Optional[int] = None) -> "Label":
        """
        Parse a label field. Only the exact strings "ham" and "spam" are
        accepted; there is no case folding or trimming.
        """
        try:
            return cls(value)
        except ValueError:
            raise LabelError(
                f"Invalid label {value!r}; expected 'ham' or 'spam'.",
                line_number=line_number,
            ) from None

    @property
    def target(self) -> int:
        """Numeric training target: spam -> 1, ham -> 0."""
        return 1 if self is Label.SPAM else 0


def get_label_mapping() -> dict:
    """Mapping from label string to numeric target, e.g. {"ham": 0, "spam": 1}."""
    return {label.value: label.target for label in Label}


def encode_labels(labels: Iterable[Label], dtype=DEFAULT_DTYPE) -> np.ndarray:
    """
    Encode labels as a numeric target vector (spam -> 1, ham -> 0).
    """
    return np.asarray([label.target for label in labels], dtype=dtype)


# ---------------------------------------------------------------------------
# Raw records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RawRecord:
    label: Label
    text: str

    def lowercase(self) -> "RawRecord":
        return RawRecord(label=self.label, text=lowercase(self.text))

    def without_punctuation(self) -> "RawRecord":
        return RawRecord(label=self.label, text=strip_punctuation(self.text))


@dataclass(frozen=True)
class RawDataset:
    """Loaded records in source line order."""

    records: Tuple[RawRecord, ...]

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    def __getitem__(self, index: int) -> RawRecord:
        return self.records[index]

    @property
    def is_empty(self) -> bool:
        return len(self.records) == 0

    def lowercase(self) -> "RawDataset":
        return RawDataset(tuple(r.lowercase() for r in self.records))

    def without_punctuation(self) -> "RawDataset":
        return RawDataset(tuple(r.without_punctuation() for r in self.records))

    def tokenize(self) -> "Dataset":
        """Split every message on whitespace, keeping labels aligned."""
        return Dataset(
            labels=tuple(r.label for r in self.records),
            tokens=tuple(tuple(tokenize(r.text)) for r in self.records),
        )

    def to_frame(self) -> pd.DataFrame:
        """
        Return the records as a DataFrame with columns
        ["label", "text", "label_id"], one row per record.
        """
        return pd.DataFrame(
            {
                "label": [r.label.value for r in self.records],
                "text": [r.text for r in self.records],
                "label_id": [r.label.target for r in self.records],
            },
            columns=["label", "text", "label_id"],
        )


# ---------------------------------------------------------------------------
# Tokenized dataset
# ---------------------------------------------------------------------------


class TrainingInput(NamedTuple):
    """Training output handed to the classifier: X, y and the vocabulary."""

    features: np.ndarray
    labels: np.ndarray
    vocabulary: Vocabulary


@dataclass(frozen=True)
class Dataset:
    """Aligned labels and token sequences; labels[i] belongs to tokens[i]."""

    labels: Tuple[Label, ...]
    tokens: Tuple[Tuple[str, ...], ...]

    def __post_init__(self) -> None:
        if len(self.labels) != len(self.tokens):
            raise ValueError(
                f"Misaligned dataset: {len(self.labels)} labels vs "
                f"{len(self.tokens)} token sequences."
            )

    def __len__(self) -> int:
        return len(self.tokens)

    @property
    def is_empty(self) -> bool:
        return len(self.tokens) == 0

    @property
    def num_tokens(self) -> int:
        return sum(len(t) for t in self.tokens)

    def remove_stopwords(self, stopword_set: FrozenSet[str]) -> "Dataset":
        return Dataset(
            labels=self.labels,
            tokens=tuple(tuple(remove_stopwords(t, stopword_set)) for t in self.tokens),
        )

    def build_vocabulary(self) -> Vocabulary:
        return build_vocabulary(self.tokens)

    def to_training_input(
        self,
        dtype=DEFAULT_DTYPE,
        vocabulary: Optional[Vocabulary] = None,
        n_jobs: int = 1,
    ) -> TrainingInput:
        """
        Build the feature matrix, label vector and vocabulary.

        The vocabulary is built from this dataset unless one is passed in,
        e.g. to encode held-out data into an existing feature space.

        Parameters
        ----------
        dtype : numpy dtype
            Element type of the feature matrix and label vector.
        vocabulary : Optional[Vocabulary]
            Frozen vocabulary to encode against.
        n_jobs : int
            joblib workers for per-document encoding.

        Returns
        -------
        TrainingInput
            features of shape (len(self), len(vocabulary)), labels of
            shape (len(self),), and the vocabulary.
        """
        if vocabulary is None:
            vocabulary = self.build_vocabulary()
        features = encode_corpus(self.tokens, vocabulary, dtype=dtype, n_jobs=n_jobs)
        labels = encode_labels(self.labels, dtype=dtype)
        return TrainingInput(features=features, labels=labels, vocabulary=vocabulary)


def dataset_from_pairs(pairs: Sequence[Tuple[str, str]]) -> RawDataset:
    """
    Build a RawDataset from in-memory (label, text) string pairs.

    Raises
    ------
    LabelError
        If a label is not "ham" or "spam".
    """
    return RawDataset(
        tuple(
            RawRecord(label=Label.from_str(label, line_number=i), text=text)
            for i, (label, text) in enumerate(pairs, start=1)
        )
    )
