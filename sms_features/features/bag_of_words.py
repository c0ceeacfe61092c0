"""
Bag-of-words feature encoding.

Each document becomes a dense vector of length len(vocabulary) whose
element i counts the occurrences of vocabulary token i (term frequency,
not a 0/1 flag). Tokens missing from the vocabulary are dropped silently.

The same encoder serves both paths:
- encode_corpus() builds the training matrix row by row
- encode_message() turns one raw message into a vector at inference time
"""

from __future__ import annotations

from typing import FrozenSet, Iterable, List, Sequence

import numpy as np
from joblib import Parallel, delayed

from sms_features.features.preprocessing import (
    preprocess_text_to_tokens,
    strip_punctuation,
    tokenize,
)
from sms_features.features.vocabulary import Vocabulary


DEFAULT_DTYPE = np.int64


def bag_of_words(
    tokens: Iterable[str],
    vocabulary: Vocabulary,
    dtype=DEFAULT_DTYPE,
) -> np.ndarray:
    """
    Encode one token sequence as a term-frequency vector.

    Parameters
    ----------
    tokens : Iterable[str]
        Tokens of a single document.
    vocabulary : Vocabulary
        Frozen vocabulary defining the feature space.
    dtype : numpy dtype
        Element type of the returned vector.

    Returns
    -------
    np.ndarray
        Vector of shape (len(vocabulary),). All zeros when no token is
        known, including for an empty token sequence.
    """
    vector = np.zeros(len(vocabulary), dtype=dtype)
    for token in tokens:
        idx = vocabulary.get(token)
        if idx is not None:
            vector[idx] += 1
    return vector


def encode_corpus(
    token_sequences: Sequence[Sequence[str]],
    vocabulary: Vocabulary,
    dtype=DEFAULT_DTYPE,
    n_jobs: int = 1,
) -> np.ndarray:
    """
    Encode every document of a corpus into a feature matrix.

    Documents are independent of each other, so with n_jobs != 1 they are
    encoded in parallel via joblib. Row i always encodes document i.

    Parameters
    ----------
    token_sequences : Sequence[Sequence[str]]
        Token sequences in dataset row order.
    vocabulary : Vocabulary
        Frozen vocabulary.
    dtype : numpy dtype
        Element type of the matrix.
    n_jobs : int
        Number of joblib workers; 1 encodes sequentially.

    Returns
    -------
    np.ndarray
        Matrix of shape (len(token_sequences), len(vocabulary)).
    """
    n_rows = len(token_sequences)
    matrix = np.zeros((n_rows, len(vocabulary)), dtype=dtype)
    if n_rows == 0:
        return matrix

    if n_jobs == 1:
        rows: List[np.ndarray] = [
            bag_of_words(tokens, vocabulary, dtype=dtype) for tokens in token_sequences
        ]
    else:
        rows = Parallel(n_jobs=n_jobs)(
            delayed(bag_of_words)(list(tokens), vocabulary, dtype)
            for tokens in token_sequences
        )

    for i, row in enumerate(rows):
        matrix[i] = row
    return matrix


def encode_message(
    raw_text: str,
    vocabulary: Vocabulary,
    match_training: bool = True,
    stopword_set: FrozenSet[str] = frozenset(),
    dtype=DEFAULT_DTYPE,
) -> np.ndarray:
    """
    Encode a single raw message for inference.

    With match_training=True the text goes through the same chain as the
    training corpus (lowercase, strip punctuation, tokenize, optional
    stopword removal). With match_training=False only punctuation is
    stripped before tokenizing; uppercase tokens then miss lowercase
    vocabulary entries. That mode exists for artifacts that were scored
    with the legacy inference behavior.

    Stopword removal never changes the result as long as the vocabulary
    was built with the same stopword set, since stopwords have no index.

    Parameters
    ----------
    raw_text : str
        Raw message text.
    vocabulary : Vocabulary
        Frozen vocabulary from training.
    match_training : bool
        Apply the full training preprocessing if True.
    stopword_set : FrozenSet[str]
        Stopwords to drop when match_training is True.
    dtype : numpy dtype
        Element type of the returned vector.

    Returns
    -------
    np.ndarray
        Feature vector of shape (len(vocabulary),).
    """
    if match_training:
        tokens = preprocess_text_to_tokens(raw_text, stopword_set=stopword_set)
    else:
        tokens = tokenize(strip_punctuation(raw_text))
    return bag_of_words(tokens, vocabulary, dtype=dtype)
