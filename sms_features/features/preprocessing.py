"""
Text preprocessing utilities for SMS spam detection.

This module implements the per-message preprocessing chain shared by the
training and inference paths:

- lowercasing
- ASCII punctuation removal
- whitespace tokenization
- stopword removal (NLTK stopword lists)

All helpers are pure functions over strings and token lists. Which steps
run for a given pipeline is decided by the callers in
sms_features.features.pipeline, driven by config/data.yaml.
"""

from __future__ import annotations

import re
import string
from functools import lru_cache
from typing import FrozenSet, Iterable, List

import nltk
from nltk.corpus import stopwords as nltk_stopwords


DEFAULT_STOPWORD_LANGUAGE = "english"

# Deletion table for the 32 ASCII punctuation characters.
_PUNCTUATION_TABLE = str.maketrans("", "", string.punctuation)

# Unicode White_Space. str.split() would also split on the \x1c-\x1f
# separator controls, which are not whitespace.
_WHITESPACE_RE = re.compile(r"[^\S\x1c-\x1f]+")


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------


def lowercase(text: str) -> str:
    """
    Case-fold a message text.

    Parameters
    ----------
    text : str
        Raw message text.

    Returns
    -------
    str
        Lowercased text.
    """
    return text.lower()


def strip_punctuation(text: str) -> str:
    """
    Remove every ASCII punctuation character from a text string.

    Unlike a replace-with-space approach, characters are deleted outright,
    so "don't" becomes "dont". All other characters keep their order,
    including runs of whitespace, which are not collapsed.

    Parameters
    ----------
    text : str
        Input text.

    Returns
    -------
    str
        Text without ASCII punctuation.
    """
    return text.translate(_PUNCTUATION_TABLE)


# ---------------------------------------------------------------------------
# Tokenization
# ---------------------------------------------------------------------------


def tokenize(text: str) -> List[str]:
    """
    Split text on runs of whitespace.

    Empty fragments are discarded, so empty or all-whitespace input
    yields an empty list. The information separators \\x1c-\\x1f are not
    treated as whitespace and stay inside tokens.

    Parameters
    ----------
    text : str
        Text string (assumed to be pre-cleaned).

    Returns
    -------
    List[str]
        Tokens in left-to-right order.
    """
    return [t for t in _WHITESPACE_RE.split(text) if t]


# ---------------------------------------------------------------------------
# Stopwords
# ---------------------------------------------------------------------------


@lru_cache(maxsize=None)
def get_stopword_set(language: str = DEFAULT_STOPWORD_LANGUAGE) -> FrozenSet[str]:
    """
    Return the NLTK stopword set for the given language.

    The set is built once per language and cached for the lifetime of the
    process. If the NLTK "stopwords" corpus is not installed yet, it is
    downloaded once and the lookup is retried.

    Parameters
    ----------
    language : str
        Language name, e.g. "english".

    Returns
    -------
    FrozenSet[str]
        Immutable set of stopwords.

    Raises
    ------
    LookupError
        If the corpus is still unavailable after the download attempt.
    """
    lang = (language or DEFAULT_STOPWORD_LANGUAGE).lower()
    try:
        words = nltk_stopwords.words(lang)
    except LookupError:
        nltk.download("stopwords", quiet=True)
        words = nltk_stopwords.words(lang)
    return frozenset(words)


def remove_stopwords(tokens: Iterable[str], stopword_set: FrozenSet[str]) -> List[str]:
    """
    Remove stopwords from a list of tokens.

    Matching is exact and case-sensitive; tokens are expected to be
    lowercased already.

    Parameters
    ----------
    tokens : Iterable[str]
        Input tokens.
    stopword_set : FrozenSet[str]
        Words to remove.

    Returns
    -------
    List[str]
        Surviving tokens, in their original relative order.
    """
    return [t for t in tokens if t not in stopword_set]


# ---------------------------------------------------------------------------
# Composite helpers
# ---------------------------------------------------------------------------


def preprocess_text_to_tokens(
    text: str,
    lowercase_text: bool = True,
    remove_punctuation: bool = True,
    stopword_set: FrozenSet[str] = frozenset(),
) -> List[str]:
    """
    Run the full preprocessing chain on one message and return tokens.

    The order of steps matches the batch training path: lowercase,
    strip punctuation, tokenize, remove stopwords.

    Parameters
    ----------
    text : str
        Raw message text.
    lowercase_text : bool
        Lowercase the text first if True.
    remove_punctuation : bool
        Strip ASCII punctuation if True.
    stopword_set : FrozenSet[str]
        Stopwords to drop; an empty set disables filtering.

    Returns
    -------
    List[str]
        Preprocessed tokens.
    """
    if lowercase_text:
        text = lowercase(text)
    if remove_punctuation:
        text = strip_punctuation(text)
    tokens = tokenize(text)
    if stopword_set:
        tokens = remove_stopwords(tokens, stopword_set)
    return tokens
