"""
Tests for the text preprocessing helpers.

These tests validate that:

- lowercasing and punctuation stripping are pure and keep whitespace
- tokenization drops empty fragments and keeps order
- stopword removal is exact, case-sensitive and order-preserving
- the NLTK stopword set is loaded once and is immutable

NLTK-dependent tests are skipped when the stopwords corpus is missing.
"""

from __future__ import annotations

from types import SimpleNamespace

import pytest
from nltk.corpus import stopwords as nltk_stopwords

import sms_features.features.preprocessing as preprocessing
from sms_features.features.preprocessing import (
    get_stopword_set,
    lowercase,
    preprocess_text_to_tokens,
    remove_stopwords,
    strip_punctuation,
    tokenize,
)


def _nltk_stopwords_available() -> bool:
    try:
        nltk_stopwords.words("english")
    except LookupError:
        return False
    return True


requires_nltk_stopwords = pytest.mark.skipif(
    not _nltk_stopwords_available(),
    reason="NLTK stopwords corpus not installed.",
)


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------


def test_lowercase():
    assert lowercase("WIN Cash NOW") == "win cash now"


def test_strip_punctuation_deletes_ascii_punctuation_only():
    assert strip_punctuation("Hello, World!!") == "Hello World"
    assert strip_punctuation("don't") == "dont"
    assert strip_punctuation("£1000 «prize»") == "£1000 «prize»"


def test_strip_punctuation_keeps_whitespace_runs():
    assert strip_punctuation("a ,  b\t.c") == "a   b\tc"


def test_strip_punctuation_all_punctuation():
    assert strip_punctuation("!?...,;:") == ""


# ---------------------------------------------------------------------------
# Tokenization
# ---------------------------------------------------------------------------


def test_tokenize_splits_on_whitespace_runs():
    assert tokenize("  hello   world\tagain\n") == ["hello", "world", "again"]


@pytest.mark.parametrize("text", ["", "   ", "\t\n"])
def test_tokenize_empty(text):
    assert tokenize(text) == []


def test_tokenize_splits_on_unicode_whitespace():
    assert tokenize("win\u00a0cash\u2003prize\u3000now") == ["win", "cash", "prize", "now"]


def test_tokenize_keeps_separator_controls_inside_tokens():
    assert tokenize("win\x1fcash \x1c") == ["win\x1fcash", "\x1c"]


# ---------------------------------------------------------------------------
# Stopwords
# ---------------------------------------------------------------------------


def test_remove_stopwords_preserves_order():
    tokens = ["win", "the", "cash", "now", "the"]
    assert remove_stopwords(tokens, frozenset({"the", "now"})) == ["win", "cash"]


def test_remove_stopwords_is_case_sensitive():
    assert remove_stopwords(["The", "the"], frozenset({"the"})) == ["The"]


def test_remove_stopwords_does_not_mutate_input():
    tokens = ["a", "b"]
    remove_stopwords(tokens, frozenset({"a"}))
    assert tokens == ["a", "b"]


@requires_nltk_stopwords
def test_get_stopword_set_english():
    stops = get_stopword_set("english")
    assert isinstance(stops, frozenset)
    assert {"the", "and", "now"} <= stops
    assert "cash" not in stops


@requires_nltk_stopwords
def test_get_stopword_set_is_cached():
    assert get_stopword_set("english") is get_stopword_set("english")


@pytest.fixture
def fresh_stopword_cache():
    get_stopword_set.cache_clear()
    yield
    get_stopword_set.cache_clear()


def test_get_stopword_set_downloads_missing_corpus(monkeypatch, fresh_stopword_cache):
    calls = {"words": 0, "download": []}

    def fake_words(lang):
        calls["words"] += 1
        if calls["words"] == 1:
            raise LookupError("Resource stopwords not found.")
        return ["the", "and", "the"]

    monkeypatch.setattr(preprocessing, "nltk_stopwords", SimpleNamespace(words=fake_words))
    monkeypatch.setattr(
        preprocessing.nltk, "download", lambda name, quiet=False: calls["download"].append(name)
    )

    stops = get_stopword_set("english")

    assert stops == frozenset({"the", "and"})
    assert calls["download"] == ["stopwords"]
    assert calls["words"] == 2


def test_get_stopword_set_propagates_persistent_lookup_error(monkeypatch, fresh_stopword_cache):
    downloads = []

    def missing_words(lang):
        raise LookupError("Resource stopwords not found.")

    monkeypatch.setattr(preprocessing, "nltk_stopwords", SimpleNamespace(words=missing_words))
    monkeypatch.setattr(
        preprocessing.nltk, "download", lambda name, quiet=False: downloads.append(name)
    )

    with pytest.raises(LookupError):
        get_stopword_set("english")
    assert downloads == ["stopwords"]


# ---------------------------------------------------------------------------
# Composite
# ---------------------------------------------------------------------------


def test_preprocess_text_to_tokens_full_chain():
    tokens = preprocess_text_to_tokens("WIN cash NOW!!!", stopword_set=frozenset({"now"}))
    assert tokens == ["win", "cash"]


def test_preprocess_text_to_tokens_without_lowercase():
    tokens = preprocess_text_to_tokens("WIN cash!", lowercase_text=False)
    assert tokens == ["WIN", "cash"]
