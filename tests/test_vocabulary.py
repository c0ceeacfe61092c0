"""
Tests for vocabulary building and the JSON exchange format.
"""

from __future__ import annotations

import json
import pickle

import pytest

from sms_features.features.vocabulary import (
    Vocabulary,
    build_vocabulary,
    load_vocabulary,
    save_vocabulary,
)


CORPUS = [
    ["hello", "world"],
    ["win", "cash", "hello"],
    [],
    ["cash", "prize", "world", "prize"],
]


def test_indices_follow_first_occurrence():
    vocab = build_vocabulary(CORPUS)
    assert dict(vocab) == {"hello": 0, "world": 1, "win": 2, "cash": 3, "prize": 4}
    assert vocab.tokens() == ("hello", "world", "win", "cash", "prize")


def test_indices_are_dense_and_unique():
    vocab = build_vocabulary(CORPUS)
    assert sorted(vocab.values()) == list(range(len(vocab)))
    assert len(vocab) <= sum(len(t) for t in CORPUS)


def test_build_is_deterministic():
    first = build_vocabulary(CORPUS)
    second = build_vocabulary([list(t) for t in CORPUS])
    assert list(first.items()) == list(second.items())


def test_empty_corpus_gives_empty_vocabulary():
    vocab = build_vocabulary([[], []])
    assert len(vocab) == 0
    assert vocab.size == 0


def test_vocabulary_is_read_only():
    vocab = build_vocabulary(CORPUS)
    with pytest.raises(TypeError):
        vocab["new"] = 5  # type: ignore[index]
    assert "new" not in vocab


def test_vocabulary_compares_equal_to_dict():
    assert build_vocabulary([["a", "b"]]) == {"a": 0, "b": 1}


@pytest.mark.parametrize(
    "mapping",
    [
        {"a": 0, "b": 0},
        {"a": 0, "b": 2},
        {"a": -1},
    ],
)
def test_from_json_rejects_non_dense_indices(mapping):
    with pytest.raises(ValueError):
        Vocabulary.from_json(mapping)


def test_non_integer_index_is_rejected():
    with pytest.raises(ValueError):
        Vocabulary({"a": "0"})  # type: ignore[dict-item]


@pytest.mark.parametrize("mapping", [{"win": "0"}, {"win": 0.0}, {"win": True}])
def test_from_json_does_not_coerce_indices(mapping):
    with pytest.raises(ValueError):
        Vocabulary.from_json(mapping)


def test_load_rejects_non_integer_indices(tmp_path):
    path = tmp_path / "vocab.json"
    path.write_text(json.dumps({"win": 1.9, "cash": 0}), encoding="utf-8")

    with pytest.raises(ValueError):
        load_vocabulary(path=str(path))


def test_save_and_load_keep_index_values(tmp_path):
    vocab = build_vocabulary(CORPUS)
    path = save_vocabulary(vocab, str(tmp_path))

    with open(path, "r", encoding="utf-8") as f:
        assert json.load(f) == vocab.to_json()

    loaded = load_vocabulary(str(tmp_path))
    for token, idx in vocab.items():
        assert loaded[token] == idx


def test_load_accepts_any_key_order(tmp_path):
    path = tmp_path / "vocab.json"
    path.write_text(json.dumps({"cash": 1, "win": 0}), encoding="utf-8")

    vocab = load_vocabulary(path=str(path))
    assert vocab.tokens() == ("win", "cash")


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_vocabulary(str(tmp_path))


def test_vocabulary_pickles():
    vocab = build_vocabulary(CORPUS)
    restored = pickle.loads(pickle.dumps(vocab))
    assert restored == vocab
    assert isinstance(restored, Vocabulary)

