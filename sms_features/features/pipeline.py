"""
End-to-end feature pipeline.

This module wires the loader, the preprocessing stages, the vocabulary
builder and the bag-of-words encoder into the two public entry points:

- create_training_input(): source file -> (X, y, vocabulary)
- encode_message_from_config(): raw message -> feature vector

Both have a config-driven variant that reads the "preprocessing",
"features" and "inference" sections of config/data.yaml.
"""

from __future__ import annotations

from typing import Any, Dict, FrozenSet, Optional

import numpy as np

from sms_features.data.datasets import (
    DEFAULT_DATA_CONFIG_PATH,
    load_data_config,
    load_sms_dataset,
    read_raw_dataset,
)
from sms_features.data.records import Dataset, RawDataset, TrainingInput
from sms_features.features.bag_of_words import DEFAULT_DTYPE, encode_message
from sms_features.features.preprocessing import (
    DEFAULT_STOPWORD_LANGUAGE,
    get_stopword_set,
)
from sms_features.features.vocabulary import Vocabulary


# ---------------------------------------------------------------------------
# Config helpers
# ---------------------------------------------------------------------------


def _get_preprocessing_cfg(cfg: Dict[str, Any]) -> Dict[str, Any]:
    return cfg.get("preprocessing", {}) or {}


def resolve_stopword_set(cfg: Dict[str, Any]) -> FrozenSet[str]:
    """
    Return the stopword set configured under preprocessing.stopwords.

    An empty set is returned when stopword removal is disabled.
    """
    sw_cfg = _get_preprocessing_cfg(cfg).get("stopwords", {}) or {}
    if not bool(sw_cfg.get("enabled", True)):
        return frozenset()
    return get_stopword_set(sw_cfg.get("language", DEFAULT_STOPWORD_LANGUAGE))


def resolve_dtype(cfg: Dict[str, Any]):
    """Feature element type from features.dtype (default int64)."""
    features_cfg = cfg.get("features", {}) or {}
    return np.dtype(features_cfg.get("dtype", DEFAULT_DTYPE))


# ---------------------------------------------------------------------------
# Training path
# ---------------------------------------------------------------------------


def preprocess_dataset(
    raw: RawDataset,
    stopword_set: FrozenSet[str],
    lowercase: bool = True,
    remove_punctuation: bool = True,
) -> Dataset:
    """
    Run the preprocessing stages over a loaded dataset.

    Parameters
    ----------
    raw : RawDataset
        Loaded records.
    stopword_set : FrozenSet[str]
        Stopwords to remove; empty disables filtering.
    lowercase : bool
        Lowercase messages first if True.
    remove_punctuation : bool
        Strip ASCII punctuation if True.

    Returns
    -------
    Dataset
        Tokenized, filtered dataset aligned with `raw`.
    """
    if lowercase:
        raw = raw.lowercase()
    if remove_punctuation:
        raw = raw.without_punctuation()
    dataset = raw.tokenize()
    if stopword_set:
        dataset = dataset.remove_stopwords(stopword_set)
    return dataset


def create_training_input(
    path: str,
    stopword_set: Optional[FrozenSet[str]] = None,
    dtype=DEFAULT_DTYPE,
    encoding: str = "utf-8",
    n_jobs: int = 1,
) -> TrainingInput:
    """
    Load a source file and produce the training matrix, labels and vocabulary.

    Runs: load -> lowercase -> strip punctuation -> tokenize -> remove
    stopwords -> build vocabulary -> encode.

    Parameters
    ----------
    path : str
        Path to the tab-separated source.
    stopword_set : Optional[FrozenSet[str]]
        Stopwords to remove. Defaults to the NLTK English list.
    dtype : numpy dtype
        Element type of features and labels.
    encoding : str
        Source text encoding.
    n_jobs : int
        joblib workers for document encoding.

    Returns
    -------
    TrainingInput
        (features, labels, vocabulary)
    """
    if stopword_set is None:
        stopword_set = get_stopword_set(DEFAULT_STOPWORD_LANGUAGE)
    raw = read_raw_dataset(path, encoding=encoding)
    dataset = preprocess_dataset(raw, stopword_set)
    return dataset.to_training_input(dtype=dtype, n_jobs=n_jobs)


def create_training_input_from_config(
    config_path: str = DEFAULT_DATA_CONFIG_PATH,
    path: Optional[str] = None,
) -> TrainingInput:
    """
    Config-driven variant of create_training_input().

    Parameters
    ----------
    config_path : str
        Path to the data YAML configuration.
    path : Optional[str]
        Overrides dataset.path from the configuration.

    Returns
    -------
    TrainingInput
        (features, labels, vocabulary)
    """
    cfg = load_data_config(config_path)
    pre_cfg = _get_preprocessing_cfg(cfg)
    features_cfg = cfg.get("features", {}) or {}

    raw = load_sms_dataset(config_path=config_path, path=path)
    dataset = preprocess_dataset(
        raw,
        stopword_set=resolve_stopword_set(cfg),
        lowercase=bool(pre_cfg.get("lowercase", True)),
        remove_punctuation=bool(pre_cfg.get("remove_punctuation", True)),
    )
    return dataset.to_training_input(
        dtype=resolve_dtype(cfg),
        n_jobs=int(features_cfg.get("n_jobs", 1)),
    )


# ---------------------------------------------------------------------------
# Inference path
# ---------------------------------------------------------------------------


def encode_message_from_config(
    raw_text: str,
    vocabulary: Vocabulary,
    config_path: str = DEFAULT_DATA_CONFIG_PATH,
) -> np.ndarray:
    """
    Encode one raw message using the inference settings in config/data.yaml.

    inference.match_training_preprocessing (default True) selects between
    the training-equivalent chain and the legacy punctuation-only path.
    """
    cfg = load_data_config(config_path)
    inference_cfg = cfg.get("inference", {}) or {}
    match_training = bool(inference_cfg.get("match_training_preprocessing", True))

    stopword_set = resolve_stopword_set(cfg) if match_training else frozenset()
    return encode_message(
        raw_text,
        vocabulary,
        match_training=match_training,
        stopword_set=stopword_set,
        dtype=resolve_dtype(cfg),
    )
