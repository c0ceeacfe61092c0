"""
Train/test splitting for the encoded feature matrix.

The split itself is delegated to scikit-learn's train_test_split. The
defaults hold out 70% of the rows for testing, without shuffling, with
seed 10 (the seed only matters when shuffling is enabled).
"""

from __future__ import annotations

from typing import Any, Dict, Tuple

import numpy as np
from sklearn.model_selection import train_test_split


def train_test_split_arrays(
    features: np.ndarray,
    labels: np.ndarray,
    split_cfg: Dict[str, Any],
) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Split a feature matrix and its label vector into train and test parts.

    Parameters
    ----------
    features : np.ndarray
        Feature matrix, one row per record.
    labels : np.ndarray
        Label vector aligned with `features`.
    split_cfg : Dict[str, Any]
        The 'split' section of config/data.yaml.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]
        (X_train, X_test, y_train, y_test)

    Raises
    ------
    ValueError
        If features and labels differ in length, or stratification is
        requested together with shuffle=False.
    """
    if features.shape[0] != labels.shape[0]:
        raise ValueError(
            f"Features have {features.shape[0]} rows but labels have {labels.shape[0]}."
        )

    test_size = float(split_cfg.get("test_size", 0.7))
    shuffle = bool(split_cfg.get("shuffle", False))
    random_state = int(split_cfg.get("random_state", 10))
    stratify = labels if bool(split_cfg.get("stratify", False)) else None

    X_train, X_test, y_train, y_test = train_test_split(
        features,
        labels,
        test_size=test_size,
        shuffle=shuffle,
        random_state=random_state if shuffle else None,
        stratify=stratify,
    )
    return X_train, X_test, y_train, y_test
