"""
Evaluation metrics for the spam classifier.

Computes accuracy, precision, recall, F1 and the confusion matrix for a
ham (0) / spam (1) prediction, and enforces the minimum accuracy a
trained model must reach before its artifacts are written.
"""

from __future__ import annotations

from typing import Any, Dict, Sequence, Union

import numpy as np
from sklearn.metrics import (
    accuracy_score,
    confusion_matrix,
    precision_recall_fscore_support,
)

from sms_features.exceptions import ModelQualityError


ArrayLike = Union[Sequence[int], np.ndarray]

# ham, spam
BINARY_LABELS = (0, 1)


def compute_classification_metrics(
    y_true: ArrayLike,
    y_pred: ArrayLike,
) -> Dict[str, Any]:
    """
    Compute binary classification metrics with spam (1) as positive class.

    Parameters
    ----------
    y_true : ArrayLike
        Ground-truth targets.
    y_pred : ArrayLike
        Predicted targets, same shape as y_true.

    Returns
    -------
    Dict[str, Any]
        Keys "accuracy", "precision", "recall", "f1" (floats) and
        "confusion_matrix" (2x2 nested list, rows = true ham/spam).
    """
    y_true_arr = np.asarray(y_true)
    y_pred_arr = np.asarray(y_pred)

    prec, rec, f1, _ = precision_recall_fscore_support(
        y_true_arr,
        y_pred_arr,
        average="binary",
        pos_label=1,
        zero_division=0,
    )
    cm = confusion_matrix(y_true_arr, y_pred_arr, labels=list(BINARY_LABELS))

    return {
        "accuracy": float(accuracy_score(y_true_arr, y_pred_arr)),
        "precision": float(prec),
        "recall": float(rec),
        "f1": float(f1),
        "confusion_matrix": cm.tolist(),
    }


def check_min_accuracy(metrics: Dict[str, Any], min_accuracy: float) -> None:
    """
    Raise ModelQualityError if metrics["accuracy"] is below min_accuracy.
    """
    accuracy = float(metrics["accuracy"])
    if accuracy < min_accuracy:
        raise ModelQualityError(
            f"Model accuracy {accuracy:.4f} is below the required {min_accuracy:.4f}."
        )
