"""
Training and evaluation pipeline for the Naive Bayes spam classifier.

This module reproduces the model build step by:

- loading the SMS Spam Collection source configured in config/data.yaml
- running the preprocessing chain and building the bag-of-words matrix
- splitting rows into train/test sets (70% held out, no shuffling)
- fitting a Multinomial Naive Bayes model on the training rows
- evaluating accuracy, precision, recall and F1 on the test rows
- refusing to write artifacts when accuracy is below evaluation.min_accuracy
- saving the model (joblib), the vocabulary (JSON) and the metrics

This module is callable both as a library function and as a script
(via `python -m sms_features.training.train_nb`).
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Optional

import pandas as pd

from sms_features.data.datasets import DEFAULT_DATA_CONFIG_PATH, load_data_config
from sms_features.data.split import train_test_split_arrays
from sms_features.evaluation.metrics import check_min_accuracy, compute_classification_metrics
from sms_features.features.pipeline import create_training_input_from_config
from sms_features.features.vocabulary import save_vocabulary
from sms_features.models.naive_bayes import build_naive_bayes
from sms_features.models.spam_classifier import DEFAULT_MODEL_FILENAME, save_model
from sms_features.utils.training_utils import (
    DEFAULT_TRAIN_CONFIG_PATH,
    ensure_dir_exists,
    get_logger,
    load_train_config,
)


MODEL_NAME = "multinomial_nb"


def train_and_evaluate_naive_bayes(
    data_config_path: str = DEFAULT_DATA_CONFIG_PATH,
    train_config_path: str = DEFAULT_TRAIN_CONFIG_PATH,
    dataset_path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    End-to-end pipeline to build features, train and evaluate the model.

    Parameters
    ----------
    data_config_path : str
        Path to config/data.yaml.
    train_config_path : str
        Path to config/train.yaml.
    dataset_path : Optional[str]
        Overrides dataset.path from the data config.

    Returns
    -------
    Dict[str, Any]
        Metrics for the held-out rows plus "model", "vocabulary_size",
        "n_train" and "n_test".

    Raises
    ------
    ModelQualityError
        If test accuracy is below evaluation.min_accuracy; no artifacts
        are written in that case.
    """
    data_cfg = load_data_config(data_config_path)
    train_cfg = load_train_config(train_config_path)

    logger = get_logger(name="train_nb", config=train_cfg, log_file_suffix="train")

    logger.info("Building training input from %s", dataset_path or data_cfg["dataset"].get("path"))
    X, y, vocabulary = create_training_input_from_config(
        config_path=data_config_path,
        path=dataset_path,
    )
    logger.info(
        "Feature matrix shape: %s, vocabulary size: %d, spam rows: %d",
        X.shape,
        len(vocabulary),
        int(y.sum()),
    )

    X_train, X_test, y_train, y_test = train_test_split_arrays(X, y, data_cfg["split"])
    logger.info("Train size: %d, Test size: %d", X_train.shape[0], X_test.shape[0])

    model = build_naive_bayes(train_cfg)
    model.fit(X_train, y_train)
    logger.info("Model '%s' trained.", MODEL_NAME)

    y_pred = model.predict(X_test)
    metrics = compute_classification_metrics(y_true=y_test, y_pred=y_pred)
    logger.info(
        "Metrics for %s - acc: %.4f, prec: %.4f, rec: %.4f, f1: %.4f",
        MODEL_NAME,
        metrics["accuracy"],
        metrics["precision"],
        metrics["recall"],
        metrics["f1"],
    )

    eval_cfg = train_cfg.get("evaluation", {}) or {}
    check_min_accuracy(metrics, float(eval_cfg.get("min_accuracy", 0.9)))

    result = {
        "model": MODEL_NAME,
        "vocabulary_size": len(vocabulary),
        "n_train": int(X_train.shape[0]),
        "n_test": int(X_test.shape[0]),
        **metrics,
    }

    paths_cfg = train_cfg["paths"]
    results_dir = paths_cfg["results_dir"]
    models_dir = paths_cfg["models_dir"]
    artifacts_dir = paths_cfg["artifacts_dir"]
    ensure_dir_exists(results_dir)
    ensure_dir_exists(models_dir)

    metrics_json_path = os.path.join(results_dir, f"metrics_{MODEL_NAME}.json")
    with open(metrics_json_path, "w", encoding="utf-8") as f:
        json.dump(result, f, indent=2)
    logger.info("Saved metrics JSON to %s", metrics_json_path)

    csv_path = os.path.join(results_dir, "nb_results.csv")
    pd.DataFrame([{k: v for k, v in result.items() if k != "confusion_matrix"}]).to_csv(
        csv_path, index=False
    )
    logger.info("Saved metrics CSV to %s", csv_path)

    save_cfg = train_cfg.get("save", {}) or {}
    if bool(save_cfg.get("save_models", True)):
        model_path = os.path.join(models_dir, DEFAULT_MODEL_FILENAME)
        overwrite = bool(save_cfg.get("overwrite_existing", False))
        if not os.path.exists(model_path) or overwrite:
            save_model(model, models_dir)
            vocab_path = save_vocabulary(vocabulary, artifacts_dir)
            logger.info("Saved model to %s and vocabulary to %s", model_path, vocab_path)
        else:
            logger.info(
                "Model file already exists and overwrite_existing is False: %s",
                model_path,
            )

    return result


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """
    Main entry point when running this module as a script.
    """
    _ = train_and_evaluate_naive_bayes()


if __name__ == "__main__":
    main()
