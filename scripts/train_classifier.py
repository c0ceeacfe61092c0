"""
Train the Naive Bayes spam classifier and write its artifacts.

This script is a convenience wrapper around
`sms_features.training.train_nb.train_and_evaluate_naive_bayes`, which:

- loads the configured dataset
- builds bag-of-words features and the vocabulary
- fits and evaluates the model on a held-out split
- writes metrics under experiments/results/
- saves the model and vocabulary when accuracy is high enough

Usage (from project root):

    python -m scripts.train_classifier
    # or
    python scripts/train_classifier.py --dataset path/to/SMSSpamCollection
"""

from __future__ import annotations

import argparse

from sms_features.training.train_nb import train_and_evaluate_naive_bayes
from sms_features.utils.training_utils import load_train_config, get_logger


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Train the Naive Bayes spam classifier."
    )
    parser.add_argument(
        "--data-config",
        type=str,
        default="config/data.yaml",
        help="Path to data config YAML (default: config/data.yaml).",
    )
    parser.add_argument(
        "--train-config",
        type=str,
        default="config/train.yaml",
        help="Path to train config YAML (default: config/train.yaml).",
    )
    parser.add_argument(
        "--dataset",
        type=str,
        default=None,
        help="Override dataset.path from the data config.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    train_cfg = load_train_config(args.train_config)
    logger = get_logger(
        name="train_classifier",
        config=train_cfg,
        log_file_suffix="train_classifier",
    )

    logger.info("=" * 80)
    logger.info("Configs: data=%s, train=%s", args.data_config, args.train_config)

    result = train_and_evaluate_naive_bayes(
        data_config_path=args.data_config,
        train_config_path=args.train_config,
        dataset_path=args.dataset,
    )

    logger.info(
        "Completed training: accuracy=%.4f, f1=%.4f, vocabulary=%d",
        result["accuracy"],
        result["f1"],
        result["vocabulary_size"],
    )


if __name__ == "__main__":
    main()
