"""
Build the bag-of-words training input and report its shape.

Runs load -> lowercase -> strip punctuation -> tokenize -> remove
stopwords -> build vocabulary -> encode, as configured in
config/data.yaml. Optionally writes the vocabulary JSON.

Usage (from project root):

    python -m scripts.build_features --vocab-out experiments/artifacts
"""

from __future__ import annotations

import argparse

from sms_features.features.pipeline import create_training_input_from_config
from sms_features.features.vocabulary import save_vocabulary
from sms_features.utils.training_utils import load_train_config, get_logger


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build bag-of-words features for the SMS dataset."
    )
    parser.add_argument("--data-config", type=str, default="config/data.yaml")
    parser.add_argument("--train-config", type=str, default="config/train.yaml")
    parser.add_argument("--dataset", type=str, default=None)
    parser.add_argument(
        "--vocab-out",
        type=str,
        default=None,
        help="Directory to write vocabulary.json into (optional).",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    train_cfg = load_train_config(args.train_config)
    logger = get_logger(name="build_features", config=train_cfg, log_file_suffix="features")

    X, y, vocabulary = create_training_input_from_config(
        config_path=args.data_config,
        path=args.dataset,
    )
    logger.info("Feature matrix: %s, labels: %s, vocabulary: %d", X.shape, y.shape, len(vocabulary))
    logger.info("Ham: %d, Spam: %d", int((y == 0).sum()), int((y == 1).sum()))

    if args.vocab_out:
        path = save_vocabulary(vocabulary, args.vocab_out)
        logger.info("Saved vocabulary to %s", path)


if __name__ == "__main__":
    main()
