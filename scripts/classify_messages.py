"""
Classify messages with a trained model.

Reads messages from the command line, or one per line from stdin, and
prints one JSON object per message:

    {"sms": "WIN cash NOW!!!", "spam": true}

Usage (from project root, after scripts/train_classifier.py):

    python -m scripts.classify_messages "WIN cash NOW!!!"
    cat messages.txt | python -m scripts.classify_messages
"""

from __future__ import annotations

import argparse
import json
import sys

from sms_features.data.datasets import load_data_config
from sms_features.features.pipeline import resolve_stopword_set
from sms_features.models.spam_classifier import load_spam_classifier
from sms_features.utils.training_utils import load_train_config


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Classify SMS messages as ham/spam.")
    parser.add_argument("messages", nargs="*", help="Messages to classify (default: stdin).")
    parser.add_argument("--data-config", type=str, default="config/data.yaml")
    parser.add_argument("--train-config", type=str, default="config/train.yaml")
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    data_cfg = load_data_config(args.data_config)
    train_cfg = load_train_config(args.train_config)
    inference_cfg = data_cfg.get("inference", {}) or {}
    match_training = bool(inference_cfg.get("match_training_preprocessing", True))

    classifier = load_spam_classifier(
        artifacts_dir=train_cfg["paths"]["artifacts_dir"],
        models_dir=train_cfg["paths"]["models_dir"],
        match_training=match_training,
        stopword_set=resolve_stopword_set(data_cfg) if match_training else frozenset(),
    )

    messages = args.messages or (line.rstrip("\n") for line in sys.stdin)
    for message in messages:
        print(json.dumps(classifier.classify(message)))


if __name__ == "__main__":
    main()
