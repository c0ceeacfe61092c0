"""
Smoke tests for the Naive Bayes training pipeline and the inference
wrapper.

A small synthetic dataset with clearly separated vocabularies is written
to tmp_path, so the tests need neither the real dataset nor the NLTK
corpus (stopword removal is disabled in the test config).
"""

from __future__ import annotations

import json
import os

import pytest
import yaml

from sms_features.exceptions import DecodeError, ModelQualityError
from sms_features.features.vocabulary import Vocabulary
from sms_features.models.spam_classifier import (
    DEFAULT_MODEL_FILENAME,
    SpamClassifier,
    load_spam_classifier,
)
from sms_features.training.train_nb import train_and_evaluate_naive_bayes
from sms_features.utils.training_utils import load_train_config


HAM_MESSAGES = [
    "See you at lunch tomorrow",
    "Are we still meeting at the cafe later?",
    "Mum says dinner is ready, come home",
    "Ok lar, joking with you",
]
SPAM_MESSAGES = [
    "WIN a FREE cash prize! Call now to claim",
    "Free entry: claim your cash prize, text WIN",
    "URGENT! You have won a free prize, call to claim",
    "Claim your FREE cash reward now, call today",
]


def _write_configs(tmp_path, min_accuracy: float = 0.9):
    lines = []
    for i in range(10):
        lines.append("ham\t" + HAM_MESSAGES[i % len(HAM_MESSAGES)])
        lines.append("spam\t" + SPAM_MESSAGES[i % len(SPAM_MESSAGES)])
    source_path = tmp_path / "SMSSpamCollection"
    source_path.write_text("\n".join(lines) + "\n", encoding="utf-8")

    data_cfg = {
        "dataset": {"path": str(source_path), "encoding": "utf-8"},
        "split": {"test_size": 0.7, "shuffle": False, "random_state": 10},
        "preprocessing": {
            "lowercase": True,
            "remove_punctuation": True,
            "stopwords": {"enabled": False},
        },
        "features": {"dtype": "int64", "n_jobs": 1},
    }
    train_cfg = {
        "paths": {
            "artifacts_dir": str(tmp_path / "artifacts"),
            "models_dir": str(tmp_path / "models"),
            "results_dir": str(tmp_path / "results"),
            "logs_dir": str(tmp_path / "logs"),
        },
        "logging": {"level": "INFO", "to_file": False},
        "model": {"alpha": 1.0},
        "evaluation": {"min_accuracy": min_accuracy},
        "save": {"save_models": True, "overwrite_existing": True},
    }

    data_path = tmp_path / "data.yaml"
    train_path = tmp_path / "train.yaml"
    data_path.write_text(yaml.safe_dump(data_cfg), encoding="utf-8")
    train_path.write_text(yaml.safe_dump(train_cfg), encoding="utf-8")
    return str(data_path), str(train_path), train_cfg


def test_train_writes_metrics_and_artifacts(tmp_path):
    data_path, train_path, train_cfg = _write_configs(tmp_path)

    result = train_and_evaluate_naive_bayes(
        data_config_path=data_path,
        train_config_path=train_path,
    )

    assert result["model"] == "multinomial_nb"
    assert result["n_train"] == 6
    assert result["n_test"] == 14
    assert result["accuracy"] >= 0.9
    assert len(result["confusion_matrix"]) == 2

    paths = train_cfg["paths"]
    assert os.path.exists(os.path.join(paths["results_dir"], "metrics_multinomial_nb.json"))
    assert os.path.exists(os.path.join(paths["results_dir"], "nb_results.csv"))
    assert os.path.exists(os.path.join(paths["models_dir"], DEFAULT_MODEL_FILENAME))
    assert os.path.exists(os.path.join(paths["artifacts_dir"], "vocabulary.json"))


def test_low_accuracy_aborts_before_saving(tmp_path):
    data_path, train_path, train_cfg = _write_configs(tmp_path, min_accuracy=1.01)

    with pytest.raises(ModelQualityError):
        train_and_evaluate_naive_bayes(
            data_config_path=data_path,
            train_config_path=train_path,
        )

    assert not os.path.exists(
        os.path.join(train_cfg["paths"]["models_dir"], DEFAULT_MODEL_FILENAME)
    )


def test_trained_classifier_scores_new_messages(tmp_path):
    data_path, train_path, train_cfg = _write_configs(tmp_path)
    train_and_evaluate_naive_bayes(data_config_path=data_path, train_config_path=train_path)

    classifier = load_spam_classifier(
        artifacts_dir=train_cfg["paths"]["artifacts_dir"],
        models_dir=train_cfg["paths"]["models_dir"],
    )

    assert classifier.classify("FREE cash prize, claim now!") == {
        "sms": "FREE cash prize, claim now!",
        "spam": True,
    }
    assert classifier.predict("see you at lunch") is False

    value = json.loads(classifier.classify_record_value("Call to claim your prize".encode("utf-8")))
    assert value == {"sms": "Call to claim your prize", "spam": True}

    with pytest.raises(DecodeError):
        classifier.classify_record_value(b"\xff\xfe")


class _AlwaysSpam:
    def predict(self, X):
        return [1] * len(X)


def test_record_value_keeps_non_ascii_text():
    classifier = SpamClassifier(model=_AlwaysSpam(), vocabulary=Vocabulary({"cash": 0}))

    value = classifier.classify_record_value("Claim your £1000 cash prize ✓".encode("utf-8"))

    assert "£1000" in value and "✓" in value
    assert "\\u00a3" not in value
    assert json.loads(value) == {"sms": "Claim your £1000 cash prize ✓", "spam": True}


def test_repo_train_config_sections():
    config_path = os.path.join(os.path.dirname(__file__), os.pardir, "config", "train.yaml")
    cfg = load_train_config(config_path)

    assert set(cfg) == {"paths", "logging", "model", "evaluation", "save"}


def test_load_spam_classifier_missing_model(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_spam_classifier(artifacts_dir=str(tmp_path))
