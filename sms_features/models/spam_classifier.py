"""
Inference wrapper around a fitted classifier and its vocabulary.

A SpamClassifier pairs a fitted scikit-learn estimator with the frozen
vocabulary it was trained on, and scores one message at a time. The
output mirrors the stream-processing record format:

    {"sms": "<original text>", "spam": true}

Nothing here mutates the model or the vocabulary, so one instance can
serve concurrent callers.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional

import joblib

from sms_features.exceptions import DecodeError
from sms_features.features.bag_of_words import encode_message
from sms_features.features.vocabulary import (
    DEFAULT_VOCAB_FILENAME,
    Vocabulary,
    load_vocabulary,
)


DEFAULT_MODEL_FILENAME = "model_multinomial_nb.joblib"


@dataclass(frozen=True)
class SpamClassifier:
    model: Any
    vocabulary: Vocabulary
    match_training: bool = True
    stopword_set: FrozenSet[str] = field(default_factory=frozenset)

    def predict(self, text: str) -> bool:
        """Return True if the message is classified as spam."""
        x = encode_message(
            text,
            self.vocabulary,
            match_training=self.match_training,
            stopword_set=self.stopword_set,
        )
        y = self.model.predict(x.reshape(1, -1))
        return int(y[0]) == 1

    def classify(self, text: str) -> Dict[str, Any]:
        return {"sms": text, "spam": self.predict(text)}

    def classify_record_value(self, value: bytes) -> str:
        """
        Classify a raw record payload and return the JSON output value.

        Raises
        ------
        DecodeError
            If the payload is not valid UTF-8.
        """
        try:
            text = value.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"Record value is not valid UTF-8: {exc.reason}.") from exc
        return json.dumps(self.classify(text), ensure_ascii=False)


def save_model(model: Any, models_dir: str, filename: str = DEFAULT_MODEL_FILENAME) -> str:
    path = os.path.join(models_dir, filename)
    joblib.dump(model, path)
    return path


def load_spam_classifier(
    artifacts_dir: str,
    models_dir: Optional[str] = None,
    model_filename: str = DEFAULT_MODEL_FILENAME,
    vocab_filename: str = DEFAULT_VOCAB_FILENAME,
    match_training: bool = True,
    stopword_set: FrozenSet[str] = frozenset(),
) -> SpamClassifier:
    """
    Load a fitted model and its vocabulary from disk.

    Parameters
    ----------
    artifacts_dir : str
        Directory holding the vocabulary JSON.
    models_dir : Optional[str]
        Directory holding the joblib model; defaults to artifacts_dir.
    model_filename : str
        File name of the saved model.
    vocab_filename : str
        File name of the saved vocabulary.
    match_training : bool
        Use the training preprocessing chain at inference time.
    stopword_set : FrozenSet[str]
        Stopwords to remove at inference time when match_training is True.

    Returns
    -------
    SpamClassifier
        Ready-to-use classifier.

    Raises
    ------
    FileNotFoundError
        If the model or vocabulary file does not exist.
    ValueError
        If the model's feature count does not match the vocabulary size.
    """
    model_path = os.path.join(models_dir or artifacts_dir, model_filename)
    if not os.path.exists(model_path):
        raise FileNotFoundError(f"Model not found at: {model_path}")

    model = joblib.load(model_path)
    vocabulary = load_vocabulary(artifacts_dir, filename=vocab_filename)

    n_features = getattr(model, "n_features_in_", None)
    if n_features is not None and int(n_features) != len(vocabulary):
        raise ValueError(
            f"Model expects {n_features} features but vocabulary has {len(vocabulary)} tokens."
        )

    return SpamClassifier(
        model=model,
        vocabulary=vocabulary,
        match_training=match_training,
        stopword_set=stopword_set,
    )
