"""
Multinomial Naive Bayes model builder.

The classifier is scikit-learn's MultinomialNB, which works directly on
term-frequency count vectors. Hyperparameters come from the "model"
section of config/train.yaml.
"""

from __future__ import annotations

from typing import Any, Dict

from sklearn.naive_bayes import MultinomialNB


def build_naive_bayes(train_cfg: Dict[str, Any]) -> MultinomialNB:
    mcfg = train_cfg.get("model", {}) or {}
    return MultinomialNB(
        alpha=float(mcfg.get("alpha", 1.0)),
        fit_prior=bool(mcfg.get("fit_prior", True)),
    )
