"""
Top-level package for the SMS spam feature pipeline.

This package contains modules for:
- loading labeled SMS records from the tab-separated source file
- text normalization, tokenization and stopword removal
- first-occurrence vocabulary building and bag-of-words encoding
- a thin Multinomial Naive Bayes training/inference wrapper
- evaluation metrics and shared helper functions

The training path and the inference path share the same vocabulary and
encoder, so a model fitted on the training output can score new messages
in exactly the same feature space.
"""
