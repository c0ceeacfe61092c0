"""
Text preprocessing and feature extraction utilities.

This subpackage includes:
- lowercasing, punctuation stripping, tokenization and stopword removal
- first-occurrence vocabulary building and JSON persistence
- bag-of-words (term-frequency) encoding for training and inference.
"""
