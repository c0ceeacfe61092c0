"""
Model definitions for spam detection.

This subpackage contains:
- the Multinomial Naive Bayes builder
- the SpamClassifier inference wrapper and artifact loading.
"""
