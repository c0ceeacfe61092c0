"""
Data loading and dataset utilities.

This subpackage provides:
- immutable record/dataset types and the label encoding
- the tab-separated SMS source loader
- train/test splitting of the encoded feature matrix.
"""
