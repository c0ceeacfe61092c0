"""
Shared utility functions.

This subpackage includes:
- training config loading
- directory management
- logger construction used across the project.
"""
