"""
Exception types raised while loading and encoding SMS datasets.

Every error here is fatal to the operation in progress: loaders do not
skip bad rows or return partial datasets. The classes subclass the
matching built-in exceptions so callers can also catch ``OSError`` or
``ValueError`` as they would for the standard library.
"""

from __future__ import annotations

from typing import Optional


class DatasetError(Exception):
    """Base class for all dataset loading errors."""


class DatasetIOError(DatasetError, OSError):
    """The source file could not be read."""


class _LineError(DatasetError, ValueError):
    """Error tied to a specific (1-based) line of the source."""

    def __init__(self, message: str, line_number: Optional[int] = None) -> None:
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class FormatError(_LineError):
    """A line is missing the tab delimiter between label and message."""


class LabelError(_LineError):
    """A label field is neither "ham" nor "spam"."""


class DecodeError(_LineError):
    """Input bytes are not valid UTF-8 text."""


class ModelQualityError(RuntimeError):
    """A fitted model scored below the configured accuracy threshold."""
