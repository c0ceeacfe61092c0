"""
Dataset loading utilities for the SMS Spam Collection file.

This module is responsible for:
- reading the dataset configuration from config/data.yaml
- reading the raw tab-separated source into a RawDataset

The source has one record per line and no header:

    ham<TAB>Go until jurong point, crazy..
    spam<TAB>Free entry in 2 a wkly comp to win FA Cup final tkts ...

Loading is all-or-nothing. Unreadable files, invalid UTF-8, lines without
a tab and unknown labels each abort the load with a typed error from
sms_features.exceptions; rows are never skipped or reordered.
"""

from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

import yaml

from sms_features.data.records import Label, RawDataset, RawRecord
from sms_features.exceptions import DatasetIOError, DecodeError, FormatError


DEFAULT_DATA_CONFIG_PATH = "config/data.yaml"
DEFAULT_DATASET_PATH = "data/raw/SMSSpamCollection"

FIELD_DELIMITER = "\t"


# ---------------------------------------------------------------------------
# Config loading
# ---------------------------------------------------------------------------


def _load_yaml(path: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file and return it as a dictionary.

    Raises
    ------
    FileNotFoundError
        If the YAML file does not exist.
    ValueError
        If the YAML file is empty or cannot be parsed.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)

    if cfg is None:
        raise ValueError(f"Config file is empty or invalid: {path}")

    return cfg


def load_data_config(config_path: str = DEFAULT_DATA_CONFIG_PATH) -> Dict[str, Any]:
    """
    Load and return the full data configuration dictionary.

    Parameters
    ----------
    config_path : str, optional
        Path to the data YAML configuration file.

    Returns
    -------
    Dict[str, Any]
        Dictionary containing the "dataset", "split" and "preprocessing"
        sections, plus the optional "features" and "inference" sections.
    """
    cfg = _load_yaml(config_path)

    for section in ("dataset", "split", "preprocessing"):
        if section not in cfg:
            raise KeyError(f'Missing "{section}" section in data config: {config_path}')

    return cfg


# ---------------------------------------------------------------------------
# Source parsing
# ---------------------------------------------------------------------------


def _split_lines(data: bytes) -> List[bytes]:
    """
    Split raw bytes into lines on "\\n", dropping a trailing "\\r".

    A newline at the very end of the file does not start another record.
    Only "\\n" separates lines; other Unicode line breaks stay inside
    the message text.
    """
    if not data:
        return []
    lines = data.split(b"\n")
    if lines[-1] == b"":
        lines.pop()
    return [line[:-1] if line.endswith(b"\r") else line for line in lines]


def parse_line(line: str, line_number: Optional[int] = None) -> RawRecord:
    """
    Parse one source line into a RawRecord.

    The line is split on the first tab only; further tabs belong to the
    message.

    Raises
    ------
    FormatError
        If the line contains no tab.
    LabelError
        If the label field is not "ham" or "spam".
    """
    label, sep, text = line.partition(FIELD_DELIMITER)
    if not sep:
        raise FormatError("Missing tab delimiter between label and message.", line_number)
    return RawRecord(label=Label.from_str(label, line_number=line_number), text=text)


def parse_source_bytes(data: bytes, encoding: str = "utf-8") -> RawDataset:
    """
    Parse the raw bytes of a source file into a RawDataset.

    Raises
    ------
    DecodeError
        If a line is not valid text in the given encoding.
    FormatError
        If a line contains no tab.
    LabelError
        If a label field is invalid.
    """
    records = []
    for line_number, raw_line in enumerate(_split_lines(data), start=1):
        try:
            line = raw_line.decode(encoding)
        except UnicodeDecodeError as exc:
            raise DecodeError(f"Invalid {encoding} data: {exc.reason}.", line_number) from exc
        records.append(parse_line(line, line_number=line_number))
    return RawDataset(tuple(records))


def read_raw_dataset(path: str, encoding: str = "utf-8") -> RawDataset:
    """
    Read a tab-separated SMS source file.

    Parameters
    ----------
    path : str
        Path to the source file.
    encoding : str
        Text encoding of the file (strict decoding).

    Returns
    -------
    RawDataset
        One record per line, in line order.

    Raises
    ------
    DatasetIOError
        If the file cannot be read.
    DecodeError, FormatError, LabelError
        If the content is malformed.
    """
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as exc:
        raise DatasetIOError(exc.errno, f"Cannot read dataset source: {exc.strerror}", path) from exc
    return parse_source_bytes(data, encoding=encoding)


def load_sms_dataset(
    config_path: str = DEFAULT_DATA_CONFIG_PATH,
    path: Optional[str] = None,
) -> RawDataset:
    """
    Load the SMS Spam Collection dataset according to the configuration.

    Parameters
    ----------
    config_path : str, optional
        Path to the data YAML configuration file.
    path : Optional[str]
        Overrides dataset.path from the configuration.

    Returns
    -------
    RawDataset
        Loaded records.
    """
    cfg = load_data_config(config_path)
    dataset_cfg = cfg["dataset"]

    source_path = path or dataset_cfg.get("path", DEFAULT_DATASET_PATH)
    encoding = dataset_cfg.get("encoding", "utf-8")

    return read_raw_dataset(source_path, encoding=encoding)
