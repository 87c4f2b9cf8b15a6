"""
Reading input string lists from `.txt` (one per line) or `.json` (array of
strings) files.
"""

from __future__ import annotations

import json
import logging
import os
from typing import List

from .errors import ConfigError, UnsupportedFormat

logger = logging.getLogger(__name__)

INPUT_EXTENSIONS = (".txt", ".json")


def check_input_path(path: str) -> str:
    ext = os.path.splitext(path)[1].lower()
    if ext not in INPUT_EXTENSIONS:
        raise UnsupportedFormat(path, INPUT_EXTENSIONS)
    return ext


def read_txt(path: str) -> List[str]:
    r"""One string per `\n`-terminated line; a trailing `\r` is dropped.

    Only `\n` separates items. Other Unicode line breaks (`\x85`, U+2028, ...)
    stay part of the string.
    """
    with open(path, "r", encoding="utf-8", newline="") as fh:
        text = fh.read()
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def read_json(path: str) -> List[str]:
    with open(path, "r", encoding="utf-8") as fh:
        try:
            data = json.load(fh)
        except json.JSONDecodeError as e:
            raise ConfigError(f"{path!r} is not valid JSON: {e}") from e
    if not isinstance(data, list) or not all(isinstance(x, str) for x in data):
        raise ConfigError(f"{path!r} must hold a top-level JSON array of strings")
    return data


def read_strings(path: str) -> List[str]:
    """Load every string from `path`, fully materialized."""
    ext = check_input_path(path)
    try:
        items = read_txt(path) if ext == ".txt" else read_json(path)
    except OSError as e:
        raise ConfigError(f"Could not read {path!r}: {e}") from e
    logger.info("Read %d strings from %s", len(items), path)
    return items
