"""
Output containers: JSON arrays and CSV files.

Two ways of getting records on disk:

- `serialize_all` writes a complete, already sorted result set in one shot
  (used by the batch collector).
- `initialize_empty` followed by repeated `append_record` grows an existing
  file one record at a time without re-encoding what is already there (used
  by the streaming appender).

Appending to a JSON array patches the file tail in place. The invariant the
append relies on: the last 3 bytes of the file contain the array's closing
`]`, i.e. the file ends in `]`, `]\\n` or `] \\n` / `]\\r\\n`. Any other tail
raises `MalformedContainer` and the file is left untouched.
"""

from __future__ import annotations

import csv
import io
import json
import logging
import os
from typing import BinaryIO, Iterable, List

import pandas as pd

from .errors import MalformedContainer, OutputError, UnsupportedFormat
from .records import CSV_HEADER, Record

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = {".json": "json", ".csv": "csv"}

JSON_TAIL_LOOKBACK = 3


def output_format(path: str) -> str:
    """Return "json" or "csv" for `path`, or raise `UnsupportedFormat`."""
    ext = os.path.splitext(path)[1].lower()
    fmt = OUTPUT_FORMATS.get(ext)
    if fmt is None:
        raise UnsupportedFormat(path, OUTPUT_FORMATS)
    return fmt


def _csv_line(row: List[str]) -> bytes:
    buf = io.StringIO()
    csv.writer(buf, lineterminator="\n").writerow(row)
    return buf.getvalue().encode("utf-8")


def _json_bytes(record: Record) -> bytes:
    return json.dumps(record.to_dict(), ensure_ascii=False, separators=(",", ":")).encode(
        "utf-8"
    )


def initialize_empty(path: str) -> str:
    """Create (or truncate) `path` as an empty container; returns the format."""
    fmt = output_format(path)
    payload = b"[]\n" if fmt == "json" else _csv_line(CSV_HEADER)
    try:
        with open(path, "wb") as fh:
            fh.write(payload)
    except OSError as e:
        raise OutputError(f"Could not create output file {path!r}: {e}") from e
    logger.debug("Initialized empty %s container at %s", fmt, path)
    return fmt


def is_empty_container(fh: BinaryIO, fmt: str) -> bool:
    """Probe an open container for records.

    A JSON container is empty when it starts with `[]` or `[ ]`; a CSV
    container is empty when it holds nothing past the header row.
    """
    fh.seek(0)
    if fmt == "json":
        head = fh.read(3)
        return head.startswith(b"[]") or head == b"[ ]"
    fh.readline()
    return fh.read(1) == b""


def append_json(fh: BinaryIO, record: Record, is_empty: bool) -> None:
    """Append `record` to the JSON array held in `fh`.

    Scans backward from the end of the file for the closing `]`, overwrites it
    with `,<record>]\\n` (no comma for the first record) and truncates whatever
    followed.
    """
    size = fh.seek(0, os.SEEK_END)
    for i in range(1, JSON_TAIL_LOOKBACK + 1):
        if i > size:
            break
        fh.seek(-i, os.SEEK_END)
        if fh.read(1) != b"]":
            continue
        fh.seek(-i, os.SEEK_END)
        if not is_empty:
            fh.write(b",")
        fh.write(_json_bytes(record))
        fh.write(b"]\n")
        fh.truncate()
        fh.flush()
        return
    raise MalformedContainer(
        f"No closing ']' in the last {JSON_TAIL_LOOKBACK} bytes of "
        f"{getattr(fh, 'name', 'output')!r}; not a JSON array this engine can append to"
    )


def append_csv(fh: BinaryIO, record: Record) -> None:
    fh.seek(0, os.SEEK_END)
    fh.write(_csv_line(record.csv_row()))
    fh.flush()


def append_record(fh: BinaryIO, fmt: str, record: Record, is_empty: bool) -> None:
    try:
        if fmt == "json":
            append_json(fh, record, is_empty)
        else:
            append_csv(fh, record)
    except OSError as e:
        raise OutputError(f"Could not append to output file: {e}") from e


def _frame(records: Iterable[Record]) -> pd.DataFrame:
    return pd.DataFrame([r.to_dict() for r in records], columns=CSV_HEADER)


def serialize_all(path: str, records: List[Record]) -> None:
    """Write every record to `path` at once (create/truncate)."""
    fmt = output_format(path)
    try:
        if fmt == "json":
            # pandas to_json caps floats at 15 digits; json keeps the exact repr
            with open(path, "w", encoding="utf-8") as fh:
                json.dump([r.to_dict() for r in records], fh, indent=2, ensure_ascii=False)
                fh.write("\n")
        else:
            _frame(records).to_csv(path, index=False, float_format="%f", lineterminator="\n", encoding="utf-8")
    except OSError as e:
        raise OutputError(f"Could not write output file {path!r}: {e}") from e
    logger.info("Wrote %d records to %s", len(records), path)


def format_record(record: Record) -> str:
    """One human readable console line."""
    return f"{record.metric}: {record.s1} vs {record.s2} = {record.score:f}"
