"""
Result sinks: where workers hand their records.

Both sinks own exactly one lock, and every `push` runs entirely under it.
Workers share nothing else.
"""

from __future__ import annotations

import logging
import sys
import threading
from typing import List, Optional, TextIO

from . import containers
from .errors import ConfigError, OutputError, RunAborted, StringSimError
from .records import Record

logger = logging.getLogger(__name__)


class ResultSink:
    """Base class; subclasses implement `push` and optionally open/close."""

    mode = "abstract"

    def __init__(self):
        self._lock = threading.Lock()
        self.count = 0
        self.failure: Optional[BaseException] = None

    def open(self) -> None:
        pass

    def push(self, record: Record) -> None:
        raise NotImplementedError

    def fail(self, exc: BaseException) -> None:
        """Mark the run as failed; every later `push` raises `RunAborted`."""
        with self._lock:
            if self.failure is None:
                self.failure = exc

    def _check_open_run(self) -> None:
        # caller holds self._lock
        if self.failure is not None:
            raise RunAborted(f"Run aborted: {self.failure}")

    def close(self) -> None:
        pass

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is None:
            self.close()
        else:
            self.abort()
        return False

    def abort(self) -> None:
        """Release resources after a failed run without emitting anything."""


def sort_records(records: List[Record]) -> List[Record]:
    """Descending score, ties by (s1, s2) ascending."""
    return sorted(records, key=lambda r: (-r.score, r.s1, r.s2))


class BatchCollector(ResultSink):
    """Collect records in memory, then sort, print and write them once."""

    mode = "batch"

    def __init__(
        self,
        output: Optional[str] = None,
        silent: bool = False,
        out: Optional[TextIO] = None,
    ):
        super().__init__()
        self.output = output
        self.silent = silent
        self.out = out if out is not None else sys.stdout
        self.records: List[Record] = []

    def push(self, record: Record) -> None:
        with self._lock:
            self._check_open_run()
            self.records.append(record)
            self.count += 1

    def close(self) -> None:
        self.records = sort_records(self.records)
        if not self.silent:
            for record in self.records:
                print(containers.format_record(record), file=self.out)
        if self.output:
            containers.serialize_all(self.output, self.records)


class StreamingAppender(ResultSink):
    """Append each record straight into an initialized container file."""

    mode = "streaming"

    def __init__(self, output: Optional[str]):
        super().__init__()
        if not output:
            raise ConfigError(
                "Too many similarities to compute and print; an output file is required"
            )
        self.output = output
        self.fmt = containers.output_format(output)
        self._fh = None
        self.is_empty = True

    def open(self) -> None:
        containers.initialize_empty(self.output)
        try:
            self._fh = open(self.output, "r+b")
        except OSError as e:
            raise OutputError(f"Could not open output file {self.output!r}: {e}") from e
        self.is_empty = containers.is_empty_container(self._fh, self.fmt)

    def push(self, record: Record) -> None:
        with self._lock:
            self._check_open_run()
            if self._fh is None:
                raise OutputError("Streaming appender used before open()")
            try:
                containers.append_record(self._fh, self.fmt, record, self.is_empty)
            except StringSimError as e:
                self.failure = e
                raise
            self.is_empty = False
            self.count += 1

    def close(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None
            logger.info("Appended %d records to %s", self.count, self.output)

    def abort(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None
