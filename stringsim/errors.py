"""
Error taxonomy for stringsim.

Every failure the engine can hit is fatal for the run, but it is raised as a
typed exception so callers embedding the engine decide what to do with it.
Only the command line turns these into a process exit status.
"""

from __future__ import annotations


class StringSimError(Exception):
    """Root of every error raised by stringsim."""


class ConfigError(StringSimError):
    """Invalid run configuration, detected before any worker starts."""


class UnsupportedMetric(ConfigError):
    def __init__(self, name: str, available=None):
        self.name = name
        self.available = list(available or [])
        msg = f"Metric not supported: {name!r}"
        if self.available:
            msg += f" (available: {', '.join(self.available)})"
        super().__init__(msg)


class UnsupportedFormat(ConfigError):
    def __init__(self, path: str, allowed):
        self.path = path
        self.allowed = tuple(allowed)
        super().__init__(
            f"File extension of {path!r} not one of: {', '.join(self.allowed)}"
        )


class RuntimeComputeError(StringSimError):
    """A metric could not score one pair of strings."""


class LengthMismatch(RuntimeComputeError):
    def __init__(self, s1: str, s2: str):
        self.s1 = s1
        self.s2 = s2
        super().__init__(
            f"Undefined for strings of unequal length: {s1!r} ({len(s1)}) vs {s2!r} ({len(s2)})"
        )


class OutputError(StringSimError):
    """The output file could not be created, opened or appended to."""


class MalformedContainer(OutputError):
    """The output file tail is not a JSON array close this engine can patch."""


class RunAborted(StringSimError):
    """A sink refused a record because another worker already failed the run."""
