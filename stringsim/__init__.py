"""
stringsim: pairwise string similarity over two collections of strings.
"""

from .engine import RunConfig, RunSummary, compare  # noqa: F401
from .errors import (  # noqa: F401
    ConfigError,
    LengthMismatch,
    MalformedContainer,
    OutputError,
    RuntimeComputeError,
    StringSimError,
    UnsupportedFormat,
    UnsupportedMetric,
)
from .records import Record  # noqa: F401

__version__ = "0.1.0"
