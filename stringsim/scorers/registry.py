"""
Global scorer registry.

Exposes `SCORER_REGISTRY`: a mapping from a normalized metric key to a
callable of the form `(s1: str, s2: str) -> float`, and `DISPLAY_NAMES`, the
canonical name each key is reported under in the output.

Scorer modules register themselves on import through `register`. Lookups go
through `resolve`, which normalizes the requested name first, so
"Damerau-Levenshtein", "damerau_levenshtein" and "DamerauLevenshtein" are the
same metric.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Dict, List

from ..errors import UnsupportedMetric

ScoreFn = Callable[[str, str], float]

SCORER_REGISTRY: Dict[str, ScoreFn] = {}
DISPLAY_NAMES: Dict[str, str] = {}

_SEPARATORS = re.compile(r"[\s_\-]+")


@dataclass(frozen=True)
class Metric:
    key: str
    display_name: str
    score: ScoreFn


def normalize_metric_name(name: str) -> str:
    return _SEPARATORS.sub("", name or "").lower()


def register(display_name: str, *aliases: str) -> Callable[[ScoreFn], ScoreFn]:
    """Register the decorated scorer under `display_name` and any aliases."""

    def decorator(fn: ScoreFn) -> ScoreFn:
        for name in (display_name, *aliases):
            key = normalize_metric_name(name)
            SCORER_REGISTRY[key] = fn
            DISPLAY_NAMES[key] = display_name
        return fn

    return decorator


def available_metrics() -> List[str]:
    return sorted(set(DISPLAY_NAMES.values()))


def resolve(name: str) -> Metric:
    """Look up a metric by (case-insensitive) name.

    Raises `UnsupportedMetric` when no registered scorer matches.
    """
    key = normalize_metric_name(name)
    fn = SCORER_REGISTRY.get(key)
    if fn is None:
        raise UnsupportedMetric(name, available_metrics())
    return Metric(key=key, display_name=DISPLAY_NAMES[key], score=fn)
