"""
Concurrent cross-product scoring.

`compare` scores every (primary, comparison) pair with one metric. The
comparison set is split into one shard per worker; each worker walks the full
primary set against its shard and pushes records into a single result sink.
Small runs are collected in memory and emitted once after the pool joins;
runs above `RunConfig.threshold` pairs are streamed straight into the output
file as they are produced.
"""

from __future__ import annotations

import logging
import sys
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, TextIO, Tuple

from unidecode import unidecode

from . import containers
from .errors import ConfigError, RuntimeComputeError
from .partition import shard_count, split
from .records import Record
from .scorers import Metric, resolve
from .sinks import BatchCollector, ResultSink, StreamingAppender

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 100_000
ON_ERROR_CHOICES = ("abort", "skip")


@dataclass(frozen=True)
class RunConfig:
    metric: str = "jaro"
    insensitive: bool = False
    ascii_fold: bool = False
    silent: bool = False
    output: Optional[str] = None
    threshold: int = DEFAULT_THRESHOLD
    workers: Optional[int] = None
    on_error: str = "abort"

    def __post_init__(self):
        if self.threshold < 0:
            raise ConfigError(f"threshold must be >= 0, got {self.threshold}")
        if self.workers is not None and self.workers < 1:
            raise ConfigError(f"workers must be >= 1, got {self.workers}")
        if self.on_error not in ON_ERROR_CHOICES:
            raise ConfigError(
                f"on_error must be one of {', '.join(ON_ERROR_CHOICES)}, got {self.on_error!r}"
            )


@dataclass
class RunSummary:
    mode: str
    records_written: int
    workers: int
    output: Optional[str] = None
    skipped: List[Tuple[str, str, str]] = field(default_factory=list)


def ascii_fold(s: str) -> str:
    """ASCII transliteration of `s` ('Москва' -> 'Moskva', 'Straße' -> 'Strasse')."""
    return unidecode(s)


def prepare(items: Sequence[str], config: RunConfig) -> List[str]:
    """Return a preprocessed copy of `items`; the input is never mutated."""
    out = list(items)
    if config.insensitive:
        out = [s.lower() for s in out]
    if config.ascii_fold:
        out = [ascii_fold(s) for s in out]
    return out


def make_sink(config: RunConfig, pairs: int, out: Optional[TextIO] = None) -> ResultSink:
    """Pick the batch collector or the streaming appender for `pairs` pairs."""
    if pairs > config.threshold:
        return StreamingAppender(config.output)
    return BatchCollector(config.output, silent=config.silent, out=out)


def _score_shard(
    metric: Metric,
    primary: Sequence[str],
    shard: Sequence[str],
    sink: ResultSink,
    on_error: str,
) -> List[Tuple[str, str, str]]:
    skipped = []
    for s1 in primary:
        for s2 in shard:
            try:
                score = metric.score(s1, s2)
            except RuntimeComputeError as e:
                if on_error == "abort":
                    sink.fail(e)
                    raise
                logger.warning("Skipping pair %r / %r: %s", s1, s2, e)
                skipped.append((s1, s2, str(e)))
                continue
            sink.push(Record(metric=metric.display_name, s1=s1, s2=s2, score=score))
    return skipped


def compare(
    primary: Sequence[str],
    comparison: Sequence[str],
    config: Optional[RunConfig] = None,
    *,
    out: Optional[TextIO] = None,
) -> RunSummary:
    """Score the full cross product of `primary` x `comparison`.

    Configuration errors (unknown metric, bad output extension, streaming run
    without an output path) are raised before any worker starts. A worker
    error fails the sink, so the other workers stop at their next push, and
    is raised once the pool has joined.
    """
    config = config or RunConfig()
    metric = resolve(config.metric)
    if config.output:
        containers.output_format(config.output)

    pairs = len(primary) * len(comparison)
    sink = make_sink(config, pairs, out if out is not None else sys.stdout)

    primary = prepare(primary, config)
    comparison = prepare(comparison, config)
    n_workers = shard_count(len(comparison), config.workers)
    shards = split(comparison, n_workers) if n_workers else []
    logger.info(
        "Scoring %d pairs with %s in %s mode on %d workers",
        pairs,
        metric.display_name,
        sink.mode,
        n_workers,
    )

    skipped: List[Tuple[str, str, str]] = []
    with sink:
        if shards:
            with ThreadPoolExecutor(max_workers=n_workers) as executor:
                futures = [
                    executor.submit(_score_shard, metric, primary, shard, sink, config.on_error)
                    for shard in shards
                ]
                wait(futures)
            if sink.failure is not None:
                raise sink.failure
            for future in futures:
                skipped.extend(future.result())

    if skipped:
        logger.warning("Skipped %d pairs that %s could not score", len(skipped), metric.display_name)
    return RunSummary(
        mode=sink.mode,
        records_written=sink.count,
        workers=n_workers,
        output=config.output,
        skipped=skipped,
    )
