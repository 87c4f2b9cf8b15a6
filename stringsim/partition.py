"""
Splitting the comparison set into one shard per worker.
"""

from __future__ import annotations

import os
from typing import List, Optional, Sequence


def split(items: Sequence[str], k: int) -> List[List[str]]:
    """Distribute `items` round-robin over `k` shards.

    Item i lands in shard i % k, so shard sizes differ by at most one and
    every item appears in exactly one shard.
    """
    if k < 1:
        raise ValueError(f"shard count must be >= 1, got {k}")
    shards: List[List[str]] = [[] for _ in range(k)]
    for i, item in enumerate(items):
        shards[i % k].append(item)
    return shards


def shard_count(n_items: int, parallelism: Optional[int] = None) -> int:
    """Number of shards: the smaller of the item count and available CPUs."""
    if parallelism is None:
        parallelism = os.cpu_count() or 1
    return max(0, min(n_items, max(1, parallelism)))
