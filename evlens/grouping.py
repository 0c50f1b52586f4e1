"""
Grouping / reduction primitives
===============================

Small, explicit building blocks used by every query:

- `group_reduce`: bucket items by a key function, then reduce each bucket.
  Buckets keep first-seen key order (plain dict insertion order).
- `top_n`: heap-based top-k over a count mapping; equal counts keep
  first-seen order.
- `mean` / `extent`: return None on empty input instead of NaN or raising.
- `histogram`: fixed-count, equal-width bins over an explicit domain.
- `round_half_up` / `percentage`: the rounding and share conventions shared
  by all results.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, Hashable, Iterable, List, Optional, Sequence, Tuple, TypeVar
import heapq
import math

import numpy as np

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)
R = TypeVar("R")


@dataclass(frozen=True)
class Bin:
    """One histogram bin: [lower, upper) except the last, which is closed."""
    lower: float
    upper: float
    count: int

    @property
    def label(self) -> str:
        return f"{round_half_up(self.lower)}-{round_half_up(self.upper)}"


def group_reduce(items: Iterable[T], key: Callable[[T], K], reduce: Callable[[List[T]], R]) -> Dict[K, R]:
    """Partition `items` by `key(item)` and apply `reduce` to each bucket."""
    buckets: Dict[K, List[T]] = {}
    for item in items:
        buckets.setdefault(key(item), []).append(item)
    return {k: reduce(v) for k, v in buckets.items()}


def count_by(items: Iterable[T], key: Callable[[T], K]) -> Dict[K, int]:
    return group_reduce(items, key, len)


def top_n(counts: Dict[K, int], limit: Optional[int] = None) -> List[Tuple[K, int]]:
    """Return (key, count) pairs sorted by count descending.

    `heapq.nlargest` is stable for equal keys, so ties keep the dict's
    first-seen order. `limit=None` returns every pair.
    """
    if limit is None:
        return sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
    return heapq.nlargest(limit, counts.items(), key=lambda kv: kv[1])


def mean(values: Sequence[float]) -> Optional[float]:
    if not values:
        return None
    return sum(values) / len(values)


def extent(values: Sequence[float]) -> Optional[Tuple[float, float]]:
    if not values:
        return None
    return min(values), max(values)


def round_half_up(x: float) -> int:
    """Round to the nearest integer, .5 going up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(x + 0.5))


def percentage(part: int, total: int) -> float:
    if total == 0:
        return 0.0
    return part / total * 100


def histogram(values: Sequence[float], domain_min: float, domain_max: float, bins: int) -> List[Bin]:
    """Count `values` into `bins` equal-width bins spanning the domain.

    Bins are half-open except the last, which also holds `domain_max`.
    Values outside the domain are ignored and empty bins are kept.
    A zero-width domain yields a single [v, v] bin.
    """
    if bins <= 0:
        raise ValueError(f"bins must be positive, got {bins}")
    if domain_min > domain_max:
        raise ValueError(f"inverted domain: [{domain_min}, {domain_max}]")

    if domain_min == domain_max:
        n = sum(1 for v in values if v == domain_min)
        return [Bin(lower=float(domain_min), upper=float(domain_max), count=n)]

    counts, edges = np.histogram(
        np.asarray(values, dtype=float),
        bins=bins,
        range=(float(domain_min), float(domain_max)),
    )
    return [
        Bin(lower=float(edges[i]), upper=float(edges[i + 1]), count=int(counts[i]))
        for i in range(bins)
    ]
