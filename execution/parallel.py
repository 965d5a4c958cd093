"""
LeapJoin Parallel Count
=======================
Splits the outer variable `a` into disjoint key ranges and counts each range
with its own set of cursors. All workers read the same immutable relations,
so no locking is needed; per-range counts are summed at the end.

Partitioning:
  - boundaries are real keys of R, spread so each range holds about the same
    number of R keys
  - ranges are contiguous and cover the whole u64 space:
        [(0, k1), (k1, k2), ..., (kn, None)]

Teaching note:
  Workers are threads, so on CPython the GIL limits speedup for this pure
  Python loop. The partition itself is what matters: the same ranges could
  be handed to processes or remote workers unchanged.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple

from storage.relation import Relation
from execution.context import ARange, JoinStats
from execution.triejoin import count_join


def partition_ranges(relation: Relation, parts: int) -> List[ARange]:
    """Split the key space of `relation` into at most `parts` a-ranges."""
    if parts < 1:
        raise ValueError(f"parts must be >= 1, got {parts}")
    keys = relation.keys
    if not keys:
        return [(0, None)]

    parts = min(parts, len(keys))
    bounds = [keys[k * len(keys) // parts] for k in range(1, parts)]
    lows = [0] + bounds
    highs: List[Optional[int]] = bounds + [None]
    return list(zip(lows, highs))


def _count_range(r: Relation, s: Relation, t: Relation,
                 a_range: ARange) -> Tuple[int, JoinStats]:
    stats = JoinStats()
    return count_join(r, s, t, a_range, stats), stats


def parallel_count(r: Relation, s: Relation, t: Relation,
                   workers: int = 4, parts: Optional[int] = None,
                   stats: Optional[JoinStats] = None) -> int:
    """
    Count R(a,b), S(b,c), T(a,c) across `workers` threads.
    `parts` defaults to one range per worker. The result always equals the
    sequential count_join().
    """
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")
    ranges = partition_ranges(r, parts if parts is not None else workers)

    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(_count_range, r, s, t, rng) for rng in ranges]
        results = [f.result() for f in futures]

    total = 0
    for count, worker_stats in results:
        total += count
        if stats is not None:
            stats.merge(worker_stats)
    return total


def parallel_count_triangles(graph: Relation, workers: int = 4,
                             stats: Optional[JoinStats] = None) -> int:
    return parallel_count(graph, graph, graph, workers=workers, stats=stats)
