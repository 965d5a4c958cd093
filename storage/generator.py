"""
LeapJoin Random Graph Generator
===============================
Builds benchmark relations: for every node i in 1..nodes-1, each later node
j in i+1..nodes-1 becomes an out-neighbour with probability `density`.
Edges only point forward, so the graph is a DAG and every triangle is found
exactly once as (a < b < c).
"""

import random
from typing import Optional

from storage.relation import Relation


def random_graph(nodes: int, density: float = 0.5,
                 seed: Optional[int] = None) -> Relation:
    """
    Generate a random forward-edge graph.
    The same seed always produces the same relation.
    """
    if nodes < 0:
        raise ValueError(f"nodes must be non-negative, got {nodes}")
    if not 0.0 <= density <= 1.0:
        raise ValueError(f"density must be within [0, 1], got {density}")

    rng = random.Random(seed)
    entries = []
    for i in range(1, nodes):
        # Ascending range keeps every bucket sorted without a sort pass
        entries.append((i, [j for j in range(i + 1, nodes) if rng.random() < density]))
    return Relation(entries)
