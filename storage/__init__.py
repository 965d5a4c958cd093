"""
LeapJoin Storage
================
In-memory sorted relations the join runs over.

Usage:
    from storage import Relation, RelationError, random_graph
"""

from storage.relation import Relation, RelationError, U64_MAX, example_graph
from storage.generator import random_graph

__all__ = [
    "Relation", "RelationError", "U64_MAX", "example_graph",
    "random_graph",
]
