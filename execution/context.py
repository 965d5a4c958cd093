from dataclasses import dataclass, field
from typing import Optional, Tuple

from storage.relation import Relation
from indexing.trie_index import TrieIndex

# (lo, hi): lo <= a < hi, hi=None means unbounded
ARange = Tuple[int, Optional[int]]


@dataclass
class JoinStats:
    """Counters collected while a join runs."""
    a_bindings: int = 0
    b_bindings: int = 0
    triples: int = 0
    seeks: int = 0
    elapsed: float = 0.0

    def merge(self, other: "JoinStats") -> "JoinStats":
        """
        Add another run's counters into this one (used by parallel workers).
        Workers overlap in time, so elapsed keeps the slowest run, not the sum.
        """
        self.a_bindings += other.a_bindings
        self.b_bindings += other.b_bindings
        self.triples += other.triples
        self.seeks += other.seeks
        self.elapsed = max(self.elapsed, other.elapsed)
        return self

    def to_dict(self) -> dict:
        return {
            "a_bindings": self.a_bindings,
            "b_bindings": self.b_bindings,
            "triples": self.triples,
            "seeks": self.seeks,
            "elapsed": self.elapsed,
        }


@dataclass
class ExecutionContext:
    """Run-time context for one join: Q(a, b, c) <- R(a, b), S(b, c), T(a, c)."""
    r: Relation
    s: Relation
    t: Relation
    a_range: Optional[ARange] = field(default=None)
    stats: JoinStats = field(default_factory=JoinStats)

    @classmethod
    def for_triangles(cls, relation: Relation,
                      a_range: Optional[ARange] = None) -> "ExecutionContext":
        # Same relation plays all three roles; shared, never copied
        return cls(relation, relation, relation, a_range=a_range)

    def open_indexes(self) -> Tuple[TrieIndex, TrieIndex, TrieIndex]:
        """Fresh cursors for R, S, T, each positioned at Upper(0)."""
        return TrieIndex(self.r), TrieIndex(self.s), TrieIndex(self.t)
