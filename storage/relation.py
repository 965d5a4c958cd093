r"""
LeapJoin Relation
=================
Immutable two-level sorted relation: an ordered list of keys, each owning a
sorted bucket of values. This is the trie every cursor in the join walks.

Layout (the seven-node example graph):

     1     2     3      4    5 6 7
    /|\   / \   /|\    /|\   | | |
   2 3 4 4   5 4 6 7  5 7 8  8 7 8

Invariants:
  - keys strictly increasing, no duplicates
  - each bucket strictly increasing, no duplicates
  - all members are unsigned 64-bit integers

Storage is two parallel tuples (`keys`, `buckets`) so that a relation can be
shared by reference between any number of cursors without copying or locking.

Teaching note:
  `Relation(entries)` trusts its input, exactly like a storage engine trusts
  pages it wrote itself. Use `from_mapping` / `from_edges` to normalize raw
  data, and `validate()` to check a relation built some other way.
"""

from typing import Dict, Iterable, Iterator, List, Tuple

U64_MAX = 2**64 - 1


class RelationError(ValueError):
    """Raised when relation data violates the sorted-trie invariants."""
    pass


def _check_node_id(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise RelationError(f"Node id must be an integer, got {type(value).__name__}: {value!r}")
    if value < 0 or value > U64_MAX:
        raise RelationError(f"Node id {value} out of unsigned 64-bit range")
    return value


class Relation:
    """
    Sorted key -> values relation.
    Read-only after construction; equality compares contents.
    """
    __slots__ = ('keys', 'buckets')

    def __init__(self, entries: Iterable[Tuple[int, Iterable[int]]] = ()):
        keys: List[int] = []
        buckets: List[Tuple[int, ...]] = []
        for key, values in entries:
            keys.append(key)
            buckets.append(tuple(values))
        self.keys: Tuple[int, ...] = tuple(keys)
        self.buckets: Tuple[Tuple[int, ...], ...] = tuple(buckets)

    # ─── Builders ───────────────────────────────────────────────────

    @classmethod
    def from_mapping(cls, mapping: Dict[int, Iterable[int]]) -> "Relation":
        """
        Build from {key: values}. Keys and values are sorted, duplicate values
        dropped. Keys with no values are kept as empty buckets.
        """
        entries = []
        for key in sorted(_check_node_id(k) for k in mapping):
            values = sorted({_check_node_id(v) for v in mapping[key]})
            entries.append((key, values))
        return cls(entries)

    @classmethod
    def from_edges(cls, edges: Iterable[Tuple[int, int]]) -> "Relation":
        """Build from (src, dst) pairs. Duplicate edges collapse to one."""
        grouped: Dict[int, set] = {}
        for src, dst in edges:
            grouped.setdefault(_check_node_id(src), set()).add(_check_node_id(dst))
        return cls((key, sorted(grouped[key])) for key in sorted(grouped))

    # ─── Checks ─────────────────────────────────────────────────────

    def validate(self) -> None:
        """
        Verify the sorted-trie invariants. Raises RelationError naming the
        first offending key. The join itself never calls this.
        """
        prev = None
        for key, bucket in zip(self.keys, self.buckets):
            _check_node_id(key)
            if prev is not None and key <= prev:
                raise RelationError(
                    f"Keys not strictly increasing: {key} follows {prev}")
            prev_val = None
            for v in bucket:
                _check_node_id(v)
                if prev_val is not None and v <= prev_val:
                    raise RelationError(
                        f"Values under key {key} not strictly increasing: "
                        f"{v} follows {prev_val}")
                prev_val = v
            prev = key

    # ─── Accessors ──────────────────────────────────────────────────

    def entry(self, i: int) -> Tuple[int, Tuple[int, ...]]:
        return self.keys[i], self.buckets[i]

    @property
    def edge_count(self) -> int:
        return sum(len(b) for b in self.buckets)

    def edges(self) -> Iterator[Tuple[int, int]]:
        """Yield (key, value) pairs in trie order."""
        for key, bucket in zip(self.keys, self.buckets):
            for v in bucket:
                yield key, v

    def __len__(self) -> int:
        return len(self.keys)

    def __iter__(self) -> Iterator[Tuple[int, Tuple[int, ...]]]:
        return zip(self.keys, self.buckets)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Relation):
            return NotImplemented
        return self.keys == other.keys and self.buckets == other.buckets

    def __hash__(self) -> int:
        return hash((self.keys, self.buckets))

    def __repr__(self) -> str:
        return f"Relation(keys={len(self.keys)}, edges={self.edge_count})"


def example_graph() -> Relation:
    """The seven-node graph used throughout the docs: it has 7 triangles."""
    return Relation([
        (1, [2, 3, 4]),
        (2, [4, 5]),
        (3, [4, 6, 7]),
        (4, [5, 7, 8]),
        (5, [8]),
        (6, [7]),
        (7, [8]),
    ])
