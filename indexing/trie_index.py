"""
LeapJoin Trie Index
===================
A trie iterator over a two-level Relation, as used by Leapfrog Triejoin.
The cursor walks the keys first, then drops down into the bucket of values
bound under the current key.

Positions (tagged variant):
  - Upper(i):    at keys[i]; iterating the first variable.
  - Lower(i, j): at buckets[i][j]; the first variable is bound to keys[i].

An index past the end of its level means "exhausted"; value() then
returns None. Nothing ever wraps around.

Transitions:
  Upper(i) --down()--> Lower(i, 0)
  Lower(i, j) --up()--> Upper(i)

Calling down() at Lower or up() at Upper is a bug in the caller and raises
TrieStateError. It is not a runtime condition to recover from.

Seeks use bisect_left starting at the current slot, so a cursor only ever
moves forward within a level.
"""

from bisect import bisect_left
from dataclasses import dataclass
from typing import Optional, Union

from storage.relation import Relation


class TrieStateError(RuntimeError):
    """Illegal cursor transition (driver defect)."""
    pass


@dataclass(frozen=True)
class Upper:
    i: int


@dataclass(frozen=True)
class Lower:
    i: int
    j: int


Position = Union[Upper, Lower]


class TrieIndex:
    """
    Cursor over a shared, read-only Relation.
    Many TrieIndex instances may reference the same Relation.
    """
    __slots__ = ('relation', 'position')

    def __init__(self, relation: Relation):
        self.relation = relation
        self.position: Position = Upper(0)

    @property
    def depth(self) -> int:
        """0 at the key level, 1 inside a bucket."""
        return 0 if isinstance(self.position, Upper) else 1

    def value(self) -> Optional[int]:
        """Current key or value, or None if the active level is exhausted."""
        pos = self.position
        keys = self.relation.keys
        if isinstance(pos, Upper):
            return keys[pos.i] if pos.i < len(keys) else None
        if pos.i >= len(keys):
            return None
        bucket = self.relation.buckets[pos.i]
        return bucket[pos.j] if pos.j < len(bucket) else None

    def at_end(self) -> bool:
        return self.value() is None

    def seek(self, target: int) -> None:
        """Move to the first entry >= target in the current level."""
        pos = self.position
        if isinstance(pos, Upper):
            keys = self.relation.keys
            lo = min(pos.i, len(keys))
            self.position = Upper(bisect_left(keys, target, lo))
        else:
            if pos.i >= len(self.relation.keys):
                return
            bucket = self.relation.buckets[pos.i]
            lo = min(pos.j, len(bucket))
            self.position = Lower(pos.i, bisect_left(bucket, target, lo))

    def next(self) -> None:
        """Advance one slot. An exhausted cursor stays exhausted."""
        pos = self.position
        if isinstance(pos, Upper):
            if pos.i < len(self.relation.keys):
                self.position = Upper(pos.i + 1)
        elif pos.i < len(self.relation.keys) and pos.j < len(self.relation.buckets[pos.i]):
            self.position = Lower(pos.i, pos.j + 1)

    def down(self) -> None:
        """Bind the current key and enter its bucket."""
        pos = self.position
        if not isinstance(pos, Upper):
            raise TrieStateError(f"down() called while already bound: {pos}")
        self.position = Lower(pos.i, 0)

    def up(self) -> None:
        """Unbind the key and return to the key level at the same slot."""
        pos = self.position
        if not isinstance(pos, Lower):
            raise TrieStateError(f"up() called at the key level: {pos}")
        self.position = Upper(pos.i)

    def reset(self) -> None:
        """Rewind the current level. A bound key stays bound."""
        pos = self.position
        if isinstance(pos, Upper):
            self.position = Upper(0)
        else:
            self.position = Lower(pos.i, 0)

    def __repr__(self) -> str:
        return f"TrieIndex({self.position}, value={self.value()})"
