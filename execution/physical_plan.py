"""
LeapJoin Physical Plan Operators
================================
Volcano Iterator Model wrappers around the join driver.
Nodes implement open(), next(), close().
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterator, List, Optional

from execution.context import ExecutionContext
from execution.triejoin import Triple, triejoin

COLUMNS = ["a", "b", "c"]


# Row Structure Contract
# values: dict[col_name -> value] with col_name in COLUMNS
class ExecutionRow:
    __slots__ = ('values',)

    def __init__(self, values: Dict[str, int]):
        self.values = values

    @classmethod
    def from_triple(cls, triple: Triple) -> "ExecutionRow":
        return cls(dict(zip(COLUMNS, triple)))

    def as_tuple(self) -> Triple:
        return self.values["a"], self.values["b"], self.values["c"]

    def __repr__(self):
        return f"Row(values={self.values})"


class PhysicalNode(ABC):
    """Base class for execution operators."""

    def __init__(self):
        self._open = False

    @abstractmethod
    def open(self):
        """Initialize the operator state."""
        self._open = True

    @abstractmethod
    def next(self) -> Optional[ExecutionRow]:
        """Return the next row or None if exhausted."""
        pass

    @abstractmethod
    def close(self):
        """Clean up resources."""
        self._open = False

    def children(self) -> List['PhysicalNode']:
        return []


class TriejoinExec(PhysicalNode):
    """
    Streams (a, b, c) rows from a Leapfrog Triejoin over the context's
    relations. Cursors are created on open() and dropped on close(), so the
    same node can be re-opened for another pass.
    """
    def __init__(self, ctx: ExecutionContext):
        super().__init__()
        self._ctx = ctx
        self._iterator: Optional[Iterator[Triple]] = None

    def open(self):
        super().open()
        r, s, t = self._ctx.open_indexes()
        self._iterator = triejoin(r, s, t, self._ctx.a_range, self._ctx.stats)

    def next(self) -> Optional[ExecutionRow]:
        if not self._open:
            return None
        try:
            return ExecutionRow.from_triple(next(self._iterator))
        except StopIteration:
            return None

    def close(self):
        super().close()
        if self._iterator is not None:
            self._iterator.close()
        self._iterator = None


class LimitExec(PhysicalNode):
    """Pass through at most `limit` rows from the child."""
    def __init__(self, child: PhysicalNode, limit: int):
        super().__init__()
        if limit < 0:
            raise ValueError(f"LIMIT must be non-negative, got {limit}")
        self.child = child
        self.limit = limit
        self._count = 0

    def open(self):
        super().open()
        self.child.open()
        self._count = 0

    def next(self) -> Optional[ExecutionRow]:
        if not self._open or self._count >= self.limit:
            return None
        row = self.child.next()
        if row is not None:
            self._count += 1
        return row

    def close(self):
        super().close()
        self.child.close()

    def children(self): return [self.child]
