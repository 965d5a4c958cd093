"""
LeapJoin Executor
=================
Runs a join described by an ExecutionContext.
Pipeline: ExecutionContext -> physical plan -> rows (or a bare count).
"""

import time
from typing import Iterator, List, Optional

from execution.context import ExecutionContext
from execution.physical_plan import ExecutionRow, LimitExec, PhysicalNode, TriejoinExec
from execution.triejoin import Triple, triejoin


class Executor:
    """
    Executes triejoin plans.
    """
    def __init__(self, context: ExecutionContext):
        self.context = context

    def plan(self, limit: Optional[int] = None) -> PhysicalNode:
        """Build the operator tree: TriejoinExec, optionally under a LimitExec."""
        node: PhysicalNode = TriejoinExec(self.context)
        if limit is not None:
            node = LimitExec(node, limit)
        return node

    def execute(self, plan: Optional[PhysicalNode] = None) -> Iterator[ExecutionRow]:
        """
        Execute a plan and yield result rows.
        """
        if plan is None:
            plan = self.plan()
        start = time.perf_counter()
        # Resource Guarantee: Ensure close() is called.
        try:
            plan.open()
            while True:
                row = plan.next()
                if row is None:
                    break
                yield row
        finally:
            plan.close()
            self.context.stats.elapsed += time.perf_counter() - start

    def fetchall(self, plan: Optional[PhysicalNode] = None) -> List[Triple]:
        """
        Execute and return the triples as tuples.
        Helper for tests/API.
        """
        return [row.as_tuple() for row in self.execute(plan)]

    def count(self) -> int:
        """Count matches straight off the driver, without building rows."""
        r, s, t = self.context.open_indexes()
        start = time.perf_counter()
        count = 0
        for _ in triejoin(r, s, t, self.context.a_range, self.context.stats):
            count += 1
        self.context.stats.elapsed += time.perf_counter() - start
        return count
