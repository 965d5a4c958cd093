"""
LeapJoin Join Driver
====================
Leapfrog Triejoin for the pattern

    Q(a, b, c) <- R(a, b), S(b, c), T(a, c)

Each variable is bound by a leapfrog merge of the two cursors that mention it:

    a: R.Upper  x T.Upper
    b: R.Lower  x S.Upper     (R bound to a)
    c: S.Lower  x T.Lower     (S bound to b, T bound to a)

Whichever cursor is behind is sought forward to the other's value until they
agree or one runs out. Levels a and b stop at the first agreement and
descend; level c reports every agreement and advances both sides.

Backtracking:
  - c exhausted: S goes up and on to the next b.
  - b exhausted: S rewinds its key level, R and T go up and on to the next a.
  - R or T exhausted at the key level: done.

Results come out in ascending (a, b, c) order. Correctness relies on every
level being sorted and duplicate-free (see storage.relation).

Teaching note:
  No intermediate result is ever materialized; total work is bounded by the
  worst-case output size of the join (AGM bound), unlike a pair of binary
  joins that can build an O(E^1.5)-sized R x S first.
"""

import time
from typing import Iterator, Optional, Tuple

from storage.relation import Relation
from indexing.trie_index import TrieIndex
from execution.context import ARange, JoinStats

Triple = Tuple[int, int, int]


def triejoin(r: TrieIndex, s: TrieIndex, t: TrieIndex,
             a_range: Optional[ARange] = None,
             stats: Optional[JoinStats] = None) -> Iterator[Triple]:
    """
    Yield every (a, b, c) with (a,b) in R, (b,c) in S, (a,c) in T.
    Cursors must start at Upper(0). Once the generator finishes, all three
    are back at the key level.
    """
    if stats is None:
        stats = JoinStats()

    hi = None
    if a_range is not None:
        lo, hi = a_range
        r.seek(lo)
        t.seek(lo)
        stats.seeks += 2

    while True:
        r_a = r.value()
        t_a = t.value()
        if r_a is None or t_a is None:
            break
        if hi is not None and (r_a >= hi or t_a >= hi):
            break

        if r_a < t_a:
            r.seek(t_a)
            stats.seeks += 1
        elif r_a > t_a:
            t.seek(r_a)
            stats.seeks += 1
        else:
            # a is bound
            stats.a_bindings += 1
            r.down()
            t.down()
            while True:
                r_b = r.value()
                s_b = s.value()
                if r_b is None or s_b is None:
                    break

                if r_b < s_b:
                    r.seek(s_b)
                    stats.seeks += 1
                elif r_b > s_b:
                    s.seek(r_b)
                    stats.seeks += 1
                else:
                    # b is bound
                    stats.b_bindings += 1
                    s.down()
                    t.reset()
                    while True:
                        s_c = s.value()
                        t_c = t.value()
                        if s_c is None or t_c is None:
                            break

                        if s_c < t_c:
                            s.seek(t_c)
                            stats.seeks += 1
                        elif s_c > t_c:
                            t.seek(s_c)
                            stats.seeks += 1
                        else:
                            stats.triples += 1
                            yield r_a, r_b, s_c
                            s.next()
                            t.next()

                    # Next b
                    s.up()
                    s.next()

            # Next a
            s.reset()
            r.up()
            r.next()
            t.up()
            t.next()


# ─── General three-relation join ────────────────────────────────────────────

def enumerate_join(r: Relation, s: Relation, t: Relation,
                   a_range: Optional[ARange] = None,
                   stats: Optional[JoinStats] = None) -> Iterator[Triple]:
    """Stream the join of three (possibly distinct) relations."""
    return triejoin(TrieIndex(r), TrieIndex(s), TrieIndex(t), a_range, stats)


def count_join(r: Relation, s: Relation, t: Relation,
               a_range: Optional[ARange] = None,
               stats: Optional[JoinStats] = None) -> int:
    """Count join results without keeping them."""
    if stats is None:
        stats = JoinStats()
    start = time.perf_counter()
    count = 0
    for _ in enumerate_join(r, s, t, a_range, stats):
        count += 1
    stats.elapsed += time.perf_counter() - start
    return count


# ─── Triangle specialization ────────────────────────────────────────────────

def enumerate_triangles(graph: Relation,
                        stats: Optional[JoinStats] = None) -> Iterator[Triple]:
    """Directed triangles a->b, b->c, a->c, ascending."""
    return enumerate_join(graph, graph, graph, stats=stats)


def count_triangles(graph: Relation,
                    stats: Optional[JoinStats] = None) -> int:
    return count_join(graph, graph, graph, stats=stats)
