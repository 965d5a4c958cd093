"""
LeapJoin Join Driver Tests
==========================
Triangle counting on the reference graph, degenerate inputs, the general
three-relation join, a-range restriction, and agreement with a brute-force
join on random graphs.
"""

from itertools import product

import pytest

from storage.relation import Relation, example_graph
from storage.generator import random_graph
from indexing.trie_index import TrieIndex
from execution.context import JoinStats
from execution.triejoin import (
    triejoin, count_join, enumerate_join, count_triangles, enumerate_triangles,
)

EXPECTED_TRIANGLES = [
    (1, 2, 4), (1, 3, 4), (2, 4, 5), (3, 4, 7),
    (3, 6, 7), (4, 5, 8), (4, 7, 8),
]


def brute_force(r: Relation, s: Relation, t: Relation):
    """Reference nested-loop join."""
    s_edges = set(s.edges())
    t_edges = set(t.edges())
    out = []
    for a, b in r.edges():
        for b2, c in sorted(s_edges):
            if b2 == b and (a, c) in t_edges:
                out.append((a, b, c))
    return sorted(out)


# ═══════════════════════════════════════════════════════════════════
# Triangle specialization
# ═══════════════════════════════════════════════════════════════════

class TestTriangles:

    def test_example_count(self):
        assert count_triangles(example_graph()) == 7

    def test_example_enumeration_in_order(self):
        assert list(enumerate_triangles(example_graph())) == EXPECTED_TRIANGLES

    def test_deterministic(self):
        graph = random_graph(40, 0.4, seed=3)
        assert list(enumerate_triangles(graph)) == list(enumerate_triangles(graph))
        assert count_triangles(graph) == count_triangles(graph)

    def test_empty_relation(self):
        assert count_triangles(Relation()) == 0

    def test_single_key_empty_bucket(self):
        assert count_triangles(Relation([(1, [])])) == 0

    def test_no_triangles_in_path(self):
        assert count_triangles(Relation.from_edges([(1, 2), (2, 3), (3, 4)])) == 0

    def test_complete_forward_graph(self):
        # Every 3-subset of nodes 1..9 is a triangle
        assert count_triangles(random_graph(10, 1.0)) == 84

    def test_relation_not_mutated(self):
        graph = example_graph()
        before = (graph.keys, graph.buckets)
        count_triangles(graph)
        assert (graph.keys, graph.buckets) == before

    @pytest.mark.parametrize("seed", [1, 2, 3, 4])
    def test_matches_brute_force(self, seed):
        graph = random_graph(25, 0.35, seed=seed)
        assert list(enumerate_triangles(graph)) == brute_force(graph, graph, graph)

    def test_cycle_needs_chord(self):
        # 1->2->3->1 has no a->b, b->c, a->c pattern
        assert count_triangles(Relation.from_edges([(1, 2), (2, 3), (3, 1)])) == 0
        # Adding 1->3 gives exactly one
        graph = Relation.from_edges([(1, 2), (2, 3), (3, 1), (1, 3)])
        assert list(enumerate_triangles(graph)) == brute_force(graph, graph, graph)


# ═══════════════════════════════════════════════════════════════════
# General three-relation join
# ═══════════════════════════════════════════════════════════════════

class TestGeneralJoin:

    def test_distinct_relations(self):
        r = Relation.from_mapping({1: [10, 20], 2: [10]})
        s = Relation.from_mapping({10: [100, 200], 20: [300]})
        t = Relation.from_mapping({1: [100, 300], 2: [200]})
        assert list(enumerate_join(r, s, t)) == [
            (1, 10, 100), (1, 20, 300), (2, 10, 200),
        ]
        assert count_join(r, s, t) == 3

    def test_t_missing_a(self):
        r = Relation.from_mapping({1: [10]})
        s = Relation.from_mapping({10: [100]})
        t = Relation.from_mapping({2: [100]})
        assert count_join(r, s, t) == 0

    def test_s_missing_b(self):
        r = Relation.from_mapping({1: [10, 11]})
        s = Relation.from_mapping({12: [100]})
        t = Relation.from_mapping({1: [100]})
        assert count_join(r, s, t) == 0

    @pytest.mark.parametrize("seed", [11, 12, 13])
    def test_random_distinct_relations(self, seed):
        r = random_graph(20, 0.3, seed=seed)
        s = random_graph(20, 0.3, seed=seed + 100)
        t = random_graph(20, 0.3, seed=seed + 200)
        assert list(enumerate_join(r, s, t)) == brute_force(r, s, t)


# ═══════════════════════════════════════════════════════════════════
# Driver internals
# ═══════════════════════════════════════════════════════════════════

class TestDriver:

    def test_a_range_restricts_outer_variable(self):
        graph = example_graph()
        out = list(enumerate_join(graph, graph, graph, a_range=(2, 4)))
        assert out == [(2, 4, 5), (3, 4, 7), (3, 6, 7)]

    def test_a_ranges_partition_total(self):
        graph = random_graph(40, 0.4, seed=9)
        bounds = [0, 5, 13, 14, 30]
        ranges = list(zip(bounds, bounds[1:] + [None]))
        parts = [count_join(graph, graph, graph, a_range=rng) for rng in ranges]
        assert sum(parts) == count_triangles(graph)

    def test_empty_a_range(self):
        graph = example_graph()
        assert count_join(graph, graph, graph, a_range=(5, 5)) == 0

    def test_stats_collected(self):
        stats = JoinStats()
        assert count_triangles(example_graph(), stats=stats) == 7
        assert stats.triples == 7
        assert stats.a_bindings == 7
        assert stats.b_bindings == 11
        assert stats.seeks > 0
        assert stats.elapsed >= 0.0

    def test_triejoin_drives_given_cursors(self):
        graph = example_graph()
        r, s, t = TrieIndex(graph), TrieIndex(graph), TrieIndex(graph)
        assert len(list(triejoin(r, s, t))) == 7
        # All cursors finish back at the key level
        assert r.depth == s.depth == t.depth == 0
        assert r.value() is None

    def test_partial_consumption(self):
        gen = enumerate_triangles(example_graph())
        assert next(gen) == (1, 2, 4)
        assert next(gen) == (1, 3, 4)
        gen.close()


def test_every_small_graph_matches_brute_force():
    # All edge subsets of the complete forward graph on 4 nodes
    pairs = [(a, b) for a, b in product(range(1, 5), repeat=2) if a < b]
    for mask in range(1 << len(pairs)):
        edges = [p for i, p in enumerate(pairs) if mask >> i & 1]
        graph = Relation.from_edges(edges)
        assert list(enumerate_triangles(graph)) == brute_force(graph, graph, graph)
