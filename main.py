"""
LeapJoin — Leapfrog Triejoin Triangle Benchmark
===============================================
Entry point: builds a graph, counts its directed triangles with Leapfrog
Triejoin and reports the time taken.

Usage:
    python main.py [options]

Options:
    --nodes N        Random graph size (default 1000)
    --density P      Edge probability (default 0.5)
    --seed S         Random seed
    --example        Use the built-in seven-node example graph
    --workers W      Count with W threads over disjoint ranges of a
    --show K         Print the first K triangles
    --mode M         Output mode for --show (table/raw)
    --validate       Check relation invariants before joining
    --stats          Print join counters
"""

import argparse
import sys
import time
from typing import List, Optional

from storage.relation import Relation, example_graph
from storage.generator import random_graph
from execution.context import ExecutionContext
from execution.executor import Executor
from execution.parallel import parallel_count_triangles
from execution.physical_plan import COLUMNS
from cli.renderer import MODES, Renderer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="leapjoin",
        description="Count directed triangles with Leapfrog Triejoin",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--nodes", type=int, default=1000,
                        help="Number of nodes in the random graph")
    parser.add_argument("--density", type=float, default=0.5,
                        help="Probability of each forward edge")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for reproducible graphs")
    parser.add_argument("--example", action="store_true",
                        help="Use the seven-node example graph")
    parser.add_argument("--workers", type=int, default=1,
                        help="Parallel workers (1 = sequential)")
    parser.add_argument("--show", type=int, default=0, metavar="K",
                        help="Print the first K triangles")
    parser.add_argument("--mode", choices=MODES, default="table",
                        help="Output mode for --show")
    parser.add_argument("--validate", action="store_true",
                        help="Validate relation invariants before joining")
    parser.add_argument("--stats", action="store_true",
                        help="Print join counters")
    return parser


def load_graph(args: argparse.Namespace) -> Relation:
    if args.example:
        return example_graph()
    return random_graph(args.nodes, args.density, seed=args.seed)


def run(args: argparse.Namespace, renderer: Renderer) -> int:
    """Build the graph, run the join, render results. Returns exit code."""
    if args.workers < 1:
        raise ValueError(f"--workers must be >= 1, got {args.workers}")
    if args.show < 0:
        raise ValueError(f"--show must be non-negative, got {args.show}")

    graph = load_graph(args)
    if args.validate:
        graph.validate()

    ctx = ExecutionContext.for_triangles(graph)
    executor = Executor(ctx)

    start = time.perf_counter()
    if args.workers > 1:
        count = parallel_count_triangles(graph, workers=args.workers, stats=ctx.stats)
    else:
        count = executor.count()
    elapsed = time.perf_counter() - start

    renderer.render_summary(count, elapsed)
    if args.stats:
        renderer.render_stats(ctx.stats.to_dict())

    if args.show:
        renderer.mode = args.mode
        renderer.render_rows(executor.execute(executor.plan(limit=args.show)), COLUMNS)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Parse CLI arguments and dispatch."""
    args = build_parser().parse_args(argv)
    renderer = Renderer()
    try:
        return run(args, renderer)
    except (ValueError, RuntimeError) as e:
        renderer.render_error(e)
        return 1
    except KeyboardInterrupt as e:
        renderer.render_error(e)
        return 130


if __name__ == "__main__":
    sys.exit(main())
