#!/usr/bin/env python3
"""
Benchmark: measure nodes, search depth and time per move for each level.

Run before and after a search change (move ordering, pruning) to quantify
the effect. A lower node count for the same move indicates more effective
pruning.

Usage: python3 tools/bench.py [--iterations N] [--seed S]
"""
import argparse
import os
import random
import sys
import time

REPO = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO not in sys.path:
    sys.path.insert(0, REPO)

from ttt_engine.ai import analyse  # noqa: E402
from ttt_engine.board import encode  # noqa: E402
from ttt_engine.difficulty import Difficulty  # noqa: E402
from ttt_engine.search import SearchLimits, SearchStats, score_moves  # noqa: E402

E = " "

# Fixed positions, the same for every comparison. The empty board is the
# worst case for the search.
POSITIONS = [
    ("Empty",       [[E, E, E], [E, E, E], [E, E, E]], "X"),
    ("Center",      [[E, E, E], [E, "X", E], [E, E, E]], "O"),
    ("Corner",      [["X", E, E], [E, E, E], [E, E, E]], "O"),
    ("Fork threat", [["X", E, E], [E, "O", E], [E, E, "X"]], "O"),
    ("Win in one",  [["X", "X", E], ["O", "O", E], [E, E, E]], "X"),
]

LEVELS = [
    ("Hard",    Difficulty.perfect()),
    ("Medium",  Difficulty.from_level("medium")),
    ("Shallow", Difficulty.shallow()),
    ("Easy",    Difficulty.model()),
]


def run_position(label: str, board: list[list[str]], mover: str, difficulty: Difficulty,
                 iterations: int, rng: random.Random) -> dict:
    """Run ``iterations`` decisions on one position and return averaged metrics."""
    nodes = 0
    max_depth = 0
    result = None
    start = time.perf_counter()
    for _ in range(iterations):
        result = analyse(board, mover, difficulty, rng=rng)
        nodes += result.nodes
        max_depth = max(max_depth, result.max_depth)
    elapsed = time.perf_counter() - start

    return {
        "label": label,
        "move": "(none)" if result.move is None else f"{result.move.row},{result.move.col}",
        "nodes": nodes // iterations,
        "depth": max_depth,
        "us": elapsed / iterations * 1e6,
    }


def pruning_gain(board: list[list[str]], mover: str) -> tuple[int, int]:
    """Return (nodes with pruning, nodes without) for a full search."""
    mask_x, mask_o = encode(board)
    own, opp = (mask_x, mask_o) if mover == "X" else (mask_o, mask_x)
    counts = []
    for pruning in (True, False):
        stats = SearchStats()
        score_moves(own, opp, SearchLimits(pruning=pruning), stats)
        counts.append(stats.nodes)
    return counts[0], counts[1]


def main() -> None:
    """Run all positions for every level and print a summary table."""
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--iterations", type=int, default=50)
    parser.add_argument("--seed", type=int, default=0)
    args = parser.parse_args()
    rng = random.Random(args.seed)

    print(f"Tic-tac-toe engine benchmark ({sys.executable})")
    print(f"Iterations per position: {args.iterations}")
    print()

    for level, difficulty in LEVELS:
        print(f"{level} [{difficulty}]")
        print(f"{'Position':<12} {'Move':<7} {'Nodes':>8} {'Depth':>5} {'Time(us)':>10}")
        print("-" * 46)
        for label, board, mover in POSITIONS:
            r = run_position(label, board, mover, difficulty, args.iterations, rng)
            print(f"{r['label']:<12} {r['move']:<7} {r['nodes']:>8,} {r['depth']:>5} {r['us']:>10,.1f}")
        print()

    print("Alpha-beta node reduction (full search)")
    print(f"{'Position':<12} {'Pruned':>8} {'Minimax':>9}")
    print("-" * 31)
    for label, board, mover in POSITIONS:
        pruned, full = pruning_gain(board, mover)
        print(f"{label:<12} {pruned:>8,} {full:>9,}")


if __name__ == "__main__":
    main()
