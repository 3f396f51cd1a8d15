#!/usr/bin/env python3
"""
Difficulty simulation: play each level against a fixed benchmark opponent.

The benchmark opponent plays perfectly except for a 10% chance of a random
move per turn. Starts strictly alternate, so the game count is rounded up
to an even number.

Usage: python3 tools/simulate.py [--games N] [--seed S]
"""
import argparse
import logging
import os
import random
import sys

REPO = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO not in sys.path:
    sys.path.insert(0, REPO)

from ttt_engine.constants import BENCHMARK_ERROR_RATE  # noqa: E402
from ttt_engine.difficulty import Difficulty  # noqa: E402
from ttt_engine.simulation import run_match  # noqa: E402

MODES = [
    ("Perfect (Hard)",     Difficulty.from_level("hard")),
    ("Imperfect (Medium)", Difficulty.from_level("medium")),
    ("Model (Easy)",       Difficulty.from_level("easy")),
]


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--games", type=int, default=10_000)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    games = args.games + (args.games % 2)
    rng = random.Random(args.seed)
    benchmark = Difficulty.with_error_rate(BENCHMARK_ERROR_RATE)

    print("=" * 64)
    print("AI DIFFICULTY SIMULATION")
    print("-" * 64)
    print(f"Opponent: {benchmark}")
    print(f"Total games: {games:,} ({games // 2:,} starts each)")
    print("=" * 64)
    print()

    for name, difficulty in MODES:
        result = run_match(difficulty, benchmark, games, rng=rng)
        print(f"Mode: {name}")
        print("-" * 32)
        print(f"Wins:   {result.wins:6,} ({result.rate(result.wins) * 100:5.1f}%)")
        print(f"Losses: {result.losses:6,} ({result.rate(result.losses) * 100:5.1f}%)")
        print(f"Draws:  {result.draws:6,} ({result.rate(result.draws) * 100:5.1f}%)")
        print()


if __name__ == "__main__":
    main()
