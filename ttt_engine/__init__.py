"""
Tic-tac-toe AI engine package.

This package implements a move-selection engine for 3x3 tic-tac-toe using
bitboards, minimax search with alpha-beta pruning, and a small linear model
for a search-free "easy" opponent.

Modules:
    constants  - Win masks, move order, scores, symbols, model coefficients
    board      - Bitboard codec, terminal detection, turn inference
    search     - Parameterized minimax / alpha-beta kernel and root scoring
    evaluate   - Linear model evaluation and greedy move selection
    difficulty - Difficulty modes and named levels
    ai         - Public entry points: find_best_move() and analyse()
    simulation - Engine-vs-engine game runner for benchmarks and tests
"""

from ttt_engine.ai import SearchResult, analyse, find_best_move
from ttt_engine.board import Move
from ttt_engine.difficulty import Difficulty, Mode
from ttt_engine.evaluate import DEFAULT_MODEL, LinearModel

__all__ = [
    "DEFAULT_MODEL",
    "Difficulty",
    "LinearModel",
    "Mode",
    "Move",
    "SearchResult",
    "analyse",
    "find_best_move",
]
