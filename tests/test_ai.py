"""
Tests for the public move-selection entry points across difficulty modes.
"""

import copy
import random
from concurrent.futures import ThreadPoolExecutor

import pytest

from ttt_engine.ai import analyse, find_best_move
from ttt_engine.board import Move, encode, move_to_index
from ttt_engine.constants import SEARCH_BOUND, SHALLOW_DEPTH
from ttt_engine.difficulty import Difficulty
from ttt_engine.search import FULL_SEARCH, SearchStats, minimax

E = " "

EMPTY_BOARD = [[E, E, E], [E, E, E], [E, E, E]]
WIN_IN_ONE = [["X", "X", E], ["O", "O", E], [E, E, E]]
# Three empty cells; only (0, 2) is optimal for X.
THREE_LEFT = [["X", "X", E], ["O", "O", E], ["X", "O", E]]
FULL = [["X", "O", "X"], ["X", "O", "O"], ["O", "X", "X"]]

ALL_DIFFICULTIES = [
    Difficulty.perfect(),
    Difficulty.with_error_rate(20),
    Difficulty.with_error_rate(100),
    Difficulty.shallow(),
    Difficulty.model(),
]


def _value_after(board, mover, move):
    """Exact value of ``move`` for ``mover`` with best play afterwards."""
    mask_x, mask_o = encode(board)
    own, opp = (mask_x, mask_o) if mover == "X" else (mask_o, mask_x)
    own |= 1 << move_to_index(move)
    return minimax(own, opp, 1, -SEARCH_BOUND, SEARCH_BOUND, False, FULL_SEARCH, SearchStats())


class TestPerfect:
    def test_completes_the_row(self, rng):
        result = analyse(WIN_IN_ONE, "X", Difficulty.perfect(), rng=rng)
        assert result.move == (0, 2)
        assert result.candidates == [Move(0, 2)]
        assert result.score == 9
        assert result.mover == "X"
        assert not result.random_move

    def test_returns_move_type(self, rng):
        move = find_best_move(WIN_IN_ONE, "X", rng=rng)
        assert isinstance(move, Move)
        assert move.row == 0 and move.col == 2

    def test_empty_board_opening_never_loses(self, rng):
        for _ in range(10):
            result = analyse(EMPTY_BOARD, "X", Difficulty.perfect(), rng=rng)
            assert result.move in result.candidates
            assert result.score == 0
            assert _value_after(EMPTY_BOARD, "X", result.move) >= 0

    def test_ties_are_broken_randomly(self):
        board = [[E, E, E], [E, "X", E], [E, E, E]]
        rng = random.Random(5)
        moves = {find_best_move(board, "O", rng=rng) for _ in range(40)}
        # Only the four corners hold the draw against a center opening.
        assert moves <= {(0, 0), (0, 2), (2, 0), (2, 2)}
        assert len(moves) > 1

    def test_seeded_generator_is_reproducible(self):
        board = [[E, E, E], [E, "X", E], [E, E, E]]
        first = [find_best_move(board, "O", rng=random.Random(11)) for _ in range(5)]
        second = [find_best_move(board, "O", rng=random.Random(11)) for _ in range(5)]
        assert first == second

    def test_reports_search_statistics(self, rng):
        result = analyse([[E, E, E], [E, "X", E], [E, E, E]], "O", rng=rng)
        assert result.nodes > 0
        assert 1 <= result.max_depth <= 9

    def test_default_difficulty_is_perfect(self, rng):
        assert find_best_move(WIN_IN_ONE, "X", rng=rng) == (0, 2)

    def test_concurrent_calls_with_private_generators(self):
        def decide(seed):
            return find_best_move(WIN_IN_ONE, "X", rng=random.Random(seed))

        with ThreadPoolExecutor(max_workers=4) as pool:
            assert set(pool.map(decide, range(16))) == {(0, 2)}


class TestErrorRate:
    def test_zero_rate_never_random(self, rng):
        difficulty = Difficulty.with_error_rate(0)
        for _ in range(50):
            result = analyse(THREE_LEFT, "X", difficulty, rng=rng)
            assert not result.random_move
            assert result.move == (0, 2)

    def test_full_rate_always_random(self, rng):
        difficulty = Difficulty.with_error_rate(100)
        seen = set()
        for _ in range(60):
            result = analyse(THREE_LEFT, "X", difficulty, rng=rng)
            assert result.random_move
            assert result.nodes == 0
            assert result.score is None
            seen.add(result.move)
        assert seen == {(0, 2), (1, 2), (2, 2)}

    def test_error_rate_calibration(self):
        rng = random.Random(2024)
        difficulty = Difficulty.with_error_rate(20)
        trials = 10_000
        random_moves = 0
        non_optimal = 0
        for _ in range(trials):
            result = analyse(THREE_LEFT, "X", difficulty, rng=rng)
            random_moves += result.random_move
            non_optimal += result.move != (0, 2)
        assert random_moves / trials == pytest.approx(0.20, abs=0.02)
        # A random pick still lands on the winning cell one time in three.
        assert non_optimal / trials == pytest.approx(0.20 * 2 / 3, abs=0.02)


class TestShallow:
    def test_blocks_immediate_threat(self, rng):
        board = [["X", E, E], ["O", "O", E], [E, E, "X"]]
        for _ in range(10):
            result = analyse(board, "X", Difficulty.shallow(), rng=rng)
            assert result.move == (1, 2)
            assert result.max_depth <= SHALLOW_DEPTH

    def test_takes_immediate_win(self, rng):
        assert find_best_move(WIN_IN_ONE, "X", Difficulty.shallow(), rng=rng) == (0, 2)

    def test_depth_limit_caps_recursion(self, rng):
        result = analyse(EMPTY_BOARD, "X", Difficulty.shallow(3), rng=rng)
        assert result.move is not None
        assert result.max_depth <= 3


class TestModel:
    def test_empty_board_takes_center(self):
        result = analyse(EMPTY_BOARD, "X", Difficulty.model())
        assert result.move == (1, 1)
        assert result.nodes == 0
        assert isinstance(result.score, float)

    def test_plays_for_either_side(self):
        board = [[E, E, E], [E, "X", E], [E, E, E]]
        assert find_best_move(board, "O", Difficulty.model()) == (0, 2)

    def test_is_deterministic(self):
        board = [["X", E, E], [E, "O", E], [E, E, E]]
        moves = {find_best_move(board, "X", Difficulty.model(), rng=random.Random(seed)) for seed in range(10)}
        assert len(moves) == 1


class TestBoundary:
    @pytest.mark.parametrize("difficulty", ALL_DIFFICULTIES, ids=str)
    def test_full_board_returns_none(self, difficulty, rng):
        assert find_best_move(FULL, "X", difficulty, rng=rng) is None
        result = analyse(FULL, "O", difficulty, rng=rng)
        assert result.move is None
        assert result.candidates == []

    @pytest.mark.parametrize("difficulty", ALL_DIFFICULTIES, ids=str)
    def test_board_is_not_modified(self, difficulty, rng):
        board = [["X", E, E], [E, "O", E], [E, E, E]]
        before = copy.deepcopy(board)
        move = find_best_move(board, "X", difficulty, rng=rng)
        assert board == before
        assert board[move.row][move.col] == E

    def test_turn_is_inferred_from_counts(self, rng):
        board = [[E, E, E], [E, "X", E], [E, E, E]]
        assert analyse(board, "X", rng=rng).mover == "O"
        assert analyse(board, "X", rng=rng, infer_turn=False).mover == "X"

    def test_custom_symbols(self, rng):
        board = [["A", "A", E], ["B", "B", E], [E, E, E]]
        assert find_best_move(board, "B", rng=rng, symbols=("A", "B"), infer_turn=False) == (1, 2)

    def test_unknown_mover_rejected(self, rng):
        with pytest.raises(ValueError):
            find_best_move(EMPTY_BOARD, "Z", rng=rng)
