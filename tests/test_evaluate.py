"""
Tests for the linear model evaluator and greedy move selection.
"""

import copy

import pytest

from ttt_engine.board import encode
from ttt_engine.constants import LR_BIAS, LR_WEIGHTS
from ttt_engine.evaluate import DEFAULT_MODEL, LinearModel, greedy_move, score_board, score_masks

E = " "


class TestLinearModel:
    def test_default_coefficients(self):
        assert DEFAULT_MODEL.weights == LR_WEIGHTS
        assert DEFAULT_MODEL.bias == LR_BIAS

    def test_wrong_weight_count_rejected(self):
        with pytest.raises(ValueError):
            LinearModel(weights=(1.0,) * 8)

    def test_list_weights_are_frozen(self):
        model = LinearModel(weights=[1, 2, 3, 4, 5, 6, 7, 8, 9], bias=0.5)
        assert model.weights == (1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0, 9.0)
        assert hash(model) == hash(LinearModel(weights=tuple(range(1, 10)), bias=0.5))


class TestScoring:
    def test_empty_board_scores_bias(self):
        assert score_masks(0, 0) == pytest.approx(LR_BIAS)

    def test_mover_and_opponent_features(self):
        own, opp = 1 << 4, 1 << 0
        expected = LR_WEIGHTS[4] - LR_WEIGHTS[0] + LR_BIAS
        assert score_masks(own, opp) == pytest.approx(expected)

    def test_perspective_flips_sign_of_features(self):
        grid = [["X", E, "O"], [E, "X", E], [E, E, "O"]]
        x_view = score_board(grid, "X") - LR_BIAS
        o_view = score_board(grid, "O") - LR_BIAS
        assert x_view == pytest.approx(-o_view)

    def test_score_is_pure(self):
        grid = [["X", E, E], [E, "O", E], [E, E, E]]
        before = copy.deepcopy(grid)
        first = score_board(grid, "X")
        assert all(score_board(grid, "X") == first for _ in range(5))
        assert grid == before

    def test_place_and_remove_restores_board(self):
        grid = [["X", E, E], [E, "O", E], [E, E, E]]
        before = copy.deepcopy(grid)
        base = score_board(grid, "X")
        grid[2][2] = "X"
        placed = score_board(grid, "X")
        grid[2][2] = E
        assert grid == before
        assert placed == pytest.approx(base + LR_WEIGHTS[8])
        assert score_board(grid, "X") == base

    def test_score_board_rejects_unknown_mover(self):
        with pytest.raises(ValueError):
            score_board([[E] * 3 for _ in range(3)], "Z")


class TestGreedyMove:
    def test_empty_board_takes_center(self):
        idx, score = greedy_move(0, 0)
        assert idx == 4
        assert score == pytest.approx(LR_WEIGHTS[4] + LR_BIAS)

    def test_after_center_takes_heaviest_corner(self):
        mask_x, mask_o = encode([[E, E, E], [E, "X", E], [E, E, E]])
        idx, _ = greedy_move(mask_o, mask_x)
        assert idx == 2

    def test_first_cell_wins_ties(self):
        flat = LinearModel(weights=(1.0,) * 9, bias=0.0)
        assert greedy_move(1 << 0, 1 << 4, flat)[0] == 1
        assert greedy_move(0, 0, flat)[0] == 0

    def test_ignores_tactics(self):
        # X threatens the left column at (2, 0); the model still prefers the
        # heavier corner at (0, 2).
        mask_x, mask_o = encode([["X", E, E], ["X", "O", E], [E, E, E]])
        idx, _ = greedy_move(mask_o, mask_x)
        assert idx == 2

    def test_full_board_returns_none(self):
        mask_x, mask_o = encode([["X", "O", "X"], ["X", "O", "O"], ["O", "X", "X"]])
        assert greedy_move(mask_x, mask_o) is None
