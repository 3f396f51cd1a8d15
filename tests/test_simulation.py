"""
Engine-vs-engine games: legality of play and strength of the perfect level.
"""

import random

import pytest

from ttt_engine.board import move_to_index
from ttt_engine.difficulty import Difficulty
from ttt_engine.simulation import MatchResult, play_game, run_match

RANDOM_PLAYER = Difficulty.with_error_rate(100)


class TestPlayGame:
    def test_moves_alternate_and_are_legal(self, rng):
        record = play_game(RANDOM_PLAYER, RANDOM_PLAYER, rng=rng)
        cells = [move_to_index(move) for _, move in record.moves]
        assert len(cells) == len(set(cells))
        assert 5 <= len(record.moves) <= 9
        sides = [side for side, _ in record.moves]
        assert sides[0] == "X"
        assert all(a != b for a, b in zip(sides, sides[1:]))

    def test_o_can_open(self, rng):
        record = play_game(RANDOM_PLAYER, RANDOM_PLAYER, x_starts=False, rng=rng)
        assert record.moves[0][0] == "O"

    def test_winner_made_the_last_move(self):
        rng = random.Random(99)
        for _ in range(20):
            record = play_game(RANDOM_PLAYER, RANDOM_PLAYER, rng=rng)
            if record.winner is not None:
                assert record.moves[-1][0] == record.winner
            else:
                assert len(record.moves) == 9

    def test_perfect_against_itself_draws(self, rng):
        for x_starts in (True, False):
            record = play_game(Difficulty.perfect(), Difficulty.perfect(), x_starts=x_starts, rng=rng)
            assert record.winner is None


class TestRunMatch:
    def test_perfect_never_loses_to_random(self, rng):
        result = run_match(Difficulty.perfect(), RANDOM_PLAYER, 40, rng=rng)
        assert result.losses == 0
        assert result.games == 40
        assert result.wins > 0

    def test_perfect_never_loses_to_easy(self, rng):
        result = run_match(Difficulty.perfect(), Difficulty.model(), 10, rng=rng)
        assert result.losses == 0

    def test_counts_add_up(self, rng):
        result = run_match(Difficulty.model(), RANDOM_PLAYER, 30, rng=rng)
        assert result.wins + result.losses + result.draws == 30

    def test_rejects_non_positive_games(self):
        with pytest.raises(ValueError):
            run_match(Difficulty.perfect(), RANDOM_PLAYER, 0)


class TestMatchResult:
    def test_rates(self):
        result = MatchResult(wins=3, losses=1, draws=0)
        assert result.games == 4
        assert result.rate(result.wins) == 0.75

    def test_empty_rate(self):
        assert MatchResult().rate(0) == 0.0
