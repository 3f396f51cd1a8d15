"""
Engine-vs-engine games for difficulty benchmarking.

A match pits a test difficulty against a benchmark difficulty and strictly
alternates who opens, so neither side profits from the first-move
advantage. The test side always plays 'X' and the benchmark side 'O';
whoever opens simply moves first with their own symbol.

The runner is the engine's caller here, so it owns the fallback:
a move that is missing or lands on an occupied cell is replaced by the
first empty cell in row-major order.
"""

import logging
import random
from dataclasses import dataclass, field

from ttt_engine.ai import find_best_move
from ttt_engine.board import Move, decode, empty_cells, index_to_move, is_full, is_winner, move_to_index
from ttt_engine.constants import NUM_CELLS, PLAYER_O, PLAYER_X
from ttt_engine.difficulty import Difficulty

_log = logging.getLogger(__name__)


@dataclass
class GameRecord:
    """Winner symbol (None for a draw) and the moves in order of play."""

    winner: str | None
    moves: list[tuple[str, Move]] = field(default_factory=list)


@dataclass
class MatchResult:
    """Results from the test side's point of view."""

    wins: int = 0
    losses: int = 0
    draws: int = 0

    @property
    def games(self) -> int:
        return self.wins + self.losses + self.draws

    def rate(self, count: int) -> float:
        return count / self.games if self.games else 0.0


def play_game(
    x_difficulty: Difficulty,
    o_difficulty: Difficulty,
    *,
    x_starts: bool = True,
    rng: random.Random | None = None,
) -> GameRecord:
    """
    Play one game from the empty board.

    Args:
        x_difficulty: Difficulty for the 'X' side.
        o_difficulty: Difficulty for the 'O' side.
        x_starts:     True if 'X' makes the first move.
        rng:          Random generator shared by both sides for this game.

    Returns:
        GameRecord with the winner and the move list.
    """
    if rng is None:
        rng = random.Random()

    masks = {PLAYER_X: 0, PLAYER_O: 0}
    difficulties = {PLAYER_X: x_difficulty, PLAYER_O: o_difficulty}
    turn = PLAYER_X if x_starts else PLAYER_O
    record = GameRecord(winner=None)

    for _ in range(NUM_CELLS):
        # The turn is tracked here, so inference is switched off.
        grid = decode(masks[PLAYER_X], masks[PLAYER_O])
        move = find_best_move(grid, turn, difficulties[turn], rng=rng, infer_turn=False)

        occupied = masks[PLAYER_X] | masks[PLAYER_O]
        if move is None or occupied & (1 << move_to_index(move)):
            _log.warning("invalid move %s for %s, using first empty cell", move, turn)
            move = index_to_move(empty_cells(masks[PLAYER_X], masks[PLAYER_O])[0])

        masks[turn] |= 1 << move_to_index(move)
        record.moves.append((turn, move))

        if is_winner(masks[turn]):
            record.winner = turn
            break
        if is_full(masks[PLAYER_X], masks[PLAYER_O]):
            break
        turn = PLAYER_O if turn == PLAYER_X else PLAYER_X

    return record


def run_match(
    test: Difficulty,
    benchmark: Difficulty,
    games: int,
    *,
    rng: random.Random | None = None,
) -> MatchResult:
    """
    Play ``games`` games of ``test`` ('X') against ``benchmark`` ('O').

    Even-numbered games are opened by the test side, odd-numbered ones by
    the benchmark side.

    Raises:
        ValueError: If ``games`` is not positive.
    """
    if games <= 0:
        raise ValueError(f"games must be positive, got {games}")
    if rng is None:
        rng = random.Random()

    result = MatchResult()
    for i in range(games):
        record = play_game(test, benchmark, x_starts=(i % 2 == 0), rng=rng)
        if record.winner == PLAYER_X:
            result.wins += 1
        elif record.winner == PLAYER_O:
            result.losses += 1
        else:
            result.draws += 1

    _log.info(
        "%s vs %s: %d games, W=%d L=%d D=%d",
        test,
        benchmark,
        result.games,
        result.wins,
        result.losses,
        result.draws,
    )
    return result
