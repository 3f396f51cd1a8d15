"""
Move selection entry points.

This module defines the stable public interface used by the web app, the
simulation runner and the tools:

    find_best_move(board, mover, difficulty) -> Move | None
    analyse(board, mover, difficulty)        -> SearchResult

Each call is single-shot: the board is encoded once, the side to move is
resolved once, the configured difficulty picks a move, and nothing is kept
afterwards. The caller's board is never modified.

Difficulty behaviours:

    PERFECT     Full alpha-beta search of every candidate. Moves tying the
                best score are collected and one is drawn uniformly at
                random, so repeated games vary while play stays perfect.
    ERROR_RATE  One roll in [0, 100) per call. Below error_rate, skip the
                search and play a uniformly random legal move; otherwise
                behave exactly like PERFECT.
    SHALLOW     The same search cut off at depth_limit plies, visiting
                children in a freshly shuffled order at every node.
    MODEL       No search. Greedy pick by the linear model, first cell in
                row-major order wins ties.

A full board yields ``None`` in every mode. That is the normal "nothing to
do" outcome, not an error.

Randomness:
    All random draws (error roll, random move, shuffles, tie-breaks) come
    from the ``rng`` argument. When it is omitted a private random.Random
    is created for the call, so concurrent callers never share generator
    state. Pass a seeded generator for reproducible play.
"""

import logging
import random
from dataclasses import dataclass, field

from ttt_engine.board import Grid, Move, empty_cells, index_to_move, is_full, player_masks
from ttt_engine.constants import SYMBOLS
from ttt_engine.difficulty import Difficulty, Mode
from ttt_engine.evaluate import DEFAULT_MODEL, LinearModel, greedy_move
from ttt_engine.search import FULL_SEARCH, SearchLimits, SearchStats, best_candidates, score_moves

_log = logging.getLogger(__name__)


@dataclass
class SearchResult:
    """
    Outcome of one decision.

    Attributes:
        move:        Chosen move, or None when the board is full.
        score:       Search score (int) or linear model score (float) of the
                     chosen move. None for a random move or a full board.
        nodes:       Minimax nodes visited. 0 when no search ran.
        max_depth:   Deepest ply reached by the search.
        random_move: True when the error roll replaced the search.
        candidates:  Every move that tied for the best score.
        mover:       Symbol of the side the move was chosen for.
    """

    move: Move | None = None
    score: int | float | None = None
    nodes: int = 0
    max_depth: int = 0
    random_move: bool = False
    candidates: list[Move] = field(default_factory=list)
    mover: str | None = None


def _choose_by_search(
    own: int,
    opp: int,
    limits: SearchLimits,
    rng: random.Random,
    result: SearchResult,
) -> SearchResult:
    stats = SearchStats()
    scored = score_moves(own, opp, limits, stats, rng)
    top, tied = best_candidates(scored)

    result.move = index_to_move(rng.choice(tied))
    result.score = top
    result.nodes = stats.nodes
    result.max_depth = stats.max_depth
    result.candidates = [index_to_move(idx) for idx in tied]
    return result


def _choose_by_model(own: int, opp: int, model: LinearModel, result: SearchResult) -> SearchResult:
    picked = greedy_move(own, opp, model)
    if picked is not None:
        idx, score = picked
        result.move = index_to_move(idx)
        result.score = score
        result.candidates = [result.move]
    return result


def analyse(
    board: Grid,
    mover: str,
    difficulty: Difficulty | None = None,
    *,
    rng: random.Random | None = None,
    symbols: tuple[str, str] = SYMBOLS,
    infer_turn: bool = True,
    model: LinearModel = DEFAULT_MODEL,
) -> SearchResult:
    """
    Choose a move and report how it was chosen.

    Args:
        board:      3x3 grid of symbols, row-major. Cells holding neither
                    symbol are empty. Not modified.
        mover:      Symbol of the side to move. When ``infer_turn`` is true
                    it is only used if both sides have the same number of
                    stones; otherwise the side with fewer stones moves.
        difficulty: Move-selection behaviour. Defaults to PERFECT.
        rng:        Random generator for every random draw of this call.
        symbols:    The two side markers.
        infer_turn: Resolve the side to move from stone counts.
        model:      Linear model used by MODEL mode.

    Returns:
        SearchResult with the chosen move and per-call statistics.

    Raises:
        ValueError: If ``mover`` is not one of ``symbols``.
    """
    if difficulty is None:
        difficulty = Difficulty.perfect()
    if rng is None:
        rng = random.Random()

    own, opp, side = player_masks(board, mover, symbols, infer_turn)
    result = SearchResult(mover=side)

    if is_full(own, opp):
        _log.debug("board full, no move for %s", side)
        return result

    if difficulty.mode is Mode.MODEL:
        _choose_by_model(own, opp, model, result)
    elif difficulty.mode is Mode.SHALLOW:
        limits = SearchLimits(depth_limit=difficulty.depth_limit, shuffle=True)
        _choose_by_search(own, opp, limits, rng, result)
    elif difficulty.mode is Mode.ERROR_RATE and difficulty.error_rate > 0 and rng.randrange(100) < difficulty.error_rate:
        # One roll per decision, never per candidate.
        result.move = index_to_move(rng.choice(empty_cells(own, opp)))
        result.random_move = True
    else:
        _choose_by_search(own, opp, FULL_SEARCH, rng, result)

    _log.debug(
        "%s plays %s as %s (score=%s nodes=%d random=%s)",
        difficulty,
        result.move,
        side,
        result.score,
        result.nodes,
        result.random_move,
    )
    return result


def find_best_move(
    board: Grid,
    mover: str,
    difficulty: Difficulty | None = None,
    *,
    rng: random.Random | None = None,
    symbols: tuple[str, str] = SYMBOLS,
    infer_turn: bool = True,
    model: LinearModel = DEFAULT_MODEL,
) -> Move | None:
    """
    Return the move to play, or None if the board is full.

    Same arguments as analyse(); see there.
    """
    return analyse(
        board,
        mover,
        difficulty,
        rng=rng,
        symbols=symbols,
        infer_turn=infer_turn,
        model=model,
    ).move
