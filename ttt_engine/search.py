"""
Search kernel: minimax with alpha-beta pruning over bitboards.

A single parameterized function covers every search-based difficulty.
SearchLimits selects whether alpha-beta cutoffs are taken, where the
depth cutoff sits, and whether the children of each node are visited in
the fixed MOVE_ORDER or in a freshly shuffled order.

Perspective:
    ``own`` is always the side the engine is choosing a move for (the
    maximizer) and ``opp`` is the opponent (the minimizer). The
    ``maximizing`` flag says whose turn it is at the node.

Scoring:
    A win for ``own`` reached at ply ``depth`` scores WIN_SCORE - depth,
    a win for ``opp`` scores depth - WIN_SCORE, and draws or depth cutoffs
    score 0. The root's candidate moves are searched at depth 1, so an
    immediate win scores 9 and a win three plies later scores 7.

Search state:
    Masks, depth and the alpha-beta window live in each call frame. The
    only shared object is the per-decision SearchStats counter, created by
    the caller and returned with the result, so repeated or concurrent
    decisions never interfere with each other.
"""

import random
from dataclasses import dataclass

from ttt_engine.board import empty_cells, is_full, is_winner
from ttt_engine.constants import (
    DRAW_SCORE,
    MAX_PLY,
    MOVE_ORDER,
    SEARCH_BOUND,
    WIN_SCORE,
)


@dataclass
class SearchStats:
    """
    Counters for one decision.

    Attributes:
        nodes:     Number of minimax calls made.
        max_depth: Deepest ply reached by the recursion.
    """

    nodes: int = 0
    max_depth: int = 0


@dataclass(frozen=True)
class SearchLimits:
    """
    Search kernel configuration.

    Attributes:
        pruning:     Take alpha-beta cutoffs. Disabling it gives plain
                     minimax with identical results and more nodes.
        depth_limit: Plies after which a non-terminal node scores 0.
                     MAX_PLY means the search always reaches the end.
        shuffle:     Visit children in random order instead of MOVE_ORDER.
                     Requires a random generator.
    """

    pruning: bool = True
    depth_limit: int = MAX_PLY
    shuffle: bool = False


FULL_SEARCH = SearchLimits()


def _ordered_cells(own: int, opp: int, limits: SearchLimits, rng: random.Random | None) -> list[int]:
    if not limits.shuffle:
        return empty_cells(own, opp, MOVE_ORDER)
    if rng is None:
        raise ValueError("shuffled search requires a random generator")
    cells = empty_cells(own, opp)
    rng.shuffle(cells)
    return cells


def minimax(
    own: int,
    opp: int,
    depth: int,
    alpha: int,
    beta: int,
    maximizing: bool,
    limits: SearchLimits,
    stats: SearchStats,
    rng: random.Random | None = None,
) -> int:
    """
    Minimax search with optional alpha-beta pruning.

    Args:
        own:        Occupancy mask of the engine's side. Not modified.
        opp:        Occupancy mask of the opponent. Not modified.
        depth:      Plies played since the root position.
        alpha:      Best score the maximizer can already guarantee.
        beta:       Best score the minimizer can already guarantee.
        maximizing: True when ``own`` is to move at this node.
        limits:     Pruning, depth cutoff and ordering configuration.
        stats:      Per-decision counters, updated in place.
        rng:        Random generator, required only when limits.shuffle.

    Returns:
        The depth-adjusted score of the node from ``own``'s perspective.
    """
    stats.nodes += 1
    if depth > stats.max_depth:
        stats.max_depth = depth

    # Terminal checks come before the depth cutoff so that a shallow search
    # still sees a line completed on the last ply it explores.
    if is_winner(own):
        return WIN_SCORE - depth
    if is_winner(opp):
        return depth - WIN_SCORE
    if is_full(own, opp) or depth >= limits.depth_limit:
        return DRAW_SCORE

    if maximizing:
        best = -SEARCH_BOUND
        for idx in _ordered_cells(own, opp, limits, rng):
            score = minimax(own | (1 << idx), opp, depth + 1, alpha, beta, False, limits, stats, rng)
            if score > best:
                best = score
            if best > alpha:
                alpha = best
            # Beta cutoff: the minimizer already has a better option elsewhere.
            if limits.pruning and alpha >= beta:
                break
    else:
        best = SEARCH_BOUND
        for idx in _ordered_cells(own, opp, limits, rng):
            score = minimax(own, opp | (1 << idx), depth + 1, alpha, beta, True, limits, stats, rng)
            if score < best:
                best = score
            if best < beta:
                beta = best
            # Alpha cutoff: the maximizer already has a better option elsewhere.
            if limits.pruning and alpha >= beta:
                break

    return best


def score_moves(
    own: int,
    opp: int,
    limits: SearchLimits = FULL_SEARCH,
    stats: SearchStats | None = None,
    rng: random.Random | None = None,
) -> list[tuple[int, int]]:
    """
    Score every legal move for ``own``.

    Each candidate is searched with the full (-SEARCH_BOUND, SEARCH_BOUND)
    window rather than a window narrowed by earlier siblings, so tied
    scores are exact values and not bounds.

    Args:
        own:    Occupancy mask of the side to move.
        opp:    Occupancy mask of the opponent.
        limits: Search configuration.
        stats:  Optional counters, updated in place.
        rng:    Random generator, required when limits.shuffle.

    Returns:
        List of (cell_index, score) in visiting order. Empty when the board
        is full.
    """
    if stats is None:
        stats = SearchStats()

    scored: list[tuple[int, int]] = []
    for idx in _ordered_cells(own, opp, limits, rng):
        score = minimax(own | (1 << idx), opp, 1, -SEARCH_BOUND, SEARCH_BOUND, False, limits, stats, rng)
        scored.append((idx, score))
    return scored


def best_candidates(scored: list[tuple[int, int]]) -> tuple[int, list[int]]:
    """Return the top score and every cell index that reaches it, in order."""
    if not scored:
        raise ValueError("no moves to choose from")
    top = max(score for _, score in scored)
    return top, [idx for idx, score in scored if score == top]
