"""
Linear model evaluation: a search-free scorer for the "easy" level.

The model is a pre-trained logistic regression over the nine cells. Each
cell contributes one feature, taken from the perspective of the side to
move:

    +1  the mover's stone
    -1  the opponent's stone
     0  empty

    score = sum(feature_i * weight_i) + bias

The sigmoid is never applied because move selection only compares scores.
The model does not look ahead, so it happily walks past an opponent's
open two-in-a-row, much like a beginner who knows the center and corners
are good squares.

The score is always relative to the mover, so the same weights serve
either side.
"""

from dataclasses import dataclass

from ttt_engine.board import Grid, encode, empty_cells
from ttt_engine.constants import LR_BIAS, LR_WEIGHTS, NUM_CELLS, SYMBOLS


@dataclass(frozen=True)
class LinearModel:
    """
    Nine per-cell weights (row-major) plus a bias term.

    Instances are immutable and can be shared freely between threads.

    Raises:
        ValueError: If the number of weights is not nine.
    """

    weights: tuple[float, ...] = LR_WEIGHTS
    bias: float = LR_BIAS

    def __post_init__(self) -> None:
        if len(self.weights) != NUM_CELLS:
            raise ValueError(f"expected {NUM_CELLS} weights, got {len(self.weights)}")
        # Normalize lists and other sequences so the model stays hashable.
        object.__setattr__(self, "weights", tuple(float(w) for w in self.weights))


DEFAULT_MODEL = LinearModel()


def score_masks(own: int, opp: int, model: LinearModel = DEFAULT_MODEL) -> float:
    """
    Score a position from the perspective of the side owning ``own``.

    Args:
        own:   Occupancy mask of the mover.
        opp:   Occupancy mask of the opponent.
        model: Weights and bias to apply.

    Returns:
        The raw linear score. Higher is better for the mover.
    """
    total = 0.0
    for idx, weight in enumerate(model.weights):
        bit = 1 << idx
        if own & bit:
            total += weight
        elif opp & bit:
            total -= weight
    return total + model.bias


def score_board(
    grid: Grid,
    mover: str,
    model: LinearModel = DEFAULT_MODEL,
    symbols: tuple[str, str] = SYMBOLS,
) -> float:
    """Score a symbol grid from ``mover``'s perspective. The grid is not modified."""
    if mover not in symbols:
        raise ValueError(f"mover {mover!r} is not one of {symbols!r}")
    mask_a, mask_b = encode(grid, symbols)
    if mover == symbols[0]:
        return score_masks(mask_a, mask_b, model)
    return score_masks(mask_b, mask_a, model)


def greedy_move(own: int, opp: int, model: LinearModel = DEFAULT_MODEL) -> tuple[int, float] | None:
    """
    Pick the empty cell whose placement gives the highest model score.

    Cells are tried in row-major order and only a strictly higher score
    replaces the current best, so the first cell wins ties. There is no
    randomness in this mode.

    Returns:
        (cell_index, score) of the chosen move, or None if the board is full.
    """
    best: tuple[int, float] | None = None
    for idx in empty_cells(own, opp):
        score = score_masks(own | (1 << idx), opp, model)
        if best is None or score > best[1]:
            best = (idx, score)
    return best
