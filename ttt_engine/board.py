"""
Bitboard codec, terminal detection, and turn inference.

Every other module works on a pair of 9-bit integers (one per side) rather
than on the caller's 3x3 grid of symbols. Converting once at the boundary
keeps the search free of string comparisons: placing a stone is a bitwise
OR, and checking a win is at most eight AND-and-compare operations.

Masks are plain ints, so they are passed by value and never mutated. The
two masks of a position are always disjoint (mask_a & mask_b == 0).
"""

from typing import NamedTuple, Sequence

from ttt_engine.constants import (
    BOARD_SIZE,
    EMPTY,
    FULL_MASK,
    NUM_CELLS,
    SYMBOLS,
    WIN_MASKS,
)

Grid = Sequence[Sequence[str]]


class Move(NamedTuple):
    """A board coordinate. Compares equal to a plain (row, col) tuple."""

    row: int
    col: int


# ---------------------------------------------------------------------------
# Codec
# ---------------------------------------------------------------------------


def encode(grid: Grid, symbols: tuple[str, str] = SYMBOLS) -> tuple[int, int]:
    """
    Convert a 3x3 grid of symbols into two occupancy masks.

    Bit ``r * 3 + c`` of the first mask is set when ``grid[r][c]`` holds
    ``symbols[0]``; likewise for the second mask and ``symbols[1]``. Any
    other cell value is treated as empty.

    Args:
        grid:    3x3 grid, row-major. Not modified.
        symbols: The two side markers (side A, side B).

    Returns:
        Tuple of (mask_a, mask_b).
    """
    side_a, side_b = symbols
    mask_a = 0
    mask_b = 0
    for r in range(BOARD_SIZE):
        for c in range(BOARD_SIZE):
            bit = 1 << (r * BOARD_SIZE + c)
            cell = grid[r][c]
            if cell == side_a:
                mask_a |= bit
            elif cell == side_b:
                mask_b |= bit
    return mask_a, mask_b


def decode(
    mask_a: int,
    mask_b: int,
    symbols: tuple[str, str] = SYMBOLS,
    empty: str = EMPTY,
) -> list[list[str]]:
    """Rebuild a fresh 3x3 symbol grid from two occupancy masks."""
    side_a, side_b = symbols
    grid = [[empty] * BOARD_SIZE for _ in range(BOARD_SIZE)]
    for idx in range(NUM_CELLS):
        bit = 1 << idx
        if mask_a & bit:
            grid[idx // BOARD_SIZE][idx % BOARD_SIZE] = side_a
        elif mask_b & bit:
            grid[idx // BOARD_SIZE][idx % BOARD_SIZE] = side_b
    return grid


def index_to_move(idx: int) -> Move:
    return Move(idx // BOARD_SIZE, idx % BOARD_SIZE)


def move_to_index(move: tuple[int, int]) -> int:
    row, col = move
    return row * BOARD_SIZE + col


# ---------------------------------------------------------------------------
# Terminal detection
# ---------------------------------------------------------------------------


def is_winner(mask: int) -> bool:
    """Return True if the mask contains any of the eight winning lines."""
    for line in WIN_MASKS:
        if mask & line == line:
            return True
    return False


def is_full(mask_a: int, mask_b: int) -> bool:
    return (mask_a | mask_b) == FULL_MASK


def count_bits(mask: int) -> int:
    return bin(mask).count("1")


def empty_cells(mask_a: int, mask_b: int, order: Sequence[int] = range(NUM_CELLS)) -> list[int]:
    """
    List the unoccupied cell indices, following ``order``.

    The default order is row-major; the search passes MOVE_ORDER instead.
    """
    occupied = mask_a | mask_b
    return [idx for idx in order if not occupied & (1 << idx)]


def winner(grid: Grid, symbols: tuple[str, str] = SYMBOLS) -> str | None:
    """Return the symbol that owns a complete line, or None."""
    mask_a, mask_b = encode(grid, symbols)
    if is_winner(mask_a):
        return symbols[0]
    if is_winner(mask_b):
        return symbols[1]
    return None


# ---------------------------------------------------------------------------
# Turn inference
# ---------------------------------------------------------------------------


def infer_mover(
    mask_a: int,
    mask_b: int,
    mover: str,
    symbols: tuple[str, str] = SYMBOLS,
) -> str:
    """
    Decide which side is to move from stone counts.

    The side with strictly fewer stones moves next. When both sides have
    the same number of stones (including the empty board), the count says
    nothing about turn order and the caller-supplied ``mover`` is used.

    Args:
        mask_a: Occupancy mask for ``symbols[0]``.
        mask_b: Occupancy mask for ``symbols[1]``.
        mover:  Fallback symbol used on an exact tie.
        symbols: The two side markers.

    Returns:
        The symbol of the side to move.

    Raises:
        ValueError: If ``mover`` is not one of ``symbols``.
    """
    if mover not in symbols:
        raise ValueError(f"mover {mover!r} is not one of {symbols!r}")

    count_a = count_bits(mask_a)
    count_b = count_bits(mask_b)
    if count_a < count_b:
        return symbols[0]
    if count_b < count_a:
        return symbols[1]
    return mover


def player_masks(
    grid: Grid,
    mover: str,
    symbols: tuple[str, str] = SYMBOLS,
    infer_turn: bool = True,
) -> tuple[int, int, str]:
    """
    Encode a grid into (own_mask, opp_mask) from the side to move.

    This is the single place where "which side is the AI" is resolved.
    Everything downstream only sees the own/opponent pair.

    Returns:
        Tuple of (own_mask, opp_mask, mover_symbol).

    Raises:
        ValueError: If ``mover`` is not one of ``symbols``.
    """
    if mover not in symbols:
        raise ValueError(f"mover {mover!r} is not one of {symbols!r}")

    mask_a, mask_b = encode(grid, symbols)
    if infer_turn:
        mover = infer_mover(mask_a, mask_b, mover, symbols)

    if mover == symbols[0]:
        return mask_a, mask_b, mover
    return mask_b, mask_a, mover
