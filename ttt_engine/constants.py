"""
Engine constants: win lines, move ordering, scores, and model coefficients.

All numeric constants used throughout the engine are defined here so that
the other modules never need to introduce new magic numbers.

Bitboard layout (one bit per cell, index = row * 3 + col):

    0 | 1 | 2
    ---------
    3 | 4 | 5
    ---------
    6 | 7 | 8
"""

# ---------------------------------------------------------------------------
# Board geometry
# ---------------------------------------------------------------------------

BOARD_SIZE: int = 3
NUM_CELLS: int = BOARD_SIZE * BOARD_SIZE

# All nine bits set: the board is full when own | opp == FULL_MASK.
FULL_MASK: int = (1 << NUM_CELLS) - 1  # 0x1FF

# The eight winning triples. A side has won when (mask & line) == line.
WIN_MASKS: tuple[int, ...] = (
    # Rows
    (1 << 0) | (1 << 1) | (1 << 2),  # 0b000000111
    (1 << 3) | (1 << 4) | (1 << 5),  # 0b000111000
    (1 << 6) | (1 << 7) | (1 << 8),  # 0b111000000
    # Columns
    (1 << 0) | (1 << 3) | (1 << 6),  # 0b001001001
    (1 << 1) | (1 << 4) | (1 << 7),  # 0b010010010
    (1 << 2) | (1 << 5) | (1 << 8),  # 0b100100100
    # Diagonals
    (1 << 0) | (1 << 4) | (1 << 8),  # 0b100010001
    (1 << 2) | (1 << 4) | (1 << 6),  # 0b001010100
)

# Search order: center, then corners, then edges. Trying the strongest
# squares first raises alpha early and prunes more siblings.
MOVE_ORDER: tuple[int, ...] = (4, 0, 2, 6, 8, 1, 3, 5, 7)

# ---------------------------------------------------------------------------
# Board symbols
# ---------------------------------------------------------------------------
# Any cell value that is not one of the two side symbols is read as empty.

PLAYER_X: str = "X"
PLAYER_O: str = "O"
EMPTY: str = " "
SYMBOLS: tuple[str, str] = (PLAYER_X, PLAYER_O)

# ---------------------------------------------------------------------------
# Search scores
# ---------------------------------------------------------------------------
# Terminal scores are depth-adjusted: a win at ply d scores WIN_SCORE - d and
# a loss scores d - WIN_SCORE, so faster wins and slower losses rank higher.

WIN_SCORE: int = 10
DRAW_SCORE: int = 0

# Larger than any reachable score; used as the initial alpha-beta window.
SEARCH_BOUND: int = 1_000

# No game lasts more than nine plies.
MAX_PLY: int = NUM_CELLS

# ---------------------------------------------------------------------------
# Difficulty defaults
# ---------------------------------------------------------------------------

# Percentage chance that the "medium" level plays a uniformly random move.
MEDIUM_ERROR_RATE: int = 20

# Percentage chance used by the benchmark opponent in simulations.
BENCHMARK_ERROR_RATE: int = 10

# Depth cutoff for the shallow, shuffled search.
SHALLOW_DEPTH: int = 2

# ---------------------------------------------------------------------------
# Linear model (pre-trained logistic regression, row-major cell order)
# ---------------------------------------------------------------------------
# The center carries the largest weight, corners come next, edges last.
# The sigmoid is never applied: move selection only compares raw scores.

LR_WEIGHTS: tuple[float, ...] = (
    3.928391392624212,   # (0, 0) corner
    3.6032407817955696,  # (0, 1) edge
    4.011058129716569,   # (0, 2) corner
    3.6831967066011444,  # (1, 0) edge
    4.313335296889612,   # (1, 1) center
    3.6169667100902494,  # (1, 2) edge
    3.9842838685550195,  # (2, 0) corner
    3.669842436819702,   # (2, 1) edge
    3.984526284468059,   # (2, 2) corner
)

LR_BIAS: float = -1.6450287057758302
