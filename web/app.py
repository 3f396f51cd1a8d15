"""
FastAPI web application for the tic-tac-toe engine.

Exposes a REST endpoint (POST /api/move) that accepts a board and a
difficulty, runs the engine, and returns the chosen move together with the
board after the move.

Architecture notes:
- Sync endpoint (not async): FastAPI runs sync handlers in a thread pool,
  which is the right place for CPU-bound search calls.
- Stateless per request: the client sends the full board each time; no
  server-side game state is kept between requests.
- Each request gets its own random generator, so concurrent requests never
  share random state.
"""

import logging
import random

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, field_validator

from ttt_engine.ai import analyse
from ttt_engine.board import count_bits, encode, is_winner
from ttt_engine.constants import EMPTY, NUM_CELLS, PLAYER_O, PLAYER_X, SYMBOLS
from ttt_engine.difficulty import Difficulty, Mode

# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

logging.basicConfig(level=logging.INFO)
_log = logging.getLogger(__name__)

app = FastAPI(title="Tic-Tac-Toe AI", version="1.0.0")

_CELL_VALUES = {PLAYER_X, PLAYER_O, EMPTY, ""}


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class MoveRequest(BaseModel):
    """
    Client request to the engine.

    Fields:
        board:       3x3 grid of "X", "O", " " or "" (empty).
        mover:       Symbol the engine plays. Used as the side to move when
                     both sides have the same number of stones.
        level:       Menu level: "easy", "medium" or "hard".
        mode:        Explicit mode name; overrides ``level`` when given.
        error_rate:  Random-move percentage for the "error_rate" mode.
        depth_limit: Ply cutoff for the "shallow" mode.
    """

    board: list[list[str]]
    mover: str = PLAYER_O
    level: str = "hard"
    mode: Mode | None = None
    error_rate: int | None = None
    depth_limit: int | None = None

    @field_validator("board")
    @classmethod
    def check_board(cls, v: list[list[str]]) -> list[list[str]]:
        """Require a 3x3 grid of known cell values."""
        if len(v) != 3 or any(len(row) != 3 for row in v):
            raise ValueError("board must be a 3x3 grid")
        for row in v:
            for cell in row:
                if cell not in _CELL_VALUES:
                    raise ValueError(f"invalid cell value: {cell!r}")
        return v

    @field_validator("mover")
    @classmethod
    def check_mover(cls, v: str) -> str:
        if v not in SYMBOLS:
            raise ValueError(f"mover must be one of {SYMBOLS}")
        return v

    def difficulty(self) -> Difficulty:
        """Build the engine Difficulty; raises ValueError on bad parameters."""
        if self.mode is None:
            return Difficulty.from_level(self.level)
        kwargs = {}
        if self.error_rate is not None:
            kwargs["error_rate"] = self.error_rate
        if self.depth_limit is not None:
            kwargs["depth_limit"] = self.depth_limit
        return Difficulty(self.mode, **kwargs)


class MoveResponse(BaseModel):
    """
    Engine response.

    Fields:
        move:        [row, col] of the engine's move, or null if the board is full.
        board:       Board after the move is applied.
        mover:       Symbol the move was played for.
        score:       Search score or linear model score of the move.
        nodes:       Minimax nodes visited.
        depth:       Deepest ply reached by the search.
        random_move: True when the move was a deliberate random mistake.
    """

    move: tuple[int, int] | None
    board: list[list[str]]
    mover: str
    score: int | float | None = None
    nodes: int = 0
    depth: int = 0
    random_move: bool = False


# ---------------------------------------------------------------------------
# API routes
# ---------------------------------------------------------------------------


@app.get("/api/health")
def api_health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/api/move", response_model=MoveResponse)
def api_move(request: MoveRequest) -> MoveResponse:
    """
    Compute the engine's move for the given board.

    Raises:
        HTTPException 400: Bad difficulty parameters or game already won.
        HTTPException 500: Unexpected engine failure.
    """
    try:
        difficulty = request.difficulty()
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    mask_x, mask_o = encode(request.board)
    if is_winner(mask_x) or is_winner(mask_o):
        raise HTTPException(status_code=400, detail="Game is already over")

    try:
        result = analyse(request.board, request.mover, difficulty, rng=random.Random())
    except Exception as exc:
        _log.exception("Engine failed for board=%s", request.board)
        raise HTTPException(status_code=500, detail=f"Engine error: {exc}") from exc

    board = [[cell if cell in SYMBOLS else EMPTY for cell in row] for row in request.board]
    if result.move is not None:
        board[result.move.row][result.move.col] = result.mover

    filled = count_bits(mask_x | mask_o)
    _log.info(
        "Move=%s mover=%s difficulty=%s score=%s nodes=%d filled=%d/%d",
        result.move,
        result.mover,
        difficulty,
        result.score,
        result.nodes,
        filled,
        NUM_CELLS,
    )

    return MoveResponse(
        move=None if result.move is None else tuple(result.move),
        board=board,
        mover=result.mover,
        score=result.score,
        nodes=result.nodes,
        depth=result.max_depth,
        random_move=result.random_move,
    )
