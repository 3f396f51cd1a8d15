"""
Difficulty configuration.

A Difficulty is a mode tag plus the one numeric parameter that mode uses.
The named levels mirror the game's difficulty menu:

    hard   -> PERFECT      (never loses)
    medium -> ERROR_RATE   (20% chance of a uniformly random move)
    easy   -> MODEL        (greedy linear model, no search)

SHALLOW is not on the menu; it is a weaker search-based opponent that
cuts off after a few plies and visits moves in random order.
"""

from dataclasses import dataclass
from enum import Enum

from ttt_engine.constants import MAX_PLY, MEDIUM_ERROR_RATE, SHALLOW_DEPTH


class Mode(str, Enum):
    PERFECT = "perfect"
    ERROR_RATE = "error_rate"
    SHALLOW = "shallow"
    MODEL = "model"


@dataclass(frozen=True)
class Difficulty:
    """
    Attributes:
        mode:        Which move-selection behaviour to use.
        error_rate:  Percentage (0-100) of calls that play a random move.
                     Only read in ERROR_RATE mode.
        depth_limit: Ply cutoff (1-9). Only read in SHALLOW mode.

    Raises:
        ValueError: If a parameter is out of range.
    """

    mode: Mode = Mode.PERFECT
    error_rate: int = 0
    depth_limit: int = MAX_PLY

    def __post_init__(self) -> None:
        object.__setattr__(self, "mode", Mode(self.mode))
        if not 0 <= self.error_rate <= 100:
            raise ValueError(f"error_rate must be within 0..100, got {self.error_rate}")
        if not 1 <= self.depth_limit <= MAX_PLY:
            raise ValueError(f"depth_limit must be within 1..{MAX_PLY}, got {self.depth_limit}")

    @classmethod
    def perfect(cls) -> "Difficulty":
        return cls(Mode.PERFECT)

    @classmethod
    def with_error_rate(cls, error_rate: int) -> "Difficulty":
        return cls(Mode.ERROR_RATE, error_rate=error_rate)

    @classmethod
    def shallow(cls, depth_limit: int = SHALLOW_DEPTH) -> "Difficulty":
        return cls(Mode.SHALLOW, depth_limit=depth_limit)

    @classmethod
    def model(cls) -> "Difficulty":
        return cls(Mode.MODEL)

    @classmethod
    def from_level(cls, level: str) -> "Difficulty":
        """Map a menu level name ("easy", "medium", "hard") to a Difficulty."""
        key = level.strip().lower()
        if key == "hard":
            return cls.perfect()
        if key == "medium":
            return cls.with_error_rate(MEDIUM_ERROR_RATE)
        if key == "easy":
            return cls.model()
        raise ValueError(f"unknown difficulty level: {level!r}")

    def __str__(self) -> str:
        if self.mode is Mode.ERROR_RATE:
            return f"{self.mode.value}({self.error_rate}%)"
        if self.mode is Mode.SHALLOW:
            return f"{self.mode.value}(depth={self.depth_limit})"
        return self.mode.value


LEVELS: tuple[str, ...] = ("hard", "medium", "easy")
