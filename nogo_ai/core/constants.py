"""
Constants for the NoGo game.

This module defines the game constants used throughout the NoGo implementation,
including stone colours, board dimensions, coordinate labels and the
characters used to draw and parse boards.
"""
from enum import Enum
from typing import Dict, Final
import math


class PieceType(Enum):
    """Enum representing the content of a board cell and the two sides."""
    BLACK = 0
    WHITE = 1
    EMPTY = 2

    @property
    def opponent(self) -> 'PieceType':
        """The other side (EMPTY has no opponent and maps to itself)."""
        if self is PieceType.BLACK:
            return PieceType.WHITE
        if self is PieceType.WHITE:
            return PieceType.BLACK
        return PieceType.EMPTY


# Sides that can move, in turn order
SIDES: Final = (PieceType.BLACK, PieceType.WHITE)

# Role names accepted in agent option strings
ROLE_NAMES: Final[Dict[str, PieceType]] = {
    "black": PieceType.BLACK,
    "white": PieceType.WHITE,
}

# Characters used to draw boards (and accepted by Board.from_rows)
PIECE_SYMBOLS: Final[Dict[PieceType, str]] = {
    PieceType.BLACK: "X",
    PieceType.WHITE: "O",
    PieceType.EMPTY: ".",
}
SYMBOL_PIECES: Final[Dict[str, PieceType]] = {v: k for k, v in PIECE_SYMBOLS.items()}

# Board dimensions
DEFAULT_BOARD_WIDTH: Final[int] = 9
DEFAULT_BOARD_HEIGHT: Final[int] = 9
MAX_BOARD_SIZE: Final[int] = 19

# Go-style column labels ('I' is skipped)
COLUMN_LABELS: Final[str] = "ABCDEFGHJKLMNOPQRST"

# Characters that may not appear in an agent name
INVALID_NAME_CHARS: Final[str] = "[]():; "

# AI and simulation settings
DEFAULT_MCTS_ITERATIONS: Final[int] = 1000
DEFAULT_MCTS_EXPLORATION: Final[float] = math.sqrt(2)  # UCB1 exploration parameter
DEFAULT_MCTS_DECISION: Final[float] = 1e-12  # Near-greedy constant for the final pick
