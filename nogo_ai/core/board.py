"""
Board representation and placement rules for NoGo.

NoGo is played on a Go board but with inverted goals: a placement is only
legal if it neither captures an opponent group nor leaves the placed stone's
own group without liberties. The side to move that has no legal placement
loses the game.

The Board class is the position object consumed by the search engine. It
tracks whose turn it is, validates placements and can be cloned cheaply so
that searches and playouts never touch the authoritative game board.
"""
from __future__ import annotations
from functools import lru_cache
from typing import Dict, List, Optional, Sequence, Tuple, Any

from nogo_ai.core.constants import (
    PieceType, PIECE_SYMBOLS, SYMBOL_PIECES, COLUMN_LABELS,
    DEFAULT_BOARD_WIDTH, DEFAULT_BOARD_HEIGHT, MAX_BOARD_SIZE
)
from nogo_ai.core.actions import PlaceAction


@lru_cache(maxsize=None)
def _neighbor_table(width: int, height: int) -> Tuple[Tuple[int, ...], ...]:
    """Orthogonal neighbours of every cell, shared by all boards of one size."""
    table = []
    for position in range(width * height):
        row, col = divmod(position, width)
        adjacent = []
        if row > 0:
            adjacent.append(position - width)
        if row < height - 1:
            adjacent.append(position + width)
        if col > 0:
            adjacent.append(position - 1)
        if col < width - 1:
            adjacent.append(position + 1)
        table.append(tuple(adjacent))
    return tuple(table)


class Board:
    """
    A NoGo position: stones on a rectangular grid plus the side to move.

    Cells are addressed by a flat index ``row * width + col``. Black moves
    first on a fresh board.
    """

    def __init__(
        self,
        width: int = DEFAULT_BOARD_WIDTH,
        height: int = DEFAULT_BOARD_HEIGHT,
        side_to_move: PieceType = PieceType.BLACK
    ):
        """
        Create an empty board.

        Args:
            width: Number of columns
            height: Number of rows
            side_to_move: Side that makes the next placement
        """
        if not 1 <= width <= MAX_BOARD_SIZE or not 1 <= height <= MAX_BOARD_SIZE:
            raise ValueError(f"Board dimensions must be between 1 and {MAX_BOARD_SIZE}")
        if side_to_move is PieceType.EMPTY:
            raise ValueError("side_to_move must be BLACK or WHITE")

        self.width = width
        self.height = height
        self.cells: List[PieceType] = [PieceType.EMPTY] * (width * height)
        self.side_to_move = side_to_move
        self.history: List[int] = []
        self._neighbors = _neighbor_table(width, height)

    @property
    def size(self) -> int:
        """Total number of cells on the board."""
        return self.width * self.height

    @property
    def move_count(self) -> int:
        """Number of placements made on this board."""
        return len(self.history)

    def __getitem__(self, position: int) -> PieceType:
        return self.cells[position]

    def neighbors(self, position: int) -> Tuple[int, ...]:
        """Orthogonally adjacent cells of ``position``."""
        return self._neighbors[position]

    def _has_liberty(self, start: int) -> bool:
        """Check whether the group containing ``start`` touches an empty cell."""
        colour = self.cells[start]
        stack = [start]
        seen = {start}
        while stack:
            position = stack.pop()
            for adjacent in self._neighbors[position]:
                piece = self.cells[adjacent]
                if piece is PieceType.EMPTY:
                    return True
                if piece is colour and adjacent not in seen:
                    seen.add(adjacent)
                    stack.append(adjacent)
        return False

    def is_legal(self, position: int, side: Optional[PieceType] = None) -> bool:
        """
        Check whether a placement is legal under the NoGo rules.

        Args:
            position: Cell index to place on
            side: Side placing the stone (defaults to the side to move)

        Returns:
            True if the placement is legal, False otherwise
        """
        if side is None:
            side = self.side_to_move
        if side is not self.side_to_move:
            return False
        if not 0 <= position < self.size or self.cells[position] is not PieceType.EMPTY:
            return False

        opponent = side.opponent
        self.cells[position] = side
        try:
            # Suicide
            if not self._has_liberty(position):
                return False
            # Capture
            for adjacent in self._neighbors[position]:
                if self.cells[adjacent] is opponent and not self._has_liberty(adjacent):
                    return False
            return True
        finally:
            self.cells[position] = PieceType.EMPTY

    def place(self, position: int, side: Optional[PieceType] = None) -> bool:
        """
        Place a stone for the side to move.

        Illegal attempts leave the board unchanged.

        Args:
            position: Cell index to place on
            side: Side placing the stone (defaults to the side to move)

        Returns:
            True if the stone was placed, False if the placement was illegal
        """
        if not self.is_legal(position, side):
            return False

        self.cells[position] = self.side_to_move
        self.history.append(position)
        self.side_to_move = self.side_to_move.opponent
        return True

    def get_legal_positions(self) -> List[int]:
        """All cells the side to move may legally place on, in index order."""
        return [position for position in range(self.size) if self.is_legal(position)]

    def get_valid_actions(self) -> List[PlaceAction]:
        """All legal placements for the side to move."""
        return [PlaceAction(position, self.side_to_move) for position in self.get_legal_positions()]

    def has_legal_move(self) -> bool:
        """Check whether the side to move has any legal placement."""
        return any(self.is_legal(position) for position in range(self.size))

    def count(self, piece: PieceType) -> int:
        """Number of cells holding ``piece``."""
        return self.cells.count(piece)

    def clone(self) -> 'Board':
        """
        Create an independent copy of the board.

        Returns:
            A new Board with the same stones, history and side to move
        """
        other = Board.__new__(Board)
        other.width = self.width
        other.height = self.height
        other.cells = list(self.cells)
        other.side_to_move = self.side_to_move
        other.history = list(self.history)
        other._neighbors = self._neighbors
        return other

    def position_label(self, position: int) -> str:
        """Go-style label of a cell, e.g. ``C4``."""
        row, col = divmod(position, self.width)
        return f"{COLUMN_LABELS[col]}{row + 1}"

    def parse_position(self, label: str) -> int:
        """
        Convert a Go-style label back into a cell index.

        Args:
            label: Label such as ``A1`` (case-insensitive)

        Returns:
            Cell index
        """
        label = label.strip().upper()
        if len(label) < 2 or label[0] not in COLUMN_LABELS[:self.width]:
            raise ValueError(f"Invalid position label: {label!r}")
        try:
            row = int(label[1:]) - 1
        except ValueError:
            raise ValueError(f"Invalid position label: {label!r}") from None
        if not 0 <= row < self.height:
            raise ValueError(f"Invalid position label: {label!r}")
        return row * self.width + COLUMN_LABELS.index(label[0])

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[str],
        side_to_move: Optional[PieceType] = None
    ) -> 'Board':
        """
        Build a position from rows of ``X`` (black), ``O`` (white) and ``.``.

        The stones are set up directly, without checking placement rules.
        When ``side_to_move`` is omitted, black moves if both sides have the
        same number of stones and white moves otherwise.

        Args:
            rows: One string per board row, first row first
            side_to_move: Side that makes the next placement

        Returns:
            Board holding the given stones
        """
        if not rows or len({len(row) for row in rows}) != 1:
            raise ValueError("rows must be a non-empty list of equal-length strings")

        board = cls(width=len(rows[0]), height=len(rows))
        for row_index, row in enumerate(rows):
            for col_index, symbol in enumerate(row):
                if symbol not in SYMBOL_PIECES:
                    raise ValueError(f"Unknown board symbol: {symbol!r}")
                board.cells[row_index * board.width + col_index] = SYMBOL_PIECES[symbol]

        if side_to_move is None:
            black, white = board.count(PieceType.BLACK), board.count(PieceType.WHITE)
            side_to_move = PieceType.BLACK if black == white else PieceType.WHITE
        board.side_to_move = side_to_move
        return board

    def to_rows(self) -> List[str]:
        """Rows of symbols, the inverse of ``from_rows``."""
        return [
            "".join(PIECE_SYMBOLS[piece] for piece in self.cells[row * self.width:(row + 1) * self.width])
            for row in range(self.height)
        ]

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the board to a dictionary for serialization.

        Returns:
            Dictionary representation of the board
        """
        return {
            "width": self.width,
            "height": self.height,
            "rows": self.to_rows(),
            "side_to_move": self.side_to_move.name,
            "history": list(self.history),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Board':
        """
        Create a board from its dictionary representation.

        Args:
            data: Dictionary produced by ``to_dict``

        Returns:
            Board object
        """
        board = cls.from_rows(data["rows"], PieceType[data["side_to_move"]])
        board.history = list(data.get("history", []))
        return board

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (self.width == other.width and self.height == other.height
                and self.cells == other.cells and self.side_to_move is other.side_to_move)

    def __str__(self) -> str:
        """
        Draw the board with coordinates.

        Returns:
            Multi-line string representation
        """
        header = "   " + " ".join(COLUMN_LABELS[:self.width])
        lines = [header]
        for row_index, row in enumerate(self.to_rows()):
            lines.append(f"{row_index + 1:>2} " + " ".join(row))
        lines.append(f"{self.side_to_move.name.capitalize()} to move")
        return "\n".join(lines)
