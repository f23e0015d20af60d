"""Tic-tac-toe board state, move application, and outcome detection."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from engine.cells import Cell
from engine.rules import CELL_COUNT, WINNING_LINES, BOARD_SIZE, Position, in_bounds, iter_positions


class MoveError(str, Enum):
    """Recoverable reasons a move can be rejected."""

    OUT_OF_RANGE = "out_of_range"
    CELL_OCCUPIED = "cell_occupied"


@dataclass(frozen=True)
class MoveResult:
    """Outcome of an attempted move; truthy iff the move was applied."""

    pos: Position
    player: Cell
    error: Optional[MoveError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __bool__(self) -> bool:
        return self.ok


class Board:
    """3x3 grid plus the ordered list of unoccupied positions."""

    size: int = BOARD_SIZE

    def __init__(self) -> None:
        self.grid: List[List[Cell]] = [[Cell.EMPTY for _ in range(self.size)] for _ in range(self.size)]
        self._legal_moves: List[Position] = list(iter_positions())

    def clone(self) -> "Board":
        """Independent copy of grid and legal-move list."""
        cloned = Board.__new__(Board)
        cloned.grid = [list(row) for row in self.grid]
        cloned._legal_moves = list(self._legal_moves)
        return cloned

    @classmethod
    def from_moves(cls, moves: Iterable[Tuple[Position, Cell]]) -> "Board":
        """Build a board by applying (position, player) pairs in order."""
        board = cls()
        for pos, player in moves:
            result = board.apply_move(pos, player)
            if not result:
                raise ValueError(f"Cannot apply {player.value} at {pos}: {result.error.value}")
        return board

    def get_cell(self, pos: Position) -> Cell:
        row, col = pos
        return self.grid[row][col]

    @property
    def legal_moves(self) -> List[Position]:
        """Unoccupied positions in the order they will be expanded."""
        return list(self._legal_moves)

    def legal_move_count(self) -> int:
        return len(self._legal_moves)

    def occupied_count(self) -> int:
        return sum(1 for pos in iter_positions() if self.get_cell(pos) is not Cell.EMPTY)

    def apply_move(self, pos: Position, player: Cell) -> MoveResult:
        """Mark ``pos`` for ``player`` if it is free; the board is untouched on failure."""
        if player is Cell.EMPTY:
            raise ValueError("Cannot apply a move for the empty cell state.")
        pos = (pos[0], pos[1])
        if not in_bounds(pos):
            return MoveResult(pos=pos, player=player, error=MoveError.OUT_OF_RANGE)
        if pos not in self._legal_moves:
            return MoveResult(pos=pos, player=player, error=MoveError.CELL_OCCUPIED)

        row, col = pos
        self.grid[row][col] = player
        self._legal_moves.remove(pos)
        return MoveResult(pos=pos, player=player)

    def winner(self) -> Optional[Cell]:
        """Owner of the first complete line (rows/columns, then diagonals), else None."""
        for a, b, c in WINNING_LINES:
            first = self.get_cell(a)
            if first is not Cell.EMPTY and first is self.get_cell(b) and first is self.get_cell(c):
                return first
        return None

    def is_terminal(self) -> bool:
        return not self._legal_moves or self.winner() is not None

    def game_over(self) -> Tuple[bool, Optional[Cell], bool]:
        """Return (is_terminal, winner, is_draw)."""
        winner = self.winner()
        if winner is not None:
            return True, winner, False
        if not self._legal_moves:
            return True, None, True
        return False, None, False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.grid == other.grid and self._legal_moves == other._legal_moves

    def __repr__(self) -> str:
        cells = "".join(self.get_cell(pos).glyph.replace(" ", ".") for pos in iter_positions())
        return f"Board({cells!r}, legal={len(self._legal_moves)}/{CELL_COUNT})"
