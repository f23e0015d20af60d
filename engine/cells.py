"""Cell occupancy states for the tic-tac-toe grid."""

from __future__ import annotations

from enum import Enum
from typing import Dict


class Cell(str, Enum):
    """Occupancy of one grid cell; SELF is the searching agent."""

    EMPTY = "empty"
    SELF = "self"
    OPPONENT = "opponent"

    def opponent(self) -> "Cell":
        if self is Cell.EMPTY:
            raise ValueError("Empty cell has no opponent.")
        return Cell.OPPONENT if self is Cell.SELF else Cell.SELF

    @property
    def glyph(self) -> str:
        return CELL_GLYPH[self]


CELL_GLYPH: Dict[Cell, str] = {
    Cell.OPPONENT: "X",
    Cell.SELF: "O",
    Cell.EMPTY: " ",
}
