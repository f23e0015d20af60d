"""Geometry helpers for the 3x3 tic-tac-toe board."""

from __future__ import annotations

from typing import Iterable, List, Tuple

BOARD_SIZE = 3
CELL_COUNT = BOARD_SIZE * BOARD_SIZE

Position = Tuple[int, int]
Line = Tuple[Position, Position, Position]


def in_bounds(pos: Position) -> bool:
    """Return whether a position is inside the grid."""
    row, col = pos
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def iter_positions() -> Iterable[Position]:
    """Yield all positions in row-major order."""
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            yield (row, col)


def _build_winning_lines() -> List[Line]:
    # Row i and column i are checked together, then both diagonals.
    lines: List[Line] = []
    for i in range(BOARD_SIZE):
        lines.append(((i, 0), (i, 1), (i, 2)))
        lines.append(((0, i), (1, i), (2, i)))
    lines.append(((0, 0), (1, 1), (2, 2)))
    lines.append(((0, 2), (1, 1), (2, 0)))
    return lines


WINNING_LINES: Tuple[Line, ...] = tuple(_build_winning_lines())
