"""Terminal rendering for the tic-tac-toe grid and outcome."""

from __future__ import annotations

from typing import List, Optional

from engine.board import Board
from engine.cells import Cell

GREEN = "\033[1;32m"
RED = "\033[1;31m"
RESET = "\033[0m"


def colorize(text: str, color: str, enabled: bool = True) -> str:
    if not enabled:
        return text
    return f"{color}{text}{RESET}"


def render_grid(board: Board) -> str:
    """Return the grid as ``| c | c | c |`` rows."""
    lines: List[str] = []
    for row in range(board.size):
        cells = "".join(f"| {board.get_cell((row, col)).glyph} " for col in range(board.size))
        lines.append(f"{cells}|")
    return "\n".join(lines)


def render_outcome(winner: Optional[Cell], color: bool = True) -> str:
    """Final message for a finished game."""
    if winner is None:
        return "Draw!"
    return colorize(f"Player {winner.glyph} Won!", GREEN, color)
