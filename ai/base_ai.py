"""Base AI interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from engine.board import Board
from engine.rules import Position


class BaseAI(ABC):
    """Abstract move-selection strategy for the SELF player."""

    @abstractmethod
    def choose_move(self, board: Board) -> Position:
        """Choose a legal position for SELF on a non-terminal board."""
        raise NotImplementedError
