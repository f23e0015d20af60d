"""Monte Carlo Tree Search AI for tic-tac-toe."""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

import numpy as np

from ai.base_ai import BaseAI
from ai.search_tree import DEFAULT_EXPLORATION, SearchTree
from engine.board import Board
from engine.cells import Cell
from engine.rules import BOARD_SIZE, Position

LOGGER = logging.getLogger(__name__)

DEFAULT_TIME_BUDGET_MS = 50

OUTCOME_VALUES = {
    Cell.SELF: 1.0,
    Cell.OPPONENT: -1.0,
    None: 0.0,
}


@dataclass(frozen=True)
class SearchResult:
    """Summary of one finished search episode."""

    move: Position
    simulations: int
    elapsed_ms: float
    root_visits: int


class MCTSEngine:
    """One select/expand/rollout/backpropagate episode over a fresh tree.

    The engine searches on behalf of SELF, assuming OPPONENT made the last
    move on ``board``. It must not be built for a terminal board.
    """

    def __init__(
        self,
        board: Board,
        time_budget_ms: float = DEFAULT_TIME_BUDGET_MS,
        exploration: float = DEFAULT_EXPLORATION,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        if board.is_terminal():
            raise RuntimeError("Cannot search a terminal board.")
        if time_budget_ms <= 0:
            raise ValueError(f"time_budget_ms must be positive, got {time_budget_ms}")
        self.time_budget_ms = time_budget_ms
        self.tree = SearchTree(board.clone(), root_player=Cell.OPPONENT, exploration=exploration)
        self.simulations = 0
        self._rng = rng if rng is not None else random
        self._clock = clock

    def select(self) -> int:
        """Descend by maximum UCB1 until reaching a node without children."""
        index = 0
        while self.tree[index].children:
            index = self.tree.best_child(index, self.tree.ucb1)
        return index

    def expand(self, index: int) -> int:
        """Expand a visited, non-terminal leaf and return the child to simulate."""
        node = self.tree[index]
        if node.visits == 0 or node.board.is_terminal():
            return index
        self.tree.expand(index)
        return self.tree.best_child(index, self.tree.ucb1)

    def rollout(self, index: int) -> float:
        """Play uniformly random moves to the end; return the value for SELF.

        The first ply belongs to the node's recorded player, then sides alternate.
        """
        node = self.tree[index]
        state = node.board.clone()
        player = node.player
        while not state.is_terminal():
            state.apply_move(self._rng.choice(state.legal_moves), player)
            player = player.opponent()
        return OUTCOME_VALUES[state.winner()]

    def backpropagate(self, index: int, value: float) -> None:
        for current in self.tree.path_to_root(index):
            node = self.tree[current]
            node.visits += 1
            node.score += value

    def iterate(self) -> None:
        index = self.expand(self.select())
        self.backpropagate(index, self.rollout(index))
        self.simulations += 1

    def run(self, iterations: int) -> Position:
        """Run a fixed number of iterations without a deadline."""
        for _ in range(iterations):
            self.iterate()
        return self.best_move()

    def _elapsed_ms(self, started: float) -> float:
        return (self._clock() - started) * 1000.0

    def search(self) -> SearchResult:
        """Iterate until the time budget is spent, then report the best move."""
        started = self._clock()
        # The root needs one visit before it expands, so always get past that.
        while not self.tree.root.children or self._elapsed_ms(started) < self.time_budget_ms:
            self.iterate()
        elapsed_ms = self._elapsed_ms(started)
        LOGGER.info("made %d simulations in %d ms", self.simulations, elapsed_ms)
        return SearchResult(
            move=self.best_move(),
            simulations=self.simulations,
            elapsed_ms=elapsed_ms,
            root_visits=self.tree.root.visits,
        )

    def best_move(self) -> Position:
        """Move of the most visited root child (first one on ties)."""
        if not self.tree.root.children:
            raise RuntimeError("Search has not expanded the root; no move to report.")
        best = self.tree.best_child(0, lambda child: self.tree[child].visits)
        move = self.tree[best].move
        if move is None:
            raise RuntimeError("Root child has no move attached.")
        return move

    def candidates(self) -> List[Tuple[Position, int, float]]:
        """(move, visits, mean score) for each root child, in generation order."""
        rows: List[Tuple[Position, int, float]] = []
        for child in self.tree.root.children:
            node = self.tree[child]
            if node.move is None:
                continue
            mean = node.score / node.visits if node.visits else 0.0
            rows.append((node.move, node.visits, mean))
        return rows

    def visit_grid(self) -> np.ndarray:
        """Root child visit counts laid out on the board."""
        grid = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int64)
        for (row, col), visits, _ in self.candidates():
            grid[row, col] = visits
        return grid


class MCTSAI(BaseAI):
    """Time-boxed MCTS player; builds a fresh engine every turn."""

    def __init__(
        self,
        time_budget_ms: float = DEFAULT_TIME_BUDGET_MS,
        exploration: float = DEFAULT_EXPLORATION,
        seed: Optional[int] = None,
        debug_top_k: int = 3,
    ) -> None:
        self.time_budget_ms = time_budget_ms
        self.exploration = exploration
        self._rng = random.Random(seed)
        self.debug_top_k = max(1, debug_top_k)
        self.last_result: Optional[SearchResult] = None

    def choose_move(self, board: Board) -> Position:
        engine = MCTSEngine(
            board,
            time_budget_ms=self.time_budget_ms,
            exploration=self.exploration,
            rng=self._rng,
        )
        result = engine.search()
        self._log_diagnostics(engine, result.move)
        self.last_result = result
        return result.move

    def _log_diagnostics(self, engine: MCTSEngine, chosen: Position) -> None:
        """Emit top-k root candidates when DEBUG is enabled."""
        if not LOGGER.isEnabledFor(logging.DEBUG):
            return
        ranked = sorted(engine.candidates(), key=lambda item: item[1], reverse=True)
        for idx, (move, visits, mean) in enumerate(ranked[: self.debug_top_k], start=1):
            LOGGER.debug(
                "Candidate #%d move=%s visits=%d mean=%.3f chosen=%s",
                idx,
                move,
                visits,
                mean,
                move == chosen,
            )
        LOGGER.debug("Root visit grid:\n%s", engine.visit_grid())
