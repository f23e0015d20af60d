"""Arena-backed MCTS search tree with UCB1 scoring."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional

from engine.board import Board
from engine.cells import Cell
from engine.rules import Position

DEFAULT_EXPLORATION = 1.41


@dataclass
class SearchNode:
    """Board state reached by ``player`` playing ``move``.

    ``parent`` and ``children`` are indices into the owning SearchTree,
    never direct references.
    """

    board: Board
    player: Cell
    move: Optional[Position] = None
    parent: Optional[int] = None
    children: List[int] = field(default_factory=list)
    score: float = 0.0
    visits: int = 0

    @property
    def is_root(self) -> bool:
        return self.parent is None


class SearchTree:
    """All nodes of one search episode; index 0 is the root."""

    def __init__(self, board: Board, root_player: Cell = Cell.OPPONENT, exploration: float = DEFAULT_EXPLORATION) -> None:
        self.exploration = exploration
        self.nodes: List[SearchNode] = [SearchNode(board=board, player=root_player)]

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> SearchNode:
        return self.nodes[index]

    @property
    def root(self) -> SearchNode:
        return self.nodes[0]

    def ucb1(self, index: int) -> float:
        """Exploitation from the mover's side plus the UCB1 exploration bonus."""
        node = self.nodes[index]
        if node.is_root or node.visits == 0:
            return math.inf

        exploitation = node.score / node.visits
        # Scores are stored from SELF's side; the opponent minimizes them.
        if node.player is Cell.OPPONENT:
            exploitation = -exploitation
        parent_visits = self.nodes[node.parent].visits
        exploration = self.exploration * math.sqrt(math.log(parent_visits) / node.visits)
        return exploitation + exploration

    def expand(self, index: int) -> List[int]:
        """Create one child per legal move of a childless node."""
        node = self.nodes[index]
        if node.children:
            raise ValueError(f"Node {index} is already expanded.")

        player = node.player.opponent()
        for move in node.board.legal_moves:
            board = node.board.clone()
            board.apply_move(move, player)
            child_index = len(self.nodes)
            self.nodes.append(SearchNode(board=board, player=player, move=move, parent=index))
            node.children.append(child_index)
        return list(node.children)

    def best_child(self, index: int, key: Callable[[int], float]) -> int:
        """First child maximizing ``key``, in generation order."""
        children = self.nodes[index].children
        if not children:
            raise ValueError(f"Node {index} has no children.")
        best = children[0]
        best_value = key(best)
        for child in children[1:]:
            value = key(child)
            if value > best_value:
                best, best_value = child, value
        return best

    def path_to_root(self, index: int) -> Iterator[int]:
        """Yield ``index`` and each ancestor up to and including the root."""
        current: Optional[int] = index
        while current is not None:
            yield current
            current = self.nodes[current].parent
