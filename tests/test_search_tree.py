"""
Tests for the arena-backed search tree: UCB1 scoring and child generation.
"""

import math

import pytest

from ai.search_tree import DEFAULT_EXPLORATION, SearchTree
from engine.board import Board
from engine.cells import Cell


def expanded_tree():
    tree = SearchTree(Board.from_moves([((1, 1), Cell.OPPONENT)]))
    children = tree.expand(0)
    return tree, children


class TestUCB1:
    """Test UCB1 scoring"""

    def test_root_is_infinite(self):
        tree = SearchTree(Board())
        tree.root.visits = 10
        tree.root.score = 3.0
        assert tree.ucb1(0) == math.inf

    def test_unvisited_child_is_infinite_even_with_visited_parent(self):
        tree, children = expanded_tree()
        tree.root.visits = 25
        assert all(tree.ucb1(child) == math.inf for child in children)

    def test_self_node_keeps_exploitation_sign(self):
        tree, children = expanded_tree()
        child = tree[children[0]]
        assert child.player is Cell.SELF
        tree.root.visits = 10
        child.visits = 4
        child.score = 2.0
        expected = 0.5 + DEFAULT_EXPLORATION * math.sqrt(math.log(10) / 4)
        assert tree.ucb1(children[0]) == pytest.approx(expected)

    def test_opponent_node_negates_exploitation(self):
        tree, children = expanded_tree()
        grandchildren = tree.expand(children[0])
        node = tree[grandchildren[0]]
        assert node.player is Cell.OPPONENT
        tree[children[0]].visits = 8
        node.visits = 2
        node.score = 1.0
        expected = -0.5 + DEFAULT_EXPLORATION * math.sqrt(math.log(8) / 2)
        assert tree.ucb1(grandchildren[0]) == pytest.approx(expected)

    def test_custom_exploration_constant(self):
        tree = SearchTree(Board(), exploration=0.0)
        children = tree.expand(0)
        tree.root.visits = 5
        tree[children[0]].visits = 5
        tree[children[0]].score = -5.0
        assert tree.ucb1(children[0]) == pytest.approx(-1.0)


class TestExpand:
    """Test child generation"""

    def test_one_child_per_legal_move(self):
        tree, children = expanded_tree()
        root_moves = tree.root.board.legal_moves
        assert len(children) == len(root_moves) == 8
        assert [tree[child].move for child in children] == root_moves

    def test_children_apply_their_move_for_the_other_player(self):
        tree, children = expanded_tree()
        for child in children:
            node = tree[child]
            assert node.parent == 0
            assert node.player is Cell.SELF
            assert node.board.get_cell(node.move) is Cell.SELF
            assert node.board.legal_move_count() == 7
            assert node.visits == 0 and node.score == 0.0

    def test_parent_board_is_untouched(self):
        tree, _ = expanded_tree()
        assert tree.root.board.legal_move_count() == 8

    def test_players_alternate_by_depth(self):
        tree, children = expanded_tree()
        grandchildren = tree.expand(children[-1])
        assert all(tree[node].player is Cell.OPPONENT for node in grandchildren)
        assert all(tree[node].board.legal_move_count() == 6 for node in grandchildren)

    def test_expanding_twice_is_rejected(self):
        tree, _ = expanded_tree()
        with pytest.raises(ValueError):
            tree.expand(0)

    def test_root_has_no_move_or_parent(self):
        tree = SearchTree(Board())
        assert tree.root.move is None
        assert tree.root.is_root
        assert tree.root.player is Cell.OPPONENT


class TestNavigation:
    """Test child choice and upward walks"""

    def test_best_child_prefers_first_on_ties(self):
        tree, children = expanded_tree()
        assert tree.best_child(0, lambda child: 1.0) == children[0]

    def test_best_child_picks_maximum(self):
        tree, children = expanded_tree()
        tree[children[3]].visits = 9
        tree[children[5]].visits = 9
        assert tree.best_child(0, lambda child: tree[child].visits) == children[3]

    def test_best_child_without_children_raises(self):
        with pytest.raises(ValueError):
            SearchTree(Board()).best_child(0, lambda child: 0.0)

    def test_path_to_root(self):
        tree, children = expanded_tree()
        grandchildren = tree.expand(children[2])
        assert list(tree.path_to_root(grandchildren[1])) == [grandchildren[1], children[2], 0]
        assert list(tree.path_to_root(0)) == [0]
