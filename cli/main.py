"""CLI entrypoint for playing tic-tac-toe against the MCTS AI."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Optional

from ai.base_ai import BaseAI
from ai.mcts_ai import DEFAULT_TIME_BUDGET_MS, MCTSAI
from cli.render import RED, colorize, render_grid, render_outcome
from engine.board import Board
from engine.cells import Cell
from engine.rules import Position

PROMPT = "Enter your move (row and column): "

LOGGER = logging.getLogger("tictactoe.cli")


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play tic-tac-toe against a Monte Carlo Tree Search AI.")
    parser.add_argument(
        "--time-budget-ms",
        type=int,
        default=DEFAULT_TIME_BUDGET_MS,
        help="Search time per AI move in milliseconds",
    )
    parser.add_argument("--log-level", type=str, default="WARNING", help="Python logging level")
    args = parser.parse_args(argv)
    if args.time_budget_ms <= 0:
        parser.error("--time-budget-ms must be positive")
    return args


def parse_user_move(command: str) -> Optional[Position]:
    """Parse ``row,col`` or ``row col``; None if malformed."""
    text = command.strip()
    parts = text.split(",") if "," in text else text.split()
    if len(parts) != 2:
        return None
    try:
        row, col = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    return (row, col)


def play_game(
    board: Board,
    ai: BaseAI,
    read_line: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
    color: bool = True,
) -> Optional[Cell]:
    """Alternate human (OPPONENT) and AI (SELF) moves until the game ends.

    Returns the winner, or None for a draw or an abandoned game.
    """
    while True:
        terminal, winner, is_draw = board.game_over()
        write(render_grid(board))
        if terminal:
            LOGGER.info("Game over. winner=%s draw=%s", winner.glyph if winner else "none", is_draw)
            write(render_outcome(winner, color))
            return winner

        while True:
            try:
                user_input = read_line(PROMPT)
            except EOFError:
                LOGGER.info("Input closed; abandoning game.")
                return None
            if user_input.strip().lower() in {"quit", "exit"}:
                write("Exiting game.")
                return None

            move = parse_user_move(user_input)
            result = board.apply_move(move, Cell.OPPONENT) if move is not None else None
            if not result:
                LOGGER.debug("Rejected input %r (%s)", user_input, result.error.value if result is not None else "malformed")
                write(colorize("invalid move", RED, color))
                continue
            break

        if board.is_terminal():
            continue

        ai_move = ai.choose_move(board)
        if not board.apply_move(ai_move, Cell.SELF):
            raise RuntimeError(f"AI chose an illegal move: {ai_move}")
        LOGGER.info("AI move: %s", ai_move)


def run_cli(argv: Optional[list] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))

    board = Board()
    ai = MCTSAI(time_budget_ms=args.time_budget_ms)
    LOGGER.info("Starting game. Human=%s AI=%s budget=%dms", Cell.OPPONENT.glyph, Cell.SELF.glyph, args.time_budget_ms)

    play_game(board, ai, color=sys.stdout.isatty())
    return 0


if __name__ == "__main__":
    sys.exit(run_cli())
