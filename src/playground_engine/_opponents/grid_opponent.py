# Area: Opponents
"""
playground_engine._opponents.grid_opponent — Heuristic grid opponent
====================================================================

Move priority, first match wins:

1. Complete our own two-in-a-row (win)
2. Complete the human's two-in-a-row (block)
3. Take the center
4. Take a random empty corner
5. Take a random empty cell

With probability ``random_move_probability`` the whole list is skipped
for a uniform-random empty cell ("mostly random, occasionally optimal").
At 0.0 the opponent always plays the list; it is still a heuristic, not
minimax, and can be beaten.
"""

from __future__ import annotations

import logging
from typing import Optional

from .base import Opponent, RandomSource
from .grid_board import (
    CENTER,
    CORNERS,
    HUMAN_MARK,
    OPPONENT_MARK,
    Board,
    completing_cell,
    empty_cells,
    validate_board,
)
from ..errors import InvariantViolation

logger = logging.getLogger("playground_engine.opponents")

EASY_RANDOM_MOVE_PROBABILITY = 0.7


class GridOpponent(Opponent):
    """
    Deterministic-priority grid opponent.

    Attributes:
        mark: The opponent's mark
        human_mark: The human's mark
        random_move_probability: Chance of replacing the priority list
            with a uniform-random move
    """

    def __init__(
        self,
        mark: str = OPPONENT_MARK,
        human_mark: str = HUMAN_MARK,
        random_move_probability: float = 0.0,
        rng: Optional[RandomSource] = None,
    ):
        super().__init__(rng)
        if mark == human_mark:
            raise ValueError("Opponent and human marks must differ")
        if not 0.0 <= random_move_probability <= 1.0:
            raise ValueError(
                f"random_move_probability must be in [0, 1], got {random_move_probability}"
            )
        self.mark = mark
        self.human_mark = human_mark
        self.random_move_probability = random_move_probability

    @classmethod
    def easy(cls, rng: Optional[RandomSource] = None,
             probability: float = EASY_RANDOM_MOVE_PROBABILITY) -> "GridOpponent":
        return cls(random_move_probability=probability, rng=rng)

    @classmethod
    def hard(cls, rng: Optional[RandomSource] = None) -> "GridOpponent":
        return cls(random_move_probability=0.0, rng=rng)

    def choose_move(self, history: Board) -> int:
        """
        Pick a cell index for the current board.

        Raises:
            InvariantViolation: If the board has no empty cell
        """
        board = history
        validate_board(board)
        available = empty_cells(board)
        if not available:
            raise InvariantViolation("choose_move", "board_full")

        if self.random_move_probability > 0 and self.rng.random() < self.random_move_probability:
            move = self.rng.choice(available)
            logger.debug("Grid opponent plays random cell %d", move)
            return move

        return self.best_move(board)

    def best_move(self, board: Board) -> int:
        """Apply the priority list without the random override."""
        win = completing_cell(board, self.mark)
        if win is not None:
            return win

        block = completing_cell(board, self.human_mark)
        if block is not None:
            return block

        if board[CENTER] is None:
            return CENTER

        corners = [c for c in CORNERS if board[c] is None]
        if corners:
            return self.rng.choice(corners)

        return self.rng.choice(empty_cells(board))
