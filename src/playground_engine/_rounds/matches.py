# Area: Rounds
"""
playground_engine._rounds.matches — Mini-game round drivers
===========================================================

ChoiceMatch plays simultaneous-choice rounds; GridMatch plays grid games
with the human moving first. Both ask their opponent for a move, resolve
the outcome and append it to a RoundHistory. Neither adds any
"thinking" delay; pacing belongs to the caller.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .history import RoundHistory, RoundOutcome
from .._opponents.choice_opponent import Choice, ChoiceOpponent, Outcome, resolve
from .._opponents.grid_board import find_winner, is_full, new_board
from .._opponents.grid_opponent import GridOpponent
from ..errors import InvariantViolation

logger = logging.getLogger("playground_engine.rounds")


class ChoiceMatch:
    """Simultaneous-choice rounds against an adaptive opponent."""

    def __init__(self, opponent: ChoiceOpponent, history: Optional[RoundHistory] = None):
        self.opponent = opponent
        self.history = history if history is not None else RoundHistory()

    def play(self, player_choice: Choice) -> RoundOutcome:
        # The opponent only sees rounds already played, never the current pick.
        opponent_choice = self.opponent.choose_move(self.history.player_moves())
        result = resolve(player_choice, opponent_choice)
        outcome = self.history.record(player_choice, opponent_choice, result)
        logger.info(
            f"Round {outcome.round_number}: {player_choice.value} vs "
            f"{opponent_choice.value} → {result.value}"
        )
        return outcome


class GridMatch:
    """
    One grid game at a time against a GridOpponent.

    The human plays ``opponent.human_mark`` and always moves first. When a
    game ends its outcome (from the human's side) is appended to the
    history; ``reset`` clears the board for the next game.
    """

    def __init__(self, opponent: GridOpponent, history: Optional[RoundHistory] = None):
        self.opponent = opponent
        self.history = history if history is not None else RoundHistory()
        self.board: List[Optional[str]] = new_board()
        self.winner: Optional[str] = None
        self.winning_line: Optional[Tuple[int, int, int]] = None
        self.outcome: Optional[RoundOutcome] = None
        self._human_cells: List[int] = []
        self._opponent_cells: List[int] = []

    @property
    def is_over(self) -> bool:
        return self.outcome is not None

    @property
    def is_draw(self) -> bool:
        return self.is_over and self.winner is None

    def play(self, cell: int) -> Optional[int]:
        """
        Place the human's mark, then let the opponent reply.

        Returns the opponent's cell, or None if the human's move ended the
        game.

        Raises:
            InvariantViolation: If the game is already over
            ValueError: If ``cell`` is out of range or taken
        """
        if self.is_over:
            raise InvariantViolation("play", "game_over")
        if not 0 <= cell < 9:
            raise ValueError(f"Cell must be in 0..8, got {cell}")
        if self.board[cell] is not None:
            raise ValueError(f"Cell {cell} is already taken")

        self.board[cell] = self.opponent.human_mark
        self._human_cells.append(cell)
        if self._check_end():
            return None

        reply = self.opponent.choose_move(self.board)
        self.board[reply] = self.opponent.mark
        self._opponent_cells.append(reply)
        self._check_end()
        return reply

    def reset(self) -> None:
        self.board = new_board()
        self.winner = None
        self.winning_line = None
        self.outcome = None
        self._human_cells = []
        self._opponent_cells = []

    def _check_end(self) -> bool:
        found = find_winner(self.board)
        if found is not None:
            self.winner, self.winning_line = found
            result = Outcome.WIN if self.winner == self.opponent.human_mark else Outcome.LOSE
        elif is_full(self.board):
            result = Outcome.DRAW
        else:
            return False

        self.outcome = self.history.record(
            tuple(self._human_cells), tuple(self._opponent_cells), result,
        )
        logger.info(f"Grid game {self.outcome.round_number} over: {result.value}")
        return True
