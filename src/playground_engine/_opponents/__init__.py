# Area: Opponents
"""
Mini-game opponents behind a common ``choose_move(history)`` contract.

This package handles:
- The 3x3 grid board helpers and heuristic grid opponent
- The adaptive simultaneous-choice opponent and outcome resolution
"""

from .base import Opponent, RandomSource
from .grid_board import (
    WINNING_LINES,
    HUMAN_MARK,
    OPPONENT_MARK,
    new_board,
    empty_cells,
    is_full,
    find_winner,
    completing_cell,
)
from .grid_opponent import GridOpponent
from .choice_opponent import (
    Choice,
    Outcome,
    BEATS,
    ALL_CHOICES,
    counter_to,
    resolve,
    modal_choice,
    ChoiceOpponent,
)

__all__ = [
    "Opponent",
    "RandomSource",
    "WINNING_LINES",
    "HUMAN_MARK",
    "OPPONENT_MARK",
    "new_board",
    "empty_cells",
    "is_full",
    "find_winner",
    "completing_cell",
    "GridOpponent",
    "Choice",
    "Outcome",
    "BEATS",
    "ALL_CHOICES",
    "counter_to",
    "resolve",
    "modal_choice",
    "ChoiceOpponent",
]
