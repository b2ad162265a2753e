# Area: Opponents
"""
playground_engine._opponents.choice_opponent — Adaptive simultaneous-choice opponent
====================================================================================

Three choices with cyclic dominance (rock beats scissors, scissors beats
paper, paper beats rock).

The opponent looks at the human's last ``window`` choices, finds the
modal one (frequency ties go to the most recent occurrence) and, with
probability ``counter_probability``, plays the choice that beats it.
Otherwise, and whenever fewer than ``window`` choices exist, it picks
uniformly at random. Nothing is learned or stored between calls.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, Optional, Sequence

from .base import Opponent, RandomSource

logger = logging.getLogger("playground_engine.opponents")


class Choice(Enum):
    ROCK = "rock"
    PAPER = "paper"
    SCISSORS = "scissors"


class Outcome(Enum):
    """Round result from the human player's side."""
    WIN = "win"
    LOSE = "lose"
    DRAW = "draw"


# {choice: the choice it beats}
BEATS: Dict[Choice, Choice] = {
    Choice.ROCK: Choice.SCISSORS,
    Choice.SCISSORS: Choice.PAPER,
    Choice.PAPER: Choice.ROCK,
}

# {choice: the choice that beats it}
COUNTERS: Dict[Choice, Choice] = {loser: winner for winner, loser in BEATS.items()}

ALL_CHOICES = (Choice.ROCK, Choice.PAPER, Choice.SCISSORS)


def counter_to(choice: Choice) -> Choice:
    return COUNTERS[choice]


def resolve(player: Choice, opponent: Choice) -> Outcome:
    if player is opponent:
        return Outcome.DRAW
    if BEATS[player] is opponent:
        return Outcome.WIN
    return Outcome.LOSE


def modal_choice(choices: Sequence[Choice]) -> Optional[Choice]:
    """Most frequent choice; ties go to the one seen most recently."""
    if not choices:
        return None
    counts: Dict[Choice, int] = {}
    last_seen: Dict[Choice, int] = {}
    for position, choice in enumerate(choices):
        counts[choice] = counts.get(choice, 0) + 1
        last_seen[choice] = position
    return max(counts, key=lambda c: (counts[c], last_seen[c]))


class ChoiceOpponent(Opponent):
    """
    Frequency-counter opponent.

    Attributes:
        window: Number of recent human choices examined
        counter_probability: Chance of countering the modal choice once
            the window is full
    """

    def __init__(
        self,
        window: int = 3,
        counter_probability: float = 0.6,
        rng: Optional[RandomSource] = None,
    ):
        super().__init__(rng)
        if window < 1:
            raise ValueError(f"window must be >= 1, got {window}")
        if not 0.0 <= counter_probability <= 1.0:
            raise ValueError(
                f"counter_probability must be in [0, 1], got {counter_probability}"
            )
        self.window = window
        self.counter_probability = counter_probability

    def choose_move(self, history: Sequence[Choice]) -> Choice:
        """Pick a choice given the human's past choices, oldest first."""
        if len(history) >= self.window:
            recent = list(history)[-self.window:]
            modal = modal_choice(recent)
            if self.rng.random() < self.counter_probability:
                move = counter_to(modal)
                logger.debug("Choice opponent counters %s with %s", modal.value, move.value)
                return move
        return self.rng.choice(ALL_CHOICES)
