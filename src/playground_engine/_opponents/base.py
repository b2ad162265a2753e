# Area: Opponents
"""
playground_engine._opponents.base — Opponent contract
=====================================================

Every opponent exposes ``choose_move(history) -> move``. The decision is
a pure function of its input plus an injected random source, so a seeded
``random.Random`` (or a stub) makes it fully reproducible. Any "thinking"
delay is a presentation concern and lives outside the engine.
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import Any, Optional, Protocol, Sequence, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    """The subset of ``random.Random`` the opponents rely on."""

    def random(self) -> float: ...

    def choice(self, seq: Sequence[T]) -> T: ...


class Opponent(ABC):
    """Base class for mini-game opponents."""

    def __init__(self, rng: Optional[RandomSource] = None):
        self.rng: RandomSource = rng if rng is not None else random.Random()

    @abstractmethod
    def choose_move(self, history: Any) -> Any:
        """Return the next move given the board or the round history."""
        ...
