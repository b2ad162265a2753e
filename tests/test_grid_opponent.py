# Area: Opponents Tests
"""Tests for the grid board helpers and the heuristic grid opponent."""

import random

import pytest

from playground_engine._opponents.grid_board import (
    CORNERS,
    completing_cell,
    empty_cells,
    find_winner,
    is_full,
    new_board,
)
from playground_engine._opponents.grid_opponent import GridOpponent
from playground_engine.errors import InvariantViolation

X, O, _ = "X", "O", None


class StubRandom:
    """Scripted random source: fixed random() values, choice() by position."""

    def __init__(self, randoms=(), pick=0):
        self._randoms = list(randoms)
        self.pick = pick
        self.choices = []

    def random(self):
        return self._randoms.pop(0) if self._randoms else 0.99

    def choice(self, seq):
        seq = list(seq)
        self.choices.append(seq)
        return seq[self.pick]


class ExplodingRandom(StubRandom):
    def random(self):
        raise AssertionError("random() must not be consulted")


class TestGridBoard:
    """Tests for board helper functions."""

    def test_new_board_is_empty(self):
        """Test new board is empty."""
        board = new_board()
        assert len(board) == 9
        assert empty_cells(board) == list(range(9))
        assert is_full(board) is False

    def test_find_winner_reports_line(self):
        """Test find winner reports line."""
        board = [X, X, X, O, O, _, _, _, _]
        assert find_winner(board) == (X, (0, 1, 2))

    def test_find_winner_diagonal(self):
        """Test find winner diagonal."""
        board = [O, X, X, _, O, _, _, X, O]
        assert find_winner(board) == (O, (0, 4, 8))

    def test_no_winner(self):
        """Test an empty board has no winner."""
        assert find_winner(new_board()) is None

    def test_completing_cell(self):
        """Test completing_cell finds the open third cell."""
        board = [X, _, X, _, _, _, _, _, _]
        assert completing_cell(board, X) == 1
        assert completing_cell(board, O) is None


class TestGridOpponentPriority:
    """Tests for the deterministic priority list."""

    def test_takes_win_before_block(self):
        """Test takes win before block."""
        board = [O, O, _, X, X, _, _, _, _]
        assert GridOpponent.hard(rng=StubRandom()).choose_move(board) == 2

    def test_blocks_human_two_in_a_row(self):
        """Test blocks human two in a row."""
        board = [X, X, _, _, O, _, _, _, _]
        assert GridOpponent.hard(rng=StubRandom()).choose_move(board) == 2

    def test_takes_center(self):
        """Test takes center."""
        board = [X, _, _, _, _, _, _, _, _]
        assert GridOpponent.hard(rng=StubRandom()).choose_move(board) == 4

    def test_takes_random_empty_corner(self):
        """Test takes random empty corner."""
        rng = StubRandom(pick=-1)
        board = [_, _, _, _, X, _, _, _, _]
        move = GridOpponent.hard(rng=rng).choose_move(board)
        assert move == 8
        assert rng.choices == [list(CORNERS)]

    def test_falls_back_to_any_empty_cell(self):
        """Test falls back to any empty cell."""
        board = [X, O, X, X, O, _, O, X, O]
        rng = StubRandom()
        assert GridOpponent.hard(rng=rng).choose_move(board) == 5
        assert rng.choices == [[5]]

    def test_hard_never_consults_random(self):
        """Test hard never consults random."""
        board = [X, _, _, _, _, _, _, _, _]
        assert GridOpponent.hard(rng=ExplodingRandom()).choose_move(board) == 4

    def test_win_is_always_taken_when_hard(self):
        """Test win is always taken when hard."""
        board = [O, _, X, _, O, X, _, _, _]
        opponent = GridOpponent.hard(rng=random.Random(1234))
        assert {opponent.choose_move(board) for _ in range(50)} == {8}


class TestGridOpponentEasy:
    """Tests for the random-move override."""

    def test_easy_default_probability(self):
        """Test easy default probability."""
        assert GridOpponent.easy().random_move_probability == 0.7

    def test_random_override_below_probability(self):
        """Test random override below probability."""
        board = [O, O, _, X, X, _, _, _, _]
        rng = StubRandom(randoms=[0.1], pick=-1)
        assert GridOpponent.easy(rng=rng).choose_move(board) == 8
        assert rng.choices == [[2, 5, 6, 7, 8]]

    def test_priority_list_at_or_above_probability(self):
        """Test priority list at or above probability."""
        board = [O, O, _, X, X, _, _, _, _]
        rng = StubRandom(randoms=[0.7])
        assert GridOpponent.easy(rng=rng).choose_move(board) == 2

    def test_custom_probability(self):
        """Test easy() accepts a custom probability."""
        opponent = GridOpponent.easy(probability=0.25)
        assert opponent.random_move_probability == 0.25


class TestGridOpponentGuards:
    """Tests for invalid input."""

    def test_full_board_raises(self):
        """Test full board raises."""
        board = [X, O, X, X, O, O, O, X, X]
        with pytest.raises(InvariantViolation):
            GridOpponent.hard().choose_move(board)

    def test_wrong_board_size_raises(self):
        """Test wrong board size raises."""
        with pytest.raises(ValueError):
            GridOpponent.hard().choose_move([_] * 8)

    def test_probability_out_of_range(self):
        """Test probability out of range."""
        with pytest.raises(ValueError):
            GridOpponent(random_move_probability=1.5)

    def test_same_marks_rejected(self):
        """Test same marks rejected."""
        with pytest.raises(ValueError):
            GridOpponent(mark=X, human_mark=X)
