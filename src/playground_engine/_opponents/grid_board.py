# Area: Opponents
"""
playground_engine._opponents.grid_board — 3x3 grid helpers
==========================================================

A board is a sequence of 9 cells, indexed row by row::

    0 | 1 | 2
    3 | 4 | 5
    6 | 7 | 8

Each cell holds a mark ("X" or "O") or None.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

Board = Sequence[Optional[str]]

HUMAN_MARK = "X"
OPPONENT_MARK = "O"
CENTER = 4
CORNERS = (0, 2, 6, 8)

WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # columns
    (0, 4, 8), (2, 4, 6),             # diagonals
)


def new_board() -> List[Optional[str]]:
    return [None] * 9


def validate_board(board: Board) -> None:
    if len(board) != 9:
        raise ValueError(f"Grid board must have 9 cells, got {len(board)}")


def empty_cells(board: Board) -> List[int]:
    return [i for i, cell in enumerate(board) if cell is None]


def is_full(board: Board) -> bool:
    return all(cell is not None for cell in board)


def find_winner(board: Board) -> Optional[Tuple[str, Tuple[int, int, int]]]:
    """Return (mark, line) for the first completed line, or None."""
    for line in WINNING_LINES:
        a, b, c = line
        if board[a] is not None and board[a] == board[b] == board[c]:
            return board[a], line
    return None


def completing_cell(board: Board, mark: str) -> Optional[int]:
    """
    First empty cell that would give ``mark`` three in a row.

    Lines are scanned in WINNING_LINES order.
    """
    for line in WINNING_LINES:
        marks = [board[i] for i in line]
        if marks.count(mark) == 2 and marks.count(None) == 1:
            return line[marks.index(None)]
    return None
