"""Square coordinate type and helpers.

Board layout (row-major, black at the top)::

    row 0 -> rank 8 (black back rank)
    row 7 -> rank 1 (white back rank)
    col 0 -> file a, col 7 -> file h
"""

from __future__ import annotations

from typing import NamedTuple

BOARD_SIZE = 8


class Square(NamedTuple):
    """A ``(row, col)`` coordinate pair."""

    row: int
    col: int

    def __str__(self) -> str:
        return square_name(self)


def is_in_bounds(row: int, col: int) -> bool:
    """True iff both coordinates lie in ``[0, 7]``."""
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. ``Square(7, 4)`` → 'e1'."""
    return chr(ord("a") + sq.col) + str(BOARD_SIZE - sq.row)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → ``Square(4, 4)``."""
    if len(name) != 2 or name[0] not in "abcdefgh" or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return Square(BOARD_SIZE - int(name[1]), ord(name[0]) - ord("a"))
