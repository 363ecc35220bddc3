"""Core domain layer — pure chess logic with zero external dependencies.

Quick start::

    from chesslite.core import Board, Color, MoveGenerator, Rules

    board = Board.initial()
    gen = MoveGenerator(board)
    for move in gen.legal_moves(Color.WHITE):
        print(move)
"""

from chesslite.core.board import Board
from chesslite.core.enums import Color, GameResult, PieceType
from chesslite.core.move import Move
from chesslite.core.move_generator import MoveGenerator
from chesslite.core.notation import (
    STARTING_PLACEMENT,
    board_from_placement,
    board_to_placement,
)
from chesslite.core.piece import Piece
from chesslite.core.rules import Rules
from chesslite.core.types import Square, is_in_bounds, parse_square, square_name

__all__ = [
    # Enums
    "Color",
    "GameResult",
    "PieceType",
    # Types / helpers
    "Square",
    "is_in_bounds",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Rules",
    # Notation
    "STARTING_PLACEMENT",
    "board_from_placement",
    "board_to_placement",
]
