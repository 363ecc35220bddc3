"""High-level chess rules: check, checkmate, stalemate."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chesslite.core.enums import Color, GameResult
from chesslite.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from chesslite.core.board import Board


class Rules:
    """Static rule-checker that operates on a :class:`Board`."""

    # Reduced rule set: no castling, en passant, promotion or draw-by-rule,
    # and nothing stops a king from being captured.

    @staticmethod
    def is_in_check(board: Board, color: Color) -> bool:
        return MoveGenerator(board).is_in_check(color)

    @staticmethod
    def has_legal_moves(board: Board, color: Color) -> bool:
        return MoveGenerator(board).has_legal_move(color)

    @staticmethod
    def is_checkmate(board: Board, color: Color) -> bool:
        if not Rules.is_in_check(board, color):
            return False
        return not Rules.has_legal_moves(board, color)

    @staticmethod
    def is_stalemate(board: Board, color: Color) -> bool:
        if Rules.is_in_check(board, color):
            return False
        return not Rules.has_legal_moves(board, color)

    @staticmethod
    def game_result(board: Board, side_to_move: Color) -> GameResult:
        """Determine the result with *side_to_move* about to play."""
        if Rules.has_legal_moves(board, side_to_move):
            return GameResult.IN_PROGRESS
        if Rules.is_in_check(board, side_to_move):
            return GameResult.win_for(side_to_move.opposite)
        return GameResult.DRAW  # stalemate
