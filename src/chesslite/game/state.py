"""Game session state — board, turn, selection and end-of-game flags."""

from __future__ import annotations

from dataclasses import dataclass, field

from chesslite.core.board import Board
from chesslite.core.enums import Color, GameResult
from chesslite.core.types import Square
from chesslite.game.interfaces import GameEndReason


@dataclass
class GameState:
    """Everything a session mutates between moves.

    This is a pure data class — no timers, no UI.  Only the session's
    move-application and turn-switch logic writes to it.
    """

    board: Board = field(default_factory=Board.initial)
    current_player: Color = Color.WHITE
    selected: Square | None = None
    valid_moves: list[Square] = field(default_factory=list)
    is_computer_thinking: bool = False
    is_game_over: bool = False
    is_check: bool = False
    result: GameResult = GameResult.IN_PROGRESS
    end_reason: GameEndReason | None = None

    def reset(
        self,
        board: Board | None = None,
        current_player: Color = Color.WHITE,
    ) -> None:
        """Rebuild the starting layout (or *board*) and clear every flag."""
        self.board = board if board is not None else Board.initial()
        self.current_player = current_player
        self.clear_selection()
        self.is_computer_thinking = False
        self.is_game_over = False
        self.is_check = False
        self.result = GameResult.IN_PROGRESS
        self.end_reason = None

    def clear_selection(self) -> None:
        self.selected = None
        self.valid_moves = []

    def finish(self, result: GameResult, reason: GameEndReason) -> None:
        self.is_game_over = True
        self.is_computer_thinking = False
        self.result = result
        self.end_reason = reason
        self.clear_selection()
