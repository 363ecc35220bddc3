"""GameSession — human versus computer orchestration.

Coordinates: GameState, MoveGenerator, Rules, the computer's move selector
and the deferred timers.  Emits events via simple callbacks so the UI /
tests can subscribe.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass, field

from chesslite.core.board import Board
from chesslite.core.enums import Color, GameResult
from chesslite.core.move import Move
from chesslite.core.move_generator import MoveGenerator
from chesslite.core.piece import Piece
from chesslite.core.rules import Rules
from chesslite.core.types import Square
from chesslite.engine.greedy import GreedySelector
from chesslite.engine.search import IMoveSelector
from chesslite.game.config import GameConfig
from chesslite.game.interfaces import (
    GameEndReason,
    GameStatus,
    IScheduler,
    StatusKind,
)
from chesslite.game.scheduler import ManualScheduler, OneShotTimer
from chesslite.game.state import GameState

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, Piece | None, GameState], None]  # move, captured, state
CheckCallback = Callable[[Color], None]
CheckDismissedCallback = Callable[[], None]
GameOverCallback = Callable[[GameResult, GameEndReason], None]
StatusCallback = Callable[[GameStatus], None]


@dataclass
class SessionEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_check: list[CheckCallback] = field(default_factory=list)
    on_check_dismissed: list[CheckDismissedCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_status_changed: list[StatusCallback] = field(default_factory=list)


# ── Session ──────────────────────────────────────────────────────────────────


class GameSession:
    """Runs a game between a human (driven by the UI) and the computer.

    The presentation layer calls :meth:`select_square` / :meth:`attempt_move`
    (or :meth:`handle_click`) and renders :meth:`current_status`.  Invalid
    input is never an error: it simply clears the selection.

    Thread-safety: all methods and timer callbacks must run on one thread.
    While the computer's move is pending every human call is rejected.
    """

    __slots__ = (
        "_config",
        "_scheduler",
        "_selector",
        "_state",
        "_computer_timer",
        "_notice_timer",
        "_check_notice",
        "events",
    )

    def __init__(
        self,
        config: GameConfig | None = None,
        scheduler: IScheduler | None = None,
        selector: IMoveSelector | None = None,
    ) -> None:
        self._config = config or GameConfig()
        self._scheduler = scheduler or ManualScheduler()
        self._selector = selector or GreedySelector(random.Random(self._config.seed))
        self._state = GameState()
        self._computer_timer = OneShotTimer(self._scheduler, "computer move")
        self._notice_timer = OneShotTimer(self._scheduler, "check notice dismissal")
        self._check_notice: Color | None = None
        self.events = SessionEvents()
        self._start(None, Color.WHITE)

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def board(self) -> Board:
        return self._state.board

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def scheduler(self) -> IScheduler:
        return self._scheduler

    @property
    def check_notice(self) -> Color | None:
        """Color whose king is currently announced as in check."""
        return self._check_notice

    @property
    def accepts_input(self) -> bool:
        st = self._state
        return (
            not st.is_game_over
            and not st.is_computer_thinking
            and st.current_player == self._config.human_color
        )

    # ── Presentation-facing API ──────────────────────────────────────────

    def select_square(self, sq: Square) -> list[Square]:
        """Select the human's piece on *sq*; returns its legal destinations."""
        if not self.accepts_input:
            return []
        st = self._state
        piece = st.board[sq]
        if piece is None or piece.color != st.current_player:
            st.clear_selection()
            return []
        st.selected = sq
        st.valid_moves = MoveGenerator(st.board).legal_destinations(sq)
        return list(st.valid_moves)

    def attempt_move(self, from_sq: Square, to_sq: Square) -> bool:
        """Play *from_sq* → *to_sq* if it is in the selected legal set."""
        if not self.accepts_input:
            return False
        st = self._state
        if st.selected != from_sq or to_sq not in st.valid_moves:
            st.clear_selection()
            return False

        st.clear_selection()
        self._apply(Move(from_sq, to_sq))
        st.current_player = self._config.computer_color
        self._after_turn_switch()
        self._emit_status()
        return True

    def handle_click(self, sq: Square) -> bool:
        """One board click: move if something is selected, else select.

        Returns True when the click played a move.
        """
        if not self.accepts_input:
            return False
        selected = self._state.selected
        if selected is not None:
            return self.attempt_move(selected, sq)
        self.select_square(sq)
        return False

    def current_status(self) -> GameStatus:
        st = self._state
        if st.is_game_over:
            return GameStatus(StatusKind.GAME_OVER, st.result, st.end_reason)
        if st.is_computer_thinking or st.current_player != self._config.human_color:
            return GameStatus(StatusKind.COMPUTER_THINKING)
        if st.is_check:
            return GameStatus(StatusKind.AWAITING_HUMAN_IN_CHECK)
        return GameStatus(StatusKind.AWAITING_HUMAN)

    def reset(self, board: Board | None = None, side_to_move: Color = Color.WHITE) -> None:
        """Start over from the standard layout (or *board*).

        Pending computer moves and check notices are cancelled.
        """
        _LOGGER.info("Game reset")
        self._start(board, side_to_move)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _start(self, board: Board | None, side_to_move: Color) -> None:
        self._computer_timer.cancel()
        self._dismiss_check_notice()
        self._state.reset(board, side_to_move)
        self._after_turn_switch()
        self._emit_status()

    def _apply(self, move: Move) -> None:
        captured = self._state.board.move_piece(move.from_sq, move.to_sq)
        _LOGGER.debug(
            "%s plays %s%s",
            self._state.current_player,
            move,
            f" capturing {captured}" if captured is not None else "",
        )
        for cb in self.events.on_move:
            cb(move, captured, self._state)

    def _after_turn_switch(self) -> None:
        """Evaluate check, checkmate and stalemate for the side to move."""
        st = self._state
        color = st.current_player
        in_check = Rules.is_in_check(st.board, color)
        st.is_check = in_check

        if not Rules.has_legal_moves(st.board, color):
            if in_check:
                self._finish(GameResult.win_for(color.opposite), GameEndReason.CHECKMATE)
            else:
                self._finish(GameResult.DRAW, GameEndReason.STALEMATE)
            return

        if in_check:
            self._announce_check(color)
        if color == self._config.computer_color:
            st.is_computer_thinking = True
            self._computer_timer.start(
                self._config.thinking_delay_ms, self._play_computer_move
            )

    def _play_computer_move(self) -> None:
        st = self._state
        st.is_computer_thinking = False
        if st.is_game_over:
            return

        color = self._config.computer_color
        selection = self._selector.select(st.board, color)
        if selection is None:
            if Rules.is_in_check(st.board, color):
                self._finish(GameResult.win_for(color.opposite), GameEndReason.CHECKMATE)
            else:
                self._finish(GameResult.DRAW, GameEndReason.STALEMATE)
            self._emit_status()
            return

        self._apply(selection.move)
        st.current_player = self._config.human_color
        self._after_turn_switch()
        self._emit_status()

    def _finish(self, result: GameResult, reason: GameEndReason) -> None:
        self._computer_timer.cancel()
        self._state.finish(result, reason)
        _LOGGER.info("Game over: %s by %s", result.name, reason.name)
        for cb in self.events.on_game_over:
            cb(result, reason)

    def _announce_check(self, color: Color) -> None:
        _LOGGER.info("%s king is in check", str(color).capitalize())
        self._check_notice = color
        for cb in self.events.on_check:
            cb(color)
        self._notice_timer.start(self._config.check_notice_ms, self._dismiss_check_notice)

    def _dismiss_check_notice(self) -> None:
        self._notice_timer.cancel()
        if self._check_notice is None:
            return
        self._check_notice = None
        for cb in self.events.on_check_dismissed:
            cb()

    def _emit_status(self) -> None:
        status = self.current_status()
        for cb in self.events.on_status_changed:
            cb(status)
