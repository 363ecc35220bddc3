"""Tests for GameSession — the human versus computer orchestrator."""

from __future__ import annotations

from chesslite.core.board import Board
from chesslite.core.enums import Color, GameResult
from chesslite.core.move import Move
from chesslite.core.notation import board_from_placement, board_to_placement
from chesslite.core.piece import Piece
from chesslite.core.types import Square, parse_square
from chesslite.engine.search import Selection, SelectionTier
from chesslite.game.config import GameConfig
from chesslite.game.interfaces import GameEndReason, GameStatus, StatusKind
from chesslite.game.scheduler import ManualScheduler
from chesslite.game.session import GameSession
from chesslite.game.state import GameState

E2 = parse_square("e2")
E4 = parse_square("e4")


class _ScriptedSelector:
    """Plays a fixed list of moves, then reports no move."""

    def __init__(self, *moves: Move) -> None:
        self._moves = list(moves)

    def select(self, board: Board, color: Color) -> Selection | None:
        del board, color
        if not self._moves:
            return None
        return Selection(self._moves.pop(0), SelectionTier.QUIET, 1)


def _make_session(
    scheduler: ManualScheduler,
    *moves: Move,
    config: GameConfig | None = None,
) -> GameSession:
    """Helper: session whose computer plays *moves* (greedy if none given)."""
    selector = _ScriptedSelector(*moves) if moves else None
    return GameSession(config or GameConfig(seed=7), scheduler, selector)


def _play(session: GameSession, from_name: str, to_name: str) -> bool:
    from_sq, to_sq = parse_square(from_name), parse_square(to_name)
    session.select_square(from_sq)
    return session.attempt_move(from_sq, to_sq)


class TestNewSession:
    def test_initial_status(self, scheduler: ManualScheduler) -> None:
        session = _make_session(scheduler)
        assert session.current_status() == GameStatus(StatusKind.AWAITING_HUMAN)
        assert session.state.current_player == Color.WHITE
        assert session.board == Board.initial()
        assert session.check_notice is None

    def test_computer_opens_when_human_plays_black(
        self, scheduler: ManualScheduler
    ) -> None:
        session = _make_session(scheduler, config=GameConfig(human_color=Color.BLACK))
        assert session.current_status().kind == StatusKind.COMPUTER_THINKING
        assert session.select_square(parse_square("e7")) == []

        scheduler.advance(500)
        assert session.state.current_player == Color.BLACK
        assert session.current_status().kind == StatusKind.AWAITING_HUMAN
        assert session.select_square(parse_square("e7")) != []


class TestSelection:
    def test_select_own_piece(self, scheduler: ManualScheduler) -> None:
        session = _make_session(scheduler)
        moves = session.select_square(E2)
        assert moves == [parse_square("e3"), E4]
        assert session.state.selected == E2
        assert session.state.valid_moves == moves

    def test_returned_list_is_a_copy(self, scheduler: ManualScheduler) -> None:
        session = _make_session(scheduler)
        session.select_square(E2).clear()
        assert session.state.valid_moves == [parse_square("e3"), E4]

    def test_select_empty_square_clears(self, scheduler: ManualScheduler) -> None:
        session = _make_session(scheduler)
        session.select_square(E2)
        assert session.select_square(E4) == []
        assert session.state.selected is None
        assert session.state.valid_moves == []

    def test_select_opponent_piece_clears(self, scheduler: ManualScheduler) -> None:
        session = _make_session(scheduler)
        session.select_square(E2)
        assert session.select_square(parse_square("e7")) == []
        assert session.state.selected is None


class TestAttemptMove:
    def test_legal_move_accepted(self, scheduler: ManualScheduler) -> None:
        session = _make_session(scheduler)
        assert _play(session, "e2", "e4")
        piece = session.board[E4]
        assert piece is not None and piece.has_moved
        assert session.board[E2] is None
        assert session.state.current_player == Color.BLACK
        assert session.state.is_computer_thinking
        assert session.state.selected is None
        assert session.current_status().kind == StatusKind.COMPUTER_THINKING

    def test_move_outside_legal_set_deselects(self, scheduler: ManualScheduler) -> None:
        session = _make_session(scheduler)
        session.select_square(E2)
        assert not session.attempt_move(E2, parse_square("e5"))
        assert session.state.selected is None
        assert session.board == Board.initial()
        assert session.state.current_player == Color.WHITE

    def test_move_without_selection_rejected(self, scheduler: ManualScheduler) -> None:
        session = _make_session(scheduler)
        assert not session.attempt_move(E2, E4)
        assert session.board == Board.initial()

    def test_move_from_other_square_rejected(self, scheduler: ManualScheduler) -> None:
        session = _make_session(scheduler)
        session.select_square(parse_square("d2"))
        assert not session.attempt_move(E2, E4)
        assert session.state.selected is None

    def test_move_event_fires(self, scheduler: ManualScheduler) -> None:
        session = _make_session(scheduler)
        events: list[tuple[Move, Piece | None, GameState]] = []
        session.events.on_move.append(lambda m, cap, st: events.append((m, cap, st)))
        _play(session, "e2", "e4")
        assert events == [(Move(E2, E4), None, session.state)]


class TestComputerTurn:
    def test_computer_replies_after_delay(self, scheduler: ManualScheduler) -> None:
        session = _make_session(scheduler)
        replies: list[Move] = []
        _play(session, "e2", "e4")
        session.events.on_move.append(lambda m, _cap, _st: replies.append(m))

        scheduler.advance(499)
        assert replies == []
        scheduler.advance(1)

        assert len(replies) == 1
        moved = session.board[replies[0].to_sq]
        assert moved is not None and moved.color == Color.BLACK
        assert session.state.current_player == Color.WHITE
        assert not session.state.is_computer_thinking
        assert session.current_status().kind == StatusKind.AWAITING_HUMAN

    def test_input_rejected_while_thinking(self, scheduler: ManualScheduler) -> None:
        session = _make_session(scheduler)
        _play(session, "e2", "e4")
        placement = board_to_placement(session.board)

        d2 = parse_square("d2")
        assert session.select_square(d2) == []
        assert not session.attempt_move(d2, parse_square("d4"))
        assert not session.handle_click(d2)
        assert session.state.selected is None
        assert board_to_placement(session.board) == placement

    def test_status_events(self, scheduler: ManualScheduler) -> None:
        session = _make_session(scheduler)
        kinds: list[StatusKind] = []
        session.events.on_status_changed.append(lambda s: kinds.append(s.kind))
        _play(session, "e2", "e4")
        scheduler.advance(500)
        assert kinds == [StatusKind.COMPUTER_THINKING, StatusKind.AWAITING_HUMAN]


class TestHandleClick:
    def test_select_then_move(self, scheduler: ManualScheduler) -> None:
        session = _make_session(scheduler)
        assert not session.handle_click(E2)
        assert session.state.selected == E2
        assert session.handle_click(E4)
        assert session.state.current_player == Color.BLACK

    def test_second_click_elsewhere_deselects(self, scheduler: ManualScheduler) -> None:
        session = _make_session(scheduler)
        session.handle_click(E2)
        assert not session.handle_click(parse_square("d2"))
        assert session.state.selected is None
        assert session.board == Board.initial()


class TestCheckNotice:
    # Re1+ blocked by Qe4+, which in turn checks the white king on h1.
    PLACEMENT = "4k3/8/8/5q2/8/8/8/R6K"

    def _session(self, scheduler: ManualScheduler) -> GameSession:
        session = _make_session(scheduler, Move(Square(3, 5), Square(4, 4)))
        session.reset(board_from_placement(self.PLACEMENT))
        return session

    def test_check_on_computer_is_announced(self, scheduler: ManualScheduler) -> None:
        session = self._session(scheduler)
        checks: list[Color] = []
        session.events.on_check.append(checks.append)
        assert _play(session, "a1", "e1")
        assert checks == [Color.BLACK]
        assert session.check_notice == Color.BLACK
        assert session.state.is_check

    def test_latest_notice_wins(self, scheduler: ManualScheduler) -> None:
        session = self._session(scheduler)
        checks: list[Color] = []
        dismissed: list[bool] = []
        session.events.on_check.append(checks.append)
        session.events.on_check_dismissed.append(lambda: dismissed.append(True))

        _play(session, "a1", "e1")
        scheduler.advance(500)  # computer blocks with check
        assert checks == [Color.BLACK, Color.WHITE]
        assert session.check_notice == Color.WHITE
        assert session.current_status().kind == StatusKind.AWAITING_HUMAN_IN_CHECK

        scheduler.advance(1999)  # first notice's deadline has passed
        assert session.check_notice == Color.WHITE
        assert dismissed == []

        scheduler.advance(1)
        assert session.check_notice is None
        assert dismissed == [True]

    def test_human_must_answer_check(self, scheduler: ManualScheduler) -> None:
        session = self._session(scheduler)
        _play(session, "a1", "e1")
        scheduler.advance(500)
        king_moves = session.select_square(parse_square("h1"))
        assert parse_square("g2") not in king_moves
        assert parse_square("e4") in session.select_square(parse_square("e1"))

    def test_reset_cancels_notice(self, scheduler: ManualScheduler) -> None:
        session = self._session(scheduler)
        dismissed: list[bool] = []
        session.events.on_check_dismissed.append(lambda: dismissed.append(True))
        _play(session, "a1", "e1")
        session.reset()
        assert session.check_notice is None
        assert dismissed == [True]
        assert scheduler.pending == 0


class TestGameOver:
    def test_human_checkmates_computer(self, scheduler: ManualScheduler) -> None:
        session = _make_session(scheduler)
        session.reset(board_from_placement("k7/pp6/8/8/8/8/8/4R2K"))
        results: list[tuple[GameResult, GameEndReason]] = []
        session.events.on_game_over.append(lambda r, why: results.append((r, why)))

        assert _play(session, "e1", "e8")
        assert results == [(GameResult.WHITE_WINS, GameEndReason.CHECKMATE)]
        assert session.current_status() == GameStatus(
            StatusKind.GAME_OVER, GameResult.WHITE_WINS, GameEndReason.CHECKMATE
        )
        assert not session.state.is_computer_thinking
        assert scheduler.pending == 0

    def test_computer_checkmates_human(self, scheduler: ManualScheduler) -> None:
        session = _make_session(
            scheduler,
            Move(parse_square("e7"), parse_square("e5")),
            Move(parse_square("d8"), parse_square("h4")),
        )
        assert _play(session, "f2", "f3")
        scheduler.advance(500)
        assert _play(session, "g2", "g4")
        scheduler.advance(500)

        status = session.current_status()
        assert status.is_game_over
        assert status.result == GameResult.BLACK_WINS
        assert status.reason == GameEndReason.CHECKMATE
        assert session.state.is_check

    def test_human_stalemates_computer(self, scheduler: ManualScheduler) -> None:
        session = _make_session(scheduler)
        session.reset(board_from_placement("7k/8/5K2/6Q1/8/8/8/8"))
        assert _play(session, "g5", "g6")
        status = session.current_status()
        assert status.result == GameResult.DRAW
        assert status.reason == GameEndReason.STALEMATE

    def test_computer_stalemates_human(self, scheduler: ManualScheduler) -> None:
        session = _make_session(scheduler, Move(Square(4, 6), Square(5, 6)))
        session.reset(board_from_placement("8/8/8/8/6q1/5k2/8/7K"), Color.BLACK)
        assert session.current_status().kind == StatusKind.COMPUTER_THINKING

        scheduler.advance(500)
        status = session.current_status()
        assert status.result == GameResult.DRAW
        assert status.reason == GameEndReason.STALEMATE
        assert not session.state.is_check

    def test_no_input_after_game_over(self, scheduler: ManualScheduler) -> None:
        session = _make_session(scheduler)
        session.reset(board_from_placement("k7/pp6/8/8/8/8/8/4R2K"))
        _play(session, "e1", "e8")
        assert session.select_square(parse_square("h1")) == []
        assert not session.handle_click(parse_square("h1"))


class TestReset:
    def test_reset_restores_start(self, scheduler: ManualScheduler) -> None:
        session = _make_session(scheduler)
        _play(session, "e2", "e4")
        scheduler.advance(500)
        _play(session, "d2", "d4")
        session.reset()
        assert session.board == Board.initial()
        assert session.state.current_player == Color.WHITE
        assert session.current_status() == GameStatus(StatusKind.AWAITING_HUMAN)

    def test_reset_cancels_pending_computer_move(
        self, scheduler: ManualScheduler
    ) -> None:
        session = _make_session(scheduler)
        _play(session, "e2", "e4")
        session.reset()
        scheduler.advance(1000)
        assert session.board == Board.initial()
        assert session.current_status().kind == StatusKind.AWAITING_HUMAN

    def test_reset_after_game_over(self, scheduler: ManualScheduler) -> None:
        session = _make_session(scheduler)
        session.reset(board_from_placement("k7/pp6/8/8/8/8/8/4R2K"))
        _play(session, "e1", "e8")
        session.reset()
        assert not session.state.is_game_over
        assert session.state.result == GameResult.IN_PROGRESS
        assert session.select_square(E2) != []
