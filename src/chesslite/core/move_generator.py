"""Pseudo-legal and legal move generation + attack detection."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from chesslite.core.enums import Color, PieceType
from chesslite.core.move import Move
from chesslite.core.types import Square, is_in_bounds

if TYPE_CHECKING:
    from chesslite.core.board import Board
    from chesslite.core.piece import Piece


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

ROOK_DIRS: tuple[tuple[int, int], ...] = ((0, 1), (0, -1), (1, 0), (-1, 0))
BISHOP_DIRS: tuple[tuple[int, int], ...] = ((1, 1), (1, -1), (-1, 1), (-1, -1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = ROOK_DIRS + BISHOP_DIRS

# Row delta and starting row per color; white advances toward row 0.
_PAWN_DIRECTION: tuple[int, int] = (-1, 1)
_PAWN_START_ROW: tuple[int, int] = (6, 1)


class MoveGenerator:
    """Generates moves for the pieces on a :class:`Board`.

    Colors are always taken from the piece standing on the origin square,
    so the same generator serves the human, the computer and the check
    oracle regardless of whose turn it is.

    Legality checks mutate the board through :meth:`simulate` and always
    restore it before returning.  The board must not be read by anything
    else while a simulation is in progress; a port to a concurrent runtime
    needs to serialise board access around it.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    # -- Public API ---------------------------------------------------------

    def pseudo_legal_destinations(self, sq: Square) -> list[Square]:
        """Destinations for the piece on *sq*, ignoring own-king safety."""
        piece = self._board[sq]
        if piece is None:
            return []
        moves: list[Square] = []
        _DISPATCH[piece.piece_type](self, sq, piece, moves)
        return moves

    def legal_destinations(self, sq: Square) -> list[Square]:
        """Destinations for the piece on *sq* that keep its king safe."""
        piece = self._board[sq]
        if piece is None:
            return []
        legal: list[Square] = []
        for to_sq in self.pseudo_legal_destinations(sq):
            with self.simulate(Move(sq, to_sq)):
                if not self.is_in_check(piece.color):
                    legal.append(to_sq)
        return legal

    def legal_moves(self, color: Color) -> list[Move]:
        """All legal moves for *color*, origins in row-major order."""
        moves: list[Move] = []
        for from_sq in self._board.pieces(color):
            for to_sq in self.legal_destinations(from_sq):
                moves.append(Move(from_sq, to_sq))
        return moves

    def has_legal_move(self, color: Color) -> bool:
        """Whether *color* has at least one legal move (stops early)."""
        return any(self.legal_destinations(sq) for sq in self._board.pieces(color))

    @contextmanager
    def simulate(self, move: Move) -> Iterator[Piece | None]:
        """Temporarily play *move*; yields the piece it would capture.

        Both cells are restored on exit, whatever happens inside the block.
        """
        board = self._board
        moving = board[move.from_sq]
        captured = board[move.to_sq]
        board[move.to_sq] = moving
        board[move.from_sq] = None
        try:
            yield captured
        finally:
            board[move.from_sq] = moving
            board[move.to_sq] = captured

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?

        A missing king is reported as not in check.
        """
        king_sq = self._board.find_king(color)
        if king_sq is None:
            return False
        return self.is_square_attacked(king_sq, color.opposite)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* a pseudo-legal destination of any piece of *by_color*?

        Uses unfiltered moves: filtering depends on check detection itself.
        """
        for from_sq in self._board.pieces(by_color):
            if sq in self.pseudo_legal_destinations(from_sq):
                return True
        return False

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, piece: Piece, moves: list[Square]) -> None:
        board = self._board
        direction = _PAWN_DIRECTION[int(piece.color)]
        row = sq.row + direction

        if is_in_bounds(row, sq.col) and board.is_empty(Square(row, sq.col)):
            moves.append(Square(row, sq.col))
            if sq.row == _PAWN_START_ROW[int(piece.color)]:
                two_step = Square(sq.row + 2 * direction, sq.col)
                if board.is_empty(two_step):
                    moves.append(two_step)

        for d_col in (-1, 1):
            col = sq.col + d_col
            if not is_in_bounds(row, col):
                continue
            target = board[Square(row, col)]
            if target is not None and target.color != piece.color:
                moves.append(Square(row, col))

    def _gen_steps(
        self,
        sq: Square,
        piece: Piece,
        offsets: tuple[tuple[int, int], ...],
        moves: list[Square],
    ) -> None:
        board = self._board
        for d_row, d_col in offsets:
            row, col = sq.row + d_row, sq.col + d_col
            if not is_in_bounds(row, col):
                continue
            target = board[Square(row, col)]
            if target is None or target.color != piece.color:
                moves.append(Square(row, col))

    def _gen_sliding(
        self,
        sq: Square,
        piece: Piece,
        directions: tuple[tuple[int, int], ...],
        moves: list[Square],
    ) -> None:
        board = self._board
        for d_row, d_col in directions:
            row, col = sq.row + d_row, sq.col + d_col
            while is_in_bounds(row, col):
                target = board[Square(row, col)]
                if target is None:
                    moves.append(Square(row, col))
                else:
                    if target.color != piece.color:
                        moves.append(Square(row, col))
                    break
                row += d_row
                col += d_col

    def _gen_knight(self, sq: Square, piece: Piece, moves: list[Square]) -> None:
        self._gen_steps(sq, piece, KNIGHT_OFFSETS, moves)

    def _gen_king(self, sq: Square, piece: Piece, moves: list[Square]) -> None:
        self._gen_steps(sq, piece, KING_OFFSETS, moves)

    def _gen_bishop(self, sq: Square, piece: Piece, moves: list[Square]) -> None:
        self._gen_sliding(sq, piece, BISHOP_DIRS, moves)

    def _gen_rook(self, sq: Square, piece: Piece, moves: list[Square]) -> None:
        self._gen_sliding(sq, piece, ROOK_DIRS, moves)

    def _gen_queen(self, sq: Square, piece: Piece, moves: list[Square]) -> None:
        self._gen_sliding(sq, piece, QUEEN_DIRS, moves)


_DISPATCH: dict[PieceType, Callable[..., None]] = {
    PieceType.PAWN: MoveGenerator._gen_pawn,
    PieceType.KNIGHT: MoveGenerator._gen_knight,
    PieceType.BISHOP: MoveGenerator._gen_bishop,
    PieceType.ROOK: MoveGenerator._gen_rook,
    PieceType.QUEEN: MoveGenerator._gen_queen,
    PieceType.KING: MoveGenerator._gen_king,
}
