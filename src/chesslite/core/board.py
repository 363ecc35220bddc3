"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from chesslite.core.enums import Color, PieceType
from chesslite.core.piece import Piece
from chesslite.core.types import BOARD_SIZE, Square, is_in_bounds

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 8x8 grid of optional pieces, indexed ``[row][col]``."""

    __slots__ = ("_grid",)

    def __init__(self) -> None:
        self._grid: list[list[Piece | None]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]

    # -- Element access -----------------------------------------------------

    @staticmethod
    def is_in_bounds(row: int, col: int) -> bool:
        return is_in_bounds(row, col)

    def get_piece(self, sq: Square) -> Piece | None:
        row, col = sq
        if not is_in_bounds(row, col):
            raise IndexError(f"Square out of bounds: {sq!r}")
        return self._grid[row][col]

    def set_piece(self, sq: Square, piece: Piece | None) -> None:
        row, col = sq
        if not is_in_bounds(row, col):
            raise IndexError(f"Square out of bounds: {sq!r}")
        self._grid[row][col] = piece

    def __getitem__(self, sq: Square) -> Piece | None:
        return self.get_piece(sq)

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        self.set_piece(sq, piece)

    def is_empty(self, sq: Square) -> bool:
        return self.get_piece(sq) is None

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color) -> list[Square]:
        """Squares occupied by *color*, in row-major order."""
        return [
            Square(r, c)
            for r, row in enumerate(self._grid)
            for c, piece in enumerate(row)
            if piece is not None and piece.color == color
        ]

    def find_king(self, color: Color) -> Square | None:
        """Square of *color*'s king, or ``None`` if it has been captured."""
        for r, row in enumerate(self._grid):
            for c, piece in enumerate(row):
                if (
                    piece is not None
                    and piece.color == color
                    and piece.piece_type == PieceType.KING
                ):
                    return Square(r, c)
        return None

    # -- Mutation / copying -------------------------------------------------

    def move_piece(self, from_sq: Square, to_sq: Square) -> Piece | None:
        """Play a real move and return the captured piece, if any.

        An empty origin is a no-op.
        """
        piece = self.get_piece(from_sq)
        if piece is None:
            return None
        captured = self.get_piece(to_sq)
        self.set_piece(to_sq, piece)
        self.set_piece(from_sq, None)
        if piece.piece_type == PieceType.PAWN:
            piece.has_moved = True
        return captured

    def copy(self) -> Board:
        """Independent board holding copies of every piece."""
        b = Board()
        b._grid = [
            [
                None
                if p is None
                else Piece(p.color, p.piece_type, p.has_moved)
                for p in row
            ]
            for row in self._grid
        ]
        return b

    def clear(self) -> None:
        self._grid = [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]

    def snapshot(self) -> tuple[tuple[int, ...], ...]:
        """Identity of every cell's occupant (``0`` for empty).

        Two snapshots compare equal only if every cell holds the very same
        piece object, which is stricter than :meth:`__eq__`.
        """
        return tuple(
            tuple(0 if p is None else id(p) for p in row) for row in self._grid
        )

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for col in range(BOARD_SIZE):
            b[Square(1, col)] = Piece(Color.BLACK, PieceType.PAWN)
            b[Square(6, col)] = Piece(Color.WHITE, PieceType.PAWN)

        for col, pt in enumerate(_BACK_RANK):
            b[Square(0, col)] = Piece(Color.BLACK, pt)
            b[Square(7, col)] = Piece(Color.WHITE, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __repr__(self) -> str:
        rows: list[str] = []
        for r, row in enumerate(self._grid):
            cells = [str(p) if p else "." for p in row]
            rows.append(f"{BOARD_SIZE - r} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
