"""One-ply greedy move selector: check > capture > anything."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from chesslite.core.move_generator import MoveGenerator
from chesslite.engine.search import Selection, SelectionTier

if TYPE_CHECKING:
    from chesslite.core.board import Board
    from chesslite.core.enums import Color
    from chesslite.core.move import Move

_LOGGER = logging.getLogger(__name__)


class GreedySelector:
    """Picks a legal move by fixed priority, random within a tier.

    1. Moves that put the opposing king in check.
    2. Captures (destination occupied).
    3. Any legal move.

    Returns ``None`` when *color* has no legal move; the caller decides
    between checkmate and stalemate.
    """

    __slots__ = ("_rng",)

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def select(self, board: Board, color: Color) -> Selection | None:
        gen = MoveGenerator(board)
        legal = gen.legal_moves(color)
        if not legal:
            _LOGGER.debug("No legal moves for %s", color)
            return None

        checking = [m for m in legal if self._gives_check(gen, m, color)]
        if checking:
            return self._pick(checking, SelectionTier.CHECK)

        captures = [m for m in legal if board[m.to_sq] is not None]
        if captures:
            return self._pick(captures, SelectionTier.CAPTURE)

        return self._pick(legal, SelectionTier.QUIET)

    @staticmethod
    def _gives_check(gen: MoveGenerator, move: Move, color: Color) -> bool:
        with gen.simulate(move):
            return gen.is_in_check(color.opposite)

    def _pick(self, moves: list[Move], tier: SelectionTier) -> Selection:
        move = self._rng.choice(moves)
        _LOGGER.debug("Selected %s from %d %s candidate(s)", move, len(moves), tier.name)
        return Selection(move=move, tier=tier, candidates=len(moves))
