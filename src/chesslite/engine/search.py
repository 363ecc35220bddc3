"""Shared move-selection models and protocol."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from chesslite.core.board import Board
    from chesslite.core.enums import Color
    from chesslite.core.move import Move


class SelectionTier(IntEnum):
    """Priority tiers of the greedy selector, highest first."""

    CHECK = 1
    CAPTURE = 2
    QUIET = 3


@dataclass(slots=True, frozen=True)
class Selection:
    """Move chosen by a selector."""

    move: Move
    tier: SelectionTier
    candidates: int  # size of the tier the move was drawn from


class IMoveSelector(Protocol):
    """Protocol for computer opponents used by the game layer."""

    def select(self, board: Board, color: Color) -> Selection | None: ...
