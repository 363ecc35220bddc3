"""Abstract interfaces and status models for the game layer.

The session depends on these ABCs, not on a concrete timer backend, so the
same game logic runs under a Qt event loop or a virtual test clock.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum, auto

from chesslite.core.enums import GameResult

# ── Status model ─────────────────────────────────────────────────────────────


class StatusKind(IntEnum):
    """What the presentation layer should tell the user."""

    AWAITING_HUMAN = auto()
    AWAITING_HUMAN_IN_CHECK = auto()
    COMPUTER_THINKING = auto()
    GAME_OVER = auto()


class GameEndReason(IntEnum):
    CHECKMATE = auto()
    STALEMATE = auto()


@dataclass(frozen=True, slots=True)
class GameStatus:
    """Snapshot returned by ``GameSession.current_status``."""

    kind: StatusKind
    result: GameResult = GameResult.IN_PROGRESS
    reason: GameEndReason | None = None

    @property
    def is_game_over(self) -> bool:
        return self.kind == StatusKind.GAME_OVER


# ── Scheduling ───────────────────────────────────────────────────────────────


class ITimerHandle(ABC):
    """A pending one-shot callback."""

    @abstractmethod
    def cancel(self) -> None:
        """Prevent the callback from running (no-op if already fired)."""

    @property
    @abstractmethod
    def is_active(self) -> bool:
        """Whether the callback is still waiting to run."""


class IScheduler(ABC):
    """Runs callbacks after a delay on the thread that owns the game."""

    @abstractmethod
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ITimerHandle:
        """Schedule *callback* to run once after *delay_ms* milliseconds."""
