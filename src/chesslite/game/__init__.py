"""Game management layer — session, state, timers, configuration.

Quick start::

    from chesslite.core import parse_square
    from chesslite.game import GameSession, ManualScheduler

    scheduler = ManualScheduler()
    session = GameSession(scheduler=scheduler)
    session.select_square(parse_square("e2"))
    session.attempt_move(parse_square("e2"), parse_square("e4"))
    scheduler.advance(session.config.thinking_delay_ms)  # computer replies
"""

from chesslite.game.config import GameConfig
from chesslite.game.interfaces import (
    GameEndReason,
    GameStatus,
    IScheduler,
    ITimerHandle,
    StatusKind,
)
from chesslite.game.scheduler import ManualScheduler, OneShotTimer
from chesslite.game.session import GameSession, SessionEvents
from chesslite.game.state import GameState

__all__ = [
    # Interfaces
    "GameEndReason",
    "GameStatus",
    "IScheduler",
    "ITimerHandle",
    "StatusKind",
    # Concrete
    "GameConfig",
    "GameSession",
    "GameState",
    "ManualScheduler",
    "OneShotTimer",
    "SessionEvents",
]
