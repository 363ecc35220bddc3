"""Game configuration."""

from __future__ import annotations

from dataclasses import dataclass

from chesslite.core.enums import Color


@dataclass(frozen=True)
class GameConfig:
    """All user-configurable settings of a session."""

    # Sides
    human_color: Color = Color.WHITE

    # Timing
    thinking_delay_ms: int = 500
    check_notice_ms: int = 2000

    # Computer opponent; ``None`` seeds from system entropy.
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.thinking_delay_ms < 0:
            raise ValueError(f"thinking_delay_ms must be >= 0, got {self.thinking_delay_ms}")
        if self.check_notice_ms < 0:
            raise ValueError(f"check_notice_ms must be >= 0, got {self.check_notice_ms}")

    @property
    def computer_color(self) -> Color:
        return self.human_color.opposite
