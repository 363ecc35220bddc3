"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from chesslite.core.types import Square, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """A transient ``from → to`` pair; never kept in a history."""

    from_sq: Square
    to_sq: Square

    def __str__(self) -> str:
        return f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
