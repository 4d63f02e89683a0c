"""Grid geometry primitives."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Direction(Enum):
    """Directions a ship run or a bot probe can follow."""

    RIGHT = (1, 0)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    UP = (0, -1)

    @property
    def delta(self) -> tuple[int, int]:
        return self.value

    def inverse(self) -> Direction:
        """Return the opposite direction."""
        dx, dy = self.value
        return Direction((-dx, -dy))


@dataclass(frozen=True)
class Position:
    """Immutable grid coordinate; ``x`` is the column and ``y`` the row."""

    x: int
    y: int

    def offset(self, direction: Direction, amount: int = 1) -> Position:
        """Return the position ``amount`` steps away along ``direction``."""
        dx, dy = direction.delta
        return Position(self.x + dx * amount, self.y + dy * amount)


@dataclass(frozen=True)
class Dimension:
    width: int
    height: int
