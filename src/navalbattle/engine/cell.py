"""Cell state and its one-way attack transition."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .geometry import Direction, Position
from .ship import Ship


class CellType(Enum):
    WATER = "water"
    SHIP = "ship"
    ATTACKED_WATER = "attacked_water"
    ATTACKED_SHIP = "attacked_ship"


_ATTACKED = {
    CellType.WATER: CellType.ATTACKED_WATER,
    CellType.SHIP: CellType.ATTACKED_SHIP,
}


def attacked_version(cell_type: CellType) -> CellType:
    """Return the type a cell takes once attacked; attacked types are fixed points."""
    return _ATTACKED.get(cell_type, cell_type)


def is_attackable(cell_type: CellType) -> bool:
    return attacked_version(cell_type) is not cell_type


@dataclass(frozen=True)
class ShipBody:
    """Which ship covers a cell, and where that ship's run starts and heads."""

    ship: Ship
    origin: Position
    direction: Direction

    def run(self) -> list[Position]:
        return [self.origin.offset(self.direction, step) for step in range(self.ship.size)]


@dataclass
class Cell:
    type: CellType = CellType.WATER
    ship_body: ShipBody | None = None

    def place_ship(self, ship: Ship, origin: Position, direction: Direction) -> None:
        self.ship_body = ShipBody(ship, origin, direction)
        self.type = CellType.SHIP
