"""Ship templates and the fixed fleet catalogue."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .random_source import RandomSource, pick


@dataclass(frozen=True)
class Ship:
    """A ship template: a display name and the number of cells it covers."""

    name: str
    size: int


DEFAULT_CATALOGUE: tuple[Ship, ...] = (
    Ship("Aircraft Carrier", 5),
    Ship("Battleship", 4),
    Ship("Cruiser", 3),
    Ship("Submarine", 3),
    Ship("Destroyer", 2),
)


def total_size(ships: Sequence[Ship]) -> int:
    """Sum of the cell counts of ``ships``."""
    return sum(ship.size for ship in ships)


class ShipCatalogue:
    """Draws ships uniformly, with replacement, from a fixed roster."""

    def __init__(self, rng: RandomSource, ships: Sequence[Ship] = DEFAULT_CATALOGUE) -> None:
        self._rng = rng
        self.ships = tuple(ships)

    def random_ship(self) -> Ship:
        return pick(self._rng, self.ships)

    def random_ships(self, amount: int) -> list[Ship]:
        return [self.random_ship() for _ in range(amount)]
