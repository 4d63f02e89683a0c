"""Fleet selection, size equalisation and random ship placement."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

from navalbattle.telemetry import get_tracer

from .errors import FleetSetupError
from .geometry import Direction, Position
from .grid import Grid
from .random_source import RandomSource, pick, random_index
from .settings import PARITY_PLACEMENT_DIRECTIONS
from .ship import Ship, ShipCatalogue, total_size

if TYPE_CHECKING:
    from .game import Game

logger = logging.getLogger(__name__)
tracer = get_tracer("navalbattle.engine.setup")


class GameSetup:
    """Draws both fleets and places them on their grids.

    The bot fleet is drawn first and fixes the target total size. The player
    fleet is drawn with the same ship count and then nudged, one slot at a
    time, until its total size matches.
    """

    def __init__(
        self,
        rng: RandomSource,
        catalogue: ShipCatalogue | None = None,
        placement_directions: Sequence[Direction] = PARITY_PLACEMENT_DIRECTIONS,
        max_equalize_rounds: int = 10_000,
        max_placement_attempts: int = 10_000,
    ) -> None:
        self._rng = rng
        self.catalogue = catalogue or ShipCatalogue(rng)
        self.placement_directions = tuple(placement_directions)
        self.max_equalize_rounds = max_equalize_rounds
        self.max_placement_attempts = max_placement_attempts

    def setup_game(self, game: Game) -> None:
        with tracer.start_as_current_span("setup.setup_game") as span:
            game.bot_ships = self.select_random_ships(game.ships_amount)
            game.player_ships = self.select_random_ships(game.ships_amount)
            game.target_total_ship_size = total_size(game.bot_ships)
            self.equalize_total_size(game.player_ships, game.target_total_ship_size)
            for ship in game.bot_ships:
                self.place_randomly(game.bot_grid, ship)
            for ship in game.player_ships:
                self.place_randomly(game.player_grid, ship)
            span.set_attribute("ships_amount", game.ships_amount)
            span.set_attribute("target_total_ship_size", game.target_total_ship_size)
            logger.info(
                "fleets_ready",
                extra={
                    "ships_amount": game.ships_amount,
                    "target_total_ship_size": game.target_total_ship_size,
                },
            )

    def select_random_ships(self, amount: int) -> list[Ship]:
        return self.catalogue.random_ships(amount)

    def equalize_total_size(self, ships: list[Ship], target: int) -> int:
        """Swap ships in place until ``sum(sizes) == target``; return rounds used.

        Each round draws a candidate and a random slot and keeps the candidate
        only if it moves the size difference strictly closer to zero.
        """
        difference = target - total_size(ships)
        rounds = 0
        while difference != 0:
            if rounds >= self.max_equalize_rounds:
                raise FleetSetupError(
                    f"Fleet sizes still differ by {difference} after {rounds} rounds."
                )
            rounds += 1
            candidate = self.catalogue.random_ship()
            slot = random_index(self._rng, ships)
            change = candidate.size - ships[slot].size
            if abs(difference - change) < abs(difference):
                ships[slot] = candidate
                difference -= change
        logger.debug("fleet_equalized", extra={"rounds": rounds, "target": target})
        return rounds

    def random_placement(self, grid: Grid, size: int) -> tuple[Position, Direction]:
        """Sample positions until one admits an allowed direction, then pick one."""
        for _ in range(self.max_placement_attempts):
            position = grid.random_position(self._rng)
            directions = [
                direction
                for direction in grid.valid_directions(position, size)
                if direction in self.placement_directions
            ]
            if directions:
                return position, pick(self._rng, directions)
        raise FleetSetupError(
            f"No room for a ship of size {size} on the {grid.owner} grid "
            f"after {self.max_placement_attempts} attempts."
        )

    def place_randomly(self, grid: Grid, ship: Ship) -> None:
        position, direction = self.random_placement(grid, ship.size)
        grid.place_ship(ship, position, direction)
