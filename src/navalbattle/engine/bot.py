"""Hunt/target/destroy move selection for the computer side."""

from __future__ import annotations

import logging
from enum import Enum

from navalbattle.telemetry import get_tracer

from .cell import CellType, is_attackable
from .errors import EmptyCollectionError, GameStateError
from .geometry import Direction, Position
from .grid import Grid
from .random_source import RandomSource

logger = logging.getLogger(__name__)
tracer = get_tracer("navalbattle.engine.bot")


class BotState(Enum):
    SEARCHING = "searching"
    TARGETING = "targeting"
    FINISHING = "finishing"


class BotAI:
    """Stateful bot that hunts at random, probes around a hit, then follows the line.

    The state survives between moves for the whole game. Only the game logic
    returns it to searching, via :meth:`on_last_hit_sunk_ship`, once the ship
    being hunted goes down.
    """

    def __init__(self, rng: RandomSource) -> None:
        self._rng = rng
        self.state = BotState.SEARCHING
        self.initial_hit_pos: Position | None = None
        self.last_pos: Position | None = None
        self.ship_direction: Direction | None = None
        self.remaining_directions: list[Direction] = []

    def compute_move(self, grid: Grid) -> Position:
        with tracer.start_as_current_span("bot.compute_move") as span:
            span.set_attribute("bot.state", self.state.value)
            if self.state is BotState.SEARCHING:
                move = self._searching_move(grid)
            elif self.state is BotState.TARGETING:
                move = self._targeting_move(grid)
            else:
                move = self._finishing_move(grid)
            span.set_attribute("move.x", move.x)
            span.set_attribute("move.y", move.y)
            return move

    def on_last_hit_sunk_ship(self) -> None:
        self._set_state(BotState.SEARCHING)

    def _set_state(self, state: BotState) -> None:
        if state is not self.state:
            logger.debug(
                "bot_state_changed", extra={"from": self.state.value, "to": state.value}
            )
        self.state = state

    def _searching_move(self, grid: Grid) -> Position:
        pos = self._pick_random_attackable(grid)
        if grid.is_type(pos, CellType.SHIP):
            self._set_state(BotState.TARGETING)
            self.initial_hit_pos = pos
            self.remaining_directions = [
                Direction.UP,
                Direction.DOWN,
                Direction.LEFT,
                Direction.RIGHT,
            ]
        return pos

    def _pick_random_attackable(self, grid: Grid) -> Position:
        if not any(is_attackable(cell.type) for row in grid.cells for cell in row):
            raise EmptyCollectionError("No attackable cell left on the grid.")
        while True:
            pos = grid.random_position(self._rng)
            if self._is_attackable(grid, pos):
                return pos

    def _targeting_move(self, grid: Grid) -> Position:
        origin = self.initial_hit_pos
        if origin is None:
            raise GameStateError("Bot is targeting without an initial hit.")
        self.remaining_directions = [
            direction
            for direction in self.remaining_directions
            if self._is_attackable(grid, origin.offset(direction))
        ]
        if not self.remaining_directions:
            self._set_state(BotState.SEARCHING)
            return self._searching_move(grid)

        self._rng.shuffle(self.remaining_directions)
        self.ship_direction = self.remaining_directions.pop()
        self.last_pos = origin.offset(self.ship_direction)
        if grid.is_type(self.last_pos, CellType.SHIP):
            self._set_state(BotState.FINISHING)
        return self.last_pos

    def _finishing_move(self, grid: Grid) -> Position:
        origin, last_pos, direction = self.initial_hit_pos, self.last_pos, self.ship_direction
        if origin is None or last_pos is None or direction is None:
            raise GameStateError("Bot is finishing a ship without a known line.")
        next_pos = last_pos.offset(direction)
        if self._is_after_edge(grid, next_pos):
            # Past the end of the ship: resume on the other side of the first hit.
            direction = direction.inverse()
            next_pos = origin.offset(direction)
        self.ship_direction = direction
        self.last_pos = next_pos
        return next_pos

    @staticmethod
    def _is_after_edge(grid: Grid, pos: Position) -> bool:
        return not grid.has_cell(pos) or not grid.is_type(pos, CellType.SHIP)

    @staticmethod
    def _is_attackable(grid: Grid, pos: Position) -> bool:
        return grid.has_cell(pos) and is_attackable(grid.cell(pos).type)
