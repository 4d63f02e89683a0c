"""One side's board: cell storage, ship placement and placement validation."""

from __future__ import annotations

import logging

from navalbattle.telemetry import get_meter, get_tracer

from .cell import Cell, CellType
from .geometry import Dimension, Direction, Position
from .random_source import RandomSource
from .ship import Ship

logger = logging.getLogger(__name__)
tracer = get_tracer("navalbattle.engine.grid")
meter = get_meter("navalbattle.engine.grid")

PLACEMENT_COUNTER = meter.create_counter(
    "navalbattle_engine_ship_placements",
    unit="1",
    description="Ships written onto a grid",
)

NEIGHBOUR_OFFSETS = tuple((dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1))


class Grid:
    """A width x height matrix of cells, indexed as ``cells[y][x]``."""

    def __init__(self, width: int = 10, height: int = 10, owner: str = "unknown") -> None:
        self.owner = owner
        self._cells: list[list[Cell]] = [[Cell() for _ in range(width)] for _ in range(height)]

    @property
    def dimension(self) -> Dimension:
        return Dimension(len(self._cells[0]), len(self._cells))

    @property
    def cells(self) -> list[list[Cell]]:
        return self._cells

    def has_cell(self, pos: Position) -> bool:
        """Check whether a position lies inside the grid boundaries."""
        return 0 <= pos.y < len(self._cells) and 0 <= pos.x < len(self._cells[0])

    def cell(self, pos: Position) -> Cell:
        # Negative indices would silently wrap around.
        if pos.x < 0 or pos.y < 0:
            raise IndexError(f"Position {pos} is outside the grid.")
        return self._cells[pos.y][pos.x]

    def is_type(self, pos: Position, cell_type: CellType) -> bool:
        return self.cell(pos).type is cell_type

    def place_ship(self, ship: Ship, origin: Position, direction: Direction) -> None:
        """Write ``ship`` onto the grid. Callers validate the placement first."""
        with tracer.start_as_current_span("grid.place_ship") as span:
            span.set_attribute("ship.name", ship.name)
            span.set_attribute("ship.size", ship.size)
            span.set_attribute("grid.owner", self.owner)
            for step in range(ship.size):
                self.cell(origin.offset(direction, step)).place_ship(ship, origin, direction)
            PLACEMENT_COUNTER.add(1, attributes={"owner": self.owner})
            logger.debug(
                "ship_placed",
                extra={
                    "owner": self.owner,
                    "ship": ship.name,
                    "x": origin.x,
                    "y": origin.y,
                    "direction": direction.name,
                },
            )

    def random_position(self, rng: RandomSource) -> Position:
        width, height = self.dimension.width, self.dimension.height
        return Position(rng.randrange(width), rng.randrange(height))

    def random_cell(self, rng: RandomSource) -> Cell:
        return self.cell(self.random_position(rng))

    def valid_directions(self, pos: Position, ship_size: int) -> list[Direction]:
        """Directions in which a ship of ``ship_size`` could start at ``pos``."""
        return [
            direction
            for direction in Direction
            if self._is_valid_placement(pos, direction, ship_size)
        ]

    def ship_run(self, pos: Position) -> list[Position]:
        """Positions covered by the ship occupying ``pos`` (empty for water)."""
        body = self.cell(pos).ship_body
        return body.run() if body is not None else []

    def is_ship_sunk(self, pos: Position) -> bool:
        """True when ``pos`` is an attacked ship cell and its whole run is attacked."""
        if not self.has_cell(pos) or not self.is_type(pos, CellType.ATTACKED_SHIP):
            return False
        return not any(self.is_type(part, CellType.SHIP) for part in self.ship_run(pos))

    def _is_valid_placement(self, origin: Position, direction: Direction, size: int) -> bool:
        end = origin.offset(direction, size - 1)
        if not (self.has_cell(origin) and self.has_cell(end)):
            return False
        return all(
            self._is_cell_and_neighbours_free(origin.offset(direction, step))
            for step in range(size)
        )

    def _is_cell_and_neighbours_free(self, pos: Position) -> bool:
        for dx, dy in NEIGHBOUR_OFFSETS:
            neighbour = Position(pos.x + dx, pos.y + dy)
            if self.has_cell(neighbour) and self.is_type(neighbour, CellType.SHIP):
                return False
        return True


class GridView:
    """Read-only window onto a grid for renderers."""

    def __init__(self, grid: Grid) -> None:
        self._grid = grid

    @property
    def dimension(self) -> Dimension:
        return self._grid.dimension

    def get(self, x: int, y: int) -> CellType:
        return self._grid.cell(Position(x, y)).type
