"""Tests for fleet selection, equalisation and random placement."""

import random

import pytest

from navalbattle.engine.cell import CellType
from navalbattle.engine.errors import FleetSetupError
from navalbattle.engine.game import Game
from navalbattle.engine.geometry import Direction, Position
from navalbattle.engine.grid import NEIGHBOUR_OFFSETS, Grid
from navalbattle.engine.setup import GameSetup
from navalbattle.engine.ship import DEFAULT_CATALOGUE, Ship, ShipCatalogue, total_size


def _ship_cells(grid: Grid) -> list[Position]:
    return [
        Position(x, y)
        for y, row in enumerate(grid.cells)
        for x, cell in enumerate(row)
        if cell.type is CellType.SHIP
    ]


@pytest.mark.parametrize("seed", [0, 1, 2, 3, 4, 5])
def test_setup_game_equalizes_and_places_both_fleets(seed: int) -> None:
    game = Game.create()
    GameSetup(random.Random(seed)).setup_game(game)

    assert len(game.bot_ships) == 6
    assert len(game.player_ships) == 6
    assert game.target_total_ship_size == total_size(game.bot_ships)
    assert total_size(game.player_ships) == total_size(game.bot_ships)
    assert len(_ship_cells(game.bot_grid)) == game.target_total_ship_size
    assert len(_ship_cells(game.player_grid)) == game.target_total_ship_size


def test_default_placement_only_heads_right_or_down() -> None:
    game = Game.create()
    GameSetup(random.Random(11)).setup_game(game)
    for grid in (game.bot_grid, game.player_grid):
        for pos in _ship_cells(grid):
            body = grid.cell(pos).ship_body
            assert body is not None
            assert body.direction in (Direction.RIGHT, Direction.DOWN)


def test_placed_fleets_keep_one_cell_buffer() -> None:
    game = Game.create()
    GameSetup(random.Random(21), placement_directions=tuple(Direction)).setup_game(game)
    grid = game.player_grid
    for pos in _ship_cells(grid):
        body = grid.cell(pos).ship_body
        for dx, dy in NEIGHBOUR_OFFSETS:
            neighbour = Position(pos.x + dx, pos.y + dy)
            if grid.has_cell(neighbour) and grid.is_type(neighbour, CellType.SHIP):
                assert grid.cell(neighbour).ship_body == body


def test_equalize_reaches_exact_target() -> None:
    rng = random.Random(5)
    setup = GameSetup(rng)
    destroyer = DEFAULT_CATALOGUE[-1]
    ships = [destroyer, destroyer, destroyer]
    rounds = setup.equalize_total_size(ships, 13)
    assert total_size(ships) == 13
    assert len(ships) == 3
    assert rounds >= 1


def test_equalize_is_noop_when_already_equal() -> None:
    setup = GameSetup(random.Random(0))
    ships = [DEFAULT_CATALOGUE[0], DEFAULT_CATALOGUE[1]]
    assert setup.equalize_total_size(ships, 9) == 0
    assert ships == [DEFAULT_CATALOGUE[0], DEFAULT_CATALOGUE[1]]


def test_equalize_gives_up_after_round_cap() -> None:
    rng = random.Random(0)
    only_destroyers = ShipCatalogue(rng, ships=[Ship("Destroyer", 2)])
    setup = GameSetup(rng, catalogue=only_destroyers, max_equalize_rounds=50)
    with pytest.raises(FleetSetupError):
        setup.equalize_total_size([Ship("Destroyer", 2), Ship("Destroyer", 2)], 5)


def test_random_placement_gives_up_when_ship_cannot_fit() -> None:
    setup = GameSetup(random.Random(0), max_placement_attempts=20)
    with pytest.raises(FleetSetupError):
        setup.random_placement(Grid(2, 2), 3)


def test_random_placement_returns_allowed_direction() -> None:
    setup = GameSetup(random.Random(8), placement_directions=(Direction.UP,))
    grid = Grid()
    pos, direction = setup.random_placement(grid, 4)
    assert direction is Direction.UP
    assert Direction.UP in grid.valid_directions(pos, 4)
