"""Tests for the search/target/finish bot."""

import random

import pytest

from navalbattle.engine.bot import BotAI, BotState
from navalbattle.engine.cell import CellType
from navalbattle.engine.errors import EmptyCollectionError, GameStateError
from navalbattle.engine.geometry import Direction, Position
from navalbattle.engine.grid import Grid
from navalbattle.engine.setup import GameSetup
from navalbattle.engine.ship import DEFAULT_CATALOGUE, Ship


def _adjacent(a: Position, b: Position) -> bool:
    return abs(a.x - b.x) + abs(a.y - b.y) == 1


def test_searching_miss_stays_searching(scripted) -> None:
    grid = Grid()
    bot = BotAI(scripted([4, 4]))
    assert bot.compute_move(grid) == Position(4, 4)
    assert bot.state is BotState.SEARCHING


def test_searching_skips_attacked_cells(scripted, fire) -> None:
    grid = Grid()
    fire(grid, Position(1, 1))
    bot = BotAI(scripted([1, 1, 2, 2]))
    assert bot.compute_move(grid) == Position(2, 2)


def test_hit_then_line_then_invert_sinks_ship(scripted, fire) -> None:
    grid = Grid()
    grid.place_ship(Ship("Cruiser", 3), Position(2, 2), Direction.RIGHT)
    bot = BotAI(scripted([3, 2]))

    first = bot.compute_move(grid)
    assert first == Position(3, 2)
    assert bot.state is BotState.TARGETING
    assert bot.initial_hit_pos == first
    fire(grid, first)

    # Without shuffling the last remaining direction (RIGHT) is tried first.
    second = bot.compute_move(grid)
    assert second == Position(4, 2)
    assert bot.state is BotState.FINISHING
    assert bot.ship_direction is Direction.RIGHT
    fire(grid, second)

    # (5, 2) is water, so the bot jumps to the other side of the first hit.
    third = bot.compute_move(grid)
    assert third == Position(2, 2)
    assert bot.ship_direction is Direction.LEFT
    assert bot.state is BotState.FINISHING
    fire(grid, third)
    assert grid.is_ship_sunk(third)

    bot.on_last_hit_sunk_ship()
    assert bot.state is BotState.SEARCHING


def test_targeting_probes_neighbours_until_second_hit(scripted, fire) -> None:
    grid = Grid()
    grid.place_ship(Ship("Destroyer", 2), Position(5, 5), Direction.DOWN)
    bot = BotAI(scripted([5, 5]))

    initial = bot.compute_move(grid)
    fire(grid, initial)

    probes = []
    while bot.state is BotState.TARGETING:
        move = bot.compute_move(grid)
        assert _adjacent(move, initial)
        assert move not in probes
        probes.append(move)
        fire(grid, move)

    assert bot.state is BotState.FINISHING
    assert probes == [Position(6, 5), Position(4, 5), Position(5, 6)]
    assert grid.cell(Position(5, 6)).type is CellType.ATTACKED_SHIP


def test_finishing_inverts_at_grid_edge(scripted, fire) -> None:
    grid = Grid()
    grid.place_ship(Ship("Cruiser", 3), Position(7, 0), Direction.RIGHT)
    bot = BotAI(scripted([8, 0]))

    fire(grid, bot.compute_move(grid))
    # UP is off the grid and filtered out; RIGHT is popped first.
    assert bot.compute_move(grid) == Position(9, 0)
    fire(grid, Position(9, 0))
    assert bot.state is BotState.FINISHING
    assert bot.compute_move(grid) == Position(7, 0)
    assert bot.ship_direction is Direction.LEFT


def test_exhausted_neighbours_revert_to_searching(scripted, fire) -> None:
    grid = Grid()
    grid.place_ship(Ship("Destroyer", 2), Position(0, 0), Direction.RIGHT)
    fire(grid, Position(1, 0))
    fire(grid, Position(0, 1))
    bot = BotAI(scripted([0, 0, 7, 7]))

    fire(grid, bot.compute_move(grid))
    assert bot.state is BotState.TARGETING

    assert bot.compute_move(grid) == Position(7, 7)
    assert bot.state is BotState.SEARCHING


def test_searching_a_fully_attacked_grid_fails_loudly(fire) -> None:
    grid = Grid(2, 2)
    for y in range(2):
        for x in range(2):
            fire(grid, Position(x, y))
    with pytest.raises(EmptyCollectionError):
        BotAI(random.Random(0)).compute_move(grid)


def test_targeting_without_a_hit_is_a_state_error() -> None:
    bot = BotAI(random.Random(0))
    bot.state = BotState.TARGETING
    with pytest.raises(GameStateError):
        bot.compute_move(Grid())


def test_finishing_without_a_direction_is_a_state_error() -> None:
    bot = BotAI(random.Random(0))
    bot.state = BotState.FINISHING
    bot.initial_hit_pos = bot.last_pos = Position(3, 3)
    with pytest.raises(GameStateError):
        bot.compute_move(Grid())


@pytest.mark.parametrize("seed", [1, 7, 23, 99])
def test_seeded_hunt_stays_adjacent_then_collinear(seed: int, fire) -> None:
    rng = random.Random(seed)
    grid = Grid()
    setup = GameSetup(rng, placement_directions=tuple(Direction))
    for ship in DEFAULT_CATALOGUE:
        setup.place_randomly(grid, ship)
    bot = BotAI(rng)
    seen_states = set()

    while any(cell.type is CellType.SHIP for row in grid.cells for cell in row):
        state = bot.state
        move = bot.compute_move(grid)
        seen_states.add(state)
        assert grid.cell(move).type in (CellType.WATER, CellType.SHIP)

        if state is BotState.TARGETING:
            assert _adjacent(move, bot.initial_hit_pos)
        elif state is BotState.FINISHING:
            dx, _ = bot.ship_direction.delta
            origin = bot.initial_hit_pos
            assert (move.x == origin.x) if dx == 0 else (move.y == origin.y)
            assert move != origin

        hit = grid.is_type(move, CellType.SHIP)
        fire(grid, move)
        if hit and grid.is_ship_sunk(move):
            bot.on_last_hit_sunk_ship()

    assert seen_states == set(BotState)
