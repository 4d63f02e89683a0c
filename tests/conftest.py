"""Shared fixtures for engine tests."""

from __future__ import annotations

from collections.abc import MutableSequence
from typing import Callable

import pytest

from navalbattle.engine.cell import attacked_version
from navalbattle.engine.geometry import Position
from navalbattle.engine.grid import Grid


class ScriptedRandom:
    """Random source that replays fixed ``randrange`` results and never shuffles."""

    def __init__(self, values: list[int]) -> None:
        self.values = list(values)

    def randrange(self, stop: int) -> int:
        value = self.values.pop(0)
        assert 0 <= value < stop
        return value

    def shuffle(self, x: MutableSequence) -> None:
        pass


@pytest.fixture
def scripted() -> Callable[[list[int]], ScriptedRandom]:
    return ScriptedRandom


@pytest.fixture
def fire() -> Callable[[Grid, Position], None]:
    """Mark a cell as attacked without going through the game logic."""

    def _fire(grid: Grid, pos: Position) -> None:
        cell = grid.cell(pos)
        cell.type = attacked_version(cell.type)

    return _fire

