"""Game settings loaded from the environment."""

from __future__ import annotations

import os
from typing import Any, Dict

from pydantic import BaseModel, Field, field_validator

from navalbattle.telemetry.config import env_flag

from .geometry import Direction

GRID_WIDTH = 10
GRID_HEIGHT = 10
SHIPS_AMOUNT = 6

PARITY_PLACEMENT_DIRECTIONS = (Direction.RIGHT, Direction.DOWN)


class GameSettings(BaseModel):
    """Knobs for one game session. The grid size is fixed at 10x10."""

    ships_amount: int = Field(default=SHIPS_AMOUNT, ge=1)
    seed: int | None = None
    placement_directions: tuple[Direction, ...] = PARITY_PLACEMENT_DIRECTIONS
    max_equalize_rounds: int = Field(default=10_000, ge=1)
    max_placement_attempts: int = Field(default=10_000, ge=1)

    @property
    def width(self) -> int:
        return GRID_WIDTH

    @property
    def height(self) -> int:
        return GRID_HEIGHT

    @field_validator("placement_directions")
    @classmethod
    def _non_empty_directions(cls, value: tuple[Direction, ...]) -> tuple[Direction, ...]:
        if not value:
            raise ValueError("At least one placement direction is required.")
        return value

    @classmethod
    def from_env(cls, **overrides: Any) -> "GameSettings":
        """Construct settings from `NAVAL_BATTLE_*` env vars, then apply overrides."""

        data: Dict[str, Any] = {}
        ships = os.getenv("NAVAL_BATTLE_SHIPS")
        if ships:
            data["ships_amount"] = int(ships)
        seed = os.getenv("NAVAL_BATTLE_SEED")
        if seed:
            data["seed"] = int(seed)
        if env_flag("NAVAL_BATTLE_ALL_DIRECTIONS"):
            data["placement_directions"] = tuple(Direction)

        data.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**data)
