"""Text representation of moves: ``A5`` is column A, row 5."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from .geometry import Dimension, Position

MOVE_PATTERN = re.compile(r"^[A-Z]\d{1,2}$")


class MoveParseError(Enum):
    NONE = "none"
    INVALID_FORMAT = "invalid_format"
    OUT_OF_BOUNDS = "out_of_bounds"


@dataclass(frozen=True)
class MoveParseResult:
    pos: Position
    error: MoveParseError

    @property
    def ok(self) -> bool:
        return self.error is MoveParseError.NONE


def parse_move(text: str, dimension: Dimension) -> MoveParseResult:
    """Parse ``text`` into a grid position, reporting why it was rejected."""
    cleaned = text.strip().upper()
    if not MOVE_PATTERN.match(cleaned):
        return MoveParseResult(Position(0, 0), MoveParseError.INVALID_FORMAT)

    column = ord(cleaned[0]) - ord("A")
    row = int(cleaned[1:]) - 1
    if column >= dimension.width or not 0 <= row < dimension.height:
        return MoveParseResult(Position(0, 0), MoveParseError.OUT_OF_BOUNDS)
    return MoveParseResult(Position(column, row), MoveParseError.NONE)


def move_to_str(move: Position) -> str:
    return f"{chr(ord('A') + move.x)}{move.y + 1}"
