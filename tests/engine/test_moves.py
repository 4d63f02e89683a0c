"""Tests for move text parsing."""

import pytest

from navalbattle.engine.geometry import Dimension, Position
from navalbattle.engine.moves import MoveParseError, move_to_str, parse_move

BOARD = Dimension(10, 10)


def test_parses_letter_then_row() -> None:
    result = parse_move("A5", BOARD)
    assert result.pos == Position(0, 4)
    assert result.error is MoveParseError.NONE
    assert result.ok


def test_input_is_trimmed_and_upper_cased() -> None:
    assert parse_move("  j10 \n", BOARD).pos == Position(9, 9)


@pytest.mark.parametrize("text", ["K1", "A11", "A0", "Z99"])
def test_out_of_bounds(text: str) -> None:
    assert parse_move(text, BOARD).error is MoveParseError.OUT_OF_BOUNDS


@pytest.mark.parametrize("text", ["5A", "", "AA1", "A", "A123", "A-1", "1"])
def test_invalid_format(text: str) -> None:
    result = parse_move(text, BOARD)
    assert result.error is MoveParseError.INVALID_FORMAT
    assert not result.ok


def test_move_to_str() -> None:
    assert move_to_str(Position(0, 4)) == "A5"
    assert move_to_str(Position(9, 9)) == "J10"
