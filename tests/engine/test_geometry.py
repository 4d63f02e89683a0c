"""Tests for positions and directions."""

from navalbattle.engine.geometry import Direction, Position


def test_offset_moves_along_each_direction() -> None:
    origin = Position(4, 4)
    assert origin.offset(Direction.RIGHT) == Position(5, 4)
    assert origin.offset(Direction.DOWN) == Position(4, 5)
    assert origin.offset(Direction.LEFT, 2) == Position(2, 4)
    assert origin.offset(Direction.UP, 3) == Position(4, 1)
    assert origin == Position(4, 4)


def test_inverse_is_opposite_and_involutive() -> None:
    assert Direction.RIGHT.inverse() is Direction.LEFT
    assert Direction.DOWN.inverse() is Direction.UP
    for direction in Direction:
        assert direction.inverse().inverse() is direction
