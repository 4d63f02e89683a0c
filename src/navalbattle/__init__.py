"""Naval battle: a human vs. computer Battleship-style game."""

__version__ = "0.1.0"
