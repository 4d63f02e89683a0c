"""Exceptions raised by the engine."""

from __future__ import annotations


class NavalBattleError(Exception):
    """Base class for engine failures."""


class EmptyCollectionError(NavalBattleError, ValueError):
    """Raised when a random pick is requested from an empty collection."""


class FleetSetupError(NavalBattleError, RuntimeError):
    """Raised when fleets cannot be equalised or placed within the attempt caps."""


class GameStateError(NavalBattleError, RuntimeError):
    """Raised when a move is applied out of turn or after the game ended."""
