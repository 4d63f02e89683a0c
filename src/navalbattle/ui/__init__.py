"""Front ends implementing the GameUI boundary."""

from .terminal import TerminalUI

__all__ = ["TerminalUI"]
