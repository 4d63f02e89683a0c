"""Turn scheduling between the game logic and a front end."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from .game import GameLogic, GameSide
from .geometry import Position
from .grid import GridView
from .moves import MoveParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderData:
    player_view: GridView
    bot_view: GridView
    changed_grids: bool


class GameUI(ABC):
    """Capabilities a front end must offer to the game loop.

    Player moves do not come back from ``process_input``; the front end hands
    them to the callback it was built with (usually ``GameLoop.submit_move``).
    """

    @abstractmethod
    def on_new_game(self) -> None: ...

    @abstractmethod
    def on_game_closed(self) -> None: ...

    @abstractmethod
    def is_open(self) -> bool: ...

    @abstractmethod
    def process_input(self, should_receive_player_move: bool) -> None: ...

    @abstractmethod
    def render(self, render_data: RenderData) -> None: ...

    @abstractmethod
    def on_bot_move(self, pos: Position) -> None: ...

    @abstractmethod
    def on_player_move(self, pos: Position) -> None: ...

    @abstractmethod
    def on_invalid_move(self) -> None: ...

    @abstractmethod
    def on_parse_error(self, error: MoveParseError) -> None: ...

    @abstractmethod
    def on_game_over(self, winner: GameSide) -> None: ...


class GameLoop:
    """Alternates turns until the game ends or the front end closes."""

    def __init__(self, logic: GameLogic, ui: GameUI | None = None) -> None:
        self.logic = logic
        self.ui = ui
        self.waiting_move = False
        self.ready_for_new_player_turn = True
        self.grids_changed = True
        self._pending_move: str | None = None

    def attach(self, ui: GameUI) -> None:
        self.ui = ui

    def submit_move(self, move_input: str) -> None:
        """Entry point for the front end to hand over the player's move text."""
        self._pending_move = move_input
        self.waiting_move = False

    def run(self) -> GameSide:
        ui = self._require_ui()
        ui.on_new_game()
        self.ready_for_new_player_turn = True
        while ui.is_open() and not self.logic.is_game_over():
            ui.process_input(self.expects_player_move())
            self.step()
            self._render()

        winner = self.logic.winner()
        if self.logic.is_game_over():
            ui.on_game_over(winner)
            logger.info("game_loop_finished", extra={"winner": winner.value})
        ui.on_game_closed()
        return winner

    def expects_player_move(self) -> bool:
        return self.logic.current_turn() is GameSide.PLAYER and self.waiting_move

    def step(self) -> None:
        """Run one scheduling step; returns early while waiting for input."""
        if self.logic.is_game_over():
            return
        if self.logic.current_turn() is GameSide.PLAYER:
            self._handle_player_turn()
        else:
            self._handle_bot_turn()

    def _handle_player_turn(self) -> None:
        ui = self._require_ui()
        if self.ready_for_new_player_turn:
            self.ready_for_new_player_turn = False
            self.waiting_move = True
        if self._pending_move is None:
            self.waiting_move = True
            return

        move_input, self._pending_move = self._pending_move, None
        result = self.logic.parse_player_move(move_input)
        if not result.ok:
            logger.debug("player_move_unparsable", extra={"error": result.error.value})
            ui.on_parse_error(result.error)
            self.waiting_move = True
            return
        if not self.logic.player_move(result.pos):
            logger.debug("player_move_invalid", extra={"x": result.pos.x, "y": result.pos.y})
            ui.on_invalid_move()
            self.waiting_move = True
            return

        self.waiting_move = False
        self.grids_changed = True
        ui.on_player_move(result.pos)
        if self.logic.current_turn() is not GameSide.PLAYER:
            self.ready_for_new_player_turn = True
        else:
            self.waiting_move = True

    def _handle_bot_turn(self) -> None:
        ui = self._require_ui()
        self.logic.bot_move()
        for bot_move in self.logic.pop_all_bot_moves():
            ui.on_bot_move(bot_move)
        self.grids_changed = True
        self.ready_for_new_player_turn = True

    def _render(self) -> None:
        ui = self._require_ui()
        ui.render(
            RenderData(
                player_view=self.logic.player_view(),
                bot_view=self.logic.bot_view(),
                changed_grids=self.grids_changed,
            )
        )
        self.grids_changed = False

    def _require_ui(self) -> GameUI:
        if self.ui is None:
            raise RuntimeError("GameLoop has no UI attached.")
        return self.ui
