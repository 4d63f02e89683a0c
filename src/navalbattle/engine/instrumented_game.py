"""Game logic with telemetry hooks around setup, moves and game completion."""

from __future__ import annotations

import time

from navalbattle.telemetry import get_logger, get_tracer, record_game_metric

from .cell import CellType
from .game import GameLogic, GameSide
from .geometry import Position
from .setup import GameSetup
from .ship import total_size


class InstrumentedGameLogic(GameLogic):
    """Wraps GameLogic with tracing, metrics, and logging."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._logger = get_logger("navalbattle.engine")
        self._tracer = get_tracer("navalbattle.engine")
        self._game_span_cm = None
        self._game_span = None
        self._game_start_time: float | None = None
        self._turns = 0
        self._finished = False

    def setup(self, setup: GameSetup) -> None:
        self._start_game_span()
        with self._tracer.start_as_current_span("navalbattle.engine.setup") as span:
            super().setup(setup)
            span.set_attribute("ships_amount", self.game.ships_amount)
            span.set_attribute("target_total_ship_size", self.game.target_total_ship_size)
            record_game_metric(
                "navalbattle_game_setup_total",
                1,
                {
                    "ships_amount": self.game.ships_amount,
                    "player_total_size": total_size(self.game.player_ships),
                },
            )
            self._logger.info(
                "Setup finished: %d ships per side, total size %d",
                self.game.ships_amount,
                self.game.target_total_ship_size,
            )

    def player_move(self, move: Position) -> bool:
        with self._tracer.start_as_current_span("navalbattle.engine.player_move") as span:
            span.set_attribute("x", move.x)
            span.set_attribute("y", move.y)
            changed = super().player_move(move)
            span.set_attribute("changed", changed)
            if not changed:
                record_game_metric(
                    "navalbattle_game_invalid_moves_total", 1, {"side": GameSide.PLAYER.value}
                )
                self._logger.warning("Player repeated attack at %s", self.move_to_str(move))
                return changed
            self._record_shot(GameSide.PLAYER, self.hit_bot_ship_success(move))
            return changed

    def bot_move(self) -> Position:
        with self._tracer.start_as_current_span("navalbattle.engine.bot_move") as span:
            state = self.bot_ai.state
            pos = super().bot_move()
            span.set_attribute("bot.state", state.value)
            span.set_attribute("x", pos.x)
            span.set_attribute("y", pos.y)
            hit = self.game.player_grid.is_type(pos, CellType.ATTACKED_SHIP)
            self._record_shot(GameSide.BOT, hit)
            return pos

    def close(self) -> None:
        """End the game span, recording the game as abandoned if nobody won."""
        if self._game_span_cm is None:
            return
        if not self._finished:
            self._finished = True
            record_game_metric("navalbattle_game_abandoned_total", 1, {"turns": self._turns})
            self._game_span.set_attribute("outcome", "abandoned")
            self._game_span.set_attribute("turns", self._turns)
            self._logger.info("Game abandoned after %d shots", self._turns)
        self._close_game_span()

    def _record_shot(self, side: GameSide, hit: bool) -> None:
        self._turns += 1
        record_game_metric("navalbattle_shots_total", 1, {"side": side.value})
        record_game_metric(
            "navalbattle_shots_by_result_total",
            1,
            {"side": side.value, "result": "hit" if hit else "miss"},
        )
        if self.is_game_over() and not self._finished:
            self._finish_game()

    def _start_game_span(self) -> None:
        self._close_game_span()
        self._game_start_time = time.perf_counter()
        self._finished = False
        self._turns = 0
        self._game_span_cm = self._tracer.start_as_current_span("navalbattle.engine.game")
        self._game_span = self._game_span_cm.__enter__()

    def _finish_game(self) -> None:
        self._finished = True
        duration = (time.perf_counter() - self._game_start_time) if self._game_start_time else 0.0
        winner = self.winner().value

        record_game_metric("navalbattle_game_completed_total", 1, {"winner": winner})
        record_game_metric("navalbattle_game_duration_seconds", duration, {"winner": winner})

        with self._tracer.start_as_current_span("navalbattle.engine.game_complete") as span:
            span.set_attribute("winner", winner)
            span.set_attribute("turns", self._turns)
            span.set_attribute("duration_ms", duration * 1000)

        if self._game_span is not None:
            self._game_span.set_attribute("outcome", "completed")
            self._game_span.set_attribute("winner", winner)
            self._game_span.set_attribute("turns", self._turns)

        self._logger.info("Game finished. Winner=%s shots=%d duration_s=%.3f", winner, self._turns, duration)
        self._close_game_span()

    def _close_game_span(self) -> None:
        if self._game_span_cm is not None:
            self._game_span_cm.__exit__(None, None, None)
            self._game_span_cm = None
            self._game_span = None
