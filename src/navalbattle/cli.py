"""Command-line driver for playing against the bot in a terminal."""

from __future__ import annotations

import argparse
import logging
from typing import Sequence

from navalbattle.engine.errors import FleetSetupError
from navalbattle.engine.game import GameLogic, GameSide
from navalbattle.engine.geometry import Direction
from navalbattle.engine.instrumented_game import InstrumentedGameLogic
from navalbattle.engine.loop import GameLoop
from navalbattle.engine.settings import GameSettings
from navalbattle.telemetry import TelemetryConfig, init_telemetry
from navalbattle.ui.terminal import TerminalUI

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play a naval battle against the computer.")
    parser.add_argument(
        "--seed", type=int, default=None, help="Optional RNG seed for reproducibility."
    )
    parser.add_argument(
        "--ships", type=int, default=None, help="Ships per side (default 6)."
    )
    parser.add_argument(
        "--all-directions",
        action="store_true",
        help="Let random placement use every valid direction, not only right/down.",
    )
    parser.add_argument(
        "--telemetry",
        action="store_true",
        help="Enable OpenTelemetry tracing and metrics for this session.",
    )
    return parser


def build_logic(settings: GameSettings, instrumented: bool = False) -> GameLogic:
    logic_cls = InstrumentedGameLogic if instrumented else GameLogic
    return logic_cls.from_settings(settings)


def play_game(settings: GameSettings, instrumented: bool = False) -> GameSide:
    logic = build_logic(settings, instrumented)
    loop = GameLoop(logic)
    loop.attach(TerminalUI(loop.submit_move))
    try:
        return loop.run()
    finally:
        logic.close()


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    telemetry = TelemetryConfig.from_env()
    if args.telemetry:
        telemetry = telemetry.model_copy(update={"enable_tracing": True, "enable_metrics": True})
    init_telemetry(telemetry)

    try:
        settings = GameSettings.from_env(
            seed=args.seed,
            ships_amount=args.ships,
            placement_directions=tuple(Direction) if args.all_directions else None,
        )
    except ValueError as exc:
        print(f"Invalid settings: {exc}")
        return 2

    try:
        play_game(settings, instrumented=telemetry.any_enabled)
    except FleetSetupError as exc:
        logger.error("fleet_setup_failed", extra={"error": str(exc)})
        print(f"Could not set up the fleets: {exc}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
