"""Turn engine: attack resolution, turn switching and win detection."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum

from navalbattle.telemetry import get_meter, get_tracer

from .bot import BotAI
from .cell import CellType, attacked_version
from .errors import GameStateError
from .geometry import Dimension, Position
from .grid import Grid, GridView
from .moves import MoveParseResult, move_to_str, parse_move
from .random_source import RandomSource
from .settings import GameSettings
from .setup import GameSetup
from .ship import Ship

logger = logging.getLogger(__name__)
tracer = get_tracer("navalbattle.engine.game")
meter = get_meter("navalbattle.engine.game")

ATTACK_COUNTER = meter.create_counter(
    "navalbattle_engine_attacks",
    unit="1",
    description="Attacks resolved by GameLogic",
)


class GameSide(Enum):
    """The two competing sides, plus NONE for an undecided winner."""

    NONE = "none"
    PLAYER = "player"
    BOT = "bot"

    def opponent(self) -> GameSide:
        if self is GameSide.PLAYER:
            return GameSide.BOT
        if self is GameSide.BOT:
            return GameSide.PLAYER
        return GameSide.NONE


@dataclass
class Game:
    """Everything one session owns: both grids, both fleets and the size target."""

    bot_grid: Grid
    player_grid: Grid
    ships_amount: int
    bot_ships: list[Ship] = field(default_factory=list)
    player_ships: list[Ship] = field(default_factory=list)
    target_total_ship_size: int = 0

    @classmethod
    def create(cls, width: int = 10, height: int = 10, ships_amount: int = 6) -> Game:
        return cls(
            bot_grid=Grid(width, height, owner=GameSide.BOT.value),
            player_grid=Grid(width, height, owner=GameSide.PLAYER.value),
            ships_amount=ships_amount,
        )


@dataclass(frozen=True)
class CellAttackResult:
    cell_type: CellType
    changed: bool
    sunk: bool = False


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of the current game."""

    current_turn: GameSide
    winner: GameSide
    game_over: bool
    player_hits: int
    bot_hits: int
    target_total_ship_size: int


class GameLogic:
    """Resolves attacks for both sides and tracks turn, hits and winner."""

    def __init__(self, game: Game, rng: RandomSource | None = None) -> None:
        self.game = game
        self._rng = rng or random.Random()
        self.bot_ai = BotAI(self._rng)
        self.turn = GameSide.PLAYER
        self.total_player_ship_hit = 0
        self.total_bot_ship_hit = 0
        self._last_bot_moves: list[Position] = []
        self._player_view = GridView(game.player_grid)
        self._bot_view = GridView(game.bot_grid)

    @classmethod
    def from_settings(cls, settings: GameSettings) -> GameLogic:
        """Build a game and a seeded setup from ``settings`` and run the setup."""
        rng = random.Random(settings.seed)
        logic = cls(
            Game.create(settings.width, settings.height, settings.ships_amount), rng=rng
        )
        logic.setup(
            GameSetup(
                rng,
                placement_directions=settings.placement_directions,
                max_equalize_rounds=settings.max_equalize_rounds,
                max_placement_attempts=settings.max_placement_attempts,
            )
        )
        return logic

    def setup(self, setup: GameSetup) -> None:
        setup.setup_game(self.game)
        self.turn = GameSide.PLAYER

    def close(self) -> None:
        """End the session; the plain logic holds nothing to release."""

    def player_view(self) -> GridView:
        return self._player_view

    def bot_view(self) -> GridView:
        return self._bot_view

    def dimension(self) -> Dimension:
        return self.game.player_grid.dimension

    def is_game_over(self) -> bool:
        return self.winner() is not GameSide.NONE

    def winner(self) -> GameSide:
        target = self.game.target_total_ship_size
        if target <= 0:
            # Fleets not set up yet.
            return GameSide.NONE
        if self.total_player_ship_hit == target:
            return GameSide.PLAYER
        if self.total_bot_ship_hit == target:
            return GameSide.BOT
        return GameSide.NONE

    def current_turn(self) -> GameSide:
        return self.turn

    def bot_move(self) -> Position:
        """Let the bot pick and attack a cell on the player's grid."""
        self._require_turn(GameSide.BOT)
        pos = self.bot_ai.compute_move(self.game.player_grid)
        self.attack(self.game.player_grid, pos)
        self._last_bot_moves.append(pos)
        return pos

    def pop_all_bot_moves(self) -> list[Position]:
        moves, self._last_bot_moves = self._last_bot_moves, []
        return moves

    def player_move(self, move: Position) -> bool:
        """Attack the bot grid; False when the cell was already attacked."""
        self._require_turn(GameSide.PLAYER)
        return self.attack(self.game.bot_grid, move).changed

    def hit_bot_ship_success(self, move: Position) -> bool:
        return self.game.bot_grid.is_type(move, CellType.ATTACKED_SHIP)

    def parse_player_move(self, text: str) -> MoveParseResult:
        return parse_move(text, self.game.player_grid.dimension)

    def move_to_str(self, move: Position) -> str:
        return move_to_str(move)

    def attack(self, grid: Grid, pos: Position) -> CellAttackResult:
        """Resolve one attack by the side whose turn it is against ``grid``."""
        with tracer.start_as_current_span("game.attack") as span:
            attacker = self.turn
            span.set_attribute("attacker", attacker.value)
            span.set_attribute("x", pos.x)
            span.set_attribute("y", pos.y)

            cell = grid.cell(pos)
            new_type = attacked_version(cell.type)
            changed = new_type is not cell.type
            sunk = False
            if changed:
                cell.type = new_type
                sunk = self._process_hit(grid, pos)

            span.set_attribute("cell_type", cell.type.value)
            span.set_attribute("changed", changed)
            span.set_attribute("sunk", sunk)
            ATTACK_COUNTER.add(
                1, attributes={"attacker": attacker.value, "result": cell.type.value}
            )
            logger.debug(
                "cell_attacked",
                extra={
                    "attacker": attacker.value,
                    "x": pos.x,
                    "y": pos.y,
                    "cell_type": cell.type.value,
                    "changed": changed,
                    "sunk": sunk,
                },
            )
            if changed and self.is_game_over():
                logger.info("game_finished", extra={"winner": self.winner().value})
            return CellAttackResult(cell.type, changed, sunk)

    def get_state(self) -> GameState:
        return GameState(
            current_turn=self.turn,
            winner=self.winner(),
            game_over=self.is_game_over(),
            player_hits=self.total_player_ship_hit,
            bot_hits=self.total_bot_ship_hit,
            target_total_ship_size=self.game.target_total_ship_size,
        )

    def _process_hit(self, grid: Grid, pos: Position) -> bool:
        hit = grid.is_type(pos, CellType.ATTACKED_SHIP)
        if hit:
            if self.turn is GameSide.PLAYER:
                self.total_player_ship_hit += 1
            else:
                self.total_bot_ship_hit += 1
        sunk = grid.is_ship_sunk(pos)
        if sunk and self.turn is GameSide.BOT:
            self.bot_ai.on_last_hit_sunk_ship()
        if not (hit and not sunk):
            self._switch_turn()
        return sunk

    def _switch_turn(self) -> None:
        self.turn = self.turn.opponent()

    def _require_turn(self, side: GameSide) -> None:
        if self.is_game_over():
            raise GameStateError("The game is already over.")
        if self.turn is not side:
            raise GameStateError(f"It is not the {side.value}'s turn.")
