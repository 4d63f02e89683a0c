"""Plain-text front end that reads moves from stdin."""

from __future__ import annotations

from typing import Callable, Mapping

from navalbattle.engine.cell import CellType
from navalbattle.engine.game import GameSide
from navalbattle.engine.geometry import Position
from navalbattle.engine.grid import GridView
from navalbattle.engine.loop import GameUI, RenderData
from navalbattle.engine.moves import MoveParseError, move_to_str

OWN_GRID_SYMBOLS: Mapping[CellType, str] = {
    CellType.SHIP: "█",
    CellType.WATER: "~",
    CellType.ATTACKED_SHIP: "X",
    CellType.ATTACKED_WATER: "^",
}

# Enemy ships stay hidden until hit.
ENEMY_GRID_SYMBOLS: Mapping[CellType, str] = {**OWN_GRID_SYMBOLS, CellType.SHIP: "~"}

PARSE_ERROR_MESSAGES = {
    MoveParseError.INVALID_FORMAT: "Invalid format. Use a letter followed by a number (e.g. A5).",
    MoveParseError.OUT_OF_BOUNDS: "That move is outside the board.",
}

WINNER_NAMES = {
    GameSide.PLAYER: "Player",
    GameSide.BOT: "Bot",
    GameSide.NONE: "Nobody",
}


def format_grid(view: GridView, symbols: Mapping[CellType, str]) -> str:
    """Render a grid with lettered columns, numbered rows and box borders."""
    width, height = view.dimension.width, view.dimension.height
    lines = ["   " + "".join(f" {chr(ord('A') + col)}" for col in range(width))]
    lines.append("   ┌" + "─┬" * (width - 1) + "─┐")
    for row in range(height):
        cells = "".join("│" + symbols.get(view.get(col, row), "?") for col in range(width))
        lines.append(f"{row + 1:>2} {cells}│")
        if row < height - 1:
            lines.append("   ├" + "─┼" * (width - 1) + "─┤")
    lines.append("   └" + "─┴" * (width - 1) + "─┘")
    return "\n".join(lines) + "\n"


class TerminalUI(GameUI):
    """Prints both grids and forwards typed moves to the game loop callback."""

    def __init__(
        self,
        on_player_move: Callable[[str], None],
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ) -> None:
        self._on_player_move = on_player_move
        self._input = input_fn
        self._output = output_fn
        self._bot_moves: list[str] = []
        self._closed = False

    def on_new_game(self) -> None:
        self._output("========== Naval Battle ==========")

    def on_game_closed(self) -> None:
        self._output("Goodbye!")

    def is_open(self) -> bool:
        return not self._closed

    def process_input(self, should_receive_player_move: bool) -> None:
        if not should_receive_player_move:
            return
        move = self._read_move()
        if move is not None:
            self._on_player_move(move)

    def render(self, render_data: RenderData) -> None:
        if not render_data.changed_grids:
            return
        self._output("========== YOUR GRID ==========")
        self._output(format_grid(render_data.player_view, OWN_GRID_SYMBOLS))
        self._output("========== BOT GRID ==========")
        self._output(format_grid(render_data.bot_view, ENEMY_GRID_SYMBOLS))
        for bot_move in self._bot_moves:
            self._output(f"The bot fired at {bot_move}")
        self._bot_moves.clear()

    def on_bot_move(self, pos: Position) -> None:
        self._bot_moves.append(move_to_str(pos))

    def on_player_move(self, pos: Position) -> None:
        self._output(f"You fired at {move_to_str(pos)}")

    def on_invalid_move(self) -> None:
        self._output("That cell was already attacked. Try again.")

    def on_parse_error(self, error: MoveParseError) -> None:
        message = PARSE_ERROR_MESSAGES.get(error)
        if message:
            self._output(message)

    def on_game_over(self, winner: GameSide) -> None:
        self._output(f"Game over! Winner: {WINNER_NAMES[winner]}")

    def _read_move(self) -> str | None:
        try:
            raw = self._input("Enter your move: ")
        except EOFError:
            self._closed = True
            self._output("\nLeaving the game...")
            return None
        cleaned = raw.strip().upper()
        if cleaned in {"Q", "QUIT"}:
            self._closed = True
            return None
        return cleaned
