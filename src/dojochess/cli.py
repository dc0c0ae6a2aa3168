"""Terminal front-end: a thin caller of :class:`~dojochess.game.GameSession`."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Sequence
from typing import TextIO

from dojochess.config import CliSettings
from dojochess.core.enums import GamePhase, GameResult, PieceType
from dojochess.core.errors import ChessError
from dojochess.core.fen import position_to_fen
from dojochess.core.types import Square, parse_square, square_name
from dojochess.game.session import GameSession

_LOGGER = logging.getLogger(__name__)

_PROMOTION_CHARS: dict[str, PieceType] = {
    "q": PieceType.QUEEN,
    "r": PieceType.ROOK,
    "b": PieceType.BISHOP,
    "n": PieceType.KNIGHT,
}

_RESULT_TEXT: dict[GameResult, str] = {
    GameResult.WHITE_WINS: "Checkmate. White wins.",
    GameResult.BLACK_WINS: "Checkmate. Black wins.",
    GameResult.DRAW: "Stalemate. Draw.",
}

HELP_TEXT = """\
Commands:
  e2 e4 | e2e4      move a piece
  e7 e8 q | e7e8q   move and promote (q, r, b, n)
  moves e2          list legal destinations from a square
  board | fen       show the position
  history           show the moves played so far
  quit              leave the game"""


def parse_move_input(text: str) -> tuple[Square, Square, PieceType | None]:
    """Split ``"e2e4"``, ``"e2 e4"`` or ``"e7 e8 q"`` into its parts."""
    compact = text.replace(" ", "").lower()
    if len(compact) not in (4, 5):
        raise ValueError(f"Cannot read move: {text!r}")
    origin = parse_square(compact[0:2])
    destination = parse_square(compact[2:4])
    promotion: PieceType | None = None
    if len(compact) == 5:
        try:
            promotion = _PROMOTION_CHARS[compact[4]]
        except KeyError:
            raise ValueError(f"Unknown promotion piece: {compact[4]!r}") from None
    return origin, destination, promotion


def format_record(record: Sequence[str]) -> str:
    """Number the half-moves in pairs: ``1. e4 e5 2. Nf3``."""
    parts: list[str] = []
    for idx, notation in enumerate(record):
        if idx % 2 == 0:
            parts.append(f"{idx // 2 + 1}.")
        parts.append(notation)
    return " ".join(parts)


class TerminalGame:
    """Read-eval-print loop around one :class:`GameSession`."""

    def __init__(
        self,
        settings: CliSettings,
        input_fn: Callable[[str], str] = input,
        out: TextIO | None = None,
    ) -> None:
        self._settings = settings
        self._input = input_fn
        self._out = out if out is not None else sys.stdout
        self.session = GameSession(settings.start_fen)
        self.session.events.on_move.append(self._on_move)

    def run(self) -> GameResult:
        self._print_board()
        while not self.session.state.is_terminal:
            prompt = self._prompt()
            try:
                line = self._input(prompt).strip()
            except EOFError:
                break
            if line in ("quit", "exit"):
                break
            if line:
                self._handle(line)

        game_result = self.session.result
        if game_result in _RESULT_TEXT:
            self._write(_RESULT_TEXT[game_result])
        return game_result

    # ── Command handling ─────────────────────────────────────────────────

    def _handle(self, line: str) -> None:
        if line == "help":
            self._write(HELP_TEXT)
        elif line == "board":
            self._print_board()
        elif line == "fen":
            self._write(position_to_fen(self.session.state.position))
        elif line == "history":
            self._write(format_record(self.session.record) or "(no moves yet)")
        elif line.startswith("moves "):
            self._list_moves(line[6:].strip())
        elif self.session.state.phase == GamePhase.AWAITING_PROMOTION:
            self._handle_promotion(line)
        else:
            self._handle_move(line)

    def _handle_move(self, line: str) -> None:
        try:
            origin, destination, promotion = parse_move_input(line)
        except ChessError as exc:
            self._write(str(exc))
            return
        except ValueError as exc:
            self._write(f"{exc} (type 'help' for commands)")
            return

        if not self.session.submit(origin, destination, promotion):
            self._write(f"Illegal move: {square_name(origin)}{square_name(destination)}")
            if self._settings.show_legal_moves:
                self._list_moves(square_name(origin))
            return
        if self.session.state.phase != GamePhase.AWAITING_PROMOTION:
            self._print_board()

    def _handle_promotion(self, line: str) -> None:
        piece_type = _PROMOTION_CHARS.get(line.lower())
        if piece_type is None or not self.session.promote(piece_type):
            self._write("Choose one of q, r, b, n")
            return
        self._print_board()

    def _list_moves(self, name: str) -> None:
        try:
            sq = parse_square(name)
        except ChessError as exc:
            self._write(str(exc))
            return
        moves = self.session.select(sq)
        if not moves:
            self._write(f"No legal moves from {name}")
            return
        self._write(" ".join(square_name(m.destination) for m in moves))

    # ── Output ───────────────────────────────────────────────────────────

    def _prompt(self) -> str:
        state = self.session.state
        if state.phase == GamePhase.AWAITING_PROMOTION:
            return "Promote to (q/r/b/n): "
        return f"{state.side_to_move} to move> "

    def _print_board(self) -> None:
        board = self.session.state.board
        self._write(board.render(unicode=self._settings.use_unicode_symbols))

    def _on_move(self, notation: str, _state: object) -> None:
        self._write(f"{self.session.ply_count}: {notation}")

    def _write(self, text: str) -> None:
        print(text, file=self._out)


def main(argv: Sequence[str] | None = None) -> int:
    """Launch the terminal game."""
    settings = CliSettings.from_args(argv)
    settings.configure_logging()
    try:
        game = TerminalGame(settings)
    except ChessError as exc:
        _LOGGER.error("Cannot start game: %s", exc)
        return 2
    game.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
