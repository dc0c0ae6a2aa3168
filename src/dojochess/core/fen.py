"""FEN parsing and serialisation for position setup."""

from __future__ import annotations

from dojochess.core.board import Board
from dojochess.core.enums import CastlingRights, Color, PieceType
from dojochess.core.errors import InvalidFen, InvalidSquare
from dojochess.core.piece import Piece
from dojochess.core.position import Position
from dojochess.core.types import Square, parse_square, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: dict[str, CastlingRights] = {
    "K": CastlingRights.WHITE_KINGSIDE,
    "Q": CastlingRights.WHITE_QUEENSIDE,
    "k": CastlingRights.BLACK_KINGSIDE,
    "q": CastlingRights.BLACK_QUEENSIDE,
}


def position_from_fen(fen: str) -> Position:
    """Parse a FEN string into a :class:`Position`."""
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise InvalidFen(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement_part, side_part, castling_part, ep_part = parts[:4]

    # 1. Piece placement (first rank listed is rank 8 = row 0)
    ranks = placement_part.split("/")
    if len(ranks) != 8:
        raise InvalidFen(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    placement: dict[Square, Piece] = {}
    for row, rank_text in enumerate(ranks):
        col = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise InvalidFen(f"Invalid FEN digit {ch!r}: {fen!r}")
                col += step
            else:
                if col >= 8:
                    raise InvalidFen(f"Invalid FEN rank width: {fen!r}")
                try:
                    placement[Square(row, col)] = Piece.from_char(ch)
                except ValueError as exc:
                    raise InvalidFen(str(exc)) from None
                col += 1
            if col > 8:
                raise InvalidFen(f"Invalid FEN rank width: {fen!r}")
        if col != 8:
            raise InvalidFen(f"Invalid FEN rank width: {fen!r}")
    board = Board(placement)

    for color in Color:
        if board.count(color, PieceType.KING) != 1:
            raise InvalidFen(f"FEN must contain exactly one {color} king: {fen!r}")

    # 2. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise InvalidFen(f"Invalid FEN side-to-move field: {side_part!r}")

    # 3. Castling
    castling = CastlingRights.NONE
    if castling_part != "-":
        seen: set[str] = set()
        for ch in castling_part:
            right = _CASTLING_CHARS.get(ch)
            if right is None or ch in seen:
                raise InvalidFen(f"Invalid FEN castling field: {castling_part!r}")
            seen.add(ch)
            castling |= right

    # 4. En passant
    ep: Square | None = None
    if ep_part != "-":
        try:
            ep = parse_square(ep_part)
        except InvalidSquare:
            raise InvalidFen(f"Invalid FEN en-passant square: {ep_part!r}") from None
        expected_row = 2 if side == Color.WHITE else 5
        if ep.row != expected_row:
            raise InvalidFen(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )

    # 5–6. Clocks (optional)
    halfmove = _parse_counter(parts, 4, default=0, minimum=0)
    fullmove = _parse_counter(parts, 5, default=1, minimum=1)

    return Position(board, side, castling, ep, halfmove, fullmove)


def _parse_counter(parts: list[str], idx: int, *, default: int, minimum: int) -> int:
    if len(parts) <= idx:
        return default
    try:
        value = int(parts[idx])
    except ValueError:
        raise InvalidFen(f"Invalid FEN counter: {parts[idx]!r}") from None
    if value < minimum:
        raise InvalidFen(f"Invalid FEN counter: {parts[idx]!r}")
    return value


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN."""
    # 1. Board
    rows: list[str] = []
    for row in range(8):
        empty = 0
        text = ""
        for col in range(8):
            piece = pos.board[Square(row, col)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    text += str(empty)
                    empty = 0
                text += str(piece)
        if empty:
            text += str(empty)
        rows.append(text)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if pos.side_to_move == Color.WHITE else "b"

    # 3. Castling
    castling_str = "".join(
        ch for ch, right in _CASTLING_CHARS.items() if pos.castling & right
    )
    if not castling_str:
        castling_str = "-"

    # 4. En passant
    ep_str = square_name(pos.en_passant) if pos.en_passant is not None else "-"

    return f"{board_str} {side_str} {castling_str} {ep_str} {pos.halfmove_clock} {pos.fullmove_number}"
