"""Move notation emitted once per half-move.

The format is a simplified algebraic notation without disambiguation:
``Nf3``, ``exd5``, ``exd6 e.p.``, ``O-O``, ``e8=Q``, with a trailing ``+``
whenever the opponent is left in check (checkmate included).
"""

from __future__ import annotations

from dojochess.core.board import Board
from dojochess.core.enums import MoveKind, PieceType
from dojochess.core.move import Move
from dojochess.core.piece import PIECE_LETTERS
from dojochess.core.types import square_name

EN_PASSANT_SUFFIX = " e.p."
CHECK_SUFFIX = "+"

_CASTLING_SAN: dict[MoveKind, str] = {
    MoveKind.CASTLE_KINGSIDE: "O-O",
    MoveKind.CASTLE_QUEENSIDE: "O-O-O",
}


def describe_move(board: Board, move: Move) -> str:
    """Notation of *move* on *board* (the position before the move),
    without promotion or check suffixes."""
    if move.kind in _CASTLING_SAN:
        return _CASTLING_SAN[move.kind]

    piece = board[move.origin]
    assert piece is not None

    san = piece.letter
    if board[move.destination] is not None or move.is_en_passant:
        if piece.piece_type == PieceType.PAWN:
            san = move.origin.file
        san += "x"

    san += square_name(move.destination)

    if move.is_en_passant:
        san += EN_PASSANT_SUFFIX
    return san


def promotion_suffix(piece_type: PieceType) -> str:
    return "=" + PIECE_LETTERS[piece_type]


def with_check(notation: str, gives_check: bool) -> str:
    return notation + CHECK_SUFFIX if gives_check else notation
