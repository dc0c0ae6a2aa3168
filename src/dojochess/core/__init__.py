"""Core domain layer: pure chess logic with zero external dependencies.

Quick start::

    from dojochess.core import Position, parse_square

    pos = Position.initial()
    for move in pos.legal_moves_from(parse_square("g1")):
        print(move)
"""

from dojochess.core.attacks import is_attacked, is_king_in_check
from dojochess.core.board import Board
from dojochess.core.enums import (
    CastlingRights,
    Color,
    GamePhase,
    GameResult,
    MoveKind,
    PieceType,
)
from dojochess.core.errors import (
    ChessError,
    IllegalMove,
    InvalidFen,
    InvalidPromotion,
    InvalidSquare,
    InvariantViolation,
    MoveRejected,
    StateNotAccepting,
    WrongTurn,
)
from dojochess.core.fen import STARTING_FEN, position_from_fen, position_to_fen
from dojochess.core.move import PROMOTION_TYPES, Move
from dojochess.core.move_generator import MoveGenerator
from dojochess.core.piece import Piece, are_opponents, color_of
from dojochess.core.position import MoveResult, Position
from dojochess.core.rules import Rules
from dojochess.core.types import Square, parse_square, square_name

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GamePhase",
    "GameResult",
    "MoveKind",
    "PieceType",
    # Errors
    "ChessError",
    "IllegalMove",
    "InvalidFen",
    "InvalidPromotion",
    "InvalidSquare",
    "InvariantViolation",
    "MoveRejected",
    "StateNotAccepting",
    "WrongTurn",
    # Types / helpers
    "Square",
    "are_opponents",
    "color_of",
    "is_attacked",
    "is_king_in_check",
    "parse_square",
    "square_name",
    # Domain objects
    "PROMOTION_TYPES",
    "Board",
    "Move",
    "MoveGenerator",
    "MoveResult",
    "Piece",
    "Position",
    "Rules",
    # Notation
    "STARTING_FEN",
    "position_from_fen",
    "position_to_fen",
]
