"""Position: immutable game snapshot (board + metadata) with copy-on-apply."""

from __future__ import annotations

from dataclasses import dataclass

from dojochess.core.board import Board
from dojochess.core.enums import CastlingRights, Color, PieceType
from dojochess.core.errors import IllegalMove, InvalidPromotion
from dojochess.core.move import PROMOTION_TYPES, Move
from dojochess.core.move_generator import MoveGenerator, relocate
from dojochess.core.notation import describe_move, promotion_suffix
from dojochess.core.piece import Piece
from dojochess.core.types import Square


@dataclass(frozen=True, slots=True)
class MoveResult:
    """Outcome of :meth:`Position.apply`.

    ``notation`` holds everything up to (and including) an explicit
    promotion suffix; the check marker is appended by the game layer once
    the half-move is final.
    """

    position: Position
    notation: str
    moved: Piece
    captured: Piece | None
    needs_promotion: bool


# Rook corners -> the right that dies with them.
_ROOK_CORNERS: dict[Square, CastlingRights] = {
    Square(7, 0): CastlingRights.WHITE_QUEENSIDE,
    Square(7, 7): CastlingRights.WHITE_KINGSIDE,
    Square(0, 0): CastlingRights.BLACK_QUEENSIDE,
    Square(0, 7): CastlingRights.BLACK_KINGSIDE,
}


@dataclass(frozen=True, slots=True)
class Position:
    """Full chess position: board + side to move + castling + en passant + clocks.

    Positions are values.  :meth:`apply` and :meth:`promote` return new
    positions and never touch the receiver, so any snapshot a caller keeps
    stays valid for replay.
    """

    board: Board
    side_to_move: Color = Color.WHITE
    castling: CastlingRights = CastlingRights.ALL
    en_passant: Square | None = None
    halfmove_clock: int = 0
    fullmove_number: int = 1

    @classmethod
    def initial(cls) -> Position:
        return cls(Board.initial())

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def generator(self) -> MoveGenerator:
        return MoveGenerator.for_position(self)

    def legal_moves_from(self, sq: Square) -> list[Move]:
        return self.generator.legal_moves(sq, self.side_to_move)

    def legal_moves(self) -> list[Move]:
        return self.generator.all_legal_moves(self.side_to_move)

    # ── Core move operations ─────────────────────────────────────────────

    def apply(self, move: Move) -> MoveResult:
        """Play *move* (assumed legal) for the side to move."""
        piece = self.board[move.origin]
        if piece is None:
            raise IllegalMove(f"No piece on {move.origin}")
        notation = describe_move(self.board, move)
        board, captured = relocate(self.board, move)

        next_en_passant: Square | None = None
        if move.is_double_push:
            next_en_passant = Square(
                (move.origin.row + move.destination.row) // 2, move.origin.col
            )

        if piece.piece_type == PieceType.PAWN or captured is not None:
            halfmove_clock = 0
        else:
            halfmove_clock = self.halfmove_clock + 1

        fullmove_number = self.fullmove_number
        if self.side_to_move == Color.BLACK:
            fullmove_number += 1

        needs_promotion = (
            piece.piece_type == PieceType.PAWN
            and move.destination.row == piece.color.opposite.back_row
        )
        if needs_promotion and move.promotion is not None:
            notation += promotion_suffix(move.promotion)
            needs_promotion = False

        position = Position(
            board=board,
            side_to_move=self.side_to_move.opposite,
            castling=self._next_castling(move, piece),
            en_passant=next_en_passant,
            halfmove_clock=halfmove_clock,
            fullmove_number=fullmove_number,
        )
        return MoveResult(
            position=position,
            notation=notation,
            moved=piece,
            captured=captured,
            needs_promotion=needs_promotion,
        )

    def promote(self, sq: Square, piece_type: PieceType) -> Position:
        """Replace the pawn parked on the last rank at *sq*."""
        if piece_type not in PROMOTION_TYPES:
            raise InvalidPromotion(f"Cannot promote to {piece_type.name.lower()}")
        pawn = self.board[sq]
        if (
            pawn is None
            or pawn.piece_type != PieceType.PAWN
            or sq.row != pawn.color.opposite.back_row
        ):
            raise InvalidPromotion(f"No pawn awaiting promotion on {sq}")
        board = self.board.with_pieces({sq: Piece(pawn.color, piece_type)})
        return Position(
            board=board,
            side_to_move=self.side_to_move,
            castling=self.castling,
            en_passant=self.en_passant,
            halfmove_clock=self.halfmove_clock,
            fullmove_number=self.fullmove_number,
        )

    # ── Castling bookkeeping ─────────────────────────────────────────────

    def _next_castling(self, move: Move, piece: Piece) -> CastlingRights:
        next_castling = self.castling
        if piece.piece_type == PieceType.KING:
            next_castling &= ~CastlingRights.both(piece.color)

        for sq in (move.origin, move.destination):
            if sq in _ROOK_CORNERS:
                next_castling &= ~_ROOK_CORNERS[sq]
        return next_castling
