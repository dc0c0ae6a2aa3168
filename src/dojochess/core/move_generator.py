"""Pseudo-legal geometry and simulate-then-test legality filtering."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dojochess.core.attacks import (
    BISHOP_RAYS,
    KING_TARGETS,
    KNIGHT_TARGETS,
    QUEEN_RAYS,
    ROOK_RAYS,
    is_attacked,
    is_king_in_check,
)
from dojochess.core.board import Board
from dojochess.core.enums import CastlingRights, Color, MoveKind, PieceType
from dojochess.core.errors import IllegalMove
from dojochess.core.move import Move
from dojochess.core.piece import Piece, are_opponents, color_of
from dojochess.core.types import Square, is_on_board

if TYPE_CHECKING:
    from dojochess.core.position import Position

KING_HOME_COL = 4

# kind -> (rook origin col, rook destination col, king step direction)
CASTLING_GEOMETRY: dict[MoveKind, tuple[int, int, int]] = {
    MoveKind.CASTLE_KINGSIDE: (7, 5, 1),
    MoveKind.CASTLE_QUEENSIDE: (0, 3, -1),
}


def en_passant_victim(move: Move) -> Square:
    """Square of the pawn removed by an en-passant capture."""
    return Square(move.origin.row, move.destination.col)


def relocate(board: Board, move: Move) -> tuple[Board, Piece | None]:
    """Board after *move* plus the captured piece, if any.

    Handles the en-passant victim, the castling rook and an explicit
    promotion choice.  Rights and en-passant bookkeeping live on
    :class:`~dojochess.core.position.Position`.
    """
    piece = board[move.origin]
    if piece is None:
        raise IllegalMove(f"No piece on {move.origin}")

    captured = board[move.destination]
    placed = piece
    if move.promotion is not None:
        placed = Piece(piece.color, move.promotion)

    changes: dict[Square, Piece | None] = {move.origin: None, move.destination: placed}

    if move.kind == MoveKind.EN_PASSANT:
        victim_sq = en_passant_victim(move)
        captured = board[victim_sq]
        changes[victim_sq] = None
    elif move.kind in CASTLING_GEOMETRY:
        rook_from_col, rook_to_col, _ = CASTLING_GEOMETRY[move.kind]
        row = move.origin.row
        rook_from = Square(row, rook_from_col)
        changes[Square(row, rook_to_col)] = board[rook_from]
        changes[rook_from] = None

    return board.with_pieces(changes), captured


class MoveGenerator:
    """Generates moves for one board, castling state and en-passant target.

    The generator never mutates its inputs: legality is decided by building
    a hypothetical board for each candidate and probing the mover's king.
    """

    __slots__ = ("_board", "_castling", "_en_passant")

    def __init__(
        self,
        board: Board,
        castling: CastlingRights = CastlingRights.NONE,
        en_passant: Square | None = None,
    ) -> None:
        self._board = board
        self._castling = castling
        self._en_passant = en_passant

    @classmethod
    def for_position(cls, position: Position) -> MoveGenerator:
        return cls(position.board, position.castling, position.en_passant)

    # -- Public API ---------------------------------------------------------

    def legal_moves(
        self,
        sq: Square,
        color: Color,
        *,
        enforce_castling_safety: bool = True,
    ) -> list[Move]:
        """Strictly legal moves of the *color* piece standing on *sq*."""
        piece = self._board[sq]
        if color_of(piece) != color:
            return []

        legal: list[Move] = []
        for move in self.pseudo_legal_moves(sq):
            hypothetical, _ = relocate(self._board, move)
            if is_king_in_check(hypothetical, color):
                continue
            if (
                enforce_castling_safety
                and move.is_castle
                and not self._castling_path_is_safe(move, piece)
            ):
                continue
            legal.append(move)
        return legal

    def all_legal_moves(self, color: Color) -> list[Move]:
        """All strictly legal moves for *color*."""
        moves: list[Move] = []
        for sq in self._board.pieces(color):
            moves.extend(self.legal_moves(sq, color))
        return moves

    def has_legal_move(self, color: Color) -> bool:
        """Stop at the first piece of *color* with at least one legal move."""
        return any(self.legal_moves(sq, color) for sq in self._board.pieces(color))

    def pseudo_legal_moves(self, sq: Square) -> list[Move]:
        """Moves of the piece on *sq* by geometry alone (may leave own king
        in check)."""
        piece = self._board[sq]
        if piece is None:
            return []

        moves: list[Move] = []
        pt = piece.piece_type
        idx = sq.index
        if pt == PieceType.PAWN:
            self._gen_pawn(sq, piece, moves)
        elif pt == PieceType.KNIGHT:
            self._gen_steps(sq, piece, KNIGHT_TARGETS[idx], moves)
        elif pt == PieceType.BISHOP:
            self._gen_sliding(sq, piece, BISHOP_RAYS[idx], moves)
        elif pt == PieceType.ROOK:
            self._gen_sliding(sq, piece, ROOK_RAYS[idx], moves)
        elif pt == PieceType.QUEEN:
            self._gen_sliding(sq, piece, QUEEN_RAYS[idx], moves)
        else:
            self._gen_steps(sq, piece, KING_TARGETS[idx], moves)
            self._gen_castling(sq, piece.color, moves)
        return moves

    # -- Castling safety (private) -----------------------------------------

    def _castling_path_is_safe(self, move: Move, king: Piece) -> bool:
        opponent = king.color.opposite
        if is_attacked(self._board, move.origin, opponent):
            return False
        _, _, step = CASTLING_GEOMETRY[move.kind]
        passed = Square(move.origin.row, move.origin.col + step)
        stepped = self._board.with_pieces({move.origin: None, passed: king})
        return not is_attacked(stepped, passed, opponent)

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, pawn: Piece, moves: list[Move]) -> None:
        board = self._board
        color = pawn.color
        forward = color.forward
        row = sq.row + forward
        if not 0 <= row < 8:
            return

        one_step = Square(row, sq.col)
        if board.is_empty(one_step):
            moves.append(Move(sq, one_step))
            start_row = 6 if color == Color.WHITE else 1
            if sq.row == start_row:
                two_step = Square(sq.row + 2 * forward, sq.col)
                if board.is_empty(two_step):
                    moves.append(Move(sq, two_step, MoveKind.DOUBLE_PUSH))

        for col in (sq.col - 1, sq.col + 1):
            if not is_on_board(row, col):
                continue
            cap_sq = Square(row, col)
            target = board[cap_sq]
            if target is not None:
                if are_opponents(pawn, target):
                    moves.append(Move(sq, cap_sq))
            elif cap_sq == self._en_passant:
                victim = board[Square(sq.row, col)]
                if (
                    victim is not None
                    and victim.piece_type == PieceType.PAWN
                    and are_opponents(pawn, victim)
                ):
                    moves.append(Move(sq, cap_sq, MoveKind.EN_PASSANT))

    def _gen_steps(
        self,
        sq: Square,
        mover: Piece,
        targets: tuple[Square, ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None or are_opponents(mover, target):
                moves.append(Move(sq, to_sq))

    def _gen_sliding(
        self,
        sq: Square,
        mover: Piece,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq))
                    continue
                if are_opponents(mover, target):
                    moves.append(Move(sq, to_sq))
                break

    def _gen_castling(self, king_sq: Square, color: Color, moves: list[Move]) -> None:
        row = color.back_row
        if king_sq != Square(row, KING_HOME_COL):
            return

        board = self._board
        own_rook = Piece(color, PieceType.ROOK)

        if self._castling & CastlingRights.kingside(color):
            between = (Square(row, 5), Square(row, 6))
            if board[Square(row, 7)] == own_rook and all(
                board.is_empty(s) for s in between
            ):
                moves.append(Move(king_sq, Square(row, 6), MoveKind.CASTLE_KINGSIDE))

        if self._castling & CastlingRights.queenside(color):
            between = (Square(row, 1), Square(row, 2), Square(row, 3))
            if board[Square(row, 0)] == own_rook and all(
                board.is_empty(s) for s in between
            ):
                moves.append(Move(king_sq, Square(row, 2), MoveKind.CASTLE_QUEENSIDE))
