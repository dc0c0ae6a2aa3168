"""Tests for Position.apply / Position.promote and move notation."""

import pytest

from dojochess.core.enums import CastlingRights, Color, MoveKind, PieceType
from dojochess.core.errors import IllegalMove, InvalidPromotion
from dojochess.core.fen import STARTING_FEN, position_from_fen, position_to_fen
from dojochess.core.move import Move
from dojochess.core.notation import describe_move, with_check
from dojochess.core.piece import Piece
from dojochess.core.position import Position
from dojochess.core.types import (
    A1, A8, D5, D6, D7, E1, E2, E4, E5, E7, E8, F1, G1, H1,
    parse_square,
)

CASTLING_FEN = "r3k2r/pppppppp/8/8/8/8/PPPPPPPP/R3K2R w KQkq - 0 1"


class TestApply:
    def test_side_switches(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        after = pos.apply(Move(E2, E4, MoveKind.DOUBLE_PUSH)).position
        assert after.side_to_move == Color.BLACK

    def test_input_is_not_mutated(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        pos.apply(Move(E2, E4, MoveKind.DOUBLE_PUSH))
        assert position_to_fen(pos) == STARTING_FEN

    def test_piece_relocated(self) -> None:
        after = Position.initial().apply(Move(E2, E4, MoveKind.DOUBLE_PUSH)).position
        assert after.board.is_empty(E2)
        assert after.board[E4] == Piece(Color.WHITE, PieceType.PAWN)

    def test_en_passant_set(self) -> None:
        after = Position.initial().apply(Move(E2, E4, MoveKind.DOUBLE_PUSH)).position
        assert after.en_passant == parse_square("e3")

    def test_en_passant_replaced(self) -> None:
        pos = Position.initial()
        pos = pos.apply(Move(E2, E4, MoveKind.DOUBLE_PUSH)).position
        pos = pos.apply(Move(D7, D5, MoveKind.DOUBLE_PUSH)).position
        assert pos.en_passant == D6  # new ep, old cleared

    def test_en_passant_cleared_by_any_move(self) -> None:
        pos = Position.initial().apply(Move(E2, E4, MoveKind.DOUBLE_PUSH)).position
        pos = pos.apply(Move(parse_square("g8"), parse_square("f6"))).position
        assert pos.en_passant is None

    def test_en_passant_capture_removes_pawn(self) -> None:
        pos = position_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 2")
        result = pos.apply(Move(E5, D6, MoveKind.EN_PASSANT))
        assert result.captured == Piece(Color.BLACK, PieceType.PAWN)
        assert result.position.board.is_empty(D5)
        assert result.position.board.is_empty(E5)
        assert result.position.board[D6] == Piece(Color.WHITE, PieceType.PAWN)
        assert result.notation == "exd6 e.p."

    def test_capture_reported(self) -> None:
        fen = "rnbqkbnr/ppp1pppp/8/3p4/4P3/8/PPPP1PPP/RNBQKBNR w KQkq d6 0 2"
        result = position_from_fen(fen).apply(Move(E4, D5))
        assert result.captured == Piece(Color.BLACK, PieceType.PAWN)
        assert result.position.board[D5] == Piece(Color.WHITE, PieceType.PAWN)
        assert result.notation == "exd5"

    def test_empty_origin_rejected(self) -> None:
        with pytest.raises(IllegalMove):
            Position.initial().apply(Move(E4, E5))

    def test_clocks(self) -> None:
        pos = Position.initial()
        pos = pos.apply(Move(G1, parse_square("f3"))).position
        assert pos.halfmove_clock == 1
        assert pos.fullmove_number == 1
        pos = pos.apply(Move(E7, E5, MoveKind.DOUBLE_PUSH)).position
        assert pos.halfmove_clock == 0
        assert pos.fullmove_number == 2


class TestCastlingApply:
    def test_kingside_relocates_rook(self) -> None:
        result = position_from_fen(CASTLING_FEN).apply(Move(E1, G1, MoveKind.CASTLE_KINGSIDE))
        board = result.position.board
        assert board[G1] == Piece(Color.WHITE, PieceType.KING)
        assert board[F1] == Piece(Color.WHITE, PieceType.ROOK)
        assert board.is_empty(H1)
        assert board.is_empty(E1)
        assert result.notation == "O-O"

    def test_queenside_relocates_rook(self) -> None:
        result = position_from_fen(CASTLING_FEN).apply(
            Move(E1, parse_square("c1"), MoveKind.CASTLE_QUEENSIDE)
        )
        board = result.position.board
        assert board[parse_square("c1")] == Piece(Color.WHITE, PieceType.KING)
        assert board[parse_square("d1")] == Piece(Color.WHITE, PieceType.ROOK)
        assert board.is_empty(A1)
        assert result.notation == "O-O-O"

    def test_castling_clears_own_rights(self) -> None:
        after = position_from_fen(CASTLING_FEN).apply(
            Move(E1, G1, MoveKind.CASTLE_KINGSIDE)
        ).position
        assert not (after.castling & CastlingRights.WHITE_BOTH)
        assert after.castling & CastlingRights.BLACK_BOTH == CastlingRights.BLACK_BOTH

    def test_king_move_removes_rights(self) -> None:
        after = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1").apply(
            Move(E1, E2)
        ).position
        assert not (after.castling & CastlingRights.WHITE_BOTH)

    def test_rook_move_removes_one_right(self) -> None:
        after = position_from_fen(CASTLING_FEN).apply(
            Move(A1, parse_square("b1"))
        ).position
        assert not (after.castling & CastlingRights.WHITE_QUEENSIDE)
        assert after.castling & CastlingRights.WHITE_KINGSIDE

    def test_capturing_rook_removes_enemy_right(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        result = pos.apply(Move(A1, A8))
        assert not (result.position.castling & CastlingRights.WHITE_QUEENSIDE)
        assert not (result.position.castling & CastlingRights.BLACK_QUEENSIDE)
        assert result.position.castling & CastlingRights.BLACK_KINGSIDE
        assert result.notation == "Rxa8"

    def test_rights_are_never_restored(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        pos = pos.apply(Move(E1, E2)).position
        pos = pos.apply(Move(E8, E7)).position
        pos = pos.apply(Move(E2, E1)).position
        assert pos.castling == CastlingRights.NONE


class TestPromotion:
    def test_pawn_on_last_rank_needs_choice(self) -> None:
        pos = position_from_fen("7k/4P3/8/8/8/8/8/4K3 w - - 0 1")
        result = pos.apply(Move(E7, E8))
        assert result.needs_promotion
        assert result.position.board[E8] == Piece(Color.WHITE, PieceType.PAWN)
        assert result.notation == "e8"

    def test_explicit_choice(self) -> None:
        pos = position_from_fen("7k/4P3/8/8/8/8/8/4K3 w - - 0 1")
        result = pos.apply(Move(E7, E8, promotion=PieceType.KNIGHT))
        assert not result.needs_promotion
        assert result.position.board[E8] == Piece(Color.WHITE, PieceType.KNIGHT)
        assert result.notation == "e8=N"

    def test_promote_places_piece(self) -> None:
        pos = position_from_fen("7k/4P3/8/8/8/8/8/4K3 w - - 0 1")
        parked = pos.apply(Move(E7, E8)).position
        promoted = parked.promote(E8, PieceType.QUEEN)
        assert promoted.board[E8] == Piece(Color.WHITE, PieceType.QUEEN)
        assert parked.board[E8] == Piece(Color.WHITE, PieceType.PAWN)

    @pytest.mark.parametrize("piece_type", [PieceType.KING, PieceType.PAWN])
    def test_promote_rejects_king_and_pawn(self, piece_type: PieceType) -> None:
        pos = position_from_fen("7k/4P3/8/8/8/8/8/4K3 w - - 0 1")
        parked = pos.apply(Move(E7, E8)).position
        with pytest.raises(InvalidPromotion):
            parked.promote(E8, piece_type)

    def test_promote_requires_parked_pawn(self) -> None:
        with pytest.raises(InvalidPromotion):
            Position.initial().promote(E2, PieceType.QUEEN)

    def test_black_capture_promotion_notation(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/3p4/2R1K3 b - - 0 1")
        result = pos.apply(Move(parse_square("d2"), parse_square("c1"), promotion=PieceType.QUEEN))
        assert result.notation == "dxc1=Q"
        assert result.captured == Piece(Color.WHITE, PieceType.ROOK)


class TestNotation:
    def test_piece_move(self) -> None:
        assert describe_move(Position.initial().board, Move(G1, parse_square("f3"))) == "Nf3"

    def test_pawn_push(self) -> None:
        move = Move(E2, E4, MoveKind.DOUBLE_PUSH)
        assert describe_move(Position.initial().board, move) == "e4"

    def test_piece_capture(self) -> None:
        pos = position_from_fen("4k3/8/8/3p4/8/8/8/3QK3 w - - 0 1")
        assert describe_move(pos.board, Move(parse_square("d1"), D5)) == "Qxd5"

    def test_check_suffix(self) -> None:
        assert with_check("Qh4", True) == "Qh4+"
        assert with_check("Qh4", False) == "Qh4"
