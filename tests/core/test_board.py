"""Tests for Square, Piece and Board."""

import pytest

from dojochess.core.board import Board
from dojochess.core.enums import Color, PieceType
from dojochess.core.errors import InvalidSquare, InvariantViolation
from dojochess.core.piece import Piece, are_opponents, color_of
from dojochess.core.types import (
    A1, B1, C1, D1, E1, F1, G1, H1,
    A8, B8, C8, D8, E8, F8, G8, H8,
    E2, E4,
    Square,
    parse_square,
    square_name,
)


class TestSquare:
    def test_corners(self) -> None:
        assert parse_square("a8") == Square(0, 0)
        assert parse_square("h1") == Square(7, 7)

    def test_name_round_trip(self) -> None:
        for name in ("a1", "e4", "h8", "c6"):
            assert square_name(parse_square(name)) == name

    def test_named_constants(self) -> None:
        assert E4 == parse_square("e4")
        assert E1 == Square(7, 4)

    @pytest.mark.parametrize("row,col", [(-1, 0), (8, 0), (0, 8), (3, -2)])
    def test_out_of_bounds_rejected(self, row: int, col: int) -> None:
        with pytest.raises(InvalidSquare):
            Square(row, col)

    @pytest.mark.parametrize("name", ["i1", "a9", "e", "e44", ""])
    def test_bad_names_rejected(self, name: str) -> None:
        with pytest.raises(InvalidSquare):
            parse_square(name)

    def test_invalid_square_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            Square(9, 9)

    def test_offset(self) -> None:
        assert E2.offset(-2, 0) == E4
        assert A1.offset(1, 0) is None


class TestPiece:
    def test_fen_char(self) -> None:
        assert str(Piece(Color.WHITE, PieceType.KNIGHT)) == "N"
        assert Piece.from_char("q") == Piece(Color.BLACK, PieceType.QUEEN)

    def test_bad_char(self) -> None:
        with pytest.raises(ValueError):
            Piece.from_char("x")

    def test_letter(self) -> None:
        assert Piece(Color.BLACK, PieceType.ROOK).letter == "R"
        assert Piece(Color.WHITE, PieceType.PAWN).letter == ""

    def test_color_of(self) -> None:
        assert color_of(Piece(Color.BLACK, PieceType.PAWN)) == Color.BLACK
        assert color_of(None) is None

    def test_are_opponents(self) -> None:
        white = Piece(Color.WHITE, PieceType.PAWN)
        black = Piece(Color.BLACK, PieceType.KING)
        assert are_opponents(white, black)
        assert not are_opponents(white, Piece(Color.WHITE, PieceType.ROOK))
        assert not are_opponents(white, None)
        assert not are_opponents(None, None)


class TestBoardInitial:
    def test_white_king_position(self) -> None:
        board = Board.initial()
        assert board[E1] == Piece(Color.WHITE, PieceType.KING)

    def test_black_king_position(self) -> None:
        board = Board.initial()
        assert board[E8] == Piece(Color.BLACK, PieceType.KING)

    def test_white_back_rank(self) -> None:
        board = Board.initial()
        expected = [
            (A1, PieceType.ROOK), (B1, PieceType.KNIGHT), (C1, PieceType.BISHOP),
            (D1, PieceType.QUEEN), (E1, PieceType.KING), (F1, PieceType.BISHOP),
            (G1, PieceType.KNIGHT), (H1, PieceType.ROOK),
        ]
        for sq, pt in expected:
            assert board[sq] == Piece(Color.WHITE, pt), f"Mismatch at square {sq}"

    def test_black_back_rank(self) -> None:
        board = Board.initial()
        expected = [
            (A8, PieceType.ROOK), (B8, PieceType.KNIGHT), (C8, PieceType.BISHOP),
            (D8, PieceType.QUEEN), (E8, PieceType.KING), (F8, PieceType.BISHOP),
            (G8, PieceType.KNIGHT), (H8, PieceType.ROOK),
        ]
        for sq, pt in expected:
            assert board[sq] == Piece(Color.BLACK, pt), f"Mismatch at square {sq}"

    def test_pawns(self) -> None:
        board = Board.initial()
        assert board.count(Color.WHITE, PieceType.PAWN) == 8
        assert board.count(Color.BLACK, PieceType.PAWN) == 8
        assert all(sq.row == 6 for sq, p in board.items() if p == Piece(Color.WHITE, PieceType.PAWN))

    def test_enumeration(self) -> None:
        board = Board.initial()
        assert len(list(board.items())) == 32
        assert len(board.pieces(Color.WHITE)) == 16

    def test_empty_middle(self) -> None:
        board = Board.initial()
        for row in range(2, 6):
            for col in range(8):
                assert board.piece_at(Square(row, col)) is None


class TestBoardCopyOnWrite:
    def test_with_pieces_returns_new_board(self) -> None:
        board = Board.initial()
        moved = board.with_pieces({E2: None, E4: Piece(Color.WHITE, PieceType.PAWN)})
        assert board[E2] == Piece(Color.WHITE, PieceType.PAWN)
        assert board.is_empty(E4)
        assert moved.is_empty(E2)
        assert moved[E4] == Piece(Color.WHITE, PieceType.PAWN)

    def test_equality_and_hash(self) -> None:
        assert Board.initial() == Board.initial()
        assert hash(Board.initial()) == hash(Board.initial())

    def test_king_square_follows_king(self) -> None:
        board = Board.initial()
        king = board[E1]
        moved = board.with_pieces({E1: None, E2: king})
        assert moved.king_square(Color.WHITE) == E2
        assert board.king_square(Color.WHITE) == E1

    def test_missing_king_is_invariant_violation(self) -> None:
        board = Board({E8: Piece(Color.BLACK, PieceType.KING)})
        with pytest.raises(InvariantViolation):
            board.king_square(Color.WHITE)

    def test_render(self) -> None:
        text = repr(Board.initial())
        lines = text.splitlines()
        assert lines[0] == "8 r n b q k b n r"
        assert lines[-1] == "  a b c d e f g h"
        assert "♔" in Board.initial().render(unicode=True)
