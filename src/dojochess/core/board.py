"""Board - immutable piece placement on an 8x8 board."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from dojochess.core.enums import Color, PieceType
from dojochess.core.errors import InvariantViolation
from dojochess.core.piece import Piece
from dojochess.core.types import ALL_SQUARES, Square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Immutable 64-square board.

    Every change goes through :meth:`with_pieces`, which returns a new board
    and leaves the receiver untouched, so a board can be shared freely
    between game snapshots.
    """

    __slots__ = ("_cells", "_kings")

    def __init__(self, placement: Mapping[Square, Piece] | None = None) -> None:
        cells: list[Piece | None] = [None] * 64
        if placement:
            for sq, piece in placement.items():
                cells[sq.index] = piece
        self._cells: tuple[Piece | None, ...] = tuple(cells)
        # [color] -> king square cache (None if king missing).
        self._kings: tuple[Square | None, Square | None] = self._find_kings(cells)

    @staticmethod
    def _find_kings(
        cells: Iterable[Piece | None],
    ) -> tuple[Square | None, Square | None]:
        kings: list[Square | None] = [None, None]
        for idx, piece in enumerate(cells):
            if piece is not None and piece.piece_type == PieceType.KING:
                kings[int(piece.color)] = ALL_SQUARES[idx]
        return (kings[0], kings[1])

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._cells[sq.index]

    def piece_at(self, sq: Square) -> Piece | None:
        return self._cells[sq.index]

    def is_empty(self, sq: Square) -> bool:
        return self._cells[sq.index] is None

    # -- Query helpers ------------------------------------------------------

    def items(self) -> Iterator[tuple[Square, Piece]]:
        """Occupied squares with their pieces, a8 first, h1 last."""
        for idx, piece in enumerate(self._cells):
            if piece is not None:
                yield ALL_SQUARES[idx], piece

    def pieces(self, color: Color) -> list[Square]:
        """All squares occupied by *color*."""
        return [sq for sq, piece in self.items() if piece.color == color]

    def count(self, color: Color, piece_type: PieceType) -> int:
        return sum(
            1
            for _, piece in self.items()
            if piece.color == color and piece.piece_type == piece_type
        )

    def king_square(self, color: Color) -> Square:
        """Return the single king square for *color*."""
        sq = self._kings[int(color)]
        if sq is None:
            raise InvariantViolation(f"No {color.name} king on board")
        return sq

    # -- Copy-on-write ------------------------------------------------------

    def with_pieces(self, changes: Mapping[Square, Piece | None]) -> Board:
        """New board with *changes* applied (``None`` clears a square)."""
        cells = list(self._cells)
        kings = list(self._kings)
        for sq, piece in changes.items():
            old = cells[sq.index]
            if (
                old is not None
                and old.piece_type == PieceType.KING
                and kings[int(old.color)] == sq
            ):
                kings[int(old.color)] = None
            cells[sq.index] = piece
            if piece is not None and piece.piece_type == PieceType.KING:
                kings[int(piece.color)] = sq

        board = Board.__new__(Board)
        board._cells = tuple(cells)
        board._kings = (kings[0], kings[1])
        return board

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        placement: dict[Square, Piece] = {}
        for col, pt in enumerate(_BACK_RANK):
            placement[Square(0, col)] = Piece(Color.BLACK, pt)
            placement[Square(1, col)] = Piece(Color.BLACK, PieceType.PAWN)
            placement[Square(6, col)] = Piece(Color.WHITE, PieceType.PAWN)
            placement[Square(7, col)] = Piece(Color.WHITE, pt)
        return cls(placement)

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __hash__(self) -> int:
        return hash(self._cells)

    def __repr__(self) -> str:
        return self.render()

    def render(self, *, unicode: bool = False) -> str:
        """Text diagram with rank 8 at the top."""
        rows: list[str] = []
        for row in range(8):
            cells = []
            for col in range(8):
                p = self._cells[row * 8 + col]
                if p is None:
                    cells.append(".")
                else:
                    cells.append(p.symbol if unicode else str(p))
            rows.append(f"{8 - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
