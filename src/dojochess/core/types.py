"""Square value type and coordinate helpers.

Board layout (row-major, black at the top):
    row 0 = rank 8 (black back rank), row 7 = rank 1 (white back rank)
    col 0 = file a, ..., col 7 = file h

    a8=(0, 0) ... h8=(0, 7)
    ...
    a1=(7, 0) ... h1=(7, 7)
"""

from __future__ import annotations

from dataclasses import dataclass

from dojochess.core.errors import InvalidSquare

FILES = "abcdefgh"


@dataclass(frozen=True, slots=True, order=True)
class Square:
    """Immutable board coordinate."""

    row: int
    col: int

    def __post_init__(self) -> None:
        if not (0 <= self.row < 8 and 0 <= self.col < 8):
            raise InvalidSquare(f"Square out of bounds: ({self.row}, {self.col})")

    @property
    def index(self) -> int:
        """Flat index 0–63 used by :class:`~dojochess.core.board.Board`."""
        return self.row * 8 + self.col

    @property
    def file(self) -> str:
        return FILES[self.col]

    @property
    def rank(self) -> int:
        return 8 - self.row

    def offset(self, drow: int, dcol: int) -> Square | None:
        """Neighbouring square, or ``None`` when it falls off the board."""
        row = self.row + drow
        col = self.col + dcol
        if 0 <= row < 8 and 0 <= col < 8:
            return Square(row, col)
        return None

    def __str__(self) -> str:
        return square_name(self)


def is_on_board(row: int, col: int) -> bool:
    """Check whether a (row, col) pair lies on the board."""
    return 0 <= row < 8 and 0 <= col < 8


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. Square(7, 0) → 'a1'."""
    return f"{FILES[sq.col]}{8 - sq.row}"


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → Square(4, 4)."""
    if len(name) != 2 or name[0] not in FILES or name[1] not in "12345678":
        raise InvalidSquare(f"Invalid square name: {name!r}")
    return Square(8 - int(name[1]), FILES.index(name[0]))


ALL_SQUARES: tuple[Square, ...] = tuple(
    Square(row, col) for row in range(8) for col in range(8)
)


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = ALL_SQUARES[0:8]
A7, B7, C7, D7, E7, F7, G7, H7 = ALL_SQUARES[8:16]
A6, B6, C6, D6, E6, F6, G6, H6 = ALL_SQUARES[16:24]
A5, B5, C5, D5, E5, F5, G5, H5 = ALL_SQUARES[24:32]
A4, B4, C4, D4, E4, F4, G4, H4 = ALL_SQUARES[32:40]
A3, B3, C3, D3, E3, F3, G3, H3 = ALL_SQUARES[40:48]
A2, B2, C2, D2, E2, F2, G2, H2 = ALL_SQUARES[48:56]
A1, B1, C1, D1, E1, F1, G1, H1 = ALL_SQUARES[56:64]
