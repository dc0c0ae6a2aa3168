"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass, replace

from dojochess.core.enums import MoveKind, PieceType
from dojochess.core.types import Square, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single candidate move.

    ``promotion`` is never filled in by the generator; the caller supplies
    it when a pawn reaches the last rank.
    """

    origin: Square
    destination: Square
    kind: MoveKind = MoveKind.NORMAL
    promotion: PieceType | None = None

    @property
    def is_castle(self) -> bool:
        return self.kind in (MoveKind.CASTLE_KINGSIDE, MoveKind.CASTLE_QUEENSIDE)

    @property
    def is_en_passant(self) -> bool:
        return self.kind == MoveKind.EN_PASSANT

    @property
    def is_double_push(self) -> bool:
        return self.kind == MoveKind.DOUBLE_PUSH

    def with_promotion(self, piece_type: PieceType) -> Move:
        return replace(self, promotion=piece_type)

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.origin)}{square_name(self.destination)}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base
