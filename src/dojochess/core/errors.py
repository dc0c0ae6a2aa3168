"""Exception hierarchy for the rules engine.

Rejections (:class:`MoveRejected` and its subclasses) are recoverable: they
are raised before any new state is built, so the caller keeps its prior
snapshot and may retry.  :class:`InvariantViolation` signals a bug in the
engine itself and is intentionally *not* a :class:`ChessError`.
"""

from __future__ import annotations


class ChessError(Exception):
    """Base class for every user-facing engine error."""


class InvalidSquare(ChessError, ValueError):
    """Coordinates outside the 8x8 board, or a malformed square name."""


class InvalidFen(ChessError, ValueError):
    """Malformed FEN setup string."""


class MoveRejected(ChessError):
    """A move request that the current state cannot accept."""


class IllegalMove(MoveRejected):
    """Destination is not among the legal moves of the origin square."""


class WrongTurn(MoveRejected):
    """The origin square holds a piece of the side not to move."""


class StateNotAccepting(MoveRejected):
    """A move was attempted while awaiting promotion or after game end."""


class InvalidPromotion(MoveRejected):
    """Promotion kind is a king or pawn, or no promotion is pending."""


class InvariantViolation(RuntimeError):
    """Internal fault such as a board without a king."""
