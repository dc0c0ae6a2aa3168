"""Game state machine: immutable snapshots and the transitions between them.

Transitions::

    IN_PROGRESS ──move──────────────▶ IN_PROGRESS | CHECKMATE | STALEMATE
    IN_PROGRESS ──pawn to last rank─▶ AWAITING_PROMOTION
    AWAITING_PROMOTION ──kind───────▶ IN_PROGRESS | CHECKMATE | STALEMATE

CHECKMATE and STALEMATE are final.  Every function here takes a
:class:`GameState` and returns a new one; rejected requests raise a
:class:`~dojochess.core.errors.MoveRejected` before anything is built.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from dojochess.core.board import Board
from dojochess.core.enums import Color, GamePhase, GameResult, PieceType
from dojochess.core.errors import (
    IllegalMove,
    InvalidPromotion,
    StateNotAccepting,
    WrongTurn,
)
from dojochess.core.fen import position_from_fen
from dojochess.core.move import PROMOTION_TYPES, Move
from dojochess.core.notation import promotion_suffix, with_check
from dojochess.core.piece import Piece
from dojochess.core.position import Position
from dojochess.core.rules import Rules
from dojochess.core.types import Square

DRAW: Literal["draw"] = "draw"


@dataclass(frozen=True, slots=True)
class PendingPromotion:
    """A pawn parked on the last rank, waiting for its new kind."""

    square: Square
    color: Color
    notation: str


@dataclass(frozen=True, slots=True)
class GameState:
    """One immutable snapshot of a game."""

    position: Position
    phase: GamePhase = GamePhase.IN_PROGRESS
    pending: PendingPromotion | None = None
    last_notation: str | None = None

    @property
    def board(self) -> Board:
        return self.position.board

    @property
    def side_to_move(self) -> Color:
        """Side whose input is awaited (the promoting side while pending)."""
        if self.pending is not None:
            return self.pending.color
        return self.position.side_to_move

    @property
    def is_terminal(self) -> bool:
        return self.phase.is_terminal


# ── Construction ─────────────────────────────────────────────────────────────


def initial_state(fen: str | None = None) -> GameState:
    """Standard starting position, or the position described by *fen*."""
    position = Position.initial() if fen is None else position_from_fen(fen)
    return GameState(position=position, phase=Rules.phase_for(position))


# ── Queries ──────────────────────────────────────────────────────────────────


def piece_at(source: GameState | Board, sq: Square) -> Piece | None:
    """Occupant of *sq* on a game snapshot or a bare board."""
    board = source.board if isinstance(source, GameState) else source
    return board[sq]


def legal_moves_from(state: GameState, sq: Square) -> list[Move]:
    """Legal moves of the piece on *sq*; empty unless a move is awaited."""
    if state.phase != GamePhase.IN_PROGRESS:
        return []
    return state.position.legal_moves_from(sq)


def king_in_check(state: GameState) -> Square | None:
    """Square of the side-to-move king when it is in check."""
    if state.pending is not None or not Rules.is_in_check(state.position):
        return None
    return state.position.board.king_square(state.position.side_to_move)


def is_terminal(state: GameState) -> bool:
    return state.phase.is_terminal


def winner(state: GameState) -> Color | Literal["draw"] | None:
    """Winning colour, ``"draw"`` after stalemate, ``None`` while playing."""
    if state.phase == GamePhase.CHECKMATE:
        return state.position.side_to_move.opposite
    if state.phase == GamePhase.STALEMATE:
        return DRAW
    return None


def result(state: GameState) -> GameResult:
    won = winner(state)
    if won is None:
        return GameResult.IN_PROGRESS
    if won == DRAW:
        return GameResult.DRAW
    return GameResult.WHITE_WINS if won == Color.WHITE else GameResult.BLACK_WINS


# ── Transitions ──────────────────────────────────────────────────────────────


def try_move(
    state: GameState,
    origin: Square,
    destination: Square,
    promotion: PieceType | None = None,
) -> GameState:
    """Play *origin* → *destination* for the side to move.

    A pawn reaching the last rank without *promotion* yields an
    ``AWAITING_PROMOTION`` state; :func:`resolve_promotion` completes it.
    """
    if state.phase != GamePhase.IN_PROGRESS:
        raise StateNotAccepting(f"Game is {state.phase.name.lower()}")

    position = state.position
    piece = position.board[origin]
    if piece is None:
        raise IllegalMove(f"No piece on {origin}")
    if piece.color != position.side_to_move:
        raise WrongTurn(f"It is {position.side_to_move}'s turn, not {piece.color}'s")

    move = next(
        (m for m in position.legal_moves_from(origin) if m.destination == destination),
        None,
    )
    if move is None:
        raise IllegalMove(f"{origin}{destination} is not a legal move")

    promotes = (
        piece.piece_type == PieceType.PAWN
        and destination.row == piece.color.opposite.back_row
    )
    if promotes and promotion is not None:
        if promotion not in PROMOTION_TYPES:
            raise InvalidPromotion(f"Cannot promote to {promotion.name.lower()}")
        move = move.with_promotion(promotion)

    outcome = position.apply(move)
    if outcome.needs_promotion:
        return GameState(
            position=outcome.position,
            phase=GamePhase.AWAITING_PROMOTION,
            pending=PendingPromotion(destination, piece.color, outcome.notation),
            last_notation=state.last_notation,
        )
    return _finalize(outcome.position, outcome.notation)


def resolve_promotion(state: GameState, piece_type: PieceType) -> GameState:
    """Place the chosen piece on the pending square and finish the half-move."""
    pending = state.pending
    if state.phase != GamePhase.AWAITING_PROMOTION or pending is None:
        raise InvalidPromotion("No promotion is pending")
    position = state.position.promote(pending.square, piece_type)
    return _finalize(position, pending.notation + promotion_suffix(piece_type))


def _finalize(position: Position, notation: str) -> GameState:
    return GameState(
        position=position,
        phase=Rules.phase_for(position),
        last_notation=with_check(notation, Rules.is_in_check(position)),
    )
