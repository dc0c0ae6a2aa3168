"""Game management layer: state machine snapshots and the session owner.

Quick start::

    from dojochess.core import parse_square
    from dojochess.game import initial_state, try_move

    state = initial_state()
    state = try_move(state, parse_square("e2"), parse_square("e4"))
    print(state.last_notation)  # e4
"""

from dojochess.game.session import GameEvents, GameSession
from dojochess.game.state import (
    DRAW,
    GameState,
    PendingPromotion,
    initial_state,
    is_terminal,
    king_in_check,
    legal_moves_from,
    piece_at,
    resolve_promotion,
    result,
    try_move,
    winner,
)

__all__ = [
    # State machine
    "DRAW",
    "GameState",
    "PendingPromotion",
    "initial_state",
    "is_terminal",
    "king_in_check",
    "legal_moves_from",
    "piece_at",
    "resolve_promotion",
    "result",
    "try_move",
    "winner",
    # Session
    "GameEvents",
    "GameSession",
]
