"""GameSession: the caller-side owner of one game.

Holds the current :class:`GameState`, the append-only notation record and
every snapshot reached so far.  Emits events via simple callbacks so a UI
or the CLI can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from dojochess.core.enums import GamePhase, GameResult, PieceType
from dojochess.core.errors import MoveRejected
from dojochess.core.move import Move
from dojochess.core.types import Square
from dojochess.game.state import (
    GameState,
    initial_state,
    legal_moves_from,
    resolve_promotion,
    result,
    try_move,
)

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[str, GameState], None]  # notation, new state
GameOverCallback = Callable[[GameResult], None]
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Session ──────────────────────────────────────────────────────────────────


class GameSession:
    """Drives a game through :mod:`dojochess.game.state` transitions.

    Rejected requests are logged and reported as ``False``; the session
    keeps its current snapshot.  The record is never rewritten, so there is
    no undo; callers that want to rewind can rebuild from :attr:`history`.
    """

    __slots__ = ("_state", "_record", "_history", "events")

    def __init__(self, fen: str | None = None) -> None:
        self.events = GameEvents()
        self._state = initial_state(fen)
        self._record: list[str] = []
        self._history: list[GameState] = [self._state]

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def record(self) -> tuple[str, ...]:
        """Notation of every completed half-move, in order."""
        return tuple(self._record)

    @property
    def history(self) -> tuple[GameState, ...]:
        """Every snapshot reached, starting with the initial one."""
        return tuple(self._history)

    @property
    def result(self) -> GameResult:
        return result(self._state)

    @property
    def ply_count(self) -> int:
        return len(self._record)

    # ── Commands ─────────────────────────────────────────────────────────

    def reset(self, fen: str | None = None) -> None:
        """Start over; the previous record and history are dropped."""
        self._state = initial_state(fen)
        self._record = []
        self._history = [self._state]
        _LOGGER.info("New game started")
        self._emit_phase(self._state.phase)

    def select(self, sq: Square) -> list[Move]:
        """Legal moves from *sq*, e.g. for highlighting."""
        return legal_moves_from(self._state, sq)

    def submit(
        self,
        origin: Square,
        destination: Square,
        promotion: PieceType | None = None,
    ) -> bool:
        try:
            new_state = try_move(self._state, origin, destination, promotion)
        except MoveRejected as exc:
            _LOGGER.debug("Rejected %s%s: %s", origin, destination, exc)
            return False
        self._advance(new_state)
        return True

    def promote(self, piece_type: PieceType) -> bool:
        try:
            new_state = resolve_promotion(self._state, piece_type)
        except MoveRejected as exc:
            _LOGGER.debug("Rejected promotion to %s: %s", piece_type.name, exc)
            return False
        self._advance(new_state)
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _advance(self, new_state: GameState) -> None:
        previous_phase = self._state.phase
        self._state = new_state
        self._history.append(new_state)

        if new_state.phase == GamePhase.AWAITING_PROMOTION:
            _LOGGER.debug("Awaiting promotion on %s", new_state.pending.square)  # type: ignore[union-attr]
        else:
            notation = new_state.last_notation or ""
            self._record.append(notation)
            _LOGGER.debug("Ply %d: %s", len(self._record), notation)
            self._emit_move(notation)

        if new_state.phase != previous_phase:
            self._emit_phase(new_state.phase)
        if new_state.is_terminal:
            _LOGGER.info(
                "Game over: %s (%s)",
                new_state.phase.name.lower(),
                self.result.name.lower(),
            )
            self._emit_game_over(self.result)

    def _emit_move(self, notation: str) -> None:
        for cb in self.events.on_move:
            cb(notation, self._state)

    def _emit_game_over(self, game_result: GameResult) -> None:
        for cb in self.events.on_game_over:
            cb(game_result)

    def _emit_phase(self, phase: GamePhase) -> None:
        for cb in self.events.on_phase_changed:
            cb(phase)
