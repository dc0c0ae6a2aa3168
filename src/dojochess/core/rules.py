"""High-level chess rules: check, checkmate, stalemate."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dojochess.core.attacks import is_king_in_check
from dojochess.core.enums import GamePhase

if TYPE_CHECKING:
    from dojochess.core.position import Position


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    # Product policy: stalemate is the only draw. Repetition, fifty-move and
    # insufficient-material draws are not detected.

    @staticmethod
    def is_in_check(position: Position) -> bool:
        return is_king_in_check(position.board, position.side_to_move)

    @staticmethod
    def has_legal_move(position: Position) -> bool:
        return position.generator.has_legal_move(position.side_to_move)

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        return Rules.is_in_check(position) and not Rules.has_legal_move(position)

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        return not Rules.is_in_check(position) and not Rules.has_legal_move(position)

    @staticmethod
    def phase_for(position: Position) -> GamePhase:
        """Phase after a finalized half-move, for the new side to move."""
        if Rules.has_legal_move(position):
            return GamePhase.IN_PROGRESS
        if Rules.is_in_check(position):
            return GamePhase.CHECKMATE
        return GamePhase.STALEMATE
