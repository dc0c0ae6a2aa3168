"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from dojochess.game.session import GameSession

FOOLS_MATE_MOVES = ("f2f3", "e7e5", "g2g4", "d8h4")


@pytest.fixture
def session() -> GameSession:
    """A fresh game from the standard starting position."""
    return GameSession()


@pytest.fixture
def fools_mate() -> tuple[str, ...]:
    """Four half-moves ending in 2...Qh4 mate."""
    return FOOLS_MATE_MOVES


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    """Undo any logging.basicConfig call made by the CLI under test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)
