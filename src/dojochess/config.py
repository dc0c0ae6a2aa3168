"""Command-line settings."""

from __future__ import annotations

import argparse
import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass

from dojochess.core.fen import STARTING_FEN

LOG_LEVEL_ENV = "DOJOCHESS_LOG_LEVEL"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class CliSettings:
    """All user-configurable settings of the terminal front-end."""

    start_fen: str = STARTING_FEN
    use_unicode_symbols: bool = False
    show_legal_moves: bool = True
    log_level: str = "WARNING"

    @classmethod
    def from_args(cls, argv: Sequence[str] | None = None) -> CliSettings:
        default_level = os.environ.get(LOG_LEVEL_ENV, cls.log_level).upper()
        if default_level not in _LOG_LEVELS:
            default_level = cls.log_level

        parser = argparse.ArgumentParser(
            prog="dojochess",
            description="Play a game of chess in the terminal.",
        )
        parser.add_argument(
            "--fen",
            default=STARTING_FEN,
            help="start from this FEN position instead of the initial setup",
        )
        parser.add_argument(
            "--unicode",
            action="store_true",
            help="draw pieces with Unicode chess symbols",
        )
        parser.add_argument(
            "--no-hints",
            action="store_true",
            help="do not list legal destinations after an illegal move",
        )
        parser.add_argument(
            "--log-level",
            default=default_level,
            type=str.upper,
            choices=_LOG_LEVELS,
            help=f"logging verbosity (default from ${LOG_LEVEL_ENV}, else WARNING)",
        )
        args = parser.parse_args(argv)
        return cls(
            start_fen=args.fen,
            use_unicode_symbols=args.unicode,
            show_legal_moves=not args.no_hints,
            log_level=args.log_level,
        )

    def configure_logging(self) -> None:
        logging.basicConfig(
            level=getattr(logging, self.log_level),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
