"""Dojo Chess, a standard chess rules engine."""

__version__ = "0.1.0"
