"""Chesslite — a reduced-rules chess engine with a greedy computer opponent."""

__version__ = "0.1.0"
