"""Computer opponent: move selectors."""

from chesslite.engine.greedy import GreedySelector
from chesslite.engine.search import IMoveSelector, Selection, SelectionTier

__all__ = [
    "GreedySelector",
    "IMoveSelector",
    "Selection",
    "SelectionTier",
]
