"""
Selection strategies for the genelib evolution engine.
"""

from src.genelib.selection.base import Selector
from src.genelib.selection.array import ArraySelector
from src.genelib.selection.tournament import TournamentSelector, TournamentSettings
from src.genelib.selection.roulette import RouletteSelector
from src.genelib.selection.registry import (
    SelectorRegistry,
    create_default_registry,
    default_registry,
    register_selector
)

__all__ = [
    "Selector",
    "ArraySelector",
    "TournamentSelector",
    "TournamentSettings",
    "RouletteSelector",
    "SelectorRegistry",
    "create_default_registry",
    "default_registry",
    "register_selector"
]
