"""
Registry mapping selector keys (the `selector` run setting) to classes.
"""

from typing import Dict, Type

from src.genelib.core.exceptions import ConfigurationError
from src.genelib.selection.array import ArraySelector
from src.genelib.selection.base import Selector
from src.genelib.selection.roulette import RouletteSelector
from src.genelib.selection.tournament import TournamentSelector


class SelectorRegistry:
    """Stores registered selector classes by key."""

    def __init__(self):
        self.classes: Dict[str, Type[Selector]] = {}

    def register(self, key: str, selector_class: Type[Selector]) -> None:
        """Register a selector class. The key must not already be registered."""
        if key in self.classes:
            raise ConfigurationError(
                f"Selector key '{key}' is already registered.",
                details={"key": key}
            )
        self.classes[key] = selector_class

    def get(self, key: str) -> Type[Selector]:
        """Return the selector class registered for a key."""
        try:
            return self.classes[key]
        except KeyError:
            raise ConfigurationError(
                f"Selector key '{key}' is not registered.",
                details={"key": key, "registered": sorted(self.classes)}
            ) from None

    def clear(self) -> None:
        self.classes = {}


def create_default_registry() -> SelectorRegistry:
    """Create a registry holding the built-in selectors."""
    registry = SelectorRegistry()
    registry.register("tournament", TournamentSelector)
    registry.register("roulette", RouletteSelector)
    registry.register("array", ArraySelector)
    return registry


default_registry = create_default_registry()


def register_selector(key: str, selector_class: Type[Selector]) -> None:
    """Register a selector class for use with the `selector` run setting."""
    default_registry.register(key, selector_class)
