"""
Array-backed selector.

Stores candidates in an append-only list available as `self.individuals`.
Tournament and roulette selection build on it.
"""

import random
from typing import Any, Dict, List, Optional

from src.genelib.selection.base import Selector


class ArraySelector(Selector):
    """Selector that keeps every added individual in insertion order."""

    def __init__(self, settings: Optional[Dict[str, Any]] = None):
        super().__init__(settings)
        self.individuals: List[Any] = []

    def add(self, individual: Any) -> None:
        self.individuals.append(individual)

    def get_size(self) -> int:
        return len(self.individuals)

    def get_best(self) -> Optional[Any]:
        """Return the highest-fitness individual, or None if empty."""
        if not self.individuals:
            return None
        return max(self.individuals, key=lambda ind: ind.fitness)

    def select(self) -> Optional[Any]:
        """Uniform random selection."""
        if not self.individuals:
            return None
        return random.choice(self.individuals)
