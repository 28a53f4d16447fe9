"""
Fitness-proportionate (roulette) selection.
"""

import random
from typing import Any, Dict, Optional

from src.genelib.selection.array import ArraySelector


class RouletteSelector(ArraySelector):
    """Selects individuals with probability proportional to their fitness."""

    def __init__(self, settings: Optional[Dict[str, Any]] = None):
        super().__init__(settings)
        self.fitness_total = 0.0

    def add(self, individual: Any) -> None:
        super().add(individual)
        self.fitness_total += individual.fitness

    def spin(self) -> float:
        """Return a uniform value in [0, fitness_total)."""
        return self.fitness_total * random.random()

    def select(self) -> Optional[Any]:
        """Map a spin to an individual, walking them in insertion order."""
        if not self.individuals or self.fitness_total <= 0:
            return None
        spin_result = self.spin()
        for individual in self.individuals:
            fitness = individual.fitness
            if spin_result < fitness:
                return individual
            spin_result -= fitness
        # float residue from the subtraction can skip past the last individual
        return self.individuals[-1]
