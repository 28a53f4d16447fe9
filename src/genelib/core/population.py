"""
Population Management for genelib.

A population is an immutable-by-convention list of individuals for one
generation. Every transformation (fitness scoring, mutation, loading into a
selector) runs through the matching stage pool and either returns the same
population or a new one.
"""

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import numpy as np

from src.genelib.core.concurrency import StagePool
from src.genelib.core.individual import Individual
from src.genelib.core.results import resolve_result

if TYPE_CHECKING:
    from src.genelib.core.config import EvolutionSettings


class Population:
    """
    Manages the individuals of a single generation.

    Args:
        individuals: Members of the generation
        settings: Run settings
    """

    def __init__(self, individuals: Optional[List[Individual]] = None, settings: Optional["EvolutionSettings"] = None):
        self.individuals: List[Individual] = list(individuals or [])
        self.settings = settings

    @classmethod
    async def create(cls, settings: "EvolutionSettings") -> "Population":
        """Create an initial generation of `generation_size` random individuals."""
        pool = StagePool.for_stage(settings, "create")
        individuals = await pool.times(
            settings.generation_size,
            lambda: Individual.create(settings.create_chromosome, settings.create_args, settings)
        )
        return cls(individuals, settings)

    def __len__(self) -> int:
        return len(self.individuals)

    def __iter__(self):
        return iter(self.individuals)

    def get_best(self) -> Optional[Individual]:
        """Return the highest-fitness individual, or None if the population is empty."""
        if not self.individuals:
            return None
        return max(self.individuals, key=lambda ind: ind.fitness)

    async def set_fitnesses(self) -> "Population":
        """Score every individual that has no cached fitness yet."""
        pool = StagePool.for_stage(self.settings, "get_fitness")
        await pool.map(lambda ind: ind.set_fitness(), self.individuals)
        return self

    async def mutate(self) -> "Population":
        """
        Mutate every individual at the configured rate.

        Returns:
            This population unchanged when the mutation rate is zero, otherwise
            a new population of mutants in the same order
        """
        rate = self.settings.mutation_rate
        if rate == 0:
            return self
        pool = StagePool.for_stage(self.settings, "mutate")
        mutants = await pool.map(lambda ind: ind.mutate(rate), self.individuals)
        return Population(mutants, self.settings)

    async def load_selector(self, selector: Any) -> Any:
        """Add every individual to `selector` and return it."""
        pool = StagePool.for_stage(self.settings, "add")

        async def add(individual: Individual) -> None:
            await resolve_result(self.settings, "add", selector.add(individual))

        await pool.map(add, self.individuals)
        return selector

    def calculate_statistics(self) -> Dict[str, Any]:
        """Calculate fitness statistics over the scored individuals."""
        fitnesses = np.array(
            [ind.fitness for ind in self.individuals if ind.has_fitness],
            dtype=float
        )

        if fitnesses.size == 0:
            return {"size": len(self.individuals)}

        # a solved run may carry infinite fitness, which makes the spread nan
        with np.errstate(invalid="ignore"):
            return {
                "size": len(self.individuals),
                "best_fitness": float(fitnesses.max()),
                "worst_fitness": float(fitnesses.min()),
                "mean_fitness": float(fitnesses.mean()),
                "fitness_std": float(fitnesses.std()) if fitnesses.size > 1 else 0.0
            }
