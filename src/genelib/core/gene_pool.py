"""
Gene pool: a loaded selector plus the litter plan for one generation.

The next generation is made of litters of `child_count` individuals. Each
litter is either produced by crossover, from `parent_count` selected parents,
or made of `child_count` selected copies.
"""

from typing import TYPE_CHECKING, Any, List, NamedTuple

import logfire

from src.genelib.core.breeding import BreedingScheme
from src.genelib.core.concurrency import StagePool
from src.genelib.core.exceptions import ConfigurationError, InvalidResultError
from src.genelib.core.individual import Individual
from src.genelib.core.population import Population
from src.genelib.core.results import resolve_result
from src.genelib.recombination import bool_chance

if TYPE_CHECKING:
    from src.genelib.core.config import EvolutionSettings


class LitterCounts(NamedTuple):
    crossover_count: int
    copy_count: int


class GenePool:
    """
    Selector loaded with one generation, and how many litters of each kind to breed.

    Args:
        selector: Selector instance holding the current generation
        crossover_count: Number of crossover litters
        copy_count: Number of copy litters
        settings: Run settings
    """

    def __init__(self, selector: Any, crossover_count: int, copy_count: int, settings: "EvolutionSettings"):
        self.selector = selector
        self.crossover_count = crossover_count
        self.copy_count = copy_count
        self.settings = settings

    @staticmethod
    def get_max_crossover_count(generation_size: int, child_count: int) -> int:
        """Return the number of litters per generation."""
        if generation_size % child_count != 0:
            raise ConfigurationError(
                f"generation_size ({generation_size}) must be a multiple "
                f"of child_count ({child_count}).",
                details={"generation_size": generation_size, "child_count": child_count}
            )
        return generation_size // child_count

    @classmethod
    def get_litter_counts(cls, settings: "EvolutionSettings") -> LitterCounts:
        """Decide, litter by litter, whether it is bred through crossover."""
        litters = cls.get_max_crossover_count(settings.generation_size, settings.child_count)
        if settings.compound_crossover:
            return LitterCounts(litters, 0)
        crossover_count = sum(1 for _ in range(litters) if bool_chance(settings.crossover_rate))
        return LitterCounts(crossover_count, litters - crossover_count)

    @classmethod
    def create(cls, settings: "EvolutionSettings") -> "GenePool":
        """Create an empty gene pool with fresh litter counts."""
        selector = settings.selector_class(dict(settings.selector_settings))
        crossover_count, copy_count = cls.get_litter_counts(settings)
        return cls(selector, crossover_count, copy_count, settings)

    @classmethod
    async def from_population(cls, population: Population) -> "GenePool":
        """Create a gene pool and load every individual of `population` into it."""
        gene_pool = cls.create(population.settings)
        with logfire.span("Loading selector", size=len(population)):
            await population.load_selector(gene_pool.selector)
        return gene_pool

    def get_selection_count(self) -> int:
        """Return how many individuals must be selected to fill the next generation."""
        return (
            self.crossover_count * self.settings.parent_count
            + self.settings.child_count * self.copy_count
        )

    async def select_one(self, index: int) -> Individual:
        """Draw one individual from the selector."""
        selected = await resolve_result(self.settings, "select", self.selector.select())
        if selected is None:
            raise InvalidResultError(
                "Selector returned no individual.",
                details={
                    "operation": "select",
                    "index": index,
                    "selector": type(self.selector).__name__
                }
            )
        return selected

    async def perform_selections(self) -> BreedingScheme:
        """
        Draw the parents and copies for the next generation.

        Returns:
            A breeding scheme whose crossover groups are consecutive chunks of
            `parent_count` selections, followed by the copies
        """
        pool = StagePool.for_stage(self.settings, "select")
        selections = await pool.map(self.select_one, range(self.get_selection_count()))

        parent_count = self.settings.parent_count
        boundary = self.crossover_count * parent_count
        crossovers: List[List[Individual]] = [
            selections[i:i + parent_count]
            for i in range(0, boundary, parent_count)
        ]
        return BreedingScheme(crossovers, selections[boundary:], self.settings)

    async def get_offspring(self) -> Population:
        """Select, breed, mutate and score the next generation."""
        with logfire.span("Selecting", count=self.get_selection_count()):
            scheme = await self.perform_selections()
        with logfire.span("Crossing over", litters=len(scheme.crossovers)):
            offspring = await scheme.perform_crossovers()
        with logfire.span("Mutating", rate=self.settings.mutation_rate):
            offspring = await offspring.mutate()
        with logfire.span("Scoring", size=len(offspring)):
            return await offspring.set_fitnesses()
