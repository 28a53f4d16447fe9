"""
Individual: the engine-owned wrapper around one chromosome.

An individual adds fitness caching on top of its chromosome and wraps every
chromosome produced by crossover or mutation in a fresh individual, so
fitness computed for one individual is never recomputed or shared.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Sequence

from src.genelib.core.exceptions import GeneLibError
from src.genelib.core.results import resolve_result
from src.genelib.recombination import bool_chance

if TYPE_CHECKING:
    from src.genelib.core.config import EvolutionSettings


@dataclass
class FitnessCell:
    """Memo cell for a fitness value; `computed` distinguishes unset from zero."""

    computed: bool = False
    value: float = 0.0

    def store(self, value: float) -> None:
        self.value = value
        self.computed = True


@dataclass(eq=False)
class Individual:
    """
    Represents an individual in the population.

    Args:
        chromosome: The chromosome this individual owns
        settings: Run settings, used for result validation and inherited by
            offspring
    """

    chromosome: Any
    settings: Optional["EvolutionSettings"] = field(default=None, repr=False)
    _fitness: FitnessCell = field(default_factory=FitnessCell, repr=False)

    @classmethod
    async def create(
        cls,
        create_chromosome: Callable[..., Any],
        create_args: Sequence[Any] = (),
        settings: Optional["EvolutionSettings"] = None
    ) -> "Individual":
        """Create an individual from a chromosome factory."""
        chromosome = await resolve_result(settings, "create", create_chromosome(*create_args))
        return cls(chromosome=chromosome, settings=settings)

    @property
    def has_fitness(self) -> bool:
        return self._fitness.computed

    @property
    def fitness(self) -> float:
        """The cached fitness. Raises if set_fitness has not completed."""
        if not self._fitness.computed:
            raise GeneLibError(
                "Fitness has not been computed for this individual.",
                error_code="fitness_not_set",
                details={"chromosome": self.chromosome}
            )
        return self._fitness.value

    async def set_fitness(self) -> "Individual":
        """Compute and cache the chromosome's fitness, once."""
        if not self._fitness.computed:
            value = await resolve_result(self.settings, "get_fitness", self.chromosome.get_fitness())
            self._fitness.store(value)
        return self

    async def crossover(self, others: Sequence["Individual"], rate: float) -> List["Individual"]:
        """
        Recombine this individual's chromosome with those of others.

        Args:
            others: Remaining parents, in selection order
            rate: Crossover rate, passed through as the final argument

        Returns:
            One new individual per child chromosome
        """
        other_chromosomes = [other.chromosome for other in others]
        result = await resolve_result(
            self.settings,
            "crossover",
            self.chromosome.crossover(*other_chromosomes, rate)
        )
        children = list(result) if isinstance(result, (list, tuple)) else [result]
        return [Individual(chromosome=child, settings=self.settings) for child in children]

    async def checked_crossover(
        self,
        others: Sequence["Individual"],
        rate: float,
        compound: bool = False
    ) -> List["Individual"]:
        """Crossover if a draw at `rate` succeeds (or `compound` is set), else return the parents."""
        if compound or bool_chance(rate):
            return await self.crossover(others, rate)
        return [self, *others]

    async def mutate(self, rate: float) -> "Individual":
        """Return a new individual wrapping the mutated chromosome."""
        mutant = await resolve_result(self.settings, "mutate", self.chromosome.mutate(rate))
        return Individual(chromosome=mutant, settings=self.settings)
