"""
Chromosome Representation for the genelib evolution engine.

This module defines the contract every candidate-solution type must satisfy:
a factory (`create`), fitness evaluation, recombination and mutation. The
engine never inspects a chromosome beyond these operations, so any encoding
works as long as it implements them.
"""

import asyncio
import inspect
from abc import ABC
from typing import Any, ClassVar, Dict, List, Union

from src.genelib.core.exceptions import UnsupportedOperationError

_REQUIRED_OPERATIONS = ("get_fitness", "crossover", "mutate")


def is_chromosome(obj: Any) -> bool:
    """Check whether an object satisfies the chromosome capability."""
    if isinstance(obj, Chromosome):
        return True
    return all(callable(getattr(obj, name, None)) for name in _REQUIRED_OPERATIONS)


class Chromosome(ABC):
    """
    Base class for user-defined chromosomes.

    Subclasses override the operations they need. Each operation may return
    its value directly, or an awaitable resolving to it when the matching
    stage is run concurrently.

    Class attribute `run_defaults` may hold defaults for the run settings
    (e.g. crossover_rate, mutation_rate); explicit run settings win.
    """

    run_defaults: ClassVar[Dict[str, Any]] = {}

    @classmethod
    def create(cls, *args: Any) -> "Chromosome":
        """Create a random chromosome."""
        raise UnsupportedOperationError(
            f"{cls.__name__} must override ::create to be used as chromosome_class."
        )

    def get_fitness(self) -> float:
        """Return the fitness of this chromosome. Higher is better."""
        raise UnsupportedOperationError(
            f"{type(self).__name__} must override #get_fitness."
        )

    def crossover(self, *others_and_rate: Any) -> Union["Chromosome", List["Chromosome"]]:
        """
        Recombine with other chromosomes.

        Called as `crossover(*others, rate)`: the other parents come first and
        the crossover rate is always the final argument. Must return exactly
        `child_count` chromosomes, or a single chromosome when `child_count`
        is 1.
        """
        raise UnsupportedOperationError(
            f"{type(self).__name__} must override #crossover when crossover_rate is set."
        )

    def mutate(self, rate: float) -> "Chromosome":
        """Return a mutated copy of this chromosome."""
        raise UnsupportedOperationError(
            f"{type(self).__name__} must override #mutate when mutation_rate is set."
        )


class CachingChromosome(Chromosome):
    """
    Chromosome base class that memoizes its fitness.

    Override `calculate_fitness` instead of `get_fitness`; it runs once and
    its result (zero included) is returned by every later `get_fitness` call.
    Useful when crossover or mutation need to read the fitness themselves.
    """

    _fitness_computed: bool = False

    def calculate_fitness(self) -> float:
        """Compute the fitness of this chromosome."""
        raise UnsupportedOperationError(
            f"{type(self).__name__} must override #calculate_fitness."
        )

    def get_fitness(self) -> float:
        if not self._fitness_computed:
            result = self.calculate_fitness()
            if inspect.isawaitable(result):
                # a task can be awaited by every caller, a bare coroutine only once
                result = asyncio.ensure_future(result)
            self._fitness = result
            self._fitness_computed = True
        return self._fitness
