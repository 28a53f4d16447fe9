"""
Breeding scheme: the plan for producing the next generation.

A scheme pairs the parent groups chosen for crossover with the individuals
that pass through unchanged. Performing it yields the next population, copies
first, then the children of every crossover in group order.
"""

from typing import TYPE_CHECKING, List, Optional, Sequence

from src.genelib.core.concurrency import StagePool
from src.genelib.core.exceptions import InvalidResultError
from src.genelib.core.individual import Individual
from src.genelib.core.population import Population

if TYPE_CHECKING:
    from src.genelib.core.config import EvolutionSettings


class BreedingScheme:
    """
    Crossover groups and copies selected from one generation.

    Args:
        crossovers: Parent groups, each of `parent_count` individuals
        copies: Individuals carried into the next generation as-is
        settings: Run settings
    """

    def __init__(
        self,
        crossovers: Optional[List[List[Individual]]] = None,
        copies: Optional[List[Individual]] = None,
        settings: Optional["EvolutionSettings"] = None
    ):
        self.crossovers = crossovers or []
        self.copies = copies or []
        self.settings = settings

    def check_child_count(self, children: Sequence[Individual]) -> Sequence[Individual]:
        """Return children unchanged if there are exactly `child_count` of them."""
        expected = self.settings.child_count
        if len(children) != expected:
            raise InvalidResultError(
                f"Crossover returned {len(children)} children, expected {expected}.",
                details={
                    "operation": "crossover",
                    "result": list(children),
                    "received": len(children),
                    "expected": expected
                }
            )
        return children

    async def perform_crossovers(self) -> Population:
        """Run every crossover and build the next population."""
        rate = self.settings.crossover_rate
        pool = StagePool.for_stage(self.settings, "crossover")

        async def breed(parents: List[Individual]) -> Sequence[Individual]:
            return self.check_child_count(await parents[0].crossover(parents[1:], rate))

        litters = await pool.map(breed, self.crossovers)
        children = [child for litter in litters for child in litter]
        return Population(self.copies + children, self.settings)
