"""
Tournament selection.

Each selection draws a random tournament of `tournament_size` individuals.
With `base_weight == 1` the fittest member always wins; with a lower base
weight p, the member ranked i places below first wins with probability
p * (1 - p) ** i, and the last-ranked member takes whatever probability is
left so the weights always sum to exactly 1.
"""

import random
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.genelib.core.exceptions import ConfigurationError
from src.genelib.selection.array import ArraySelector


class TournamentSettings(BaseModel):
    """Settings accepted by TournamentSelector."""

    model_config = ConfigDict(extra="ignore")

    tournament_size: int = Field(
        default=2,
        ge=2,
        description="Number of individuals drawn for each tournament"
    )
    base_weight: float = Field(
        default=1.0,
        gt=0.5,
        le=1.0,
        description="Probability of the fittest tournament member being selected"
    )


class TournamentSelector(ArraySelector):
    """
    Selector for tournament selection.

    Args:
        settings: Mapping with optional `tournament_size` (int >= 2, default 2)
            and `base_weight` (float in (0.5, 1], default 1)

    Raises:
        ConfigurationError: If either setting is out of range
    """

    def __init__(self, settings: Optional[Dict[str, Any]] = None):
        super().__init__(settings)
        try:
            options = TournamentSettings(**self.settings)
        except ValidationError as exc:
            raise ConfigurationError(
                f"Invalid tournament selector settings: {exc}",
                details={"settings": self.settings}
            ) from exc
        self.tournament_size = options.tournament_size
        self.base_weight = options.base_weight

    @staticmethod
    def get_weights(base: float, count: int) -> List[float]:
        """
        Return the selection probability of each tournament rank.

        Args:
            base: Base probability p of selecting the first-ranked member
            count: Number of individuals in the tournament

        Returns:
            One weight per rank, best rank first, summing to 1
        """
        weights = [base * (1 - base) ** i for i in range(count - 1)]
        weights.append(1 - sum(weights))
        return weights

    def get_tournament(self) -> List[Any]:
        """Draw a random tournament, without replacement."""
        size = min(self.tournament_size, len(self.individuals))
        return random.sample(self.individuals, size)

    def get_sorted_tournament(self) -> List[Any]:
        """Draw a random tournament sorted by fitness, descending."""
        return sorted(self.get_tournament(), key=lambda ind: ind.fitness, reverse=True)

    def select_deterministic(self) -> Optional[Any]:
        """Select the fittest member of a fresh tournament."""
        tournament = self.get_tournament()
        if not tournament:
            return None
        return max(tournament, key=lambda ind: ind.fitness)

    def select_weighted(self) -> Optional[Any]:
        """Select a member of a fresh tournament with rank-decayed probability."""
        tournament = self.get_sorted_tournament()
        if not tournament:
            return None
        weights = self.get_weights(self.base_weight, len(tournament))
        draw = random.random()
        for individual, weight in zip(tournament, weights):
            if draw < weight:
                return individual
            draw -= weight
        # float residue from the subtraction can skip past the last rank
        return tournament[-1]

    def select(self) -> Optional[Any]:
        if self.base_weight == 1:
            return self.select_deterministic()
        return self.select_weighted()
