"""
Unit tests for Population.

Tests cover:
- Initial population creation
- Fitness scoring, mutation and selector loading
- Population statistics
"""

import asyncio
import math

import pytest
from unittest.mock import MagicMock

from src.genelib import ArraySelector, EvolutionSettings, Individual, Population
from tests.support import AsyncSelector, TestChromosome


async def scored(*fitnesses, settings=None):
    """Build a population of scored individuals."""
    individuals = [Individual(TestChromosome(i, f), settings) for i, f in enumerate(fitnesses)]
    population = Population(individuals, settings)
    return await population.set_fitnesses()


class TestPopulation:
    """Test suite for Population."""

    @pytest.mark.asyncio
    async def test_create(self, test_settings):
        """Test creating generation_size unscored individuals."""
        population = await Population.create(test_settings)

        assert len(population) == 10
        assert all(isinstance(ind.chromosome, TestChromosome) for ind in population)
        assert not any(ind.has_fitness for ind in population)
        assert population.settings is test_settings

    @pytest.mark.asyncio
    async def test_create_passes_arguments(self):
        """Test that create_args reach the factory."""
        factory = MagicMock(side_effect=lambda *args: TestChromosome(*args))
        settings = EvolutionSettings(create_chromosome=factory, generation_size=4, create_args=("seed", 2))

        population = await Population.create(settings)

        assert factory.call_count == 4
        assert all(call.args == ("seed", 2) for call in factory.call_args_list)
        assert all(ind.chromosome.id == "seed" for ind in population)

    @pytest.mark.asyncio
    async def test_create_concurrently(self):
        """Test creating with an asynchronous factory and a concurrency limit."""
        async def factory():
            await asyncio.sleep(0)
            return TestChromosome("async")

        settings = EvolutionSettings(create_chromosome=factory, generation_size=6, concurrency={"create": 3})
        population = await Population.create(settings)

        assert len(population) == 6
        assert all(ind.chromosome.id == "async" for ind in population)

    def test_get_best(self):
        """Test returning the fittest individual."""
        individuals = [MagicMock(fitness=f) for f in (2, 7, 5)]
        assert Population(individuals).get_best() is individuals[1]
        assert Population().get_best() is None

    @pytest.mark.asyncio
    async def test_set_fitnesses(self, test_settings):
        """Test scoring every individual."""
        population = await scored(1, 2, 3, settings=test_settings)

        assert [ind.fitness for ind in population] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_set_fitnesses_skips_scored(self, test_settings):
        """Test that cached fitnesses are not recomputed."""
        chromosome = MagicMock()
        chromosome.get_fitness.return_value = 4
        individual = Individual(chromosome, test_settings)
        await individual.set_fitness()

        await Population([individual], test_settings).set_fitnesses()
        chromosome.get_fitness.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_mutate_zero_rate_returns_self(self, test_settings):
        """Test that a zero mutation rate leaves the population untouched."""
        settings = test_settings.model_copy(update={"mutation_rate": 0})
        population = await scored(1, 2, settings=settings)

        assert await population.mutate() is population

    @pytest.mark.asyncio
    async def test_mutate(self, test_settings):
        """Test mutating every individual in order."""
        population = await scored(1, 2, settings=test_settings)

        mutated = await population.mutate()

        assert mutated is not population
        assert [ind.chromosome.id for ind in mutated] == ["0-mutant", "1-mutant"]
        assert not any(ind.has_fitness for ind in mutated)

    @pytest.mark.asyncio
    async def test_load_selector(self, test_settings):
        """Test adding every individual to a selector."""
        population = await scored(1, 2, 3, settings=test_settings)
        selector = ArraySelector()

        result = await population.load_selector(selector)

        assert result is selector
        assert selector.individuals == population.individuals

    @pytest.mark.asyncio
    async def test_load_async_selector(self, test_settings):
        """Test adding to a selector whose add returns a coroutine."""
        settings = test_settings.model_copy(update={"concurrency": test_settings.concurrency.model_copy(update={"add": 2})})
        population = await scored(1, 2, 3, settings=settings)
        selector = AsyncSelector()

        await population.load_selector(selector)
        assert selector.individuals == population.individuals

    @pytest.mark.asyncio
    async def test_calculate_statistics(self, test_settings):
        """Test fitness statistics."""
        population = await scored(1, 2, 3, 6, settings=test_settings)

        stats = population.calculate_statistics()

        assert stats["size"] == 4
        assert stats["best_fitness"] == 6
        assert stats["worst_fitness"] == 1
        assert stats["mean_fitness"] == 3
        assert stats["fitness_std"] == pytest.approx(math.sqrt(3.5))

    def test_calculate_statistics_unscored(self):
        """Test statistics for a population without fitnesses."""
        population = Population([Individual(TestChromosome("a"))])
        assert population.calculate_statistics() == {"size": 1}

    @pytest.mark.asyncio
    async def test_calculate_statistics_infinite_fitness(self, test_settings):
        """Test statistics when an individual has infinite fitness."""
        population = await scored(1, math.inf, settings=test_settings)

        stats = population.calculate_statistics()
        assert stats["best_fitness"] == math.inf
        assert stats["worst_fitness"] == 1
