"""
Evolution Engine for genelib.

This module implements the runner that drives a population through
successive generations until a solution is found or the generation limit is
reached, plus the `run` and `run_sync` entry points.
"""

import asyncio
import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Mapping, Optional, Union

import logfire
import numpy as np

from src.core.config import settings as process_settings
from src.genelib.core.concurrency import resolve
from src.genelib.core.config import EvolutionSettings
from src.genelib.core.exceptions import ConfigurationError
from src.genelib.core.gene_pool import GenePool
from src.genelib.core.individual import Individual
from src.genelib.core.population import Population

SettingsLike = Union[EvolutionSettings, Mapping[str, Any]]


class RunStatus(str, Enum):
    """Lifecycle of a run."""
    RUNNING = "running"
    SOLVED = "solved"
    EXHAUSTED = "exhausted"


@dataclass
class RunState:
    """Snapshot of a run, passed to `on_generation` and returned by `Runner.get_state`."""

    generation_count: int
    best: Optional[Individual]
    individuals: List[Individual]
    status: RunStatus


class Runner:
    """
    Drives one evolution run.

    Holds the current population, the generation count and the solution,
    if one has been found.
    """

    def __init__(
        self,
        population: Population,
        settings: EvolutionSettings,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the runner.

        Args:
            population: Scored initial population
            settings: Run settings
            logger: Optional logger instance
        """
        self.population = population
        self.settings = settings
        self.logger = logger or self._setup_logger()

        self.generation_count = 0
        self.solution: Optional[Individual] = None
        self.status = RunStatus.RUNNING

        self.check_for_solution()
        self._update_status()

    def _setup_logger(self) -> logging.Logger:
        """Setup default logger."""
        logger = logging.getLogger("genelib.engine")
        logger.setLevel(getattr(logging, process_settings.log_level))

        if not logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        return logger

    @classmethod
    async def create(cls, settings: SettingsLike, logger: Optional[logging.Logger] = None) -> "Runner":
        """
        Create a runner with a freshly created and scored initial population.

        Args:
            settings: Settings record or mapping of its fields
            logger: Optional logger instance

        Returns:
            Runner ready to step

        Raises:
            ConfigurationError: If the litter split or selector settings are invalid
        """
        settings = EvolutionSettings.normalize(settings)

        # Fail before any user code runs
        GenePool.get_max_crossover_count(settings.generation_size, settings.child_count)
        settings.selector_class(dict(settings.selector_settings))

        if settings.random_seed is not None:
            random.seed(settings.random_seed)
            np.random.seed(settings.random_seed)

        with logfire.span("Initialize Population", size=settings.generation_size):
            population = await Population.create(settings)
            population = await population.set_fitnesses()

        return cls(population, settings, logger)

    def check_for_solution(self) -> Optional[Individual]:
        """Record the population best as the solution if it reaches `solution_fitness`."""
        if self.settings.solution_fitness is None:
            return None
        best = self.population.get_best()
        if best is not None and best.fitness >= self.settings.solution_fitness:
            self.solution = best
        return self.solution

    def _update_status(self) -> None:
        if self.solution is not None:
            self.status = RunStatus.SOLVED
        elif self.generation_count >= self.settings.generation_limit:
            self.status = RunStatus.EXHAUSTED
        else:
            self.status = RunStatus.RUNNING

    def get_best(self) -> Optional[Individual]:
        """Return the solution if one was found, else the best of the current population."""
        return self.solution or self.population.get_best()

    def get_state(self) -> RunState:
        return RunState(
            generation_count=self.generation_count,
            best=self.get_best(),
            individuals=list(self.population.individuals),
            status=self.status
        )

    async def emit_generation(self) -> None:
        """Pass the current state to the `on_generation` callback, if any."""
        if self.settings.on_generation is not None:
            await resolve(self.settings.on_generation(self.get_state()))

    async def run_generation(self) -> Population:
        """Breed, score and install the next generation."""
        with logfire.span("Generation", generation=self.generation_count + 1):
            gene_pool = await GenePool.from_population(self.population)
            self.population = await gene_pool.get_offspring()
            self.generation_count += 1
            self.check_for_solution()
            self._update_status()
            self._log_progress(gene_pool)
        return self.population

    async def run_step(self) -> RunStatus:
        """
        Advance the run by at most one generation.

        Returns:
            The status after the step; a finished run is left unchanged
        """
        if self.status is not RunStatus.RUNNING:
            return self.status
        await self.run_generation()
        await self.emit_generation()
        return self.status

    async def run(self) -> Optional[Individual]:
        """Step until solved or exhausted and return the best individual."""
        with logfire.span("Evolution",
                         generation_size=self.settings.generation_size,
                         generation_limit=self.settings.generation_limit):
            self.logger.info(f"Starting evolution with generation size {self.settings.generation_size}")
            await self.emit_generation()

            while await self.run_step() is RunStatus.RUNNING:
                # let other tasks on the loop run between generations
                await asyncio.sleep(0)

            best = self.get_best()
            self.logger.info(
                f"Evolution {self.status.value} after {self.generation_count} generations, "
                f"best fitness: {best.fitness if best else None}"
            )
            return best

    def _log_progress(self, gene_pool: GenePool) -> None:
        """Log generation statistics."""
        stats = self.population.calculate_statistics()

        self.logger.debug(
            f"Generation {self.generation_count}: "
            f"Best: {stats.get('best_fitness', 0):.4f}, "
            f"Mean: {stats.get('mean_fitness', 0):.4f}, "
            f"Crossovers: {gene_pool.crossover_count}, "
            f"Copies: {gene_pool.copy_count}"
        )

        logfire.info(
            "Generation complete",
            generation=self.generation_count,
            status=self.status.value,
            crossover_count=gene_pool.crossover_count,
            copy_count=gene_pool.copy_count,
            **stats
        )


async def run(settings: SettingsLike) -> Optional[Individual]:
    """
    Run an evolution to completion.

    Args:
        settings: Settings record or mapping of its fields

    Returns:
        The best individual found
    """
    runner = await Runner.create(settings)
    return await runner.run()


def run_sync(settings: SettingsLike) -> Optional[Individual]:
    """
    Run an evolution to completion from synchronous code.

    Every user operation must return its result directly, so per-stage
    concurrency cannot be configured. The run gets its own event loop, so
    callers that are already inside one (async code, notebooks) must
    `await run(settings)` instead.

    Raises:
        RuntimeError: If called while an event loop is running in this thread
        ConfigurationError: If any concurrency limit is set
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        pass
    else:
        raise RuntimeError("run_sync cannot be called from a running event loop; await run() instead.")

    settings = EvolutionSettings.normalize(settings)
    if settings.concurrency.is_configured():
        raise ConfigurationError(
            "run_sync does not support concurrency; use run() instead.",
            details={"concurrency": settings.concurrency.model_dump(exclude_none=True)}
        )
    return asyncio.run(run(settings))
