"""
genelib: an asynchronous evolutionary search engine.

Users supply a chromosome (creation, fitness, crossover and mutation) and a
settings record; genelib evolves a population through selection, crossover
and mutation until an individual reaches the solution fitness or the
generation limit is hit. Every user operation may return its result directly
or as an awaitable, with per-stage concurrency limits.
"""

from src.genelib.core.config import ConcurrencyLimits, EvolutionSettings
from src.genelib.core.exceptions import (
    GeneLibError,
    ConfigurationError,
    InvalidResultError,
    UnsupportedOperationError
)
from src.genelib.core.chromosome import Chromosome, CachingChromosome, is_chromosome
from src.genelib.core.individual import Individual
from src.genelib.core.population import Population
from src.genelib.core.breeding import BreedingScheme
from src.genelib.core.gene_pool import GenePool, LitterCounts
from src.genelib.core.engine import Runner, RunState, RunStatus, run, run_sync
from src.genelib.selection import (
    Selector,
    ArraySelector,
    TournamentSelector,
    RouletteSelector,
    SelectorRegistry,
    default_registry,
    register_selector
)
from src.genelib import recombination

__version__ = "1.0.0"

__all__ = [
    # Configuration
    "ConcurrencyLimits",
    "EvolutionSettings",
    # Errors
    "GeneLibError",
    "ConfigurationError",
    "InvalidResultError",
    "UnsupportedOperationError",
    # Chromosomes and individuals
    "Chromosome",
    "CachingChromosome",
    "is_chromosome",
    "Individual",
    "Population",
    # Breeding
    "BreedingScheme",
    "GenePool",
    "LitterCounts",
    # Engine
    "Runner",
    "RunState",
    "RunStatus",
    "run",
    "run_sync",
    # Selection
    "Selector",
    "ArraySelector",
    "TournamentSelector",
    "RouletteSelector",
    "SelectorRegistry",
    "default_registry",
    "register_selector",
    # Recombination helpers
    "recombination"
]
