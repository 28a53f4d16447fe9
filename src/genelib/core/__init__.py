"""
Core components of the genelib evolution engine.
"""

from src.genelib.core.exceptions import (
    GeneLibError,
    ConfigurationError,
    InvalidResultError,
    UnsupportedOperationError
)
from src.genelib.core.chromosome import Chromosome, CachingChromosome, is_chromosome
from src.genelib.core.concurrency import StagePool, resolve
from src.genelib.core.config import ConcurrencyLimits, EvolutionSettings, STAGES
from src.genelib.core.results import ResultSchema, CHROMOSOME_SCHEMAS, SELECTOR_SCHEMAS
from src.genelib.core.individual import Individual
from src.genelib.core.population import Population
from src.genelib.core.breeding import BreedingScheme
from src.genelib.core.gene_pool import GenePool, LitterCounts
from src.genelib.core.engine import Runner, RunState, RunStatus, run, run_sync

__all__ = [
    "GeneLibError",
    "ConfigurationError",
    "InvalidResultError",
    "UnsupportedOperationError",
    "Chromosome",
    "CachingChromosome",
    "is_chromosome",
    "StagePool",
    "resolve",
    "ConcurrencyLimits",
    "EvolutionSettings",
    "STAGES",
    "ResultSchema",
    "CHROMOSOME_SCHEMAS",
    "SELECTOR_SCHEMAS",
    "Individual",
    "Population",
    "BreedingScheme",
    "GenePool",
    "LitterCounts",
    "Runner",
    "RunState",
    "RunStatus",
    "run",
    "run_sync"
]
