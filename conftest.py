"""
PyTest configuration and fixtures for genelib.

This module puts the project root on the import path, keeps Logfire from
exporting anything during tests, and provides shared settings fixtures.
"""

import os
import sys
import random

import pytest
import logfire

# Add project root to Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from src.core.config import settings
from src.genelib import EvolutionSettings
from tests.support import Phrase, TestChromosome, TARGET


# Override settings for testing
settings.environment = "testing"
settings.logfire_environment = "testing"

logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture(autouse=True)
def seeded_random():
    """Make every test's random draws reproducible."""
    random.seed(1234)
    yield


@pytest.fixture
def test_settings() -> EvolutionSettings:
    """Settings for a small run of TestChromosome."""
    return EvolutionSettings(
        create_chromosome=TestChromosome,
        generation_size=10,
        generation_limit=5,
        crossover_rate=0.5,
        mutation_rate=0.1
    )


@pytest.fixture
def phrase_settings() -> dict:
    """Settings mapping for solving the target phrase."""
    return {
        "generation_size": 100,
        "generation_limit": 1000,
        "chromosome_class": Phrase,
        "create_args": TARGET
    }
