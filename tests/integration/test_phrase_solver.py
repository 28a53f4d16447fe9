"""
Integration tests: evolving a random string into a target phrase.

Tests cover:
- Synchronous runs with deterministic and weighted tournaments
- Roulette selection
- Asynchronous chromosome and selector operations with concurrency limits
- Asynchronous runs of synchronous operations
"""

import pytest

from src.genelib import Runner, RunStatus, run, run_sync
from tests.support import AsyncPhrase, AsyncSelector, TARGET


@pytest.mark.slow
class TestPhraseSolver:
    """Test suite for solving the target phrase end to end."""

    def test_deterministic_binary_tournament(self, phrase_settings):
        """Test solving with the default tournament selector."""
        best = run_sync(phrase_settings)
        assert best.chromosome.text == TARGET

    def test_weighted_ternary_tournament(self, phrase_settings):
        """Test solving with a weighted tournament of three."""
        best = run_sync({
            **phrase_settings,
            "selector_settings": {"tournament_size": 3, "base_weight": 0.75}
        })
        assert best.chromosome.text == TARGET

    def test_roulette_selection(self, phrase_settings):
        """Test solving with roulette selection."""
        best = run_sync({**phrase_settings, "selector": "roulette"})
        assert best.chromosome.text == TARGET

    @pytest.mark.asyncio
    async def test_asynchronous_operations(self, phrase_settings):
        """Test solving with awaitable chromosome and selector operations."""
        best = await run({
            **phrase_settings,
            "chromosome_class": AsyncPhrase,
            "selector_class": AsyncSelector,
            "validate_results": True
        })
        assert best.chromosome.text == TARGET

    @pytest.mark.asyncio
    async def test_asynchronous_run_of_synchronous_operations(self, phrase_settings):
        """Test the asynchronous entry point with plain chromosome operations."""
        runner = await Runner.create(phrase_settings)
        best = await runner.run()

        assert best.chromosome.text == TARGET
        assert runner.status is RunStatus.SOLVED
        assert runner.get_state().best is best
