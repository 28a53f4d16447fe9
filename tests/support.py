"""
Chromosomes and selectors shared by the genelib test suite.

Phrase evolves a random string towards a target phrase. AsyncPhrase and
AsyncSelector return awaitables from every operation and declare matching
concurrency limits through their run defaults.
"""

import asyncio
import math
import random
from typing import List

from src.genelib import Chromosome, TournamentSelector
from src.genelib.recombination import get_random_indices, uniform_crossover

ALPHABET = "abcdefghijklmnopqrstuvwxyz !,"
TARGET = "hello, world!"


class Phrase(Chromosome):
    """String chromosome scored by its character distance to a target."""

    run_defaults = {
        "crossover_rate": 0.2,
        "mutation_rate": 0.05
    }

    def __init__(self, text: str, target: str):
        self.text = text
        self.target = target

    @classmethod
    def create(cls, target: str) -> "Phrase":
        text = "".join(random.choice(ALPHABET) for _ in target)
        return cls(text, target)

    def get_fitness(self) -> float:
        diff = sum(
            abs(ALPHABET.index(char) - ALPHABET.index(goal))
            for char, goal in zip(self.text, self.target)
        )
        return 1 / diff if diff else math.inf

    def crossover(self, other: "Phrase", rate: float) -> List["Phrase"]:
        return [
            type(self)(text, self.target)
            for text in uniform_crossover(self.text, other.text)
        ]

    def mutate(self, rate: float) -> "Phrase":
        indices = set(get_random_indices(len(self.text), rate))
        chars = []
        for i, char in enumerate(self.text):
            if i in indices:
                shift = 1 if random.random() < 0.5 else -1
                char = ALPHABET[(ALPHABET.index(char) + shift) % len(ALPHABET)]
            chars.append(char)
        return type(self)("".join(chars), self.target)

    def __repr__(self) -> str:
        return f"Phrase({self.text!r})"


class AsyncPhrase(Phrase):
    """Phrase whose operations all return coroutines."""

    run_defaults = {
        **Phrase.run_defaults,
        "concurrency": {"create": 4, "get_fitness": 4, "crossover": 4, "mutate": 4}
    }

    @classmethod
    async def create(cls, target: str) -> "AsyncPhrase":
        await asyncio.sleep(0)
        return super().create(target)

    async def get_fitness(self) -> float:
        await asyncio.sleep(0)
        return super().get_fitness()

    async def crossover(self, other: "AsyncPhrase", rate: float) -> List["AsyncPhrase"]:
        await asyncio.sleep(0)
        return super().crossover(other, rate)

    async def mutate(self, rate: float) -> "AsyncPhrase":
        await asyncio.sleep(0)
        return super().mutate(rate)


class AsyncSelector(TournamentSelector):
    """Tournament selector whose add and select return coroutines."""

    run_defaults = {
        "concurrency": {"add": 2, "select": 2}
    }

    async def add(self, individual) -> None:
        await asyncio.sleep(0)
        super().add(individual)

    async def select(self):
        await asyncio.sleep(0)
        return super().select()


class TestChromosome(Chromosome):
    """Chromosome with an id and a settable fitness, for unit tests."""

    __test__ = False

    def __init__(self, id=None, fitness: float = 0.0):
        self.id = id
        self.fitness = fitness

    @classmethod
    def create(cls, *args) -> "TestChromosome":
        return cls(*args)

    def get_fitness(self) -> float:
        return self.fitness

    def crossover(self, *others_and_rate) -> List["TestChromosome"]:
        others = others_and_rate[:-1]
        return [TestChromosome(f"{self.id}-child"), *(TestChromosome(f"{o.id}-child") for o in others)]

    def mutate(self, rate: float) -> "TestChromosome":
        return TestChromosome(f"{self.id}-mutant", self.fitness)

    def __repr__(self) -> str:
        return f"TestChromosome({self.id!r})"
