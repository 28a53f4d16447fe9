"""
Bounded worker pools for the evolution pipeline stages.

Every stage that calls into user code (create, get_fitness, add, select,
crossover, mutate) runs its batch through a StagePool. A pool of size N runs
N workers against a fixed queue of work items; results are stored by input
position, so completion order never leaks into the output. A stage with no
configured limit gets a pool of size 1, which behaves like a plain loop.
"""

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Iterable, List, Optional, TypeVar

import logfire

T = TypeVar("T")
R = TypeVar("R")

logger = logging.getLogger("genelib.concurrency")


async def resolve(value: Any) -> Any:
    """Return the result of a user callback, awaiting it if it is deferred."""
    if inspect.isawaitable(value):
        return await value
    return value


class StagePool:
    """
    Fixed-size worker pool for a single pipeline stage.

    Args:
        operation: Stage name, used for logging and error context
        limit: Maximum number of in-flight operations (None means 1)
    """

    def __init__(self, operation: str, limit: Optional[int] = None):
        if limit is not None and limit < 1:
            raise ValueError(f"Concurrency limit for {operation} must be at least 1")
        self.operation = operation
        self.limit = limit
        self.size = limit or 1

    @classmethod
    def for_stage(cls, settings: Any, operation: str) -> "StagePool":
        """Build the pool for `operation` from the run settings' concurrency limits."""
        return cls(operation, settings.concurrency.limit_for(operation))

    @property
    def deferred(self) -> bool:
        """Whether the stage was explicitly configured for concurrency."""
        return self.limit is not None

    async def map(self, fn: Callable[[T], Awaitable[R]], items: Iterable[T]) -> List[R]:
        """Run fn over items with at most `size` calls in flight, preserving order."""
        work = list(items)
        results: List[Any] = [None] * len(work)
        if not work:
            return results

        queue: asyncio.Queue = asyncio.Queue()
        for index, item in enumerate(work):
            queue.put_nowait((index, item))

        async def worker() -> None:
            while True:
                try:
                    index, item = queue.get_nowait()
                except asyncio.QueueEmpty:
                    return
                try:
                    results[index] = await fn(item)
                except Exception as exc:
                    logger.error(
                        f"{self.operation} failed on item {index}: {exc!r}"
                    )
                    logfire.error(
                        "Stage operation failed",
                        operation=self.operation,
                        index=index,
                        error=repr(exc)
                    )
                    raise

        workers = [
            asyncio.ensure_future(worker())
            for _ in range(min(self.size, len(work)))
        ]
        try:
            await asyncio.gather(*workers)
        except BaseException:
            for task in workers:
                task.cancel()
            await asyncio.gather(*workers, return_exceptions=True)
            raise

        return results

    async def times(self, count: int, fn: Callable[[], Awaitable[R]]) -> List[R]:
        """Run fn `count` times with at most `size` calls in flight."""
        return await self.map(lambda _: fn(), range(count))

    def __repr__(self) -> str:
        return f"StagePool(operation={self.operation!r}, size={self.size})"
