"""
Validation of values returned by user-supplied operations.

When `validate_results` is enabled, every chromosome and selector call is
resolved through a ResultSchema, which checks both the shape of the value and
that the call honoured the configured immediate/deferred contract for its
stage. Validation is off by default and never runs in the plain hot path.
"""

import inspect
import numbers
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

from src.genelib.core.chromosome import is_chromosome
from src.genelib.core.concurrency import resolve
from src.genelib.core.exceptions import InvalidResultError

if TYPE_CHECKING:
    from src.genelib.core.config import EvolutionSettings


class ResultSchema:
    """
    Expected result of one user-supplied operation.

    Args:
        operation: Operation name, matching its concurrency setting key
        description: Text description of the expected value
        validate: Predicate returning True for valid values
    """

    def __init__(self, operation: str, description: str, validate: Callable[[Any], bool]):
        self.operation = operation
        self.description = description
        self.validate = validate

    def check(self, value: Any) -> Any:
        """Return value if valid, raise InvalidResultError otherwise."""
        if self.validate(value):
            return value
        raise InvalidResultError(
            f"{self.operation} must return {self.description}.",
            details={
                "operation": self.operation,
                "returned_value": value,
                "expected": self.description
            }
        )

    async def resolve(self, value: Any, deferred: bool) -> Any:
        """
        Validate and resolve a raw operation result.

        Args:
            value: Raw value returned by the operation
            deferred: Whether concurrency is configured for this operation

        Returns:
            The resolved, validated value
        """
        awaitable = inspect.isawaitable(value)
        if deferred and not awaitable:
            raise InvalidResultError(
                f"{self.operation} must return an awaitable if "
                f"concurrency.{self.operation} is set.",
                details={"operation": self.operation, "returned_value": value}
            )
        if not deferred and awaitable:
            if inspect.iscoroutine(value):
                value.close()
            raise InvalidResultError(
                f"{self.operation} returned an awaitable, but "
                f"concurrency.{self.operation} was not set.",
                details={"operation": self.operation, "returned_value": value}
            )
        if awaitable:
            value = await value
        return self.check(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _is_chromosome_list(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and all(is_chromosome(item) for item in value)


def _is_individual_or_none(value: Any) -> bool:
    # imported lazily, individual.py depends on this module
    from src.genelib.core.individual import Individual
    return value is None or isinstance(value, Individual)


CHROMOSOME_SCHEMAS: Dict[str, ResultSchema] = {
    "create": ResultSchema("create", "a chromosome", is_chromosome),
    "get_fitness": ResultSchema("get_fitness", "a number", _is_number),
    "crossover": ResultSchema(
        "crossover",
        "a chromosome or a list of chromosomes",
        lambda value: is_chromosome(value) or _is_chromosome_list(value)
    ),
    "mutate": ResultSchema("mutate", "a chromosome", is_chromosome),
}

SELECTOR_SCHEMAS: Dict[str, ResultSchema] = {
    "add": ResultSchema("add", "nothing", lambda value: True),
    "select": ResultSchema("select", "a single individual or None", _is_individual_or_none),
}

OPERATION_SCHEMAS: Dict[str, ResultSchema] = {**CHROMOSOME_SCHEMAS, **SELECTOR_SCHEMAS}


async def resolve_result(settings: Optional["EvolutionSettings"], operation: str, value: Any) -> Any:
    """Resolve a user operation result, validating it if configured."""
    if settings is not None and settings.validate_results:
        deferred = settings.concurrency.limit_for(operation) is not None
        return await OPERATION_SCHEMAS[operation].resolve(value, deferred)
    return await resolve(value)
