"""
Base selector interface.

A selector is built fresh for every generation: the gene pool adds each
individual of the current population, then draws as many individuals as the
generation's litters need. Subclass it to implement a custom selection method.
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, Optional

from src.genelib.core.exceptions import UnsupportedOperationError


class Selector(ABC):
    """
    Abstract selector.

    Args:
        settings: Selector configuration, taken from the run's
            `selector_settings`

    Class attribute `run_defaults` may hold defaults for the run settings,
    e.g. `{"concurrency": {"add": 1, "select": 4}}` for a selector whose
    operations return awaitables.
    """

    run_defaults: ClassVar[Dict[str, Any]] = {}

    def __init__(self, settings: Optional[Dict[str, Any]] = None):
        self.settings = dict(settings or {})

    @abstractmethod
    def add(self, individual: Any) -> Any:
        """Store an individual as a selection candidate."""
        raise UnsupportedOperationError(
            "Selector subclass must override the #add method."
        )

    @abstractmethod
    def select(self) -> Any:
        """Return one stored individual, or None if nothing can be selected."""
        raise UnsupportedOperationError(
            "Selector subclass must override the #select method."
        )
