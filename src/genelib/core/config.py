"""
genelib Configuration Module.

This module defines the resolved settings record consumed by the evolution
engine: population shape, reproduction rates, termination conditions, the
chromosome factory, the selection strategy and per-stage concurrency limits.
"""

import math
import os
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from src.genelib.core.exceptions import ConfigurationError
from src.genelib.selection.registry import default_registry

STAGES = ("create", "get_fitness", "add", "select", "crossover", "mutate")


class ConcurrencyLimits(BaseModel):
    """
    Maximum number of in-flight operations per pipeline stage.

    A stage left as None runs with a single worker. Setting a limit also
    declares that the matching user operation may return an awaitable.
    """

    model_config = ConfigDict(validate_assignment=True, extra='forbid')

    create: Optional[int] = Field(default=None, ge=1, description="Chromosome creation")
    get_fitness: Optional[int] = Field(default=None, ge=1, description="Fitness computation")
    add: Optional[int] = Field(default=None, ge=1, description="Selector add operations")
    select: Optional[int] = Field(default=None, ge=1, description="Selector select operations")
    crossover: Optional[int] = Field(default=None, ge=1, description="Crossover operations")
    mutate: Optional[int] = Field(default=None, ge=1, description="Mutation operations")

    @field_validator('*', mode='before')
    @classmethod
    def interpret_booleans(cls, v):
        """Read True as a limit of 1 and False as unset."""
        if v is True:
            return 1
        if v is False:
            return None
        return v

    def limit_for(self, operation: str) -> Optional[int]:
        return getattr(self, operation)

    def is_configured(self) -> bool:
        return any(self.limit_for(stage) is not None for stage in STAGES)


class EvolutionSettings(BaseModel):
    """Main settings record for an evolution run."""

    model_config = ConfigDict(
        extra='forbid',
        arbitrary_types_allowed=True
    )

    # Chromosome factory
    create_chromosome: Optional[Callable[..., Any]] = Field(
        default=None,
        description="Factory returning a new random chromosome"
    )
    chromosome_class: Optional[type] = Field(
        default=None,
        description="Chromosome class; its ::create method becomes the factory"
    )
    create_args: Tuple[Any, ...] = Field(
        default=(),
        description="Positional arguments for the chromosome factory"
    )

    # Selection
    selector: str = Field(
        default="tournament",
        description="Registered selector key"
    )
    selector_class: Optional[type] = Field(
        default=None,
        description="Selector class, overrides the selector key"
    )
    selector_settings: Dict[str, Any] = Field(
        default_factory=dict,
        description="Settings passed to the selector constructor"
    )

    # Population and termination
    generation_size: int = Field(
        gt=0,
        description="Number of individuals per generation"
    )
    generation_limit: float = Field(
        default=math.inf,
        gt=0,
        description="Maximum number of generations"
    )
    solution_fitness: Optional[float] = Field(
        default=math.inf,
        description="Fitness at which an individual counts as a solution (None disables)"
    )

    # Genetic operators
    crossover_rate: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Probability of each litter being produced through crossover"
    )
    mutation_rate: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Mutation rate passed to chromosome #mutate"
    )
    compound_crossover: bool = Field(
        default=False,
        description="Produce every litter through crossover regardless of rate"
    )
    parent_count: int = Field(
        default=2,
        ge=2,
        description="Parents selected for each crossover"
    )
    child_count: int = Field(
        default=2,
        ge=1,
        description="Children produced by each crossover"
    )

    # Execution
    concurrency: ConcurrencyLimits = Field(
        default_factory=ConcurrencyLimits,
        description="Per-stage concurrency limits"
    )
    on_generation: Optional[Callable[..., Any]] = Field(
        default=None,
        description="Callback receiving the run state after each generation"
    )
    validate_results: bool = Field(
        default=False,
        description="Check the values returned by chromosome and selector operations"
    )
    random_seed: Optional[int] = Field(
        default=None,
        description="Random seed for reproducibility"
    )

    @model_validator(mode='before')
    @classmethod
    def apply_class_defaults(cls, data: Any) -> Any:
        """Resolve chromosome and selector classes and merge their defaults."""
        if not isinstance(data, dict):
            return data
        data = dict(data)

        chromosome_class = data.get('chromosome_class')
        if chromosome_class is not None and data.get('create_chromosome') is None:
            data['create_chromosome'] = chromosome_class.create

        if data.get('selector_class') is None:
            data['selector_class'] = default_registry.get(data.get('selector', 'tournament'))

        for source in (chromosome_class, data['selector_class']):
            defaults = getattr(source, 'run_defaults', None) or {}
            for key, value in defaults.items():
                if key == 'concurrency':
                    data['concurrency'] = _merge_concurrency(value, data.get('concurrency'))
                elif key == 'selector_settings':
                    data['selector_settings'] = {**value, **(data.get('selector_settings') or {})}
                else:
                    data.setdefault(key, value)

        return data

    @field_validator('create_args', mode='before')
    @classmethod
    def wrap_single_create_arg(cls, v):
        if isinstance(v, (list, tuple)):
            return tuple(v)
        return (v,)

    @model_validator(mode='after')
    def validate_consistency(self) -> "EvolutionSettings":
        """Check cross-field constraints."""
        if self.create_chromosome is None:
            raise ValueError('Either create_chromosome or chromosome_class must be set')
        if self.generation_size % self.child_count != 0:
            raise ConfigurationError(
                f"generation_size ({self.generation_size}) must be a multiple "
                f"of child_count ({self.child_count})",
                details={"generation_size": self.generation_size, "child_count": self.child_count}
            )
        return self

    @classmethod
    def normalize(cls, settings: Union["EvolutionSettings", Mapping[str, Any]]) -> "EvolutionSettings":
        """
        Return a validated settings record from an instance or a mapping.

        Raises:
            ConfigurationError: If a litter or selector check fails
            ValidationError: For any other invalid field
        """
        if isinstance(settings, cls):
            return settings
        try:
            return cls(**settings)
        except ValidationError as exc:
            for error in exc.errors():
                cause = (error.get('ctx') or {}).get('error')
                if isinstance(cause, ConfigurationError):
                    raise cause from exc
            raise

    @classmethod
    def from_env(cls, **overrides: Any) -> "EvolutionSettings":
        """Create settings from GENELIB_* environment variables plus overrides."""
        config_dict: Dict[str, Any] = {}

        if generation_size := os.getenv("GENELIB_GENERATION_SIZE"):
            config_dict["generation_size"] = int(generation_size)
        if generation_limit := os.getenv("GENELIB_GENERATION_LIMIT"):
            config_dict["generation_limit"] = float(generation_limit)
        if solution_fitness := os.getenv("GENELIB_SOLUTION_FITNESS"):
            config_dict["solution_fitness"] = float(solution_fitness)
        if crossover_rate := os.getenv("GENELIB_CROSSOVER_RATE"):
            config_dict["crossover_rate"] = float(crossover_rate)
        if mutation_rate := os.getenv("GENELIB_MUTATION_RATE"):
            config_dict["mutation_rate"] = float(mutation_rate)
        if parent_count := os.getenv("GENELIB_PARENT_COUNT"):
            config_dict["parent_count"] = int(parent_count)
        if child_count := os.getenv("GENELIB_CHILD_COUNT"):
            config_dict["child_count"] = int(child_count)
        if selector := os.getenv("GENELIB_SELECTOR"):
            config_dict["selector"] = selector
        if random_seed := os.getenv("GENELIB_RANDOM_SEED"):
            config_dict["random_seed"] = int(random_seed)

        config_dict.update(overrides)
        return cls(**config_dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the scalar settings to a dictionary, for logging."""
        return self.model_dump(
            exclude={'create_chromosome', 'chromosome_class', 'selector_class', 'on_generation'}
        )


def _merge_concurrency(defaults: Any, explicit: Any) -> Dict[str, Any]:
    if isinstance(defaults, ConcurrencyLimits):
        defaults = defaults.model_dump(exclude_none=True)
    if isinstance(explicit, ConcurrencyLimits):
        explicit = explicit.model_dump(exclude_unset=True)
    return {**(defaults or {}), **(explicit or {})}
