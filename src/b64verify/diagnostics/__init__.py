"""Harness fault types.

Python 3.13+. Zero external dependencies.
"""

from .errors import (
    AggregationFault,
    ConfigurationError,
    FaultContext,
    GenerationError,
    HarnessError,
    PredicateFault,
    RegistryError,
    ShrinkBoundExceeded,
    StateTransitionError,
)

__all__ = [
    "AggregationFault",
    "ConfigurationError",
    "FaultContext",
    "GenerationError",
    "HarnessError",
    "PredicateFault",
    "RegistryError",
    "ShrinkBoundExceeded",
    "StateTransitionError",
]
