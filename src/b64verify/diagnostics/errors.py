"""Harness fault hierarchy.

These exceptions describe failures of the HARNESS, not of the codec under
test. Codec errors are plain values (see ``b64verify.codec.errors``) returned
alongside decode results; the classes below are raised (or captured) by the
generator, registry, executor and aggregator layers.

Design:
    - Carry diagnostic context for post-mortem analysis
    - Immutable after construction
    - Leaf classes are @final

Hierarchy:
    HarnessError (base)
    ├─ AggregationFault (reporting sink unavailable, aborts the run)
    ├─ ConfigurationError (invalid alphabet or run configuration)
    ├─ GenerationError (generator cannot satisfy its constraints)
    ├─ PredicateFault (codec raised inside a predicate, captured as a failure)
    ├─ RegistryError (duplicate or unknown property ids)
    ├─ ShrinkBoundExceeded (shrink search hit its attempt bound)
    └─ StateTransitionError (illegal property lifecycle transition)

Propagation:
    GenerationError, PredicateFault and ShrinkBoundExceeded are contained in the
    result of the property that produced them. ConfigurationError,
    RegistryError, StateTransitionError and AggregationFault abort the run.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import final

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


@dataclass(frozen=True, slots=True)
class FaultContext:
    """Context for harness fault diagnosis.

    Attributes:
        component: Harness component where the fault occurred
            (generator, registry, executor, shrinker, aggregator, config)
        operation: Operation being performed (produce, register, run, submit)
        property_id: Property involved, if any
        detail: Free-form extra detail (optional)
    """

    component: str
    operation: str
    property_id: int | None = None
    detail: str | None = None


class HarnessError(Exception):
    """Base exception for all harness faults.

    The exception is immutable after construction so that evidence recorded in
    a PropertyResult cannot be altered by later code.

    Attributes:
        context: Structured diagnostic context
    """

    __slots__ = ("_context", "_frozen")

    _context: FaultContext | None
    _frozen: bool

    def __init__(self, message: str, context: FaultContext | None = None) -> None:
        """Initialize HarnessError.

        Args:
            message: Human-readable fault description
            context: Structured diagnostic context (optional)
        """
        super().__init__(message)
        object.__setattr__(self, "_context", context)
        object.__setattr__(self, "_frozen", True)

    # Attributes Python itself sets while propagating an exception.
    _PYTHON_EXCEPTION_ATTRS: frozenset[str] = frozenset(
        ("__traceback__", "__context__", "__cause__", "__suppress_context__", "__notes__")
    )

    def __setattr__(self, name: str, value: object) -> None:
        """Reject attribute mutations after initialization.

        Raises:
            AttributeError: If attempting to modify after construction
        """
        if name in self._PYTHON_EXCEPTION_ATTRS:
            object.__setattr__(self, name, value)
            return
        if getattr(self, "_frozen", False):
            msg = f"Cannot modify harness error attribute: {name}"
            raise AttributeError(msg)
        object.__setattr__(self, name, value)

    @property
    def context(self) -> FaultContext | None:
        """Structured diagnostic context."""
        return self._context

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{self.__class__.__name__}({self.args[0]!r}, context={self._context!r})"


@final
class AggregationFault(HarnessError):
    """The reporting sink rejected a result.

    No partial report can be trusted once a submission is lost, so this fault
    aborts the entire run.
    """


@final
class ConfigurationError(HarnessError):
    """Invalid alphabet or run configuration.

    Raised at construction time, before any encode or decode call is made.
    """


@final
class GenerationError(HarnessError):
    """A generator cannot satisfy its constraints.

    Example: ``min_size`` larger than ``max_size``. Fatal to the property that
    owns the generator only.
    """


@final
class PredicateFault(HarnessError):
    """The codec raised instead of returning an error value.

    Never propagated: the executor records it as the diagnostic of a failing
    trial.

    Attributes:
        cause_type: Class name of the original exception
        cause_message: str() of the original exception
    """

    __slots__ = ("_cause_message", "_cause_type")

    _cause_type: str
    _cause_message: str

    def __init__(
        self,
        cause: BaseException,
        context: FaultContext | None = None,
    ) -> None:
        """Initialize PredicateFault from the exception raised by the codec.

        Args:
            cause: Exception raised inside the predicate
            context: Structured diagnostic context (optional)
        """
        object.__setattr__(self, "_cause_type", type(cause).__name__)
        object.__setattr__(self, "_cause_message", str(cause))
        super().__init__(f"codec raised {type(cause).__name__}: {cause}", context)

    @property
    def cause_type(self) -> str:
        """Class name of the exception raised by the codec."""
        return self._cause_type

    @property
    def cause_message(self) -> str:
        """Message of the exception raised by the codec."""
        return self._cause_message


@final
class RegistryError(HarnessError):
    """Duplicate property id at registration, or lookup of an unknown id."""


@final
class ShrinkBoundExceeded(HarnessError):
    """Shrink search stopped at its attempt bound.

    Non-fatal. The shrinker records it as ``bound_reached`` on the
    counterexample instead of raising it; the class exists so that callers that
    require a minimal counterexample can escalate via ``Counterexample.require_minimal``.
    """


@final
class StateTransitionError(HarnessError):
    """Illegal property lifecycle transition (for example Reported -> Running)."""
