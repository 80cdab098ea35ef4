"""Property and verdict types.

A Property binds a generator factory to a predicate. The executor builds the
generator from the per-property seed and the run configuration, draws inputs
from it, and calls ``Property.run`` for each one.

Predicates return a Verdict instead of raising. Anything a predicate raises
(in practice, the codec raising instead of returning an error value) is
captured by ``Property.run`` as a PredicateFault inside a failing verdict.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from b64verify.diagnostics.errors import FaultContext, PredicateFault
from b64verify.enums import PropertyCategory

if TYPE_CHECKING:
    from b64verify.codec.protocol import Codec
    from b64verify.config.test_config import TestConfig
    from b64verify.generators.base import InputGenerator

__all__ = [
    "GeneratorFactory",
    "Predicate",
    "Property",
    "Verdict",
]

logger = logging.getLogger(__name__)

type GeneratorFactory = Callable[[int, TestConfig], InputGenerator[Any]]
type Predicate = Callable[[Any, TestConfig, Codec], Verdict]


@dataclass(frozen=True, slots=True)
class Verdict:
    """Outcome of one predicate evaluation.

    Attributes:
        passed: True if the property held for the input
        diagnostic: What went wrong (empty when passed)
        fault: Exception captured while evaluating, if any
        discarded: The input does not meet the predicate's precondition.
            Generators never produce such inputs; shrink candidates can.
    """

    passed: bool
    diagnostic: str = ""
    fault: PredicateFault | None = None
    discarded: bool = False

    @classmethod
    def ok(cls) -> Verdict:
        return _PASSED

    @classmethod
    def fail(cls, diagnostic: str) -> Verdict:
        return cls(passed=False, diagnostic=diagnostic)

    @classmethod
    def discard(cls, reason: str) -> Verdict:
        """Input outside the predicate's domain; counts as not failing."""
        return cls(passed=True, diagnostic=reason, discarded=True)

    @classmethod
    def check(cls, condition: bool, diagnostic: str) -> Verdict:
        """Passing verdict if ``condition`` holds, failing with ``diagnostic`` otherwise."""
        return _PASSED if condition else cls(passed=False, diagnostic=diagnostic)


_PASSED = Verdict(passed=True)


@dataclass(frozen=True, slots=True)
class Property:
    """A named, registered correctness property.

    Attributes:
        id: Unique ordinal; reports are ordered by it
        name: Unique snake_case name
        category: Area of codec behavior checked
        requirements: Requirement-trace tags (e.g. "1.1")
        generator: Factory ``(seed, config) -> InputGenerator``
        predicate: ``(value, config, codec) -> Verdict``
        description: One-line summary shown by ``b64verify list``
    """

    id: int
    name: str
    category: PropertyCategory
    requirements: tuple[str, ...]
    generator: GeneratorFactory
    predicate: Predicate
    description: str = ""

    def run(self, value: object, config: TestConfig, codec: Codec) -> Verdict:
        """Evaluate the predicate, capturing any exception as a PredicateFault."""
        try:
            return self.predicate(value, config, codec)
        except Exception as exc:  # noqa: BLE001 - codec faults become failing verdicts
            fault = PredicateFault(
                exc,
                FaultContext(
                    component="executor",
                    operation="predicate",
                    property_id=self.id,
                    detail=config.describe(),
                ),
            )
            logger.debug("Property %s raised %s", self.name, fault.cause_type, exc_info=True)
            return Verdict(passed=False, diagnostic=str(fault), fault=fault)
