"""Run result types.

PropertyResult is the record the executor hands to the aggregator for each
property; Counterexample is the minimized failing input attached to a failed
result; RunReport is the id-ordered collection of all of them.

All three are frozen. ``to_dict`` gives the structured form used by the JSON
formatter and the seed log.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from b64verify.config.alphabet import Alphabet
from b64verify.config.test_config import TestConfig
from b64verify.diagnostics.errors import FaultContext, ShrinkBoundExceeded
from b64verify.enums import Outcome
from b64verify.generators import ChunkedInput, MalformedInput

if TYPE_CHECKING:
    from b64verify.enums import PropertyCategory

__all__ = [
    "Counterexample",
    "PropertyResult",
    "RunReport",
    "SkippedProperty",
    "render_value",
]


def render_value(value: object) -> dict[str, Any]:
    """JSON-compatible description of a generated value.

    Example:
        >>> render_value(b"\\xff")
        {'type': 'bytes', 'length': 1, 'hex': 'ff'}
    """
    match value:
        case bytes() | bytearray():
            return {"type": "bytes", "length": len(value), "hex": bytes(value).hex()}
        case str():
            return {"type": "str", "length": len(value), "text": value}
        case MalformedInput(text=text, defect=defect, expected=expected):
            return {
                "type": "malformed",
                "text": text,
                "defect": str(defect),
                "expected": repr(expected),
            }
        case ChunkedInput(data=data, splits=splits):
            return {"type": "chunked", "hex": data.hex(), "splits": list(splits)}
        case TestConfig():
            return {"type": "config", **_render_config(value)}
        case Alphabet(kind=kind, symbols=symbols):
            return {"type": "alphabet", "kind": str(kind), "symbols": symbols}
        case _:
            return {"type": type(value).__name__, "repr": repr(value)}


def _render_config(config: TestConfig) -> dict[str, Any]:
    return {
        "alphabet": str(config.alphabet.kind),
        "symbols": config.alphabet.symbols,
        "padding_mode": str(config.padding_mode),
        "engine_variant": str(config.engine_variant),
    }


@dataclass(frozen=True, slots=True)
class Counterexample:
    """Minimized failing input of a property.

    Attributes:
        value: Shrunk input (still failing)
        config: Configuration the failing trial ran under
        generator: Generator that produced the original input
        seed: That generator's seed
        index: Trial index of the original input
        diagnostic: Verdict diagnostic for the shrunk input
        original: Input as first generated
        shrink_steps: Accepted reductions
        shrink_attempts: Predicate re-runs spent shrinking
        bound_reached: Shrinking stopped at its attempt bound, so ``value`` may
            not be a local minimum
        fault_type: Exception class name when the codec raised
    """

    value: object
    config: TestConfig
    generator: str
    seed: int
    index: int
    diagnostic: str
    original: object
    shrink_steps: int = 0
    shrink_attempts: int = 0
    bound_reached: bool = False
    fault_type: str | None = None

    def require_minimal(self) -> Counterexample:
        """Return self if shrinking reached a local minimum.

        Raises:
            ShrinkBoundExceeded: If shrinking stopped at its attempt bound
        """
        if self.bound_reached:
            msg = (
                f"shrinking stopped after {self.shrink_attempts} attempts "
                f"({self.shrink_steps} reductions); counterexample may not be minimal"
            )
            raise ShrinkBoundExceeded(
                msg, FaultContext(component="shrinker", operation="shrink", detail=self.generator)
            )
        return self

    def to_dict(self) -> dict[str, Any]:
        return {
            "value": render_value(self.value),
            "original": render_value(self.original),
            "config": _render_config(self.config),
            "generator": self.generator,
            "seed": self.seed,
            "index": self.index,
            "diagnostic": self.diagnostic,
            "shrink_steps": self.shrink_steps,
            "shrink_attempts": self.shrink_attempts,
            "bound_reached": self.bound_reached,
            "fault_type": self.fault_type,
        }


@dataclass(frozen=True, slots=True)
class PropertyResult:
    """Outcome of running one property.

    Attributes:
        property_id: Registry id
        name: Property name
        category: Property category
        outcome: Passed, Failed or Timeout
        iterations_run: Trials executed (including the failing one)
        elapsed: Wall-clock seconds, shrinking included
        memory_mib: Process RSS after the run in MiB, None if not sampled
        diagnostic: Failure description (empty when passed)
        counterexample: Minimized failing input, for Failed and Timeout
    """

    property_id: int
    name: str
    category: PropertyCategory
    outcome: Outcome
    iterations_run: int
    elapsed: float
    memory_mib: float | None = None
    diagnostic: str = ""
    counterexample: Counterexample | None = None

    @property
    def passed(self) -> bool:
        return self.outcome is Outcome.PASSED

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.property_id,
            "name": self.name,
            "category": str(self.category),
            "outcome": str(self.outcome),
            "iterations_run": self.iterations_run,
            "elapsed": round(self.elapsed, 6),
            "memory_mib": None if self.memory_mib is None else round(self.memory_mib, 2),
            "diagnostic": self.diagnostic,
            "counterexample": (
                None if self.counterexample is None else self.counterexample.to_dict()
            ),
        }


@dataclass(frozen=True, slots=True)
class SkippedProperty:
    """A selected property that never started (the run was cancelled)."""

    property_id: int
    name: str


@dataclass(frozen=True, slots=True)
class RunReport:
    """Id-ordered results of a run.

    The report passes only if every property ran and passed; skipped
    properties fail the rollup.

    Attributes:
        results: Results in ascending property id order
        skipped: Properties not started because the run was cancelled
        seed: Run seed
        config: Run configuration
        elapsed: Wall-clock seconds for the whole run
        codec: ``module:attribute`` of the codec under test, None for the
            bundled reference codec
    """

    results: tuple[PropertyResult, ...]
    seed: int
    config: TestConfig
    skipped: tuple[SkippedProperty, ...] = ()
    elapsed: float = 0.0
    codec: str | None = None
    _index: dict[int, PropertyResult] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "results", tuple(sorted(self.results, key=lambda r: r.property_id))
        )
        object.__setattr__(
            self, "skipped", tuple(sorted(self.skipped, key=lambda s: s.property_id))
        )
        object.__setattr__(self, "_index", {r.property_id: r for r in self.results})

    @property
    def passed(self) -> bool:
        return not self.skipped and all(result.passed for result in self.results)

    @property
    def failures(self) -> tuple[PropertyResult, ...]:
        """Failed and timed-out results, in id order."""
        return tuple(result for result in self.results if not result.passed)

    @property
    def unsuccessful_count(self) -> int:
        """Failed, timed-out and skipped properties."""
        return len(self.failures) + len(self.skipped)

    def result(self, property_id: int) -> PropertyResult | None:
        return self._index.get(property_id)

    def counts(self) -> dict[str, int]:
        tally = {str(outcome): 0 for outcome in Outcome}
        for result in self.results:
            tally[str(result.outcome)] += 1
        tally["skipped"] = len(self.skipped)
        return tally

    def to_dict(self) -> dict[str, Any]:
        return {
            "passed": self.passed,
            "seed": self.seed,
            "codec": self.codec,
            "config": {
                **_render_config(self.config),
                "iteration_count": self.config.iteration_count,
                "max_input_size": self.config.max_input_size,
            },
            "elapsed": round(self.elapsed, 6),
            "counts": self.counts(),
            "results": [result.to_dict() for result in self.results],
            "skipped": [{"id": s.property_id, "name": s.name} for s in self.skipped],
        }
