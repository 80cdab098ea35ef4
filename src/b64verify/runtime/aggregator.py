"""Result aggregation.

ResultAggregator is the only mutable structure shared by executor workers.
A single lock guards the per-property state machine, the collected results
and calls into the optional sink:

    Pending -> Running -> [Shrinking] -> {Passed | Failed | Timeout} -> Reported

Any other transition raises StateTransitionError. ``report()`` orders results
by property id, independent of completion order; properties still Pending at
that point were never started and are reported as skipped.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from b64verify.diagnostics.errors import AggregationFault, FaultContext, StateTransitionError
from b64verify.enums import Outcome, PropertyState
from b64verify.reporting.report import RunReport, SkippedProperty

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from b64verify.config.test_config import TestConfig
    from b64verify.properties.model import Property
    from b64verify.reporting.report import PropertyResult

__all__ = ["ResultAggregator", "ResultSink"]

logger = logging.getLogger(__name__)

type ResultSink = Callable[[PropertyResult], None]

_TRANSITIONS: dict[PropertyState, frozenset[PropertyState]] = {
    PropertyState.PENDING: frozenset({PropertyState.RUNNING}),
    PropertyState.RUNNING: frozenset(
        {PropertyState.SHRINKING, PropertyState.PASSED, PropertyState.FAILED, PropertyState.TIMEOUT}
    ),
    PropertyState.SHRINKING: frozenset({PropertyState.FAILED, PropertyState.TIMEOUT}),
    PropertyState.PASSED: frozenset({PropertyState.REPORTED}),
    PropertyState.FAILED: frozenset({PropertyState.REPORTED}),
    PropertyState.TIMEOUT: frozenset({PropertyState.REPORTED}),
    PropertyState.REPORTED: frozenset(),
}

_OUTCOME_STATE: dict[Outcome, PropertyState] = {
    Outcome.PASSED: PropertyState.PASSED,
    Outcome.FAILED: PropertyState.FAILED,
    Outcome.TIMEOUT: PropertyState.TIMEOUT,
}


class ResultAggregator:
    """Thread-safe collector of property results.

    Args:
        sink: Optional callable receiving every submitted result (for example
            a SeedLog). An exception from the sink becomes an
            AggregationFault.

    Example:
        >>> aggregator = ResultAggregator()
        >>> aggregator.register(registry.select([1]))  # doctest: +SKIP
        >>> aggregator.transition(1, PropertyState.RUNNING)  # doctest: +SKIP
    """

    __slots__ = ("_lock", "_names", "_results", "_sink", "_states")

    def __init__(self, sink: ResultSink | None = None) -> None:
        self._lock = threading.Lock()
        self._sink = sink
        self._states: dict[int, PropertyState] = {}
        self._names: dict[int, str] = {}
        self._results: dict[int, PropertyResult] = {}

    def register(self, properties: Iterable[Property]) -> None:
        """Put each property in the Pending state.

        Raises:
            StateTransitionError: If a property is already tracked
        """
        with self._lock:
            for prop in properties:
                if prop.id in self._states:
                    msg = f"Property {prop.id} is already registered with the aggregator"
                    raise StateTransitionError(
                        msg, self._context("register", prop.id, self._states[prop.id])
                    )
                self._states[prop.id] = PropertyState.PENDING
                self._names[prop.id] = prop.name

    def state(self, property_id: int) -> PropertyState:
        """Current state of a tracked property.

        Raises:
            StateTransitionError: If the property is not tracked
        """
        with self._lock:
            return self._current(property_id, "state")

    def transition(self, property_id: int, new_state: PropertyState) -> None:
        """Move a property to ``new_state``.

        Raises:
            StateTransitionError: If the transition is not allowed
        """
        with self._lock:
            self._move(property_id, new_state)

    def submit(self, result: PropertyResult) -> None:
        """Record a finished property and forward it to the sink.

        The property moves to the state matching ``result.outcome`` (if not
        already there), then to Reported.

        Raises:
            StateTransitionError: If the property cannot finish from its state
            AggregationFault: If the sink raised
        """
        with self._lock:
            target = _OUTCOME_STATE[result.outcome]
            if self._current(result.property_id, "submit") is not target:
                self._move(result.property_id, target)
            if self._sink is not None:
                try:
                    self._sink(result)
                except Exception as exc:
                    msg = f"Result sink rejected property {result.property_id}: {exc}"
                    logger.error(msg)
                    raise AggregationFault(
                        msg,
                        FaultContext(
                            component="aggregator",
                            operation="submit",
                            property_id=result.property_id,
                            detail=type(exc).__name__,
                        ),
                    ) from exc
            self._move(result.property_id, PropertyState.REPORTED)
            self._results[result.property_id] = result
        logger.debug("Property %s reported: %s", result.property_id, result.outcome)

    def report(self, seed: int, config: TestConfig, elapsed: float = 0.0) -> RunReport:
        """Id-ordered report of everything submitted so far.

        Properties still Pending are listed as skipped.
        """
        with self._lock:
            results = tuple(self._results.values())
            skipped = tuple(
                SkippedProperty(property_id, self._names[property_id])
                for property_id, state in self._states.items()
                if state is PropertyState.PENDING
            )
        return RunReport(
            results=results, seed=seed, config=config, skipped=skipped, elapsed=elapsed
        )

    def _current(self, property_id: int, operation: str) -> PropertyState:
        state = self._states.get(property_id)
        if state is None:
            msg = f"Property {property_id} is not registered with the aggregator"
            raise StateTransitionError(msg, self._context(operation, property_id, None))
        return state

    def _move(self, property_id: int, new_state: PropertyState) -> None:
        current = self._current(property_id, "transition")
        if new_state not in _TRANSITIONS[current]:
            msg = f"Illegal transition {current} -> {new_state} for property {property_id}"
            raise StateTransitionError(msg, self._context("transition", property_id, current))
        self._states[property_id] = new_state

    @staticmethod
    def _context(operation: str, property_id: int, state: PropertyState | None) -> FaultContext:
        return FaultContext(
            component="aggregator",
            operation=operation,
            property_id=property_id,
            detail=None if state is None else str(state),
        )
