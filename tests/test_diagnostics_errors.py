"""Property-based tests for diagnostics/errors.py: HarnessError hierarchy.

Covers:
- Message and context accessors
- Mutation protection after construction
- PredicateFault cause capture
- Raise/catch behavior and exception chaining
- Counterexample.require_minimal escalation to ShrinkBoundExceeded

Python 3.13+.
"""

from __future__ import annotations

import pytest
from hypothesis import event, given
from hypothesis import strategies as st

from b64verify.config import TestConfig
from b64verify.diagnostics import (
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
from b64verify.reporting import Counterexample

_messages = st.text(min_size=1, max_size=200)
_contexts = st.builds(
    FaultContext,
    component=st.sampled_from(["generator", "registry", "executor", "shrinker", "aggregator"]),
    operation=st.sampled_from(["produce", "register", "run", "submit"]),
    property_id=st.none() | st.integers(min_value=1, max_value=32),
    detail=st.none() | st.text(max_size=40),
)
_error_types = st.sampled_from(
    [
        AggregationFault,
        ConfigurationError,
        GenerationError,
        RegistryError,
        ShrinkBoundExceeded,
        StateTransitionError,
    ]
)


class TestHarnessError:
    """Accessors and immutability."""

    @given(error_type=_error_types, message=_messages, context=st.none() | _contexts)
    def test_message_and_context(
        self, error_type: type[HarnessError], message: str, context: FaultContext | None
    ) -> None:
        """PROPERTY: str() is the message; context is returned unchanged."""
        error = error_type(message, context)
        assert str(error) == message
        assert error.context is context
        assert isinstance(error, HarnessError)
        event(f"type={error_type.__name__}")

    @given(error_type=_error_types, message=_messages)
    def test_attributes_frozen(self, error_type: type[HarnessError], message: str) -> None:
        """PROPERTY: No attribute can be set after construction."""
        error = error_type(message)
        with pytest.raises(AttributeError, match="Cannot modify"):
            error._context = FaultContext("x", "y")  # type: ignore[misc]
        with pytest.raises(AttributeError, match="Cannot modify"):
            error.extra = 1  # type: ignore[attr-defined]

    def test_repr(self) -> None:
        context = FaultContext(component="registry", operation="get", property_id=4)
        assert repr(RegistryError("gone", context)) == (
            "RegistryError('gone', context=FaultContext(component='registry', "
            "operation='get', property_id=4, detail=None))"
        )

    def test_raise_and_chain(self) -> None:
        with pytest.raises(AggregationFault) as exc_info:
            try:
                raise OSError("disk full")
            except OSError as exc:
                raise AggregationFault("sink failed") from exc
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_notes_allowed(self) -> None:
        error = ConfigurationError("bad alphabet")
        error.add_note("while parsing --alphabet")
        assert error.__notes__ == ["while parsing --alphabet"]

    def test_fault_context_frozen(self) -> None:
        context = FaultContext(component="config", operation="validate")
        with pytest.raises(AttributeError):
            context.component = "other"  # type: ignore[misc]


class TestPredicateFault:
    """Capture of exceptions raised by the codec."""

    @given(message=st.text(max_size=100))
    def test_cause_recorded(self, message: str) -> None:
        """PROPERTY: Cause type and message survive capture."""
        fault = PredicateFault(RuntimeError(message))
        assert fault.cause_type == "RuntimeError"
        assert fault.cause_message == message
        assert str(fault) == f"codec raised RuntimeError: {message}"

    def test_frozen(self) -> None:
        fault = PredicateFault(ValueError("x"))
        with pytest.raises(AttributeError):
            fault._cause_type = "Other"  # type: ignore[misc]


class TestRequireMinimal:
    """ShrinkBoundExceeded escalation."""

    def _counterexample(self, *, bound_reached: bool) -> Counterexample:
        return Counterexample(
            value=b"\x00",
            config=TestConfig(),
            generator="bytes",
            seed=1,
            index=2,
            diagnostic="broken",
            original=b"\x00\x01",
            shrink_steps=3,
            shrink_attempts=500,
            bound_reached=bound_reached,
        )

    def test_minimal_returns_self(self) -> None:
        counterexample = self._counterexample(bound_reached=False)
        assert counterexample.require_minimal() is counterexample

    def test_bound_reached_raises(self) -> None:
        with pytest.raises(ShrinkBoundExceeded, match="after 500 attempts") as exc_info:
            self._counterexample(bound_reached=True).require_minimal()
        context = exc_info.value.context
        assert context is not None
        assert context.component == "shrinker"
