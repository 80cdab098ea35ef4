"""Execution machinery: executor, shrinker, watchdog and result aggregation.

Exports:
    PropertyExecutor: Runs properties against a codec
    ResultAggregator: Thread-safe result collector and state machine
    Shrinker, ShrinkResult: Counterexample minimization
    TrialWatchdog: Per-trial timeout enforcement

Python 3.13+.
"""

from .aggregator import ResultAggregator, ResultSink
from .executor import PropertyExecutor, property_seed
from .shrinker import Shrinker, ShrinkResult, value_candidates
from .watchdog import TrialWatchdog

__all__ = [
    "PropertyExecutor",
    "ResultAggregator",
    "ResultSink",
    "ShrinkResult",
    "Shrinker",
    "TrialWatchdog",
    "property_seed",
    "value_candidates",
]
