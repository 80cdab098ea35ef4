"""Property executor.

PropertyExecutor runs the selected properties of a registry against one codec:

- Properties run concurrently on a bounded ThreadPoolExecutor.
- Within a property, trials run strictly sequentially: trial ``i`` draws
  ``produce(i)`` from a generator seeded with ``derive_seed(run_seed, id)``,
  so any trial can be replayed from (run seed, property id, index) alone.
- The first failing trial stops the loop and starts the shrinker.
- Everything that goes wrong inside a property (codec faults, generator
  faults, timeouts) ends up in that property's result. Only an
  AggregationFault from the result sink aborts the run.

Architecture:
    Each worker owns its generator and its TrialWatchdog; the only shared
    mutable structure is the ResultAggregator. Cancellation is checked at
    property boundaries: properties not yet started when ``cancel()`` is
    called stay Pending and are reported as skipped.

Python 3.13+. Uses psutil for memory sampling.
"""

from __future__ import annotations

import logging
import os
import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import TYPE_CHECKING

import psutil

from b64verify.codec import ReferenceCodec
from b64verify.config.test_config import RunOptions
from b64verify.diagnostics.errors import AggregationFault, GenerationError
from b64verify.enums import Outcome, PropertyState
from b64verify.generators.base import derive_seed
from b64verify.reporting.report import Counterexample, PropertyResult
from b64verify.runtime.aggregator import ResultAggregator
from b64verify.runtime.shrinker import Shrinker
from b64verify.runtime.watchdog import TrialWatchdog

if TYPE_CHECKING:
    from b64verify.codec.protocol import Codec
    from b64verify.config.test_config import TestConfig
    from b64verify.generators.base import GeneratedInput
    from b64verify.properties.model import Property, Verdict
    from b64verify.properties.registry import PropertyRegistry
    from b64verify.reporting.report import RunReport

__all__ = ["PropertyExecutor", "property_seed"]

logger = logging.getLogger(__name__)

_MIB = 1024 * 1024


def property_seed(run_seed: int, property_id: int) -> int:
    """Seed of a property's generator within a run."""
    return derive_seed(run_seed, property_id)


class PropertyExecutor:
    """Run registered properties against a codec.

    Args:
        registry: Property catalog
        config: Run configuration shared (read-only) by every property
        codec: Codec under test (default: ReferenceCodec)
        options: Seed, parallelism, timeout, shrink bound, property subset
        aggregator: Result collector; a fresh ResultAggregator per run if None

    Example:
        >>> from b64verify.config import TestConfig
        >>> from b64verify.properties import default_registry
        >>> executor = PropertyExecutor(default_registry(), TestConfig(iteration_count=10))
        >>> executor.run().passed  # doctest: +SKIP
        True
    """

    def __init__(
        self,
        registry: PropertyRegistry,
        config: TestConfig,
        codec: Codec | None = None,
        options: RunOptions | None = None,
        aggregator: ResultAggregator | None = None,
    ) -> None:
        self.registry = registry
        self.config = config
        self.codec: Codec = ReferenceCodec() if codec is None else codec
        self.options = RunOptions() if options is None else options
        self._aggregator = aggregator
        self._cancelled = threading.Event()
        self._process = psutil.Process(os.getpid()) if self.options.sample_memory else None

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        """Stop starting new properties. In-flight properties finish."""
        if not self._cancelled.is_set():
            logger.info("Run cancelled; no further properties will start")
        self._cancelled.set()

    def run(self) -> RunReport:
        """Run the selected properties and return the id-ordered report.

        Raises:
            RegistryError: If ``options.property_ids`` names an unknown id
            AggregationFault: If the result sink failed
        """
        selected = self.registry.select(self.options.property_ids)
        aggregator = ResultAggregator() if self._aggregator is None else self._aggregator
        aggregator.register(selected)
        logger.info(
            "Running %s properties (seed=%s, iterations=%s, jobs=%s, config=%s)",
            len(selected),
            self.options.seed,
            self.config.iteration_count,
            self.options.parallelism,
            self.config.describe(),
        )
        start = time.perf_counter()
        with ThreadPoolExecutor(
            max_workers=self.options.parallelism, thread_name_prefix="b64verify"
        ) as pool:
            futures = [pool.submit(self._execute, prop, aggregator) for prop in selected]
            try:
                for future in as_completed(futures):
                    future.result()
            except AggregationFault:
                self.cancel()
                raise
            except KeyboardInterrupt:
                self.cancel()
                logger.warning("Interrupted; waiting for in-flight properties to finish")
                for future in futures:
                    future.result()
        report = aggregator.report(self.options.seed, self.config, time.perf_counter() - start)
        logger.info(
            "Run finished in %.2fs: %s",
            report.elapsed,
            ", ".join(f"{count} {name}" for name, count in report.counts().items()),
        )
        return report

    def _execute(self, prop: Property, aggregator: ResultAggregator) -> None:
        if self._cancelled.is_set():
            logger.debug("Skipping property %s (%s): run cancelled", prop.id, prop.name)
            return
        aggregator.transition(prop.id, PropertyState.RUNNING)
        result = self.run_property(prop, aggregator)
        aggregator.submit(result)

    def run_property(
        self, prop: Property, aggregator: ResultAggregator | None = None
    ) -> PropertyResult:
        """Run ``iteration_count`` sequential trials of one property.

        When an aggregator is given, the property is moved to Shrinking while
        its counterexample is minimized; the caller submits the result.
        """
        start = time.perf_counter()
        seed = property_seed(self.options.seed, prop.id)
        watchdog = TrialWatchdog(self.options.trial_timeout, name=f"b64verify-p{prop.id}")
        iterations = 0
        try:
            generator = prop.generator(seed, self.config)
        except GenerationError as exc:
            logger.warning("Property %s (%s): generator setup failed: %s", prop.id, prop.name, exc)
            return self._result(prop, Outcome.FAILED, 0, start, diagnostic=str(exc))
        try:
            for index in range(self.config.iteration_count):
                generated = generator.produce(index)
                iterations += 1
                trial_config = generated.config or self.config
                completed, verdict = watchdog.call(
                    prop.run, generated.value, trial_config, self.codec
                )
                if not completed:
                    return self._timed_out(prop, generated, iterations, start)
                if verdict is not None and not verdict.passed:
                    logger.warning(
                        "Property %s (%s) failed at trial %s: %s",
                        prop.id,
                        prop.name,
                        index,
                        verdict.diagnostic,
                    )
                    if aggregator is not None:
                        aggregator.transition(prop.id, PropertyState.SHRINKING)
                    counterexample = self._shrink(prop, generated, verdict, watchdog)
                    return self._result(
                        prop,
                        Outcome.FAILED,
                        iterations,
                        start,
                        diagnostic=counterexample.diagnostic,
                        counterexample=counterexample,
                    )
        except GenerationError as exc:
            logger.warning("Property %s (%s): generation failed: %s", prop.id, prop.name, exc)
            return self._result(prop, Outcome.FAILED, iterations, start, diagnostic=str(exc))
        finally:
            generator.close()
            watchdog.close()
        logger.debug("Property %s (%s) passed %s trials", prop.id, prop.name, iterations)
        return self._result(prop, Outcome.PASSED, iterations, start)

    def replay(self, property_id: int, index: int) -> Verdict:
        """Re-run a single trial of a property, inline and unshrunk.

        Raises:
            RegistryError: If the property id is unknown
            GenerationError: If the index is negative
        """
        prop = self.registry.get(property_id)
        with prop.generator(property_seed(self.options.seed, prop.id), self.config) as generator:
            generated = generator.produce(index)
        logger.info(
            "Replaying property %s (%s) trial %s from generator %s",
            prop.id,
            prop.name,
            index,
            generated.generator,
        )
        return prop.run(generated.value, generated.config or self.config, self.codec)

    def _shrink(
        self,
        prop: Property,
        generated: GeneratedInput[object],
        verdict: Verdict,
        watchdog: TrialWatchdog,
    ) -> Counterexample:
        last_failure = verdict

        def still_fails(candidate: GeneratedInput[object]) -> bool:
            nonlocal last_failure
            config = candidate.config or self.config
            completed, outcome = watchdog.call(prop.run, candidate.value, config, self.codec)
            if not completed or outcome is None or outcome.passed:
                return False
            last_failure = outcome
            return True

        result = Shrinker(still_fails, self.options.shrink_bound).shrink(generated)
        if result.bound_reached:
            logger.warning(
                "Property %s (%s): shrinking stopped at bound %s",
                prop.id,
                prop.name,
                self.options.shrink_bound,
            )
        # last_failure belongs to the last accepted candidate, which is result.value.
        final = last_failure if result.steps else verdict
        return Counterexample(
            value=result.value.value,
            config=result.value.config or self.config,
            generator=generated.generator,
            seed=generated.seed,
            index=generated.index,
            diagnostic=final.diagnostic,
            original=generated.value,
            shrink_steps=result.steps,
            shrink_attempts=result.attempts,
            bound_reached=result.bound_reached,
            fault_type=None if final.fault is None else final.fault.cause_type,
        )

    def _timed_out(
        self, prop: Property, generated: GeneratedInput[object], iterations: int, start: float
    ) -> PropertyResult:
        diagnostic = f"trial {generated.index} exceeded {self.options.trial_timeout}s"
        logger.warning("Property %s (%s): %s", prop.id, prop.name, diagnostic)
        counterexample = Counterexample(
            value=generated.value,
            config=generated.config or self.config,
            generator=generated.generator,
            seed=generated.seed,
            index=generated.index,
            diagnostic=diagnostic,
            original=generated.value,
        )
        return self._result(
            prop,
            Outcome.TIMEOUT,
            iterations,
            start,
            diagnostic=diagnostic,
            counterexample=counterexample,
        )

    def _result(
        self,
        prop: Property,
        outcome: Outcome,
        iterations: int,
        start: float,
        *,
        diagnostic: str = "",
        counterexample: Counterexample | None = None,
    ) -> PropertyResult:
        memory = None
        if self._process is not None:
            memory = self._process.memory_info().rss / _MIB
        return PropertyResult(
            property_id=prop.id,
            name=prop.name,
            category=prop.category,
            outcome=outcome,
            iterations_run=iterations,
            elapsed=time.perf_counter() - start,
            memory_mib=memory,
            diagnostic=diagnostic,
            counterexample=counterexample,
        )
