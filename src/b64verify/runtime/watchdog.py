"""Per-trial timeout enforcement.

Python cannot interrupt a running thread, so a trial that exceeds its budget
is abandoned rather than stopped: TrialWatchdog runs each call on a daemon
worker thread and waits for it with a timeout. When the wait expires the
worker is left to finish (or spin) on its own and the next call gets a fresh
worker. Daemon workers never block interpreter exit.

Each property owns one watchdog; calls on a watchdog are sequential.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

__all__ = ["TrialWatchdog"]

logger = logging.getLogger(__name__)


class _Job:
    __slots__ = ("args", "done", "error", "func", "value")

    def __init__(self, func: Callable[..., Any], args: tuple[Any, ...]) -> None:
        self.func = func
        self.args = args
        self.done = threading.Event()
        self.value: Any = None
        self.error: BaseException | None = None


def _serve(jobs: queue.SimpleQueue[_Job | None]) -> None:
    while (job := jobs.get()) is not None:
        try:
            job.value = job.func(*job.args)
        except BaseException as exc:  # noqa: BLE001 - re-raised in the caller's thread
            job.error = exc
        finally:
            job.done.set()


class TrialWatchdog:
    """Run callables with a wall-clock budget.

    Args:
        timeout: Seconds allowed per call; None runs calls inline, unbounded
        name: Thread name prefix for workers

    Example:
        >>> watchdog = TrialWatchdog(timeout=1.0)
        >>> watchdog.call(sum, [1, 2, 3])
        (True, 6)
        >>> watchdog.close()
    """

    __slots__ = ("_abandoned", "_jobs", "_name", "_worker", "timeout")

    def __init__(self, timeout: float | None, name: str = "b64verify-trial") -> None:
        self.timeout = timeout
        self._name = name
        self._jobs: queue.SimpleQueue[_Job | None] | None = None
        self._worker: threading.Thread | None = None
        self._abandoned = 0

    @property
    def abandoned(self) -> int:
        """Workers left running after a timeout."""
        return self._abandoned

    def _ensure_worker(self) -> queue.SimpleQueue[_Job | None]:
        if self._jobs is None:
            self._jobs = queue.SimpleQueue()
            self._worker = threading.Thread(
                target=_serve,
                args=(self._jobs,),
                name=f"{self._name}-{self._abandoned}",
                daemon=True,
            )
            self._worker.start()
        return self._jobs

    def call[T](self, func: Callable[..., T], *args: Any) -> tuple[bool, T | None]:
        """Run ``func(*args)`` within the budget.

        Returns:
            Tuple of (completed, value): (True, result) if the call returned in
            time, (False, None) if it was abandoned.

        Raises:
            BaseException: Whatever ``func`` raised, re-raised in this thread
        """
        if self.timeout is None:
            return True, func(*args)
        job = _Job(func, args)
        self._ensure_worker().put(job)
        if not job.done.wait(self.timeout):
            logger.warning(
                "Trial exceeded %.3fs in %s; abandoning worker thread", self.timeout, self._name
            )
            self._abandoned += 1
            self._jobs = None
            self._worker = None
            return False, None
        if job.error is not None:
            raise job.error
        return True, job.value

    def close(self) -> None:
        """Stop the current worker. Abandoned workers are left to finish."""
        if self._jobs is not None:
            self._jobs.put(None)
        self._jobs = None
        self._worker = None

    def __enter__(self) -> TrialWatchdog:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
