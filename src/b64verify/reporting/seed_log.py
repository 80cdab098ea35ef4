"""Seed log: one JSON line per failing property.

Each line holds what ``b64verify replay`` needs to reproduce the failure
(run seed, codec, property id, trial index) plus the shrunk value, so failures found
in CI can be replayed locally.

SeedLog is an aggregator sink. The aggregator serializes calls to it, so it
needs no lock of its own.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from b64verify.reporting.report import render_value

if TYPE_CHECKING:
    from b64verify.reporting.report import PropertyResult

__all__ = ["SeedLog", "read_seed_log"]

logger = logging.getLogger(__name__)


class SeedLog:
    """Append-only JSON lines file of failing properties.

    Args:
        path: Log file; created on the first failure, appended to afterwards
        run_seed: Seed of the run being logged
        codec: ``module:attribute`` of the codec under test, None for the
            bundled reference codec
    """

    __slots__ = ("_codec", "_path", "_run_seed", "entries_written")

    def __init__(self, path: str | Path, run_seed: int, codec: str | None = None) -> None:
        self._path = Path(path)
        self._run_seed = run_seed
        self._codec = codec
        self.entries_written = 0

    @property
    def path(self) -> Path:
        return self._path

    def __call__(self, result: PropertyResult) -> None:
        """Record ``result`` if it carries a counterexample.

        Raises:
            OSError: If the log file cannot be written
        """
        counterexample = result.counterexample
        if counterexample is None:
            return
        entry = {
            "run_seed": self._run_seed,
            "codec": self._codec,
            "property_id": result.property_id,
            "property": result.name,
            "outcome": str(result.outcome),
            "index": counterexample.index,
            "generator": counterexample.generator,
            "generator_seed": counterexample.seed,
            "config": counterexample.config.describe(),
            "value": render_value(counterexample.value),
            "diagnostic": counterexample.diagnostic,
        }
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(entry, ensure_ascii=False) + "\n")
        self.entries_written += 1
        logger.debug("Seed log entry for property %s written to %s", result.property_id, self._path)


def read_seed_log(path: str | Path) -> list[dict[str, object]]:
    """Parse a seed log back into its entries (blank lines ignored)."""
    with Path(path).open(encoding="utf-8") as handle:
        return [json.loads(line) for line in handle if line.strip()]
