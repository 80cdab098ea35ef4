"""Report formatting service.

Renders a RunReport (or the property catalog) as human-readable text or as
JSON for tooling.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import json
import shlex
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from b64verify.config.test_config import TestConfig
from b64verify.enums import AlphabetKind
from b64verify.reporting.report import render_value

if TYPE_CHECKING:
    from collections.abc import Iterable

    from b64verify.properties.model import Property
    from b64verify.reporting.report import Counterexample, PropertyResult, RunReport

__all__ = [
    "OutputFormat",
    "ReportFormatter",
    "replay_flags",
]

_DEFAULT_CONFIG = TestConfig()


def replay_flags(config: TestConfig, codec: str | None = None) -> list[tuple[str, str]]:
    """CLI flags reproducing the non-default settings of ``config`` and the codec."""
    flags: list[tuple[str, str]] = []
    if codec is not None:
        flags.append(("--codec", shlex.quote(codec)))
    if config.alphabet != _DEFAULT_CONFIG.alphabet:
        custom = config.alphabet.kind is AlphabetKind.CUSTOM
        name = config.alphabet.symbols if custom else str(config.alphabet.kind)
        flags.append(("--alphabet", shlex.quote(name)))
    if config.padding_mode is not _DEFAULT_CONFIG.padding_mode:
        flags.append(("--padding", str(config.padding_mode)))
    if config.engine_variant is not _DEFAULT_CONFIG.engine_variant:
        flags.append(("--engine", str(config.engine_variant)))
    if config.max_input_size != _DEFAULT_CONFIG.max_input_size:
        flags.append(("--max-input-size", str(config.max_input_size)))
    return flags


class OutputFormat(StrEnum):
    """Output format options for report formatting."""

    TEXT = "text"  # Aligned human-readable summary (default)
    JSON = "json"  # JSON document for tooling integration


@dataclass(frozen=True, slots=True)
class ReportFormatter:
    """Report formatting service.

    Attributes:
        output_format: Output style (text, json)
        max_value_length: Longest rendered counterexample value in text output
        show_passed: List passing properties in text output

    Example:
        >>> formatter = ReportFormatter()
        >>> print(formatter.format(report))  # doctest: +SKIP
        [PASS]    1 encode_decode_roundtrip               1000 trials   0.412s
        [FAIL]   17 invalid_byte_position                   12 trials   0.003s
              InvalidByte(position=5, byte=33) expected, got None
        ...
        32 properties: 31 passed, 1 failed, 0 timeout, 0 skipped (seed 0)
    """

    output_format: OutputFormat = OutputFormat.TEXT
    max_value_length: int = 200
    show_passed: bool = True

    def format(self, report: RunReport) -> str:
        """Format a complete run report.

        Args:
            report: Report to format

        Returns:
            Formatted report string
        """
        match self.output_format:
            case OutputFormat.TEXT:
                return self._format_text(report)
            case OutputFormat.JSON:
                return json.dumps(report.to_dict(), indent=2, ensure_ascii=False)

    def format_result(
        self,
        result: PropertyResult,
        seed: int | None = None,
        config: TestConfig | None = None,
        codec: str | None = None,
    ) -> str:
        """Format a single property result.

        Args:
            result: Result to format
            seed: Run seed, included in the replay hint when given
            config: Run configuration, its non-default settings go in the replay hint
            codec: Codec spec of the run, passed on to the replay hint

        Example output:
            [FAIL]   17 invalid_byte_position                   12 trials   0.003s
        """
        if self.output_format is OutputFormat.JSON:
            return json.dumps(result.to_dict(), ensure_ascii=False)
        tag = {"passed": "PASS", "failed": "FAIL", "timeout": "TIME"}[str(result.outcome)]
        line = (
            f"[{tag}] {result.property_id:>4} {result.name:<38} "
            f"{result.iterations_run:>6} trials {result.elapsed:>8.3f}s"
        )
        if result.memory_mib is not None:
            line += f" {result.memory_mib:>8.1f} MiB"
        parts = [line]
        if result.diagnostic:
            parts.append(f"       {self._truncate(result.diagnostic)}")
        if result.counterexample is not None:
            parts.extend(
                self._format_counterexample(result, result.counterexample, seed, config, codec)
            )
        return "\n".join(parts)

    def format_catalog(self, properties: Iterable[Property]) -> str:
        """Format the property catalog for ``b64verify list``."""
        if self.output_format is OutputFormat.JSON:
            return json.dumps(
                [
                    {
                        "id": prop.id,
                        "name": prop.name,
                        "category": str(prop.category),
                        "requirements": list(prop.requirements),
                        "description": prop.description,
                    }
                    for prop in properties
                ],
                indent=2,
            )
        return "\n".join(
            f"{prop.id:>4} {prop.name:<38} {prop.category:<14} {prop.description}"
            for prop in properties
        )

    def _format_text(self, report: RunReport) -> str:
        parts: list[str] = [
            self.format_result(result, report.seed, report.config, report.codec)
            for result in report.results
            if self.show_passed or not result.passed
        ]
        parts.extend(
            f"[SKIP] {skipped.property_id:>4} {skipped.name}" for skipped in report.skipped
        )
        counts = report.counts()
        summary = (
            f"{len(report.results) + len(report.skipped)} properties: "
            f"{counts['passed']} passed, {counts['failed']} failed, "
            f"{counts['timeout']} timeout, {counts['skipped']} skipped "
            f"(seed {report.seed}, {report.config.describe()}, {report.elapsed:.2f}s)"
        )
        parts.append(summary)
        parts.append("PASSED" if report.passed else "FAILED")
        return "\n".join(parts)

    def _format_counterexample(
        self,
        result: PropertyResult,
        counterexample: Counterexample,
        seed: int | None,
        config: TestConfig | None,
        codec: str | None,
    ) -> list[str]:
        rendered = json.dumps(render_value(counterexample.value), ensure_ascii=False)
        replay = f"b64verify replay --property {result.property_id} --index {counterexample.index}"
        if seed is not None:
            replay += f" --seed {seed}"
        flags = replay_flags(config or _DEFAULT_CONFIG, codec)
        replay += "".join(f" {flag} {value}" for flag, value in flags)
        lines = [
            f"       counterexample: {self._truncate(rendered)}",
            f"       config: {counterexample.config.describe()}",
            f"       replay: {replay}",
            f"       shrunk in {counterexample.shrink_steps} steps "
            f"({counterexample.shrink_attempts} attempts)",
        ]
        if counterexample.bound_reached:
            lines.append("       shrink bound reached; value may not be minimal")
        return lines

    def _truncate(self, text: str) -> str:
        if len(text) > self.max_value_length:
            return text[: self.max_value_length] + "..."
        return text
