"""Tests for run results, report formatting and the seed log (reporting/).

Python 3.13+.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from b64verify.codec import InvalidByte
from b64verify.config import URL_SAFE, Alphabet, TestConfig
from b64verify.constants import STANDARD_SYMBOLS
from b64verify.enums import DefectKind, EngineVariant, Outcome, PaddingMode, PropertyCategory
from b64verify.generators import ChunkedInput, MalformedInput
from b64verify.properties import default_registry
from b64verify.reporting import (
    Counterexample,
    OutputFormat,
    PropertyResult,
    ReportFormatter,
    RunReport,
    SeedLog,
    SkippedProperty,
    read_seed_log,
    render_value,
)
from b64verify.reporting.formatter import replay_flags

if TYPE_CHECKING:
    from pathlib import Path


def _counterexample(config: TestConfig | None = None, **overrides: object) -> Counterexample:
    fields: dict[str, object] = {
        "value": b"\x00\x00\x00",
        "config": config or TestConfig(),
        "generator": "bytes",
        "seed": 99,
        "index": 12,
        "diagnostic": "roundtrip of b'\\x00\\x00\\x00' returned b'\\x00\\x00'",
        "original": b"\x01\x02\x03\x04",
        "shrink_steps": 4,
        "shrink_attempts": 20,
    }
    fields.update(overrides)
    return Counterexample(**fields)  # type: ignore[arg-type]


def _result(
    property_id: int,
    outcome: Outcome = Outcome.PASSED,
    counterexample: Counterexample | None = None,
) -> PropertyResult:
    return PropertyResult(
        property_id=property_id,
        name=default_registry().get(property_id).name,
        category=PropertyCategory.ROUNDTRIP,
        outcome=outcome,
        iterations_run=13 if counterexample else 20,
        elapsed=0.25,
        memory_mib=48.0,
        diagnostic=counterexample.diagnostic if counterexample else "",
        counterexample=counterexample,
    )


class TestRenderValue:
    """Structured rendering of generated values."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (b"\xff", {"type": "bytes", "length": 1, "hex": "ff"}),
            ("QQ==", {"type": "str", "length": 4, "text": "QQ=="}),
            (
                ChunkedInput(b"ab", (1,)),
                {"type": "chunked", "hex": "6162", "splits": [1]},
            ),
            (42, {"type": "int", "repr": "42"}),
        ],
    )
    def test_shapes(self, value: object, expected: dict[str, object]) -> None:
        assert render_value(value) == expected

    def test_malformed(self) -> None:
        rendered = render_value(
            MalformedInput("Q!", DefectKind.INVALID_BYTE, InvalidByte(1, 33))
        )
        assert rendered == {
            "type": "malformed",
            "text": "Q!",
            "defect": "invalid_byte",
            "expected": "InvalidByte(position=1, byte=33)",
        }

    def test_config_and_alphabet(self) -> None:
        assert render_value(TestConfig(alphabet=URL_SAFE))["alphabet"] == "url_safe"
        assert render_value(URL_SAFE)["symbols"] == URL_SAFE.symbols


class TestRunReport:
    """Ordering and rollup."""

    def test_results_sorted(self) -> None:
        results = (_result(3), _result(1), _result(2))
        report = RunReport(results=results, seed=0, config=TestConfig())
        assert [r.property_id for r in report.results] == [1, 2, 3]
        assert report.passed

    def test_failure_fails_rollup(self) -> None:
        failed = _result(2, Outcome.FAILED, _counterexample())
        report = RunReport(results=(_result(1), failed), seed=0, config=TestConfig())
        assert not report.passed
        assert report.failures == (failed,)
        assert report.unsuccessful_count == 1

    def test_to_dict(self) -> None:
        report = RunReport(
            results=(_result(2, Outcome.TIMEOUT, _counterexample()),),
            seed=7,
            config=TestConfig(iteration_count=20),
            skipped=(SkippedProperty(5, "padding_mode_roundtrip"),),
            elapsed=1.234567891,
        )
        data = report.to_dict()
        assert data["passed"] is False
        assert data["counts"] == {"passed": 0, "failed": 0, "timeout": 1, "skipped": 1}
        assert data["config"]["iteration_count"] == 20
        assert data["elapsed"] == 1.234568
        assert data["codec"] is None
        assert data["skipped"] == [{"id": 5, "name": "padding_mode_roundtrip"}]
        counterexample = data["results"][0]["counterexample"]
        assert counterexample["value"] == {"type": "bytes", "length": 3, "hex": "000000"}
        assert counterexample["seed"] == 99
        json.dumps(data)


class TestReplayFlags:
    """Non-default settings in the replay hint."""

    def test_defaults_produce_nothing(self) -> None:
        assert replay_flags(TestConfig(iteration_count=5)) == []

    def test_every_setting(self) -> None:
        config = TestConfig(
            alphabet=URL_SAFE,
            padding_mode=PaddingMode.REQUIRE_NONE,
            engine_variant=EngineVariant.NAIVE,
            max_input_size=64,
        )
        assert replay_flags(config) == [
            ("--alphabet", "url_safe"),
            ("--padding", "require_none"),
            ("--engine", "naive"),
            ("--max-input-size", "64"),
        ]

    def test_codec_spec_first(self) -> None:
        flags = replay_flags(TestConfig(padding_mode=PaddingMode.NONE), "my_pkg.codec:Base64")
        assert flags == [("--codec", "my_pkg.codec:Base64"), ("--padding", "none")]

    def test_custom_table_quoted(self) -> None:
        symbols = STANDARD_SYMBOLS[:62] + "!$"
        ((flag, value),) = replay_flags(TestConfig(alphabet=Alphabet.custom(symbols)))
        assert flag == "--alphabet"
        assert value == f"'{symbols}'"


class TestTextFormatter:
    """Human-readable output."""

    def test_passing_line(self) -> None:
        line = ReportFormatter().format_result(_result(1))
        assert line.startswith("[PASS]    1 encode_decode_roundtrip")
        assert "20 trials" in line
        assert "48.0 MiB" in line

    def test_failure_block(self) -> None:
        config = TestConfig(padding_mode=PaddingMode.NONE)
        result = _result(1, Outcome.FAILED, _counterexample())
        text = ReportFormatter().format_result(result, seed=42, config=config)
        lines = text.splitlines()
        assert lines[0].startswith("[FAIL]    1")
        assert 'counterexample: {"type": "bytes", "length": 3, "hex": "000000"}' in text
        assert "replay: b64verify replay --property 1 --index 12 --seed 42 --padding none" in text
        assert "shrunk in 4 steps (20 attempts)" in text
        assert "shrink bound reached" not in text

    def test_codec_in_replay_hint(self) -> None:
        report = RunReport(
            results=(_result(1, Outcome.FAILED, _counterexample()),),
            seed=4,
            config=TestConfig(),
            codec="my_pkg.codec:Base64",
        )
        text = ReportFormatter().format(report)
        assert "replay: b64verify replay --property 1 --index 12 --seed 4 --codec my_pkg" in text

    def test_bound_reached_noted(self) -> None:
        result = _result(1, Outcome.FAILED, _counterexample(bound_reached=True))
        assert "shrink bound reached" in ReportFormatter().format_result(result)

    def test_timeout_tag(self) -> None:
        result = _result(4, Outcome.TIMEOUT, _counterexample())
        assert ReportFormatter().format_result(result).startswith("[TIME]")

    def test_long_values_truncated(self) -> None:
        big = _counterexample(value=bytes(500))
        result = _result(1, Outcome.FAILED, big)
        text = ReportFormatter(max_value_length=40).format_result(result)
        assert any(line.endswith("...") for line in text.splitlines())

    def test_full_report(self) -> None:
        report = RunReport(
            results=(_result(1), _result(2, Outcome.FAILED, _counterexample())),
            seed=3,
            config=TestConfig(),
            skipped=(SkippedProperty(3, "cross_engine_consistency"),),
        )
        text = ReportFormatter().format(report)
        assert "[SKIP]    3 cross_engine_consistency" in text
        assert "3 properties: 1 passed, 1 failed, 0 timeout, 1 skipped (seed 3" in text
        assert text.endswith("FAILED")

    def test_failures_only(self) -> None:
        report = RunReport(
            results=(_result(1), _result(2, Outcome.FAILED, _counterexample())),
            seed=0,
            config=TestConfig(),
        )
        text = ReportFormatter(show_passed=False).format(report)
        assert "[PASS]" not in text
        assert "[FAIL]" in text


class TestJsonFormatter:
    """Machine-readable output."""

    def test_report_round_trips_through_json(self) -> None:
        report = RunReport(results=(_result(1),), seed=0, config=TestConfig())
        data = json.loads(ReportFormatter(OutputFormat.JSON).format(report))
        assert data == json.loads(json.dumps(report.to_dict()))

    def test_result_line(self) -> None:
        line = ReportFormatter(OutputFormat.JSON).format_result(_result(1))
        assert json.loads(line)["name"] == "encode_decode_roundtrip"

    def test_catalog(self) -> None:
        text = ReportFormatter(OutputFormat.JSON).format_catalog(default_registry().select([7]))
        (entry,) = json.loads(text)
        assert entry["requirements"] == ["2.5"]
        assert entry["category"] == "alphabet"


class TestSeedLog:
    """JSON lines sink."""

    def test_passing_results_not_logged(self, tmp_path: Path) -> None:
        log = SeedLog(tmp_path / "seeds.jsonl", run_seed=1)
        log(_result(1))
        assert log.entries_written == 0
        assert not log.path.exists()

    def test_failures_appended(self, tmp_path: Path) -> None:
        path = tmp_path / "seeds.jsonl"
        log = SeedLog(path, run_seed=6, codec="my_pkg.codec:Base64")
        log(_result(1, Outcome.FAILED, _counterexample()))
        log(_result(2, Outcome.TIMEOUT, _counterexample(index=0)))
        entries = read_seed_log(path)
        assert log.entries_written == 2
        assert [e["property_id"] for e in entries] == [1, 2]
        assert entries[0]["run_seed"] == 6
        assert entries[0]["codec"] == "my_pkg.codec:Base64"
        assert entries[0]["index"] == 12
        assert entries[1]["outcome"] == "timeout"
        assert entries[0]["config"] == "standard/canonical/general_purpose"

    def test_missing_directory_raises(self, tmp_path: Path) -> None:
        log = SeedLog(tmp_path / "absent" / "seeds.jsonl", run_seed=0)
        with pytest.raises(OSError):
            log(_result(1, Outcome.FAILED, _counterexample()))
