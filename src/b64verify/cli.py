"""Command-line entry point.

Subcommands:
    run     Run the property catalog (or a subset) and print the report
    list    Enumerate registered properties
    replay  Re-run one trial of one property from its (seed, index)

Exit codes:
    0       Every selected property passed
    1..100  Number of failed, timed-out or skipped properties (capped at 100)
    2       Usage or configuration error
    3       Aggregation fault (result sink failed)

Python 3.13+.
"""

from __future__ import annotations

import argparse
import dataclasses
import importlib
import logging
import sys
from typing import TYPE_CHECKING

from b64verify.codec import Codec, ReferenceCodec
from b64verify.config import Alphabet, RunOptions, TestConfig, seed_from_environment
from b64verify.constants import (
    ALPHABET_SIZE,
    DEFAULT_ITERATIONS,
    DEFAULT_MAX_INPUT_SIZE,
    DEFAULT_PARALLELISM,
    DEFAULT_SHRINK_BOUND,
    DEFAULT_TRIAL_TIMEOUT,
)
from b64verify.diagnostics.errors import (
    AggregationFault,
    ConfigurationError,
    FaultContext,
    GenerationError,
    RegistryError,
)
from b64verify.enums import AlphabetKind, EngineVariant, PaddingMode
from b64verify.properties import default_registry
from b64verify.reporting import OutputFormat, ReportFormatter, SeedLog
from b64verify.runtime import PropertyExecutor, ResultAggregator

if TYPE_CHECKING:
    from collections.abc import Sequence

__all__ = ["build_parser", "load_codec", "main"]

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_AGGREGATION = 3
_MAX_FAILURE_EXIT = 100


def _config_error(message: str, operation: str) -> ConfigurationError:
    return ConfigurationError(message, FaultContext(component="cli", operation=operation))


def parse_alphabet(value: str) -> Alphabet:
    """Built-in alphabet name, or a literal 64-symbol custom table."""
    if len(value) == ALPHABET_SIZE:
        return Alphabet.custom(value)
    return Alphabet.named(value)


def load_codec(spec: str | None) -> Codec:
    """Load a codec from ``module:attribute``.

    A class (or any callable that is not itself a codec) is called without
    arguments. None selects the bundled ReferenceCodec.

    Raises:
        ConfigurationError: If the target cannot be imported or is not a Codec
    """
    if spec is None:
        return ReferenceCodec()
    module_name, _, attribute = spec.partition(":")
    if not module_name or not attribute:
        msg = f"--codec expects module:attribute, got {spec!r}"
        raise _config_error(msg, "codec")
    try:
        target = getattr(importlib.import_module(module_name), attribute)
    except (ImportError, AttributeError) as exc:
        msg = f"Cannot load codec {spec!r}: {exc}"
        raise _config_error(msg, "codec") from exc
    codec = target
    if isinstance(target, type) or not isinstance(target, Codec):
        try:
            codec = target()
        except TypeError as exc:
            msg = f"Cannot instantiate codec {spec!r}: {exc}"
            raise _config_error(msg, "codec") from exc
    if not isinstance(codec, Codec):
        msg = f"{spec!r} does not provide the codec interface"
        raise _config_error(msg, "codec")
    return codec


def _add_config_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--alphabet",
        default=str(AlphabetKind.STANDARD),
        help="Built-in alphabet name or a 64-symbol custom table (default: standard)",
    )
    parser.add_argument(
        "--padding",
        choices=[str(mode) for mode in PaddingMode],
        default=str(PaddingMode.CANONICAL),
        help="Padding mode (default: canonical)",
    )
    parser.add_argument(
        "--engine",
        choices=[str(engine) for engine in EngineVariant],
        default=str(EngineVariant.GENERAL_PURPOSE),
        help="Engine variant (default: general_purpose)",
    )
    parser.add_argument(
        "--iterations", type=int, default=DEFAULT_ITERATIONS, help="Trials per property"
    )
    parser.add_argument(
        "--max-input-size",
        type=int,
        default=DEFAULT_MAX_INPUT_SIZE,
        help="Upper bound for generated byte sequences",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Run seed (default: $B64VERIFY_SEED or 0)"
    )
    parser.add_argument("--codec", default=None, help="Codec under test as module:attribute")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="b64verify",
        description="Property-based verification of base64-family codecs.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Full catalog, 200 trials per property, 8 workers:
  b64verify run --iterations 200 --jobs 8

  # Only the error taxonomy properties, against a custom codec:
  b64verify run --property 17 18 19 20 --codec mypkg.codec:Base64Codec

  # Reproduce a reported failure:
  b64verify replay --property 17 --index 12 --seed 42
""",
    )
    parser.add_argument(
        "--verbose", "-v", action="count", default=0, help="-v for progress, -vv for trial detail"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    run = commands.add_parser("run", help="Run the property catalog")
    _add_config_arguments(run)
    run.add_argument(
        "--property", type=int, nargs="+", dest="properties", default=None, help="Property ids"
    )
    run.add_argument("--jobs", type=int, default=DEFAULT_PARALLELISM, help="Worker threads")
    run.add_argument(
        "--trial-timeout",
        type=float,
        default=DEFAULT_TRIAL_TIMEOUT,
        help=f"Seconds allowed per trial (default: {DEFAULT_TRIAL_TIMEOUT:g})",
    )
    run.add_argument(
        "--no-timeout", action="store_true", help="Run trials inline without a watchdog"
    )
    run.add_argument(
        "--shrink-bound", type=int, default=DEFAULT_SHRINK_BOUND, help="Shrink attempt limit"
    )
    run.add_argument(
        "--format", choices=[str(fmt) for fmt in OutputFormat], default=str(OutputFormat.TEXT)
    )
    run.add_argument("--failures-only", action="store_true", help="Omit passing properties")
    run.add_argument(
        "--seed-log", default=None, help="Append failing seeds to this JSON lines file"
    )
    run.add_argument("--no-memory", action="store_true", help="Skip RSS sampling")

    listing = commands.add_parser("list", help="List registered properties")
    listing.add_argument(
        "--format", choices=[str(fmt) for fmt in OutputFormat], default=str(OutputFormat.TEXT)
    )

    replay = commands.add_parser("replay", help="Replay one trial")
    _add_config_arguments(replay)
    replay.add_argument("--property", type=int, required=True, dest="property_id")
    replay.add_argument("--index", type=int, required=True)
    return parser


def _test_config(args: argparse.Namespace) -> TestConfig:
    return TestConfig(
        alphabet=parse_alphabet(args.alphabet),
        padding_mode=PaddingMode(args.padding),
        engine_variant=EngineVariant(args.engine),
        iteration_count=args.iterations,
        max_input_size=args.max_input_size,
    )


def _seed(args: argparse.Namespace) -> int:
    return seed_from_environment() if args.seed is None else args.seed


def _run(args: argparse.Namespace) -> int:
    config = _test_config(args)
    seed = _seed(args)
    options = RunOptions(
        seed=seed,
        parallelism=args.jobs,
        trial_timeout=None if args.no_timeout else args.trial_timeout,
        shrink_bound=args.shrink_bound,
        sample_memory=not args.no_memory,
        property_ids=None if args.properties is None else tuple(args.properties),
    )
    sink = None if args.seed_log is None else SeedLog(args.seed_log, seed, codec=args.codec)
    executor = PropertyExecutor(
        default_registry(),
        config,
        codec=load_codec(args.codec),
        options=options,
        aggregator=ResultAggregator(sink),
    )
    report = dataclasses.replace(executor.run(), codec=args.codec)
    formatter = ReportFormatter(OutputFormat(args.format), show_passed=not args.failures_only)
    print(formatter.format(report))
    if report.passed:
        return EXIT_OK
    return min(report.unsuccessful_count, _MAX_FAILURE_EXIT)


def _list(args: argparse.Namespace) -> int:
    print(ReportFormatter(OutputFormat(args.format)).format_catalog(default_registry()))
    return EXIT_OK


def _replay(args: argparse.Namespace) -> int:
    executor = PropertyExecutor(
        default_registry(),
        _test_config(args),
        codec=load_codec(args.codec),
        options=RunOptions(seed=_seed(args), sample_memory=False),
    )
    verdict = executor.replay(args.property_id, args.index)
    if verdict.passed:
        print(f"[PASS] property {args.property_id} trial {args.index}")
        return EXIT_OK
    print(f"[FAIL] property {args.property_id} trial {args.index}: {verdict.diagnostic}")
    return 1


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the ``b64verify`` console script."""
    args = build_parser().parse_args(argv)
    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    try:
        match args.command:
            case "run":
                return _run(args)
            case "list":
                return _list(args)
            case _:
                return _replay(args)
    except (ConfigurationError, RegistryError, GenerationError) as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return EXIT_USAGE
    except AggregationFault as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return EXIT_AGGREGATION


if __name__ == "__main__":
    sys.exit(main())
