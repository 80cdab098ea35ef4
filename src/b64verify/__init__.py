"""b64verify - property-based verification of base64-family codecs.

Runs a catalog of correctness properties (roundtrip fidelity, character sets,
padding modes, length arithmetic, error taxonomy, streaming, configuration,
buffer safety, edge cases) against any codec implementing the Codec
protocol. Inputs come from seeded generators, so every failure can be
replayed from (seed, property id, trial index); failing inputs are shrunk
before they are reported.

Public API:
    PropertyExecutor - Runs properties against a codec
    default_registry - The built-in 32-property catalog
    TestConfig - Codec configuration under test plus run limits
    RunOptions - Seed, parallelism, timeouts and property subset
    Alphabet - Validated 64-symbol table (STANDARD, URL_SAFE, IMAP_MUTF7)
    Codec - Protocol a codec under test implements
    ReferenceCodec - Bundled codec built on the standard library
    ReportFormatter - Text and JSON rendering of a RunReport

Exceptions:
    HarnessError - Base exception class
    ConfigurationError - Invalid alphabet or configuration values
    RegistryError - Duplicate or unknown property ids
    AggregationFault - Result sink failure (aborts the run)

Submodules:
    b64verify.generators - Seeded input generators
    b64verify.properties - Property model, registry and catalog
    b64verify.runtime - Executor, shrinker, watchdog, aggregator
    b64verify.reporting - Result types, formatter and seed log
    b64verify.codec - Codec protocol, error values and reference codec
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

from .codec import Codec, ReferenceCodec
from .config import IMAP_MUTF7, STANDARD, URL_SAFE, Alphabet, RunOptions, TestConfig
from .diagnostics import AggregationFault, ConfigurationError, HarnessError, RegistryError
from .enums import AlphabetKind, EngineVariant, Outcome, PaddingMode
from .properties import Property, PropertyRegistry, Verdict, default_registry
from .reporting import ReportFormatter, RunReport
from .runtime import PropertyExecutor, ResultAggregator

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    __version__ = _get_version("b64verify")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "IMAP_MUTF7",
    "STANDARD",
    "URL_SAFE",
    "AggregationFault",
    "Alphabet",
    "AlphabetKind",
    "Codec",
    "ConfigurationError",
    "EngineVariant",
    "HarnessError",
    "Outcome",
    "PaddingMode",
    "Property",
    "PropertyExecutor",
    "PropertyRegistry",
    "ReferenceCodec",
    "RegistryError",
    "ReportFormatter",
    "ResultAggregator",
    "RunOptions",
    "RunReport",
    "TestConfig",
    "Verdict",
    "__version__",
    "default_registry",
]
