"""Shared constants for b64verify.

This module provides centralized configuration constants used across the
generator, property, runtime and reporting packages. Placing constants here
avoids circular imports and provides a single source of truth.

Constants are grouped by domain:
- Alphabets: Symbol tables of the built-in alphabets
- Codec geometry: Block and group sizes of the base64 transform
- Run defaults: Iteration counts, size limits, parallelism
- Shrinking: Reduction attempt bounds

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Alphabets
    "STANDARD_SYMBOLS",
    "URL_SAFE_SYMBOLS",
    "IMAP_MUTF7_SYMBOLS",
    "PAD_SYMBOL",
    "ALPHABET_SIZE",
    "PRINTABLE_MIN",
    "PRINTABLE_MAX",
    # Codec geometry
    "BLOCK_SIZE",
    "GROUP_SIZE",
    "MAX_PADDING",
    # Run defaults
    "DEFAULT_ITERATIONS",
    "DEFAULT_MAX_INPUT_SIZE",
    "DEFAULT_PARALLELISM",
    "DEFAULT_SEED",
    "DEFAULT_TRIAL_TIMEOUT",
    "SEED_ENV_VAR",
    # Generators
    "STRING_GENERATOR_MAX_SIZE",
    "INVALID_GENERATOR_MAX_SIZE",
    "MAX_STREAM_CHUNKS",
    "NAIVE_ENGINE_MAX_SIZE",
    "SMALL_INPUT_SIZE",
    # Shrinking
    "DEFAULT_SHRINK_BOUND",
]

# ============================================================================
# ALPHABETS
# ============================================================================

STANDARD_SYMBOLS: str = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"

URL_SAFE_SYMBOLS: str = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"

# RFC 3501 modified UTF-7 (IMAP mailbox names) replaces '/' with ','.
IMAP_MUTF7_SYMBOLS: str = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+,"

PAD_SYMBOL: str = "="

ALPHABET_SIZE: int = 64

# Custom alphabet symbols must be printable, non-space ASCII.
PRINTABLE_MIN: int = 0x21
PRINTABLE_MAX: int = 0x7E

# ============================================================================
# CODEC GEOMETRY
# ============================================================================

# Input bytes per encoded group.
BLOCK_SIZE: int = 3

# Symbols per encoded group.
GROUP_SIZE: int = 4

# A final group never carries more than two padding symbols.
MAX_PADDING: int = 2

# ============================================================================
# RUN DEFAULTS
# ============================================================================

DEFAULT_ITERATIONS: int = 1000

# 1 MiB upper bound for any generated byte sequence.
DEFAULT_MAX_INPUT_SIZE: int = 1024 * 1024

DEFAULT_PARALLELISM: int = 4

DEFAULT_SEED: int = 0

# Seconds a single trial may run before it is reported as a timeout.
DEFAULT_TRIAL_TIMEOUT: float = 10.0

# Environment variable consulted for the run seed when no --seed flag is given.
SEED_ENV_VAR: str = "B64VERIFY_SEED"

# ============================================================================
# GENERATORS
# ============================================================================

# Encoded strings are bounded independently of max_input_size so that
# string-driven properties stay fast.
STRING_GENERATOR_MAX_SIZE: int = 4096

# Malformed strings stay short; max_input_size lowers this further.
INVALID_GENERATOR_MAX_SIZE: int = 256

MAX_STREAM_CHUNKS: int = 8

# Byte sequences are mostly drawn below this size; max_input_size itself is
# reached by a low-weight length category.
SMALL_INPUT_SIZE: int = 1024

# The naive engine packs one group per loop iteration, so properties that run
# it cap their byte inputs here.
NAIVE_ENGINE_MAX_SIZE: int = 64 * 1024

# ============================================================================
# SHRINKING
# ============================================================================

# Maximum predicate re-runs spent minimizing a single counterexample.
DEFAULT_SHRINK_BOUND: int = 500
