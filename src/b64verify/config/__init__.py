"""Codec and run configuration.

Exports:
    Alphabet: Validated 64-symbol table
    STANDARD, URL_SAFE, IMAP_MUTF7: Built-in alphabets
    TestConfig: Codec configuration under test plus run limits
    RunOptions: Executor options (seed, parallelism, timeouts)

Python 3.13+.
"""

from .alphabet import IMAP_MUTF7, STANDARD, URL_SAFE, Alphabet, validate_symbols
from .test_config import RunOptions, TestConfig, seed_from_environment

__all__ = [
    "IMAP_MUTF7",
    "STANDARD",
    "URL_SAFE",
    "Alphabet",
    "RunOptions",
    "TestConfig",
    "seed_from_environment",
    "validate_symbols",
]
