"""Seeded, reproducible input generators.

Every generator value is a pure function of (seed, index); see
``InputGenerator.produce``.

Exports:
    derive_seed: SHA-256 child seed derivation
    GeneratedInput: Value plus replay provenance
    InputGenerator: Base class
    ByteSequenceGenerator, Base64StringGenerator, InvalidInputGenerator,
    ConfigurationGenerator, CustomAlphabetGenerator, RejectedAlphabetGenerator,
    ChunkedInputGenerator, WithConfiguration: Concrete generators
    MalformedInput, ChunkedInput: Structured generated values

Python 3.13+.
"""

from .base import GeneratedInput, InputGenerator, derive_seed
from .composite import ChunkedInput, ChunkedInputGenerator, WithConfiguration
from .configs import (
    ConfigurationGenerator,
    CustomAlphabetGenerator,
    RejectedAlphabetGenerator,
)
from .sequences import ByteSequenceGenerator
from .strings import Base64StringGenerator, InvalidInputGenerator, MalformedInput

__all__ = [
    "Base64StringGenerator",
    "ByteSequenceGenerator",
    "ChunkedInput",
    "ChunkedInputGenerator",
    "ConfigurationGenerator",
    "CustomAlphabetGenerator",
    "GeneratedInput",
    "InputGenerator",
    "InvalidInputGenerator",
    "MalformedInput",
    "RejectedAlphabetGenerator",
    "WithConfiguration",
    "derive_seed",
]
