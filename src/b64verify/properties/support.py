"""Helpers shared by the property modules.

Generator factory builders, size caps and diagnostic formatting. Nothing
here talks to the codec.

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from b64verify.codec.validation import as_bytes, inspect_encoded
from b64verify.constants import (
    BLOCK_SIZE,
    GROUP_SIZE,
    INVALID_GENERATOR_MAX_SIZE,
    NAIVE_ENGINE_MAX_SIZE,
    PAD_SYMBOL,
    STRING_GENERATOR_MAX_SIZE,
)
from b64verify.enums import EngineVariant
from b64verify.generators import (
    Base64StringGenerator,
    ByteSequenceGenerator,
    ConfigurationGenerator,
    InvalidInputGenerator,
    WithConfiguration,
    derive_seed,
)

if TYPE_CHECKING:
    from b64verify.config.test_config import TestConfig
    from b64verify.enums import DefectKind
    from b64verify.generators import InputGenerator
    from b64verify.properties.model import GeneratorFactory

__all__ = [
    "byte_limit",
    "bytes_factory",
    "canonical_form",
    "configured",
    "invalid_factory",
    "preview",
    "strings_factory",
    "unpadded_length",
    "well_formed",
]

_PREVIEW_LIMIT = 48


def byte_limit(config: TestConfig, *, naive: bool | None = None) -> int:
    """Largest byte input for a property.

    Inputs that may reach the naive engine are capped, since it transforms one
    group per loop iteration. ``naive=None`` decides from ``config``.
    """
    if naive is None:
        naive = config.engine_variant is EngineVariant.NAIVE
    if naive:
        return min(config.max_input_size, NAIVE_ENGINE_MAX_SIZE)
    return config.max_input_size


def bytes_factory(*, min_size: int = 0, naive: bool | None = None) -> GeneratorFactory:
    """Factory for ByteSequenceGenerator sized from the run config."""

    def build(seed: int, config: TestConfig) -> InputGenerator[Any]:
        return ByteSequenceGenerator(seed, byte_limit(config, naive=naive), min_size=min_size)

    return build


def strings_factory() -> GeneratorFactory:
    """Factory for well-formed strings in the run config's alphabet and mode."""

    def build(seed: int, config: TestConfig) -> InputGenerator[Any]:
        size = min(config.max_input_size, STRING_GENERATOR_MAX_SIZE)
        return Base64StringGenerator(seed, config.alphabet, config.padding_mode, size)

    return build


def invalid_factory(*defects: DefectKind, sweep: bool = False) -> GeneratorFactory:
    """Factory for malformed strings in the run config's alphabet.

    With ``sweep`` each value carries its own padding mode and engine, the
    alphabet staying fixed so that the recorded error remains exact. A
    ``max_input_size`` below the generator minimum fails the property with a
    GenerationError.
    """

    def build(seed: int, config: TestConfig) -> InputGenerator[Any]:
        size = min(config.max_input_size, INVALID_GENERATOR_MAX_SIZE)
        inner = InvalidInputGenerator(seed, config.alphabet, size, defects)
        if not sweep:
            return inner
        configs = ConfigurationGenerator(
            derive_seed(seed, "configuration"), config, alphabet=config.alphabet
        )
        return WithConfiguration(inner, configs)

    return build


def configured(inner: GeneratorFactory, *, custom_ratio: float = 0.25) -> GeneratorFactory:
    """Wrap a factory so that every value carries a drawn configuration.

    The wrapped factory must size its values for any engine (``naive=True``).
    """

    def build(seed: int, config: TestConfig) -> InputGenerator[Any]:
        configs = ConfigurationGenerator(
            derive_seed(seed, "configuration"), config, custom_ratio=custom_ratio
        )
        return WithConfiguration(inner(seed, config), configs)

    return build


def canonical_form(text: str, config: TestConfig) -> str:
    """``text`` re-padded the way ``config`` encodes."""
    bare = text.rstrip(PAD_SYMBOL)
    if not config.padding_mode.encode_pads:
        return bare
    return bare + PAD_SYMBOL * (-len(bare) % GROUP_SIZE)


def well_formed(text: str, config: TestConfig) -> bool:
    """Whether ``text`` is a valid encoding under ``config``'s alphabet and decode policy."""
    _, error = inspect_encoded(as_bytes(text), config.alphabet, config.padding_mode.decode_policy)
    return error is None


def unpadded_length(length: int) -> int:
    """Encoded length of ``length`` bytes without padding."""
    full, rest = divmod(length, BLOCK_SIZE)
    return full * GROUP_SIZE + (rest + 1 if rest else 0)


def preview(value: bytes | str) -> str:
    """Short repr of a possibly large value for diagnostics."""
    if len(value) <= _PREVIEW_LIMIT:
        return repr(value)
    return f"{value[:_PREVIEW_LIMIT]!r}... ({len(value)} total)"
