"""Configuration consistency properties.

Invalid alphabets never reach the codec, encoding is a pure function of its
input and configuration, and padding modes that share an encode shape produce
the same output.

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from b64verify.config.alphabet import Alphabet
from b64verify.constants import PAD_SYMBOL
from b64verify.diagnostics.errors import ConfigurationError
from b64verify.enums import PaddingMode
from b64verify.properties.model import Verdict
from b64verify.properties.support import preview

if TYPE_CHECKING:
    from b64verify.codec.protocol import Codec
    from b64verify.config.test_config import TestConfig

__all__ = [
    "check_alphabet_rejected",
    "check_determinism",
    "check_equivalent_modes",
]


def check_alphabet_rejected(symbols: str, config: TestConfig, codec: Codec) -> Verdict:
    """Harness self-check: the table is refused before any codec is configured.

    The codec is never called, so no codec can fail this property.
    """
    try:
        alphabet = Alphabet.custom(symbols)
    except ConfigurationError:
        return Verdict.ok()
    return Verdict.fail(f"invalid table {symbols!r} accepted as {alphabet.kind} alphabet")


def check_determinism(data: bytes, config: TestConfig, codec: Codec) -> Verdict:
    """Repeated calls and an equal, separately built config give the same output."""
    first = codec.encode(data, config)
    second = codec.encode(data, config)
    rebuilt = config.with_codec(alphabet=Alphabet(config.alphabet.kind, config.alphabet.symbols))
    third = codec.encode(data, rebuilt)
    return Verdict.check(
        first == second == third,
        f"encode of {preview(data)} varied: {preview(first)}, {preview(second)}, {preview(third)}",
    )


_PADDED_MODES = (PaddingMode.CANONICAL, PaddingMode.INDIFFERENT, PaddingMode.REQUIRE_CANONICAL)
_BARE_MODES = (PaddingMode.NONE, PaddingMode.REQUIRE_NONE)


def check_equivalent_modes(data: bytes, config: TestConfig, codec: Codec) -> Verdict:
    padded = {codec.encode(data, config.with_codec(padding_mode=mode)) for mode in _PADDED_MODES}
    bare = {codec.encode(data, config.with_codec(padding_mode=mode)) for mode in _BARE_MODES}
    if len(padded) != 1 or len(bare) != 1:
        return Verdict.fail(
            f"modes sharing an encode shape disagree on {preview(data)}: "
            f"padded {sorted(map(preview, padded))}, unpadded {sorted(map(preview, bare))}"
        )
    (with_pad,) = padded
    (without_pad,) = bare
    return Verdict.check(
        with_pad.rstrip(PAD_SYMBOL) == without_pad,
        f"padded {preview(with_pad)} and unpadded {preview(without_pad)} differ beyond padding",
    )
