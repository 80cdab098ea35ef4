"""Roundtrip properties.

Encoding then decoding must return the input; decoding a well-formed string
then re-encoding must return its canonical form; engines and alphabets must
not change either direction.

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from b64verify.constants import BLOCK_SIZE, PAD_SYMBOL
from b64verify.enums import EngineVariant
from b64verify.properties.model import Verdict
from b64verify.properties.support import canonical_form, preview, well_formed

if TYPE_CHECKING:
    from b64verify.codec.protocol import Codec
    from b64verify.config.test_config import TestConfig

__all__ = [
    "check_alphabet_roundtrip",
    "check_cross_engine",
    "check_decode_encode",
    "check_encode_decode",
    "check_padding_roundtrip",
]


def check_encode_decode(data: bytes, config: TestConfig, codec: Codec) -> Verdict:
    text = codec.encode(data, config)
    decoded, error = codec.decode(text, config)
    if error is not None:
        return Verdict.fail(f"decode of own output {preview(text)} failed: {error.describe()}")
    return Verdict.check(
        decoded == data, f"roundtrip of {preview(data)} returned {preview(decoded or b'')}"
    )


def check_decode_encode(text: str, config: TestConfig, codec: Codec) -> Verdict:
    if not well_formed(text, config):
        return Verdict.discard(f"{preview(text)} is not a valid encoding")
    decoded, error = codec.decode(text, config)
    if decoded is None:
        return Verdict.fail(f"well-formed {preview(text)} rejected: {error}")
    again = codec.encode(decoded, config)
    expected = canonical_form(text, config)
    return Verdict.check(
        again == expected,
        f"re-encoding {preview(text)} gave {preview(again)}, expected {preview(expected)}",
    )


def check_cross_engine(data: bytes, config: TestConfig, codec: Codec) -> Verdict:
    """Every engine variant encodes identically and decodes every other's output."""
    variants = [config.with_codec(engine_variant=variant) for variant in EngineVariant]
    outputs = {variant.engine_variant: codec.encode(data, variant) for variant in variants}
    if len(set(outputs.values())) != 1:
        shown = ", ".join(f"{name}={preview(text)}" for name, text in outputs.items())
        return Verdict.fail(f"engines disagree on {preview(data)}: {shown}")
    text = next(iter(outputs.values()))
    for variant in variants:
        decoded, error = codec.decode(text, variant)
        if decoded != data:
            return Verdict.fail(
                f"{variant.engine_variant} engine decoded {preview(text)} to "
                f"{preview(decoded or b'')} ({error})"
            )
    return Verdict.ok()


def check_alphabet_roundtrip(data: bytes, config: TestConfig, codec: Codec) -> Verdict:
    text = codec.encode(data, config)
    stray = next((s for s in text if s not in config.alphabet and s != PAD_SYMBOL), None)
    if stray is not None:
        return Verdict.fail(f"symbol {stray!r} outside custom alphabet {config.alphabet.symbols!r}")
    return check_encode_decode(data, config, codec)


def check_padding_roundtrip(data: bytes, config: TestConfig, codec: Codec) -> Verdict:
    """Roundtrip under the drawn padding mode, with padding present iff the mode pads."""
    text = codec.encode(data, config)
    padded = text.endswith(PAD_SYMBOL)
    needs_padding = config.padding_mode.encode_pads and len(data) % BLOCK_SIZE != 0
    if padded != needs_padding:
        return Verdict.fail(
            f"{config.padding_mode} encoding of {len(data)} bytes "
            f"{'has' if padded else 'lacks'} padding: {preview(text)}"
        )
    return check_encode_decode(data, config, codec)
