"""Padding properties.

Canonical encodings carry exactly the padding the final group needs, unpadded
encodings carry none, and the strict decode policies reject the other form at
the documented offset.

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from b64verify.codec.errors import InvalidPadding
from b64verify.constants import BLOCK_SIZE, GROUP_SIZE, PAD_SYMBOL
from b64verify.enums import PaddingMode
from b64verify.properties.model import Verdict
from b64verify.properties.support import preview, unpadded_length

if TYPE_CHECKING:
    from b64verify.codec.protocol import Codec
    from b64verify.config.test_config import TestConfig

__all__ = [
    "check_canonical_padding",
    "check_indifferent_accepts_both",
    "check_require_canonical",
    "check_require_none",
    "check_unpadded",
]


def check_canonical_padding(data: bytes, config: TestConfig, codec: Codec) -> Verdict:
    text = codec.encode(data, config.with_codec(padding_mode=PaddingMode.CANONICAL))
    expected_pad = -len(data) % BLOCK_SIZE
    actual_pad = len(text) - len(text.rstrip(PAD_SYMBOL))
    if len(text) % GROUP_SIZE:
        return Verdict.fail(f"canonical output {preview(text)} is {len(text)} symbols long")
    return Verdict.check(
        actual_pad == expected_pad,
        f"{len(data)} bytes encoded with {actual_pad} padding symbols, expected {expected_pad}",
    )


def check_unpadded(data: bytes, config: TestConfig, codec: Codec) -> Verdict:
    text = codec.encode(data, config.with_codec(padding_mode=PaddingMode.NONE))
    if PAD_SYMBOL in text:
        return Verdict.fail(f"unpadded output {preview(text)} contains padding")
    expected = unpadded_length(len(data))
    return Verdict.check(
        len(text) == expected, f"{len(data)} bytes gave {len(text)} symbols, expected {expected}"
    )


def check_require_canonical(data: bytes, config: TestConfig, codec: Codec) -> Verdict:
    """RequireCanonical rejects a missing-padding form at the end of input."""
    text = codec.encode(data, config.with_codec(padding_mode=PaddingMode.NONE))
    strict = config.with_codec(padding_mode=PaddingMode.REQUIRE_CANONICAL)
    decoded, error = codec.decode(text, strict)
    if len(data) % BLOCK_SIZE == 0:
        return Verdict.check(decoded == data, f"complete groups {preview(text)} rejected: {error}")
    expected = InvalidPadding(len(text))
    return Verdict.check(
        error == expected, f"unpadded {preview(text)} gave {error!r}, expected {expected!r}"
    )


def check_require_none(data: bytes, config: TestConfig, codec: Codec) -> Verdict:
    """RequireNone rejects padding at the first padding symbol."""
    text = codec.encode(data, config.with_codec(padding_mode=PaddingMode.CANONICAL))
    strict = config.with_codec(padding_mode=PaddingMode.REQUIRE_NONE)
    decoded, error = codec.decode(text, strict)
    first_pad = text.find(PAD_SYMBOL)
    if first_pad < 0:
        return Verdict.check(decoded == data, f"unpadded {preview(text)} rejected: {error}")
    expected = InvalidPadding(first_pad)
    return Verdict.check(
        error == expected, f"padded {preview(text)} gave {error!r}, expected {expected!r}"
    )


def check_indifferent_accepts_both(data: bytes, config: TestConfig, codec: Codec) -> Verdict:
    padded = codec.encode(data, config.with_codec(padding_mode=PaddingMode.CANONICAL))
    bare = codec.encode(data, config.with_codec(padding_mode=PaddingMode.NONE))
    lenient = config.with_codec(padding_mode=PaddingMode.INDIFFERENT)
    for text in (padded, bare):
        decoded, error = codec.decode(text, lenient)
        if decoded != data:
            shown = preview(decoded or b"")
            return Verdict.fail(f"indifferent decode of {preview(text)} gave {shown} ({error})")
    return Verdict.ok()
