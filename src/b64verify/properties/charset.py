"""Alphabet properties.

Encoded output uses only alphabet symbols (plus trailing padding), foreign
symbols are rejected, and switching alphabets is a pure symbol substitution.

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from b64verify.codec.errors import InvalidByte
from b64verify.config.alphabet import STANDARD
from b64verify.constants import PAD_SYMBOL
from b64verify.properties.model import Verdict
from b64verify.properties.support import preview

if TYPE_CHECKING:
    from b64verify.codec.protocol import Codec
    from b64verify.config.test_config import TestConfig
    from b64verify.generators import MalformedInput

__all__ = [
    "check_character_set",
    "check_foreign_symbol_rejected",
    "check_substitution",
]


def check_character_set(data: bytes, config: TestConfig, codec: Codec) -> Verdict:
    text = codec.encode(data, config)
    body = text.rstrip(PAD_SYMBOL)
    for position, symbol in enumerate(body):
        if symbol not in config.alphabet:
            return Verdict.fail(
                f"{config.alphabet.kind} output {preview(text)} has {symbol!r} at {position}"
            )
    return Verdict.ok()


def check_foreign_symbol_rejected(
    value: MalformedInput, config: TestConfig, codec: Codec
) -> Verdict:
    decoded, error = codec.decode(value.text, config)
    if error is None:
        return Verdict.fail(f"{preview(value.text)} accepted as {preview(decoded or b'')}")
    if not isinstance(error, InvalidByte):
        return Verdict.fail(f"{preview(value.text)} rejected with {error!r}, expected InvalidByte")
    expected = value.expected
    return Verdict.check(
        isinstance(expected, InvalidByte) and error.byte == expected.byte,
        f"{preview(value.text)} reported byte 0x{error.byte:02x}, expected {expected!r}",
    )


def check_substitution(data: bytes, config: TestConfig, codec: Codec) -> Verdict:
    """Output under any alphabet is the Standard output with symbols substituted."""
    text = codec.encode(data, config)
    standard = codec.encode(data, config.with_codec(alphabet=STANDARD))
    table = str.maketrans(STANDARD.symbols, config.alphabet.symbols)
    expected = standard.translate(table)
    return Verdict.check(
        text == expected,
        f"{config.alphabet.kind} output {preview(text)} is not the substitution "
        f"{preview(expected)} of {preview(standard)}",
    )
