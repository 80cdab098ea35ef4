"""Encoded-input validation shared by the batch and streaming decoders.

Check order (decides which error is reported when several apply):
    1. Scan symbols up to the first padding symbol. A byte outside the
       alphabet is InvalidByte at its offset. A non-padding byte after padding
       started is InvalidByte at the first padding symbol.
    2. More padding than the final group permits is InvalidPadding at the
       first excess padding symbol. A single-symbol group permits two.
    3. A symbol count congruent to 1 mod 4 is InvalidLength.
    4. Non-zero trailing bits in the final symbol is InvalidLastSymbol.
    5. Decode policy: RequireCanonical with missing padding is InvalidPadding
       at the end of input; RequireNone with padding is InvalidPadding at the
       first padding symbol.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from b64verify.codec.errors import (
    CodecError,
    InvalidByte,
    InvalidLastSymbol,
    InvalidLength,
    InvalidPadding,
)
from b64verify.constants import GROUP_SIZE, MAX_PADDING, PAD_SYMBOL
from b64verify.enums import PaddingMode

if TYPE_CHECKING:
    from b64verify.config.alphabet import Alphabet

__all__ = ["PAD_BYTE", "TRAILING_MASK", "as_bytes", "inspect_encoded", "symbol_values"]

PAD_BYTE: int = ord(PAD_SYMBOL)

# Trailing-bit masks of the final symbol, keyed by group remainder.
TRAILING_MASK: dict[int, int] = {2: 0x0F, 3: 0x03}


@lru_cache(maxsize=64)
def symbol_values(symbols: str) -> dict[int, int]:
    """Byte -> 6-bit value lookup for an alphabet."""
    return {ord(s): i for i, s in enumerate(symbols)}


def as_bytes(text: str | bytes) -> bytes:
    """UTF-8 form of ``text`` (bytes pass through unchanged)."""
    if isinstance(text, str):
        return text.encode("utf-8")
    return bytes(text)


def inspect_encoded(
    data: bytes,
    alphabet: Alphabet,
    policy: PaddingMode,
    *,
    base: int = 0,
) -> tuple[int, CodecError | None]:
    """Validate an encoded input.

    Args:
        data: Encoded input, or the unconsumed tail of a streamed input
        alphabet: Alphabet to validate against
        policy: Decode policy (INDIFFERENT, REQUIRE_CANONICAL or REQUIRE_NONE)
        base: Symbols already consumed before ``data`` (a multiple of 4);
            offsets and lengths in the returned error include it

    Returns:
        Tuple of (symbol_count, error):
        - symbol_count: Number of leading alphabet symbols in ``data``
        - error: First violated rule, or None if ``data`` is well-formed

    Examples:
        >>> from b64verify.config import STANDARD
        >>> inspect_encoded(b"A===", STANDARD, PaddingMode.REQUIRE_CANONICAL)
        (1, InvalidPadding(position=3))
        >>> inspect_encoded(b"QQ", STANDARD, PaddingMode.INDIFFERENT)
        (2, None)
    """
    values = symbol_values(alphabet.symbols)
    symbols = len(data)
    for offset, byte in enumerate(data):
        if byte == PAD_BYTE:
            symbols = offset
            break
        if byte not in values:
            return offset, InvalidByte(base + offset, byte)

    for offset in range(symbols, len(data)):
        if data[offset] != PAD_BYTE:
            return symbols, InvalidByte(base + symbols, PAD_BYTE)

    padding = len(data) - symbols
    total = base + symbols
    remainder = total % GROUP_SIZE
    allowed = MAX_PADDING if remainder == 1 else -remainder % GROUP_SIZE
    if padding > allowed:
        return symbols, InvalidPadding(base + symbols + allowed)
    if remainder == 1:
        return symbols, InvalidLength(total)
    if remainder:
        last = data[symbols - 1]
        if values[last] & TRAILING_MASK[remainder]:
            return symbols, InvalidLastSymbol(base + symbols - 1, last)

    match policy:
        case PaddingMode.REQUIRE_CANONICAL if padding < allowed:
            return symbols, InvalidPadding(base + len(data))
        case PaddingMode.REQUIRE_NONE if padding:
            return symbols, InvalidPadding(base + symbols)
    return symbols, None
