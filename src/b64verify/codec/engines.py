"""Engine variants of the reference codec.

An engine performs the raw 6-bit transform for an alphabet. It never
validates: the caller hands it symbol runs that are already known to be
well-formed (alphabet members only, no padding, group remainder 0, 2 or 3).

Two engines exist so that cross-engine properties compare independent
implementations:

- GeneralPurposeEngine: standard library ``base64`` plus table translation
- NaiveEngine: explicit bit packing, one group at a time

Thread-safe. Engines hold no mutable state.

Python 3.13+.
"""

from __future__ import annotations

import base64
from functools import lru_cache
from typing import TYPE_CHECKING, Protocol

from b64verify.constants import BLOCK_SIZE, GROUP_SIZE, PAD_SYMBOL, STANDARD_SYMBOLS
from b64verify.enums import EngineVariant

if TYPE_CHECKING:
    from b64verify.config.alphabet import Alphabet

__all__ = ["ENGINES", "Engine", "GeneralPurposeEngine", "NaiveEngine"]

_STANDARD_BYTES = STANDARD_SYMBOLS.encode("ascii")


class Engine(Protocol):
    """Raw transform between bytes and alphabet symbols."""

    def encode(self, data: bytes, alphabet: Alphabet, *, pad: bool) -> str:
        """Encode ``data``, appending canonical padding when ``pad`` is set."""
        ...  # pragma: no cover  # Protocol stub - not executable

    def decode(self, symbols: bytes, alphabet: Alphabet) -> bytes:
        """Decode a validated, unpadded symbol run."""
        ...  # pragma: no cover  # Protocol stub - not executable


@lru_cache(maxsize=64)
def _tables(symbols: str) -> tuple[bytes, bytes]:
    """Translation tables (standard -> alphabet, alphabet -> standard)."""
    alphabet_bytes = symbols.encode("ascii")
    return (
        bytes.maketrans(_STANDARD_BYTES, alphabet_bytes),
        bytes.maketrans(alphabet_bytes, _STANDARD_BYTES),
    )


class GeneralPurposeEngine:
    """Standard library transform with alphabet translation."""

    __slots__ = ()

    def encode(self, data: bytes, alphabet: Alphabet, *, pad: bool) -> str:
        to_alphabet, _ = _tables(alphabet.symbols)
        encoded = base64.b64encode(data).translate(to_alphabet)
        if not pad:
            encoded = encoded.rstrip(PAD_SYMBOL.encode("ascii"))
        return encoded.decode("ascii")

    def decode(self, symbols: bytes, alphabet: Alphabet) -> bytes:
        _, to_standard = _tables(alphabet.symbols)
        standard = symbols.translate(to_standard)
        missing = -len(standard) % GROUP_SIZE
        return base64.b64decode(standard + PAD_SYMBOL.encode("ascii") * missing, validate=True)


class NaiveEngine:
    """Group-at-a-time bit packing."""

    __slots__ = ()

    def encode(self, data: bytes, alphabet: Alphabet, *, pad: bool) -> str:
        table = alphabet.symbols
        parts: list[str] = []
        for start in range(0, len(data), BLOCK_SIZE):
            block = data[start : start + BLOCK_SIZE]
            value = int.from_bytes(block.ljust(BLOCK_SIZE, b"\x00"), "big")
            group = "".join(table[(value >> shift) & 0x3F] for shift in (18, 12, 6, 0))
            parts.append(group[: len(block) + 1])
            if pad and len(block) < BLOCK_SIZE:
                parts.append(PAD_SYMBOL * (BLOCK_SIZE - len(block)))
        return "".join(parts)

    def decode(self, symbols: bytes, alphabet: Alphabet) -> bytes:
        index = alphabet.index
        text = symbols.decode("ascii")
        out = bytearray()
        for start in range(0, len(text), GROUP_SIZE):
            group = text[start : start + GROUP_SIZE]
            value = 0
            for symbol in group:
                value = (value << 6) | index[symbol]
            value <<= 6 * (GROUP_SIZE - len(group))
            out += value.to_bytes(BLOCK_SIZE, "big")[: len(group) - 1]
        return bytes(out)


ENGINES: dict[EngineVariant, Engine] = {
    EngineVariant.GENERAL_PURPOSE: GeneralPurposeEngine(),
    EngineVariant.NAIVE: NaiveEngine(),
}
