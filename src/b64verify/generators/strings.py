"""Encoded string generators.

Base64StringGenerator produces strings every conforming decoder must accept
under the configured padding policy. InvalidInputGenerator produces strings
that break exactly one rule and records the exact error a conforming decoder
reports for them. Each defect is built so that the recorded error wins the
decode check order under every padding policy:

    invalid_byte         foreign symbol placed before any padding
    invalid_length       4k+1 symbols, no padding
    invalid_last_symbol  2 or 3 symbol tail with trailing bits set, no padding
    invalid_padding      more padding than the final group permits

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from b64verify.codec.errors import (
    CodecError,
    InvalidByte,
    InvalidLastSymbol,
    InvalidLength,
    InvalidPadding,
)
from b64verify.codec.validation import TRAILING_MASK
from b64verify.constants import GROUP_SIZE, MAX_PADDING, PAD_SYMBOL, PRINTABLE_MAX, PRINTABLE_MIN
from b64verify.enums import DefectKind, PaddingMode
from b64verify.generators.base import InputGenerator
from b64verify.generators.sequences import draw_length

if TYPE_CHECKING:
    import random
    from collections.abc import Iterable

    from b64verify.config.alphabet import Alphabet

__all__ = [
    "Base64StringGenerator",
    "InvalidInputGenerator",
    "MalformedInput",
    "foreign_symbols",
    "padding_allowed",
]

# Smallest text an invalid input needs: one group plus a defective tail.
_MIN_INVALID_SIZE = 8


@dataclass(frozen=True, slots=True)
class MalformedInput:
    """Encoded text violating exactly one decoding rule.

    Attributes:
        text: The malformed text
        defect: Which rule it violates
        expected: Exact error a conforming decoder returns for ``text``
    """

    text: str
    defect: DefectKind
    expected: CodecError


def padding_allowed(symbols: int) -> int:
    """Padding symbols a final group of ``symbols % 4`` symbols may carry."""
    remainder = symbols % GROUP_SIZE
    return MAX_PADDING if remainder == 1 else -remainder % GROUP_SIZE


def foreign_symbols(alphabet: Alphabet) -> str:
    """Printable ASCII symbols outside ``alphabet`` (padding excluded)."""
    return "".join(
        chr(code)
        for code in range(PRINTABLE_MIN, PRINTABLE_MAX + 1)
        if chr(code) not in alphabet and chr(code) != PAD_SYMBOL
    )


def _symbols(rng: random.Random, alphabet: Alphabet, count: int) -> str:
    return "".join(rng.choices(alphabet.symbols, k=count))


def _tail(rng: random.Random, alphabet: Alphabet, length: int, *, canonical: bool) -> str:
    """Final partial group of 2 or 3 symbols.

    The last symbol has zero trailing bits when ``canonical``, non-zero
    trailing bits otherwise.
    """
    mask = TRAILING_MASK[length]
    if canonical:
        value = rng.randrange(64) & ~mask
    else:
        value = (rng.randrange(64) & ~mask) | rng.randint(1, mask)
    return _symbols(rng, alphabet, length - 1) + alphabet.symbols[value]


class Base64StringGenerator(InputGenerator[str]):
    """Well-formed encoded strings for an alphabet and padding mode.

    Padding follows the decode policy of ``padding_mode``: always present under
    RequireCanonical, never under RequireNone, either way otherwise.

    Args:
        seed: Generator seed
        alphabet: Alphabet of the produced symbols
        padding_mode: Padding mode whose decode policy the strings satisfy
        max_size: Longest string produced (in symbols, padding included)
    """

    name = "base64_string"

    def __init__(
        self, seed: int, alphabet: Alphabet, padding_mode: PaddingMode, max_size: int
    ) -> None:
        super().__init__(seed)
        if max_size < 0:
            msg = f"max_size must be non-negative, got {max_size}"
            raise self._fail(msg, "configure")
        self.alphabet = alphabet
        self.padding_mode = padding_mode
        self.max_size = max_size

    def _padded(self, rng: random.Random) -> bool:
        match self.padding_mode.decode_policy:
            case PaddingMode.REQUIRE_CANONICAL:
                return True
            case PaddingMode.REQUIRE_NONE:
                return False
            case _:
                return rng.random() < 0.5

    def _generate(self, rng: random.Random) -> str:
        budget = draw_length(rng, 0, self.max_size)
        groups, room = divmod(budget, GROUP_SIZE)
        padded = self._padded(rng)
        # A padded tail takes the place of the last full group.
        if padded:
            tails = [2, 3] if groups else []
        else:
            tails = [t for t in (2, 3) if t <= room]
        if tails and rng.random() < 0.75:
            length = rng.choice(tails)
            tail = _tail(rng, self.alphabet, length, canonical=True)
            if padded:
                groups -= 1
                tail += PAD_SYMBOL * (GROUP_SIZE - length)
        else:
            tail = ""
        return _symbols(rng, self.alphabet, groups * GROUP_SIZE) + tail


class InvalidInputGenerator(InputGenerator[MalformedInput]):
    """Strings that violate exactly one decoding rule.

    Args:
        seed: Generator seed
        alphabet: Alphabet the strings are malformed against
        max_size: Longest string produced (at least 8)
        defects: Defect kinds to draw from (default: all of them)

    Raises:
        GenerationError: If ``max_size`` is below 8 or ``defects`` is empty
    """

    name = "invalid_input"

    def __init__(
        self,
        seed: int,
        alphabet: Alphabet,
        max_size: int,
        defects: Iterable[DefectKind] | None = None,
    ) -> None:
        super().__init__(seed)
        if max_size < _MIN_INVALID_SIZE:
            msg = f"max_size must be at least {_MIN_INVALID_SIZE}, got {max_size}"
            raise self._fail(msg, "configure")
        self.alphabet = alphabet
        self.max_size = max_size
        self.defects = tuple(DefectKind) if defects is None else tuple(defects)
        if not self.defects:
            msg = "at least one defect kind is required"
            raise self._fail(msg, "configure")
        self._foreign = foreign_symbols(alphabet)

    def _groups(self, rng: random.Random) -> str:
        count = draw_length(rng, 0, self.max_size - _MIN_INVALID_SIZE) // GROUP_SIZE
        return _symbols(rng, self.alphabet, count * GROUP_SIZE)

    def _generate(self, rng: random.Random) -> MalformedInput:
        defect = rng.choice(self.defects)
        body = self._groups(rng)
        match defect:
            case DefectKind.INVALID_BYTE:
                return self._invalid_byte(rng, body)
            case DefectKind.INVALID_LENGTH:
                text = body + _symbols(rng, self.alphabet, 1)
                return MalformedInput(text, defect, InvalidLength(len(text)))
            case DefectKind.INVALID_LAST_SYMBOL:
                text = body + _tail(rng, self.alphabet, rng.choice((2, 3)), canonical=False)
                return MalformedInput(
                    text, defect, InvalidLastSymbol(len(text) - 1, ord(text[-1]))
                )
            case _:
                return self._invalid_padding(rng, body)

    def _invalid_byte(self, rng: random.Random, body: str) -> MalformedInput:
        length = rng.choice((0, 2, 3))
        tail = _tail(rng, self.alphabet, length, canonical=True) if length else ""
        symbols = body + tail
        if not symbols:
            symbols = _symbols(rng, self.alphabet, GROUP_SIZE)
        padding = PAD_SYMBOL * padding_allowed(len(symbols)) if rng.random() < 0.5 else ""
        position = rng.randrange(len(symbols))
        foreign = rng.choice(self._foreign)
        text = symbols[:position] + foreign + symbols[position + 1 :] + padding
        return MalformedInput(text, DefectKind.INVALID_BYTE, InvalidByte(position, ord(foreign)))

    def _invalid_padding(self, rng: random.Random, body: str) -> MalformedInput:
        length = rng.choice((0, 1, 2, 3))
        if length >= 2:
            tail = _tail(rng, self.alphabet, length, canonical=True)
        else:
            tail = _symbols(rng, self.alphabet, length)
        symbols = body + tail
        allowed = padding_allowed(len(symbols))
        text = symbols + PAD_SYMBOL * rng.randint(allowed + 1, allowed + 3)
        return MalformedInput(
            text, DefectKind.INVALID_PADDING, InvalidPadding(len(symbols) + allowed)
        )
