"""Configuration generators.

ConfigurationGenerator draws valid codec configurations (alphabet, padding
mode, engine) on top of a base TestConfig whose limits it keeps.
CustomAlphabetGenerator draws valid custom alphabets. RejectedAlphabetGenerator
draws symbol tables that ``Alphabet.custom`` must refuse.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from b64verify.config.alphabet import IMAP_MUTF7, STANDARD, URL_SAFE, Alphabet
from b64verify.config.test_config import TestConfig
from b64verify.constants import (
    ALPHABET_SIZE,
    PAD_SYMBOL,
    PRINTABLE_MAX,
    PRINTABLE_MIN,
    STANDARD_SYMBOLS,
)
from b64verify.enums import EngineVariant, PaddingMode
from b64verify.generators.base import InputGenerator

if TYPE_CHECKING:
    import random

__all__ = [
    "ConfigurationGenerator",
    "CustomAlphabetGenerator",
    "RejectedAlphabetGenerator",
    "draw_custom_symbols",
]

_PRINTABLE_POOL = "".join(
    chr(code) for code in range(PRINTABLE_MIN, PRINTABLE_MAX + 1) if chr(code) != PAD_SYMBOL
)

_BUILTIN_ALPHABETS = (STANDARD, URL_SAFE, IMAP_MUTF7)

_FLAWS = ("duplicate", "short", "long", "padding", "unprintable")

# Characters outside 0x21..0x7E: space, controls, DEL and a non-ASCII letter.
_UNPRINTABLE = " \t\n\x00\x1f\x7fé"


def draw_custom_symbols(rng: random.Random) -> str:
    """A valid custom table: a shuffle of the standard symbols or a printable draw."""
    if rng.random() < 0.5:
        return "".join(rng.sample(STANDARD_SYMBOLS, ALPHABET_SIZE))
    return "".join(rng.sample(_PRINTABLE_POOL, ALPHABET_SIZE))


class CustomAlphabetGenerator(InputGenerator[Alphabet]):
    """Valid custom alphabets."""

    name = "custom_alphabet"

    def _generate(self, rng: random.Random) -> Alphabet:
        return Alphabet.custom(draw_custom_symbols(rng))


class ConfigurationGenerator(InputGenerator[TestConfig]):
    """Valid codec configurations derived from ``base``.

    Iteration count and size limits always come from ``base``.

    Args:
        seed: Generator seed
        base: Configuration supplying the limits
        padding_modes: Padding modes to draw from (default: all)
        engines: Engine variants to draw from (default: all)
        alphabet: Fixed alphabet; None draws one per value
        custom_ratio: Share of drawn alphabets that are custom (default 0.25)
    """

    name = "configuration"

    def __init__(
        self,
        seed: int,
        base: TestConfig,
        padding_modes: tuple[PaddingMode, ...] = tuple(PaddingMode),
        engines: tuple[EngineVariant, ...] = tuple(EngineVariant),
        *,
        alphabet: Alphabet | None = None,
        custom_ratio: float = 0.25,
    ) -> None:
        super().__init__(seed)
        if not padding_modes or not engines:
            msg = "padding_modes and engines must not be empty"
            raise self._fail(msg, "configure")
        self.base = base
        self.padding_modes = padding_modes
        self.engines = engines
        self.alphabet = alphabet
        self.custom_ratio = custom_ratio

    def _generate(self, rng: random.Random) -> TestConfig:
        if self.alphabet is not None:
            alphabet = self.alphabet
        elif rng.random() < self.custom_ratio:
            alphabet = Alphabet.custom(draw_custom_symbols(rng))
        else:
            alphabet = rng.choice(_BUILTIN_ALPHABETS)
        return self.base.with_codec(
            alphabet=alphabet,
            padding_mode=rng.choice(self.padding_modes),
            engine_variant=rng.choice(self.engines),
        )


class RejectedAlphabetGenerator(InputGenerator[str]):
    """Symbol tables with exactly one flaw that makes them invalid.

    Flaws: a repeated symbol, too few or too many symbols, the padding
    symbol, or a symbol outside printable ASCII.
    """

    name = "rejected_alphabet"

    def _generate(self, rng: random.Random) -> str:
        symbols = list(draw_custom_symbols(rng))
        position = rng.randrange(ALPHABET_SIZE)
        match rng.choice(_FLAWS):
            case "duplicate":
                other = rng.choice([i for i in range(ALPHABET_SIZE) if i != position])
                symbols[position] = symbols[other]
            case "short":
                del symbols[ALPHABET_SIZE - rng.randint(1, ALPHABET_SIZE) :]
            case "long":
                symbols.extend(rng.choices(_PRINTABLE_POOL, k=rng.randint(1, 8)))
            case "padding":
                symbols[position] = PAD_SYMBOL
            case _:
                symbols[position] = rng.choice(_UNPRINTABLE)
        return "".join(symbols)
