"""Hypothesis strategies for b64verify tests.

Provides strategies for alphabets, padding modes, codec configurations and
well-formed encoded strings, used to test the harness components independently
of the harness's own seeded generators.
"""

from __future__ import annotations

import string

from hypothesis import strategies as st
from hypothesis.strategies import composite

from b64verify.config import IMAP_MUTF7, STANDARD, URL_SAFE, Alphabet, TestConfig
from b64verify.constants import STANDARD_SYMBOLS
from b64verify.enums import EngineVariant, PaddingMode

# Printable ASCII without the padding symbol
PRINTABLE_POOL = "".join(c for c in string.printable if "!" <= c <= "~" and c != "=")

builtin_alphabets = st.sampled_from([STANDARD, URL_SAFE, IMAP_MUTF7])
padding_modes = st.sampled_from(list(PaddingMode))
engine_variants = st.sampled_from(list(EngineVariant))
seeds = st.integers(min_value=0, max_value=2**64 - 1)


@composite
def custom_alphabets(draw: st.DrawFn) -> Alphabet:
    """Valid custom alphabets: permutations of the standard table or printable draws."""
    if draw(st.booleans()):
        symbols = draw(st.permutations(STANDARD_SYMBOLS))
    else:
        symbols = draw(st.permutations(PRINTABLE_POOL))[:64]
    return Alphabet.custom("".join(symbols))


alphabets = st.one_of(builtin_alphabets, custom_alphabets())


@composite
def codec_configs(
    draw: st.DrawFn, *, alphabet: st.SearchStrategy[Alphabet] = alphabets
) -> TestConfig:
    """TestConfig with any alphabet, padding mode and engine."""
    return TestConfig(
        alphabet=draw(alphabet),
        padding_mode=draw(padding_modes),
        engine_variant=draw(engine_variants),
        iteration_count=10,
        max_input_size=1024,
    )


@composite
def duplicate_tables(draw: st.DrawFn) -> str:
    """64-symbol tables with at least one repeated symbol."""
    symbols = list(draw(st.permutations(STANDARD_SYMBOLS)))
    source = draw(st.integers(min_value=0, max_value=63))
    target = draw(st.integers(min_value=0, max_value=63).filter(lambda i: i != source))
    symbols[target] = symbols[source]
    return "".join(symbols)


payloads = st.binary(max_size=256)
