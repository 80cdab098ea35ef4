"""Counterexample shrinker.

Greedy search for a smaller failing input. Candidates are produced by
shape-specific reduction rules, most aggressive first; the first candidate for
which the predicate still fails replaces the current value and the search
restarts from it. The search ends at a local minimum (no candidate fails) or
when the attempt bound is spent.

Reduction rules:
    bytes           empty, halves, drop prefix/suffix chunks, drop single
                    bytes, zero bytes
    str             empty, halves, drop prefix/suffix chunks, drop single
                    characters (on alphabet tables this converges on a
                    minimal duplicate set)
    MalformedInput  drop whole leading groups before the defect, truncate
                    after an invalid byte, trim excess padding; the expected
                    error is shifted accordingly
    ChunkedInput    shrink the data (splits clamped), merge chunks, move
                    splits to the start
    TestConfig      each field towards Standard / Canonical / GeneralPurpose,
                    both as a value and as a per-input override

Candidates never grow the input, so the search terminates.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from b64verify.codec.errors import InvalidByte, InvalidLastSymbol, InvalidLength, InvalidPadding
from b64verify.config.alphabet import STANDARD
from b64verify.config.test_config import TestConfig
from b64verify.constants import GROUP_SIZE, PAD_SYMBOL
from b64verify.enums import EngineVariant, PaddingMode
from b64verify.generators import ChunkedInput, GeneratedInput, MalformedInput

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from b64verify.codec.errors import CodecError

__all__ = ["ShrinkResult", "Shrinker", "value_candidates"]

logger = logging.getLogger(__name__)

# Single-element removal is quadratic; only applied below this length.
_ELEMENT_LIMIT = 64


@dataclass(frozen=True, slots=True)
class ShrinkResult:
    """Outcome of a shrink search.

    Attributes:
        value: Smallest failing input found (the original if nothing shrank)
        steps: Accepted reductions
        attempts: Predicate evaluations spent
        bound_reached: The attempt bound stopped the search before a local
            minimum was confirmed
    """

    value: GeneratedInput[object]
    steps: int
    attempts: int
    bound_reached: bool


def _chunk_sizes(length: int) -> Iterator[int]:
    size = length // 2
    while size >= 1:
        yield size
        size //= 2


def _sequence_candidates[S: (bytes, str)](seq: S) -> Iterator[S]:
    length = len(seq)
    if not length:
        return
    yield seq[:0]
    for size in _chunk_sizes(length):
        yield seq[size:]
        yield seq[: length - size]
    if length <= _ELEMENT_LIMIT:
        for i in range(length):
            yield seq[:i] + seq[i + 1 :]


def _bytes_candidates(data: bytes) -> Iterator[bytes]:
    yield from _sequence_candidates(data)
    if any(data):
        yield bytes(len(data))
        if len(data) <= _ELEMENT_LIMIT:
            for i, byte in enumerate(data):
                if byte:
                    yield data[:i] + b"\x00" + data[i + 1 :]


def _shift(error: CodecError, offset: int) -> CodecError:
    match error:
        case InvalidByte() | InvalidLastSymbol() | InvalidPadding():
            return replace(error, position=error.position - offset)
        case InvalidLength():
            return replace(error, length=error.length - offset)
        case _:
            return error


def _anchor(value: MalformedInput) -> int:
    """Offset of the first symbol the defect depends on."""
    match value.expected:
        case InvalidByte(position=position) | InvalidLastSymbol(position=position):
            return position
        case InvalidLength(length=length):
            return length - 1
        case _:
            first_pad = value.text.find(PAD_SYMBOL)
            return len(value.text) if first_pad < 0 else first_pad


def _malformed_candidates(value: MalformedInput) -> Iterator[MalformedInput]:
    groups = _anchor(value) // GROUP_SIZE
    for count in dict.fromkeys((groups, groups // 2, 1)):
        if 0 < count <= groups:
            offset = count * GROUP_SIZE
            yield MalformedInput(value.text[offset:], value.defect, _shift(value.expected, offset))
    match value.expected:
        case InvalidByte(position=position) if len(value.text) > position + 1:
            yield replace(value, text=value.text[: position + 1])
        case InvalidPadding(position=position) if len(value.text) > position + 1:
            yield replace(value, text=value.text[: position + 1])


def _chunked_candidates(value: ChunkedInput) -> Iterator[ChunkedInput]:
    for data in _bytes_candidates(value.data):
        yield ChunkedInput(data, tuple(min(split, len(data)) for split in value.splits))
    if len(value.splits) > 1:
        for i in range(len(value.splits)):
            yield ChunkedInput(value.data, value.splits[:i] + value.splits[i + 1 :])
    if any(value.splits):
        yield ChunkedInput(value.data, tuple(0 for _ in value.splits))


def _config_candidates(config: TestConfig, *, keep_alphabet: bool = False) -> Iterator[TestConfig]:
    if not keep_alphabet and config.alphabet != STANDARD:
        yield config.with_codec(alphabet=STANDARD)
    if config.padding_mode is not PaddingMode.CANONICAL:
        yield config.with_codec(padding_mode=PaddingMode.CANONICAL)
    if config.engine_variant is not EngineVariant.GENERAL_PURPOSE:
        yield config.with_codec(engine_variant=EngineVariant.GENERAL_PURPOSE)


def value_candidates(value: object) -> Iterator[object]:
    """Smaller variants of ``value``, most aggressive first."""
    match value:
        case bytes():
            yield from _bytes_candidates(value)
        case str():
            yield from _sequence_candidates(value)
        case MalformedInput():
            yield from _malformed_candidates(value)
        case ChunkedInput():
            yield from _chunked_candidates(value)
        case TestConfig():
            yield from _config_candidates(value)
        case _:
            return


def _candidates(current: GeneratedInput[object]) -> Iterator[GeneratedInput[object]]:
    for value in value_candidates(current.value):
        yield current.with_value(value)
    if current.config is not None:
        keep_alphabet = isinstance(current.value, MalformedInput)
        for config in _config_candidates(current.config, keep_alphabet=keep_alphabet):
            yield current.with_value(current.value, config)


class Shrinker:
    """Minimize a failing input.

    Args:
        still_fails: Re-runs the property on a candidate; True if it fails
        bound: Maximum ``still_fails`` calls per search

    Example:
        >>> shrinker = Shrinker(lambda g: b"\\x07" in g.value, bound=100)
        >>> result = shrinker.shrink(GeneratedInput(b"abc\\x07def", "bytes", 0, 0))
        >>> result.value.value
        b'\\x07'
    """

    __slots__ = ("bound", "still_fails")

    def __init__(self, still_fails: Callable[[GeneratedInput[object]], bool], bound: int) -> None:
        self.still_fails = still_fails
        self.bound = bound

    def shrink(self, generated: GeneratedInput[object]) -> ShrinkResult:
        """Search for a minimal failing input starting from ``generated``.

        ``generated`` must already be known to fail; it is never re-evaluated.
        """
        current = generated
        steps = 0
        attempts = 0
        while True:
            improved = False
            for candidate in _candidates(current):
                if candidate == current:
                    continue
                if attempts >= self.bound:
                    logger.debug("Shrink bound %s reached after %s steps", self.bound, steps)
                    return ShrinkResult(current, steps, attempts, bound_reached=True)
                attempts += 1
                if self.still_fails(candidate):
                    current = candidate
                    steps += 1
                    improved = True
                    break
            if not improved:
                logger.debug("Shrink reached local minimum: %s steps, %s attempts", steps, attempts)
                return ShrinkResult(current, steps, attempts, bound_reached=False)
