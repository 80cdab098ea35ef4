"""Byte sequence generator.

Lengths are drawn from weighted categories that concentrate on the shapes a
base64 codec gets wrong: empty input, a single byte, lengths next to a block
boundary (3k-1, 3k, 3k+1), small uniform sizes, log-uniform sizes up to the
limit, and the limit itself. Contents are uniform random, all zero, all 0xFF,
or a short repeating pattern.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from b64verify.constants import BLOCK_SIZE, SMALL_INPUT_SIZE
from b64verify.generators.base import InputGenerator

if TYPE_CHECKING:
    import random

__all__ = ["ByteSequenceGenerator", "draw_bytes", "draw_length"]

_LENGTH_CATEGORIES = ("empty", "single", "boundary", "small", "log_uniform", "maximum")
_LENGTH_WEIGHTS = (2, 2, 6, 10, 4, 1)

_CONTENT_CATEGORIES = ("random", "zeros", "ones", "pattern")
_CONTENT_WEIGHTS = (6, 1, 1, 2)

_MAX_BOUNDARY_BLOCKS = 32
_MAX_PATTERN = 7


def draw_length(rng: random.Random, min_size: int, max_size: int) -> int:
    """Draw a length in ``[min_size, max_size]`` from the weighted categories."""
    (category,) = rng.choices(_LENGTH_CATEGORIES, _LENGTH_WEIGHTS)
    match category:
        case "empty":
            length = 0
        case "single":
            length = 1
        case "boundary":
            length = BLOCK_SIZE * rng.randint(0, _MAX_BOUNDARY_BLOCKS) + rng.choice((-1, 0, 1))
        case "small":
            length = rng.randint(0, min(max_size, SMALL_INPUT_SIZE))
        case "log_uniform":
            length = int(2 ** rng.uniform(0, math.log2(max_size + 1))) - 1
        case _:
            length = max_size
    return min(max(length, min_size), max_size)


def draw_bytes(rng: random.Random, length: int) -> bytes:
    """Draw ``length`` bytes from the weighted content categories."""
    (category,) = rng.choices(_CONTENT_CATEGORIES, _CONTENT_WEIGHTS)
    match category:
        case "random":
            return rng.randbytes(length)
        case "zeros":
            return bytes(length)
        case "ones":
            return b"\xff" * length
        case _:
            pattern = rng.randbytes(rng.randint(1, _MAX_PATTERN))
            return (pattern * (length // len(pattern) + 1))[:length]


class ByteSequenceGenerator(InputGenerator[bytes]):
    """Arbitrary byte sequences of bounded length.

    Args:
        seed: Generator seed
        max_size: Largest length produced (inclusive)
        min_size: Smallest length produced (inclusive, default 0)

    Raises:
        GenerationError: If the bounds are negative or ``min_size > max_size``
    """

    name = "bytes"

    def __init__(self, seed: int, max_size: int, min_size: int = 0) -> None:
        super().__init__(seed)
        if min_size < 0 or max_size < 0:
            msg = f"size bounds must be non-negative, got [{min_size}, {max_size}]"
            raise self._fail(msg, "configure")
        if min_size > max_size:
            msg = f"min_size {min_size} exceeds max_size {max_size}"
            raise self._fail(msg, "configure")
        self.max_size = max_size
        self.min_size = min_size

    def _generate(self, rng: random.Random) -> bytes:
        return draw_bytes(rng, draw_length(rng, self.min_size, self.max_size))
