"""Composite generators.

ChunkedInputGenerator pairs a byte sequence with split points for the
streaming properties. WithConfiguration attaches a drawn TestConfig to each
value of another generator, so a single property can sweep configurations.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from b64verify.generators.base import GeneratedInput, InputGenerator
from b64verify.generators.sequences import draw_bytes, draw_length

if TYPE_CHECKING:
    import random

    from b64verify.config.test_config import TestConfig

__all__ = ["ChunkedInput", "ChunkedInputGenerator", "WithConfiguration"]


@dataclass(frozen=True, slots=True)
class ChunkedInput:
    """Byte sequence plus ascending split points in ``[0, len(data)]``.

    Example:
        >>> ChunkedInput(b"abcdef", (2, 2, 5)).chunks()
        [b'ab', b'', b'cde', b'f']
    """

    data: bytes
    splits: tuple[int, ...]

    def chunks(self) -> list[bytes]:
        """``data`` cut at every split point (empty chunks kept)."""
        bounds = [0, *self.splits, len(self.data)]
        return [self.data[a:b] for a, b in zip(bounds, bounds[1:], strict=False)]

    def text_chunks(self, text: str) -> list[str]:
        """Cut ``text`` (typically the encoded ``data``) at proportional offsets."""
        scale = len(self.data) or 1
        bounds = [0, *(split * len(text) // scale for split in self.splits), len(text)]
        return [text[a:b] for a, b in zip(bounds, bounds[1:], strict=False)]


class ChunkedInputGenerator(InputGenerator[ChunkedInput]):
    """Byte sequences with between 1 and ``max_chunks - 1`` split points.

    Args:
        seed: Generator seed
        max_size: Largest byte sequence produced
        max_chunks: Most chunks a value is cut into (at least 2)
    """

    name = "chunked_input"

    def __init__(self, seed: int, max_size: int, max_chunks: int) -> None:
        super().__init__(seed)
        if max_chunks < 2:
            msg = f"max_chunks must be at least 2, got {max_chunks}"
            raise self._fail(msg, "configure")
        if max_size < 0:
            msg = f"max_size must be non-negative, got {max_size}"
            raise self._fail(msg, "configure")
        self.max_size = max_size
        self.max_chunks = max_chunks

    def _generate(self, rng: random.Random) -> ChunkedInput:
        data = draw_bytes(rng, draw_length(rng, 0, self.max_size))
        count = rng.randint(1, self.max_chunks - 1)
        splits = sorted(rng.randint(0, len(data)) for _ in range(count))
        return ChunkedInput(data, tuple(splits))


class WithConfiguration[T](InputGenerator[T]):
    """Attach a configuration drawn from ``configs`` to each value of ``inner``.

    Both generators are indexed in lockstep, so provenance (seed, index) of
    the composite value replays both halves.
    """

    name = "with_configuration"

    def __init__(self, inner: InputGenerator[T], configs: InputGenerator[TestConfig]) -> None:
        super().__init__(inner.seed)
        self.inner = inner
        self.configs = configs

    def produce(self, index: int) -> GeneratedInput[T]:
        if self.closed:
            msg = f"{self.name} generator is closed"
            raise self._fail(msg)
        value = self.inner.produce(index)
        config = self.configs.produce(index).value
        return GeneratedInput(
            value.value, f"{self.inner.name}+{self.configs.name}", self.seed, index, config
        )

    def close(self) -> None:
        self.inner.close()
        self.configs.close()
        super().close()
