"""Streaming adapters of the reference codec.

The encoder buffers at most two bytes between updates. The decoder emits
complete groups as soon as they are known not to be the final group, and
keeps the final (possibly padded) group for ``finalize``, where the full
validation rules of the batch decoder apply with stream-global offsets.

Neither adapter is thread-safe; each stream belongs to one caller.

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from b64verify.codec.errors import InvalidByte
from b64verify.codec.validation import PAD_BYTE, as_bytes, inspect_encoded, symbol_values
from b64verify.constants import BLOCK_SIZE, GROUP_SIZE

if TYPE_CHECKING:
    from b64verify.codec.engines import Engine
    from b64verify.codec.errors import CodecError
    from b64verify.codec.protocol import DecodeResult
    from b64verify.config.test_config import TestConfig

__all__ = ["ReferenceStreamDecoder", "ReferenceStreamEncoder"]


class ReferenceStreamEncoder:
    """Chunked encoder; ``"".join(updates) + finalize()`` equals batch encode."""

    __slots__ = ("_config", "_engine", "_finished", "_pending")

    def __init__(self, engine: Engine, config: TestConfig) -> None:
        self._engine = engine
        self._config = config
        self._pending = bytearray()
        self._finished = False

    def update(self, chunk: bytes) -> str:
        """Consume ``chunk`` and return the symbols of every complete block.

        Raises:
            ValueError: If the stream was already finalized
        """
        if self._finished:
            msg = "stream encoder already finalized"
            raise ValueError(msg)
        self._pending += chunk
        whole = len(self._pending) - len(self._pending) % BLOCK_SIZE
        if not whole:
            return ""
        out = self._engine.encode(bytes(self._pending[:whole]), self._config.alphabet, pad=False)
        del self._pending[:whole]
        return out

    def finalize(self) -> str:
        """Encode the residue (fewer than three bytes) and close the stream.

        Raises:
            ValueError: If the stream was already finalized
        """
        if self._finished:
            msg = "stream encoder already finalized"
            raise ValueError(msg)
        self._finished = True
        out = self._engine.encode(
            bytes(self._pending),
            self._config.alphabet,
            pad=self._config.padding_mode.encode_pads,
        )
        self._pending.clear()
        return out


class ReferenceStreamDecoder:
    """Chunked decoder; updates plus the finalize payload equal batch decode.

    The first error found is sticky: later updates return nothing and
    ``finalize`` reports it.
    """

    __slots__ = ("_buffer", "_config", "_consumed", "_engine", "_error", "_finished")

    def __init__(self, engine: Engine, config: TestConfig) -> None:
        self._engine = engine
        self._config = config
        self._buffer = bytearray()
        self._consumed = 0
        self._error: CodecError | None = None
        self._finished = False

    def update(self, chunk: str | bytes) -> bytes:
        """Consume ``chunk`` and return the bytes of groups that cannot be final.

        Raises:
            ValueError: If the stream was already finalized
        """
        if self._finished:
            msg = "stream decoder already finalized"
            raise ValueError(msg)
        if self._error is not None:
            return b""
        self._buffer += as_bytes(chunk)

        pad_at = self._buffer.find(PAD_BYTE)
        limit = len(self._buffer) if pad_at < 0 else pad_at
        # Hold back the group that may turn out to be the final one.
        safe = (limit - 1) // GROUP_SIZE * GROUP_SIZE if limit else 0
        if not safe:
            return b""

        values = symbol_values(self._config.alphabet.symbols)
        for offset in range(safe):
            byte = self._buffer[offset]
            if byte not in values:
                self._error = InvalidByte(self._consumed + offset, byte)
                return b""

        out = self._engine.decode(bytes(self._buffer[:safe]), self._config.alphabet)
        del self._buffer[:safe]
        self._consumed += safe
        return out

    def finalize(self) -> DecodeResult:
        """Validate and decode the held-back tail, then close the stream.

        Returns:
            Tuple of (tail, error): decoded bytes of the final group(s), or
            None and the first error of the whole stream.

        Raises:
            ValueError: If the stream was already finalized
        """
        if self._finished:
            msg = "stream decoder already finalized"
            raise ValueError(msg)
        self._finished = True
        if self._error is not None:
            return None, self._error
        tail = bytes(self._buffer)
        self._buffer.clear()
        symbols, error = inspect_encoded(
            tail,
            self._config.alphabet,
            self._config.padding_mode.decode_policy,
            base=self._consumed,
        )
        if error is not None:
            return None, error
        return self._engine.decode(tail[:symbols], self._config.alphabet), None
