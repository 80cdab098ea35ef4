"""Codec-under-test collaborator contract.

Predicates talk to the codec only through these protocols, so any object
with matching methods can be put under test (see ``b64verify run --codec``).

Contract:
    encode: deterministic and total over byte sequences up to max_input_size
    decode: returns (bytes, None) or (None, CodecError); never raises
    encoded_len: EXACT length of encode output for an n-byte input
    decoded_len_bound: SUFFICIENT buffer size for decode output
    decode_into / encode_into: slice APIs reporting BufferTooSmall
    stream_encoder / stream_decoder: chunked forms, byte-identical to the
        batch forms once finalized

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from b64verify.codec.errors import CodecError
    from b64verify.config.test_config import TestConfig

__all__ = [
    "Codec",
    "DecodeResult",
    "SliceResult",
    "StreamDecoder",
    "StreamEncoder",
]

type DecodeResult = tuple[bytes | None, CodecError | None]
type SliceResult = tuple[int | None, CodecError | None]


class StreamEncoder(Protocol):
    """Chunked encoder. Output of all updates plus finalize equals batch encode."""

    def update(self, chunk: bytes) -> str:
        """Consume a chunk, return the symbols that are now complete."""
        ...  # pragma: no cover  # Protocol stub - not executable

    def finalize(self) -> str:
        """Flush buffered residue (with padding, if the mode pads)."""
        ...  # pragma: no cover  # Protocol stub - not executable


class StreamDecoder(Protocol):
    """Chunked decoder. Output of all updates plus finalize equals batch decode."""

    def update(self, chunk: str | bytes) -> bytes:
        """Consume a chunk, return the bytes that are now complete."""
        ...  # pragma: no cover  # Protocol stub - not executable

    def finalize(self) -> DecodeResult:
        """Validate and decode the buffered final group."""
        ...  # pragma: no cover  # Protocol stub - not executable


@runtime_checkable
class Codec(Protocol):
    """Base64-family codec under test."""

    def encode(self, data: bytes, config: TestConfig) -> str: ...  # pragma: no cover

    def decode(self, text: str | bytes, config: TestConfig) -> DecodeResult: ...  # pragma: no cover

    def encoded_len(self, length: int, config: TestConfig) -> int: ...  # pragma: no cover

    def decoded_len_bound(self, text: str | bytes, config: TestConfig) -> int: ...

    def decode_into(
        self, text: str | bytes, buffer: bytearray, config: TestConfig
    ) -> SliceResult: ...  # pragma: no cover

    def encode_into(
        self, data: bytes, buffer: bytearray, config: TestConfig
    ) -> SliceResult: ...  # pragma: no cover

    def stream_encoder(self, config: TestConfig) -> StreamEncoder: ...  # pragma: no cover

    def stream_decoder(self, config: TestConfig) -> StreamDecoder: ...  # pragma: no cover
