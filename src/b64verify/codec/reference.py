"""Reference codec adapter.

ReferenceCodec satisfies the Codec protocol so the harness runs without any
external codec. Validation (``codec.validation``) is done once for every
engine variant; the engines only transform well-formed symbol runs.

Padding modes map to encode shape and decode policy as follows:

    mode               encode pads   decode policy
    canonical          yes           indifferent
    none               no            indifferent
    indifferent        yes           indifferent
    require_canonical  yes           require_canonical
    require_none       no            require_none

Thread-safe. ReferenceCodec holds no mutable state.

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from b64verify.codec.engines import ENGINES, Engine
from b64verify.codec.errors import BufferTooSmall
from b64verify.codec.streaming import ReferenceStreamDecoder, ReferenceStreamEncoder
from b64verify.codec.validation import as_bytes, inspect_encoded
from b64verify.constants import BLOCK_SIZE, GROUP_SIZE

if TYPE_CHECKING:
    from b64verify.codec.protocol import DecodeResult, SliceResult
    from b64verify.config.test_config import TestConfig

__all__ = ["ReferenceCodec"]


class ReferenceCodec:
    """Base64-family codec implementing the Codec protocol.

    Example:
        >>> from b64verify.config import TestConfig
        >>> codec = ReferenceCodec()
        >>> codec.encode(b"\\xff", TestConfig())
        '/w=='
        >>> codec.decode("/w==", TestConfig())
        (b'\\xff', None)
        >>> codec.decode("QUJD!", TestConfig())
        (None, InvalidByte(position=4, byte=33))
    """

    __slots__ = ()

    @staticmethod
    def _engine(config: TestConfig) -> Engine:
        return ENGINES[config.engine_variant]

    def encode(self, data: bytes, config: TestConfig) -> str:
        return self._engine(config).encode(
            bytes(data), config.alphabet, pad=config.padding_mode.encode_pads
        )

    def decode(self, text: str | bytes, config: TestConfig) -> DecodeResult:
        data = as_bytes(text)
        symbols, error = inspect_encoded(data, config.alphabet, config.padding_mode.decode_policy)
        if error is not None:
            return None, error
        return self._engine(config).decode(data[:symbols], config.alphabet), None

    def encoded_len(self, length: int, config: TestConfig) -> int:
        full, rest = divmod(length, BLOCK_SIZE)
        if config.padding_mode.encode_pads:
            return (full + (1 if rest else 0)) * GROUP_SIZE
        return full * GROUP_SIZE + (rest + 1 if rest else 0)

    def decoded_len_bound(self, text: str | bytes, config: TestConfig) -> int:
        length = len(as_bytes(text))
        return (length + GROUP_SIZE - 1) // GROUP_SIZE * BLOCK_SIZE

    def decode_into(
        self, text: str | bytes, buffer: bytearray, config: TestConfig
    ) -> SliceResult:
        decoded, error = self.decode(text, config)
        if decoded is None:
            return None, error
        if len(decoded) > len(buffer):
            return None, BufferTooSmall(required=len(decoded), provided=len(buffer))
        buffer[: len(decoded)] = decoded
        return len(decoded), None

    def encode_into(self, data: bytes, buffer: bytearray, config: TestConfig) -> SliceResult:
        required = self.encoded_len(len(data), config)
        if required > len(buffer):
            return None, BufferTooSmall(required=required, provided=len(buffer))
        buffer[:required] = self.encode(data, config).encode("ascii")
        return required, None

    def stream_encoder(self, config: TestConfig) -> ReferenceStreamEncoder:
        return ReferenceStreamEncoder(self._engine(config), config)

    def stream_decoder(self, config: TestConfig) -> ReferenceStreamDecoder:
        return ReferenceStreamDecoder(self._engine(config), config)
