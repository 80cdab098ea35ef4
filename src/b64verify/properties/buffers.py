"""Buffer safety properties for the slice-based codec APIs.

An exactly sized output buffer is sufficient; a buffer one byte short is
refused with BufferTooSmall naming the size the caller supplied.

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from b64verify.codec.errors import BufferTooSmall
from b64verify.properties.model import Verdict
from b64verify.properties.support import preview

if TYPE_CHECKING:
    from b64verify.codec.protocol import Codec
    from b64verify.config.test_config import TestConfig

__all__ = ["check_decode_into_exact", "check_decode_into_short", "check_encode_into_short"]


def check_decode_into_exact(data: bytes, config: TestConfig, codec: Codec) -> Verdict:
    text = codec.encode(data, config)
    buffer = bytearray(len(data))
    written, error = codec.decode_into(text, buffer, config)
    if written is None:
        return Verdict.fail(f"decode_into {len(data)}-byte buffer failed: {error}")
    return Verdict.check(
        written == len(data) and bytes(buffer) == data,
        f"decode_into wrote {written} bytes {preview(bytes(buffer))}, expected {preview(data)}",
    )


def _short_result(error: object, required: int, provided: int, operation: str) -> Verdict:
    if not isinstance(error, BufferTooSmall):
        return Verdict.fail(
            f"{operation} into {provided} bytes gave {error!r}, expected BufferTooSmall"
        )
    return Verdict.check(
        error.provided == provided and error.required >= required,
        f"{operation} reported {error!r} for {required} bytes into {provided}",
    )


def check_decode_into_short(data: bytes, config: TestConfig, codec: Codec) -> Verdict:
    text = codec.encode(data, config)
    buffer = bytearray(len(data) - 1)
    written, error = codec.decode_into(text, buffer, config)
    if written is not None:
        return Verdict.fail(f"decode_into accepted {len(data)} bytes into {len(buffer)}")
    return _short_result(error, len(data), len(buffer), "decode_into")


def check_encode_into_short(data: bytes, config: TestConfig, codec: Codec) -> Verdict:
    required = codec.encoded_len(len(data), config)
    buffer = bytearray(required - 1)
    written, error = codec.encode_into(data, buffer, config)
    if written is not None:
        return Verdict.fail(f"encode_into accepted {required} symbols into {len(buffer)}")
    if isinstance(error, BufferTooSmall) and error.required != required:
        return Verdict.fail(f"encode_into reported {error!r}, encoded_len is {required}")
    return _short_result(error, required, len(buffer), "encode_into")
