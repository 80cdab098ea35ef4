"""Codec collaborator contract and the bundled reference codec.

Exports:
    Codec: Protocol every codec under test satisfies
    StreamEncoder, StreamDecoder: Chunked collaborator protocols
    ReferenceCodec: Runnable codec built on the standard library
    CodecError and subclasses: Error values returned by decode

Python 3.13+.
"""

from .errors import (
    BufferTooSmall,
    CodecError,
    InvalidByte,
    InvalidLastSymbol,
    InvalidLength,
    InvalidPadding,
)
from .protocol import Codec, DecodeResult, SliceResult, StreamDecoder, StreamEncoder
from .reference import ReferenceCodec

__all__ = [
    "BufferTooSmall",
    "Codec",
    "CodecError",
    "DecodeResult",
    "InvalidByte",
    "InvalidLastSymbol",
    "InvalidLength",
    "InvalidPadding",
    "ReferenceCodec",
    "SliceResult",
    "StreamDecoder",
    "StreamEncoder",
]
