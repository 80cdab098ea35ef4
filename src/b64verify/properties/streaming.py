"""Streaming equivalence properties.

Feeding a stream encoder or decoder the chunks of an input, then finalizing
it, must yield exactly what the batch operation yields, wherever the chunk
boundaries fall.

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from b64verify.properties.model import Verdict
from b64verify.properties.support import preview

if TYPE_CHECKING:
    from b64verify.codec.protocol import Codec
    from b64verify.config.test_config import TestConfig
    from b64verify.generators import ChunkedInput

__all__ = ["check_stream_decode", "check_stream_encode", "check_stream_roundtrip"]


def check_stream_encode(value: ChunkedInput, config: TestConfig, codec: Codec) -> Verdict:
    encoder = codec.stream_encoder(config)
    streamed = "".join(encoder.update(chunk) for chunk in value.chunks()) + encoder.finalize()
    batch = codec.encode(value.data, config)
    return Verdict.check(
        streamed == batch,
        f"streamed encode at splits {value.splits} gave {preview(streamed)}, "
        f"batch gave {preview(batch)}",
    )


def check_stream_decode(value: ChunkedInput, config: TestConfig, codec: Codec) -> Verdict:
    text = codec.encode(value.data, config)
    decoder = codec.stream_decoder(config)
    parts = [decoder.update(chunk) for chunk in value.text_chunks(text)]
    tail, error = decoder.finalize()
    if tail is None:
        return Verdict.fail(f"streamed decode of {preview(text)} failed: {error}")
    streamed = b"".join(parts) + tail
    return Verdict.check(
        streamed == value.data,
        f"streamed decode of {preview(text)} gave {preview(streamed)}, "
        f"expected {preview(value.data)}",
    )


def check_stream_roundtrip(value: ChunkedInput, config: TestConfig, codec: Codec) -> Verdict:
    """Both directions over many chunks."""
    verdict = check_stream_encode(value, config, codec)
    if not verdict.passed:
        return verdict
    return check_stream_decode(value, config, codec)
