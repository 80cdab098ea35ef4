"""Edge case properties: empty input, single bytes, block boundaries.

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from b64verify.constants import BLOCK_SIZE, GROUP_SIZE, PAD_SYMBOL
from b64verify.properties.model import Verdict
from b64verify.properties.roundtrip import check_encode_decode
from b64verify.properties.support import preview, unpadded_length

if TYPE_CHECKING:
    from b64verify.codec.protocol import Codec
    from b64verify.config.test_config import TestConfig

__all__ = ["check_block_boundaries", "check_empty_input", "check_single_byte"]


def check_empty_input(config: TestConfig, _run_config: TestConfig, codec: Codec) -> Verdict:
    """Empty input under a drawn configuration, batch and streaming."""
    if (text := codec.encode(b"", config)) != "":
        return Verdict.fail(f"empty input encoded to {text!r} under {config.describe()}")
    if (length := codec.encoded_len(0, config)) != 0:
        return Verdict.fail(f"encoded_len(0) = {length} under {config.describe()}")
    decoded, error = codec.decode("", config)
    if decoded != b"":
        return Verdict.fail(
            f"empty string decoded to {decoded!r} ({error}) under {config.describe()}"
        )
    encoder = codec.stream_encoder(config)
    if (streamed := encoder.finalize()) != "":
        return Verdict.fail(f"empty stream encoded to {streamed!r}")
    tail, error = codec.stream_decoder(config).finalize()
    return Verdict.check(tail == b"", f"empty stream decoded to {tail!r} ({error})")


def check_single_byte(data: bytes, config: TestConfig, codec: Codec) -> Verdict:
    text = codec.encode(data, config)
    expected = "==" if config.padding_mode.encode_pads else ""
    if len(text) != 2 + len(expected) or not text.endswith(expected) or text[:2].count(PAD_SYMBOL):
        return Verdict.fail(f"byte {data!r} encoded to {text!r} under {config.describe()}")
    return check_encode_decode(data, config, codec)


def check_block_boundaries(data: bytes, config: TestConfig, codec: Codec) -> Verdict:
    """Prefixes of length 3k-1, 3k and 3k+1 around the input length."""
    base = len(data) // BLOCK_SIZE * BLOCK_SIZE
    for length in (base - 1, base, base + 1):
        if not 0 <= length <= len(data):
            continue
        prefix = data[:length]
        text = codec.encode(prefix, config)
        if config.padding_mode.encode_pads:
            expected = -(-length // BLOCK_SIZE) * GROUP_SIZE
        else:
            expected = unpadded_length(length)
        if len(text) != expected:
            return Verdict.fail(
                f"{length} bytes encoded to {len(text)} symbols, expected {expected}"
            )
        verdict = check_encode_decode(prefix, config, codec)
        if not verdict.passed:
            return Verdict.fail(f"at length {length}: {verdict.diagnostic} ({preview(prefix)})")
    return Verdict.ok()
