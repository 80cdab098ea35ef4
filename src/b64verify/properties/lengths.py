"""Length calculation properties.

``encoded_len`` is exact, ``decoded_len_bound`` is sufficient, and the
decoded length of a well-formed string follows from its symbol count alone.

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from b64verify.constants import BLOCK_SIZE, GROUP_SIZE, PAD_SYMBOL
from b64verify.properties.model import Verdict
from b64verify.properties.support import preview, well_formed

if TYPE_CHECKING:
    from b64verify.codec.protocol import Codec
    from b64verify.config.test_config import TestConfig

__all__ = ["check_decoded_bound", "check_decoded_length", "check_encoded_len"]


def check_encoded_len(data: bytes, config: TestConfig, codec: Codec) -> Verdict:
    predicted = codec.encoded_len(len(data), config)
    actual = len(codec.encode(data, config))
    return Verdict.check(
        predicted == actual,
        f"encoded_len({len(data)}) = {predicted} under {config.describe()}, actual {actual}",
    )


def check_decoded_bound(text: str, config: TestConfig, codec: Codec) -> Verdict:
    if not well_formed(text, config):
        return Verdict.discard(f"{preview(text)} is not a valid encoding")
    decoded, error = codec.decode(text, config)
    if decoded is None:
        return Verdict.fail(f"well-formed {preview(text)} rejected: {error}")
    bound = codec.decoded_len_bound(text, config)
    return Verdict.check(
        len(decoded) <= bound,
        f"decoded_len_bound({len(text)} symbols) = {bound} < actual {len(decoded)}",
    )


def check_decoded_length(text: str, config: TestConfig, codec: Codec) -> Verdict:
    """Decoded length is floor(3 * symbols / 4), padding excluded."""
    if not well_formed(text, config):
        return Verdict.discard(f"{preview(text)} is not a valid encoding")
    decoded, error = codec.decode(text, config)
    if decoded is None:
        return Verdict.fail(f"well-formed {preview(text)} rejected: {error}")
    symbols = len(text.rstrip(PAD_SYMBOL))
    expected = symbols * BLOCK_SIZE // GROUP_SIZE
    return Verdict.check(
        len(decoded) == expected,
        f"{symbols} symbols decoded to {len(decoded)} bytes, expected {expected}",
    )
