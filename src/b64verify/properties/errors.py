"""Error taxonomy properties.

Each malformed input carries the exact error a conforming decoder reports
for it. Values are swept across padding modes and engines, so the reported
error must not depend on either.

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from b64verify.properties.model import Verdict
from b64verify.properties.support import preview

if TYPE_CHECKING:
    from b64verify.codec.protocol import Codec
    from b64verify.config.test_config import TestConfig
    from b64verify.generators import MalformedInput

__all__ = ["check_exact_error"]


def check_exact_error(value: MalformedInput, config: TestConfig, codec: Codec) -> Verdict:
    decoded, error = codec.decode(value.text, config)
    if error is None:
        return Verdict.fail(
            f"{value.defect} input {preview(value.text)} accepted as {preview(decoded or b'')} "
            f"under {config.describe()}"
        )
    return Verdict.check(
        error == value.expected,
        f"{preview(value.text)} under {config.describe()} gave {error!r}, "
        f"expected {value.expected!r}",
    )
