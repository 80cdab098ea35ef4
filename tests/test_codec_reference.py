"""Tests for the bundled reference codec (codec/reference.py, codec/validation.py).

Covers:
- Concrete encode/decode scenarios, including every decode error kind
- Decode check order when several rules are violated
- Padding policies (RequireCanonical, RequireNone, Indifferent)
- Agreement with the standard library and between engine variants
- Length functions and the slice-based APIs

Python 3.13+.
"""

from __future__ import annotations

import base64

import pytest
from hypothesis import event, example, given
from hypothesis import strategies as st

from b64verify.codec import (
    BufferTooSmall,
    Codec,
    InvalidByte,
    InvalidLastSymbol,
    InvalidLength,
    InvalidPadding,
    ReferenceCodec,
)
from b64verify.codec.validation import inspect_encoded
from b64verify.config import IMAP_MUTF7, STANDARD, URL_SAFE, TestConfig
from b64verify.enums import EngineVariant, PaddingMode
from tests.strategies import codec_configs, payloads

CANONICAL = TestConfig()
REQUIRE_CANONICAL = TestConfig(padding_mode=PaddingMode.REQUIRE_CANONICAL)
REQUIRE_NONE = TestConfig(padding_mode=PaddingMode.REQUIRE_NONE)
UNPADDED = TestConfig(padding_mode=PaddingMode.NONE)


class TestConcreteScenarios:
    """Hand-picked inputs with known encodings and errors."""

    def test_satisfies_codec_protocol(self, codec: ReferenceCodec) -> None:
        assert isinstance(codec, Codec)

    @pytest.mark.parametrize("mode", list(PaddingMode))
    def test_empty_input(self, codec: ReferenceCodec, mode: PaddingMode) -> None:
        config = TestConfig(padding_mode=mode)
        assert codec.encode(b"", config) == ""
        assert codec.decode("", config) == (b"", None)
        assert codec.encoded_len(0, config) == 0

    def test_single_ff_byte(self, codec: ReferenceCodec) -> None:
        text = codec.encode(b"\xff", CANONICAL)
        assert text == "/w=="
        assert len(text) == 4
        assert text.endswith("==")

    def test_single_ff_byte_unpadded(self, codec: ReferenceCodec) -> None:
        assert codec.encode(b"\xff", UNPADDED) == "/w"

    def test_excess_padding_under_require_canonical(self, codec: ReferenceCodec) -> None:
        assert codec.decode("A===", REQUIRE_CANONICAL) == (None, InvalidPadding(3))

    @pytest.mark.parametrize(("text", "position"), [("!", 0), ("QUJD!", 4), ("QU!D", 2)])
    def test_foreign_symbol(self, codec: ReferenceCodec, text: str, position: int) -> None:
        assert codec.decode(text, CANONICAL) == (None, InvalidByte(position, ord("!")))

    def test_multibyte_character_reported_at_byte_offset(self, codec: ReferenceCodec) -> None:
        assert codec.decode("QUé", CANONICAL) == (None, InvalidByte(2, 0xC3))

    def test_invalid_length(self, codec: ReferenceCodec) -> None:
        assert codec.decode("QUJDR", CANONICAL) == (None, InvalidLength(5))

    def test_invalid_last_symbol(self, codec: ReferenceCodec) -> None:
        # 'x' = 49 = 0b110001: low four bits set in a two-symbol tail.
        assert codec.decode("Qx", CANONICAL) == (None, InvalidLastSymbol(1, ord("x")))
        assert codec.decode("QQ", CANONICAL) == (b"A", None)

    def test_symbol_after_padding(self, codec: ReferenceCodec) -> None:
        assert codec.decode("QQ=A", CANONICAL) == (None, InvalidByte(2, ord("=")))

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("QQ===", InvalidPadding(4)),
            ("QUI==", InvalidPadding(4)),
            ("QUJD=", InvalidPadding(4)),
            ("=", InvalidPadding(0)),
        ],
    )
    def test_excess_padding(
        self, codec: ReferenceCodec, text: str, expected: InvalidPadding
    ) -> None:
        assert codec.decode(text, CANONICAL) == (None, expected)

    def test_url_safe_and_imap_symbols(self, codec: ReferenceCodec) -> None:
        data = b"\xfb\xff\xbf"
        assert codec.encode(data, CANONICAL) == "+/+/"
        assert codec.encode(data, CANONICAL.with_codec(alphabet=URL_SAFE)) == "-_-_"
        assert codec.encode(data, CANONICAL.with_codec(alphabet=IMAP_MUTF7)) == "+,+,"

    def test_standard_symbols_foreign_to_url_safe(self, codec: ReferenceCodec) -> None:
        config = CANONICAL.with_codec(alphabet=URL_SAFE)
        assert codec.decode("+/+/", config) == (None, InvalidByte(0, ord("+")))

    def test_bytes_input_accepted(self, codec: ReferenceCodec) -> None:
        assert codec.decode(b"/w==", CANONICAL) == (b"\xff", None)


class TestCheckOrder:
    """The first violated rule wins."""

    def test_foreign_byte_beats_length(self) -> None:
        assert inspect_encoded(b"QUJD!", STANDARD, PaddingMode.INDIFFERENT)[1] == InvalidByte(
            4, ord("!")
        )

    def test_excess_padding_beats_length(self) -> None:
        _, error = inspect_encoded(b"QUJDR===", STANDARD, PaddingMode.INDIFFERENT)
        assert error == InvalidPadding(7)

    def test_length_beats_policy(self) -> None:
        _, error = inspect_encoded(b"QUJDR", STANDARD, PaddingMode.REQUIRE_CANONICAL)
        assert error == InvalidLength(5)

    def test_last_symbol_beats_policy(self) -> None:
        _, error = inspect_encoded(b"Qx==", STANDARD, PaddingMode.REQUIRE_NONE)
        assert error == InvalidLastSymbol(1, ord("x"))

    def test_base_offsets_errors(self) -> None:
        _, error = inspect_encoded(b"Q!", STANDARD, PaddingMode.INDIFFERENT, base=8)
        assert error == InvalidByte(9, ord("!"))


class TestPaddingPolicies:
    """Strict and lenient decode policies."""

    def test_require_canonical_rejects_missing_padding(self, codec: ReferenceCodec) -> None:
        assert codec.decode("/w", REQUIRE_CANONICAL) == (None, InvalidPadding(2))
        assert codec.decode("/w=", REQUIRE_CANONICAL) == (None, InvalidPadding(3))
        assert codec.decode("/w==", REQUIRE_CANONICAL) == (b"\xff", None)

    def test_require_none_rejects_padding(self, codec: ReferenceCodec) -> None:
        assert codec.decode("/w==", REQUIRE_NONE) == (None, InvalidPadding(2))
        assert codec.decode("/w", REQUIRE_NONE) == (b"\xff", None)

    @pytest.mark.parametrize("text", ["/w", "/w=", "/w=="])
    def test_indifferent_accepts_any_valid_padding(self, codec: ReferenceCodec, text: str) -> None:
        assert codec.decode(text, CANONICAL) == (b"\xff", None)

    @given(data=payloads)
    def test_require_none_encodes_without_padding(self, data: bytes) -> None:
        """PROPERTY: Modes that do not pad never emit padding."""
        codec = ReferenceCodec()
        assert "=" not in codec.encode(data, REQUIRE_NONE)
        assert "=" not in codec.encode(data, UNPADDED)


class TestRoundtrip:
    """Roundtrip and agreement with independent implementations."""

    @given(data=payloads, config=codec_configs())
    @example(data=b"", config=CANONICAL)
    @example(data=b"\x00\x00", config=REQUIRE_NONE)
    def test_encode_decode(self, data: bytes, config: TestConfig) -> None:
        """PROPERTY: decode(encode(b)) == b under every configuration."""
        codec = ReferenceCodec()
        assert codec.decode(codec.encode(data, config), config) == (data, None)
        event(f"mode={config.padding_mode}")

    @given(data=payloads)
    def test_matches_standard_library(self, data: bytes) -> None:
        """PROPERTY: Standard alphabet output equals base64.b64encode."""
        codec = ReferenceCodec()
        assert codec.encode(data, CANONICAL) == base64.b64encode(data).decode("ascii")
        urlsafe = CANONICAL.with_codec(alphabet=URL_SAFE)
        assert codec.encode(data, urlsafe) == base64.urlsafe_b64encode(data).decode("ascii")

    @given(data=payloads, config=codec_configs())
    def test_engines_agree(self, data: bytes, config: TestConfig) -> None:
        """PROPERTY: Both engines produce and accept identical encodings."""
        codec = ReferenceCodec()
        naive = config.with_codec(engine_variant=EngineVariant.NAIVE)
        general = config.with_codec(engine_variant=EngineVariant.GENERAL_PURPOSE)
        text = codec.encode(data, general)
        assert codec.encode(data, naive) == text
        assert codec.decode(text, naive) == codec.decode(text, general)

    @given(data=payloads, config=codec_configs())
    def test_encoded_len_exact(self, data: bytes, config: TestConfig) -> None:
        """PROPERTY: encoded_len(n) == len(encode(b)) for every n."""
        codec = ReferenceCodec()
        assert codec.encoded_len(len(data), config) == len(codec.encode(data, config))

    @given(data=payloads, config=codec_configs())
    def test_decoded_len_bound_sufficient(self, data: bytes, config: TestConfig) -> None:
        codec = ReferenceCodec()
        text = codec.encode(data, config)
        assert codec.decoded_len_bound(text, config) >= len(data)


class TestSliceApis:
    """decode_into and encode_into."""

    def test_decode_into_exact(self, codec: ReferenceCodec) -> None:
        buffer = bytearray(3)
        assert codec.decode_into("QUJD", buffer, CANONICAL) == (3, None)
        assert buffer == bytearray(b"ABC")

    def test_decode_into_larger_buffer_leaves_rest(self, codec: ReferenceCodec) -> None:
        buffer = bytearray(b"\x01" * 5)
        assert codec.decode_into("QUI=", buffer, CANONICAL) == (2, None)
        assert buffer == bytearray(b"AB\x01\x01\x01")

    def test_decode_into_short(self, codec: ReferenceCodec) -> None:
        buffer = bytearray(2)
        assert codec.decode_into("QUJD", buffer, CANONICAL) == (None, BufferTooSmall(3, 2))
        assert buffer == bytearray(2)

    def test_decode_into_reports_decode_error_first(self, codec: ReferenceCodec) -> None:
        assert codec.decode_into("QU!D", bytearray(0), CANONICAL) == (
            None,
            InvalidByte(2, ord("!")),
        )

    def test_encode_into(self, codec: ReferenceCodec) -> None:
        buffer = bytearray(4)
        assert codec.encode_into(b"\xff", buffer, CANONICAL) == (4, None)
        assert buffer == bytearray(b"/w==")

    @given(data=st.binary(min_size=1, max_size=64))
    def test_encode_into_short(self, data: bytes) -> None:
        codec = ReferenceCodec()
        required = codec.encoded_len(len(data), CANONICAL)
        result = codec.encode_into(data, bytearray(required - 1), CANONICAL)
        assert result == (None, BufferTooSmall(required, required - 1))


class TestErrorDescriptions:
    """CodecError.describe() for report output."""

    @pytest.mark.parametrize(
        ("error", "fragment"),
        [
            (InvalidByte(4, 33), "'!' (0x21) at offset 4"),
            (InvalidLength(5), "symbol count 5"),
            (InvalidLastSymbol(1, ord("x")), "last symbol 'x' at offset 1"),
            (InvalidPadding(3), "padding at offset 3"),
            (BufferTooSmall(3, 2), "3 bytes required, 2 provided"),
        ],
    )
    def test_describe(self, error: object, fragment: str) -> None:
        assert fragment in error.describe()  # type: ignore[attr-defined]
