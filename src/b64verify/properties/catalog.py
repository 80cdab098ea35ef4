"""The property catalog.

PROPERTY_TABLE is the explicit registration table: every property the harness
knows is listed here once, with its id, generator binding and predicate.
``default_registry()`` builds the registry from it on first use and returns the
same instance afterwards.

Python 3.13+.
"""

from __future__ import annotations

from functools import cache
from typing import TYPE_CHECKING, Any

from b64verify.constants import MAX_STREAM_CHUNKS
from b64verify.enums import DefectKind
from b64verify.enums import PropertyCategory as Cat
from b64verify.generators import (
    ByteSequenceGenerator,
    ChunkedInputGenerator,
    ConfigurationGenerator,
    RejectedAlphabetGenerator,
)
from b64verify.properties import (
    buffers,
    charset,
    configuration,
    edge_cases,
    errors,
    lengths,
    padding,
    roundtrip,
    streaming,
)
from b64verify.properties.model import Property
from b64verify.properties.registry import PropertyRegistry
from b64verify.properties.support import (
    byte_limit,
    bytes_factory,
    configured,
    invalid_factory,
    strings_factory,
)

if TYPE_CHECKING:
    from b64verify.config.test_config import TestConfig
    from b64verify.generators import InputGenerator
    from b64verify.properties.model import GeneratorFactory

__all__ = ["PROPERTY_TABLE", "default_registry"]


def _chunked(max_chunks: int) -> GeneratorFactory:
    def build(seed: int, config: TestConfig) -> InputGenerator[Any]:
        return ChunkedInputGenerator(seed, byte_limit(config), max_chunks)

    return build


def _configs(seed: int, config: TestConfig) -> InputGenerator[Any]:
    return ConfigurationGenerator(seed, config)


def _rejected_alphabets(seed: int, config: TestConfig) -> InputGenerator[Any]:  # noqa: ARG001
    return RejectedAlphabetGenerator(seed)


def _one_byte(seed: int, config: TestConfig) -> InputGenerator[Any]:  # noqa: ARG001
    return ByteSequenceGenerator(seed, 1, min_size=1)


_ANY_ENGINE = bytes_factory(naive=True)

# (id, name, category, requirements, generator factory, predicate, description)
PROPERTY_TABLE: tuple[Property, ...] = (
    Property(1, "encode_decode_roundtrip", Cat.ROUNDTRIP, ("1.1",),
             bytes_factory(), roundtrip.check_encode_decode,
             "decode(encode(b)) == b"),
    Property(2, "decode_encode_roundtrip", Cat.ROUNDTRIP, ("1.2",),
             strings_factory(), roundtrip.check_decode_encode,
             "encode(decode(s)) is the canonical form of s"),
    Property(3, "cross_engine_consistency", Cat.ROUNDTRIP, ("1.3", "7.1"),
             bytes_factory(naive=True), roundtrip.check_cross_engine,
             "all engine variants produce and accept identical encodings"),
    Property(4, "custom_alphabet_roundtrip", Cat.ROUNDTRIP, ("1.4",),
             configured(_ANY_ENGINE, custom_ratio=1.0), roundtrip.check_alphabet_roundtrip,
             "roundtrip holds under random custom alphabets"),
    Property(5, "padding_mode_roundtrip", Cat.ROUNDTRIP, ("1.5",),
             configured(_ANY_ENGINE), roundtrip.check_padding_roundtrip,
             "roundtrip holds under every padding mode, with padding iff the mode pads"),
    Property(6, "character_set_compliance", Cat.ALPHABET, ("2.1", "2.2", "2.3", "2.4"),
             configured(_ANY_ENGINE), charset.check_character_set,
             "encoded output uses only alphabet symbols and trailing padding"),
    Property(7, "invalid_character_detection", Cat.ALPHABET, ("2.5",),
             invalid_factory(DefectKind.INVALID_BYTE), charset.check_foreign_symbol_rejected,
             "a foreign symbol is rejected as InvalidByte naming that symbol"),
    Property(8, "alphabet_substitution_consistency", Cat.ALPHABET, ("2.6",),
             configured(_ANY_ENGINE, custom_ratio=0.5), charset.check_substitution,
             "output under any alphabet is the Standard output with symbols substituted"),
    Property(9, "canonical_padding_count", Cat.PADDING, ("3.1",),
             bytes_factory(), padding.check_canonical_padding,
             "canonical output pads to a multiple of 4 with (-n mod 3) padding symbols"),
    Property(10, "unpadded_encoding", Cat.PADDING, ("3.2",),
             bytes_factory(), padding.check_unpadded,
             "unpadded output has no padding and ceil(4n/3) symbols"),
    Property(11, "require_canonical_rejects_unpadded", Cat.PADDING, ("3.3",),
             bytes_factory(), padding.check_require_canonical,
             "RequireCanonical reports missing padding at the end of input"),
    Property(12, "require_none_rejects_padded", Cat.PADDING, ("3.4",),
             bytes_factory(), padding.check_require_none,
             "RequireNone reports padding at the first padding symbol"),
    Property(13, "indifferent_accepts_both", Cat.PADDING, ("3.5",),
             bytes_factory(), padding.check_indifferent_accepts_both,
             "Indifferent decodes padded and unpadded forms alike"),
    Property(14, "encoded_len_exact", Cat.LENGTH, ("4.1",),
             configured(_ANY_ENGINE), lengths.check_encoded_len,
             "encoded_len(n) equals the length of encode output"),
    Property(15, "decoded_len_bound_sufficient", Cat.LENGTH, ("4.2",),
             strings_factory(), lengths.check_decoded_bound,
             "decoded_len_bound(s) is at least the decoded length"),
    Property(16, "decoded_length_from_symbols", Cat.LENGTH, ("4.3",),
             strings_factory(), lengths.check_decoded_length,
             "decoded length is floor(3 * symbols / 4)"),
    Property(17, "invalid_byte_position", Cat.ERRORS, ("5.1",),
             invalid_factory(DefectKind.INVALID_BYTE, sweep=True), errors.check_exact_error,
             "InvalidByte reports the exact offset and byte"),
    Property(18, "invalid_length_detection", Cat.ERRORS, ("5.2",),
             invalid_factory(DefectKind.INVALID_LENGTH, sweep=True), errors.check_exact_error,
             "a 4k+1 symbol count is InvalidLength with that count"),
    Property(19, "invalid_last_symbol_detection", Cat.ERRORS, ("5.3",),
             invalid_factory(DefectKind.INVALID_LAST_SYMBOL, sweep=True), errors.check_exact_error,
             "non-zero trailing bits are InvalidLastSymbol at the final symbol"),
    Property(20, "invalid_padding_position", Cat.ERRORS, ("5.4",),
             invalid_factory(DefectKind.INVALID_PADDING, sweep=True), errors.check_exact_error,
             "excess padding is InvalidPadding at the first excess symbol"),
    Property(21, "streaming_encode_split_equivalence", Cat.STREAMING, ("6.1",),
             _chunked(2), streaming.check_stream_encode,
             "two-chunk streaming encode equals batch encode"),
    Property(22, "streaming_decode_split_equivalence", Cat.STREAMING, ("6.2",),
             _chunked(2), streaming.check_stream_decode,
             "two-chunk streaming decode equals batch decode"),
    Property(23, "streaming_multi_chunk_equivalence", Cat.STREAMING, ("6.3",),
             _chunked(MAX_STREAM_CHUNKS), streaming.check_stream_roundtrip,
             "many-chunk streaming equals batch in both directions"),
    Property(24, "invalid_custom_alphabet_rejected", Cat.CONFIGURATION, ("7.2",),
             _rejected_alphabets, configuration.check_alphabet_rejected,
             "harness self-check: invalid custom alphabets are refused before any codec call"),
    Property(25, "encode_determinism", Cat.CONFIGURATION, ("7.3",),
             configured(_ANY_ENGINE), configuration.check_determinism,
             "encode is a pure function of input and configuration"),
    Property(26, "equivalent_padding_modes_agree", Cat.CONFIGURATION, ("7.4",),
             bytes_factory(), configuration.check_equivalent_modes,
             "padding modes with the same encode shape give the same output"),
    Property(27, "decode_into_exact_buffer", Cat.BUFFERS, ("8.1",),
             bytes_factory(), buffers.check_decode_into_exact,
             "decode_into succeeds with an exactly sized buffer"),
    Property(28, "decode_into_small_buffer_rejected", Cat.BUFFERS, ("8.2",),
             bytes_factory(min_size=1), buffers.check_decode_into_short,
             "decode_into reports BufferTooSmall for a short buffer"),
    Property(29, "encode_into_small_buffer_rejected", Cat.BUFFERS, ("8.3",),
             bytes_factory(min_size=1), buffers.check_encode_into_short,
             "encode_into reports BufferTooSmall for a short buffer"),
    Property(30, "empty_input_handling", Cat.EDGE_CASES, ("9.1",),
             _configs, edge_cases.check_empty_input,
             "empty input encodes and decodes to empty under every configuration"),
    Property(31, "single_byte_roundtrip", Cat.EDGE_CASES, ("9.2",),
             configured(_one_byte), edge_cases.check_single_byte,
             "single bytes encode to two symbols plus padding and roundtrip"),
    Property(32, "block_boundary_lengths", Cat.EDGE_CASES, ("9.3",),
             configured(_ANY_ENGINE), edge_cases.check_block_boundaries,
             "lengths 3k-1, 3k and 3k+1 encode to the exact length and roundtrip"),
)  # fmt: skip


@cache
def default_registry() -> PropertyRegistry:
    """The process-wide registry built from PROPERTY_TABLE.

    Raises:
        RegistryError: If PROPERTY_TABLE holds duplicate ids or names
    """
    return PropertyRegistry(PROPERTY_TABLE)

