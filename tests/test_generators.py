"""Tests for the seeded generators (generators/).

Covers:
- Reproducibility: every value is a pure function of (seed, index)
- Close and index contracts
- Well-formed strings decode under their padding policy
- Malformed strings carry the exact error the reference decoder reports
- Rejected alphabet tables are refused by Alphabet.custom
- Chunked inputs and configuration attachment

Python 3.13+.
"""

from __future__ import annotations

import pytest
from hypothesis import event, given
from hypothesis import strategies as st

from b64verify.codec import ReferenceCodec
from b64verify.config import STANDARD, URL_SAFE, Alphabet, TestConfig
from b64verify.diagnostics import ConfigurationError, GenerationError
from b64verify.enums import DefectKind, EngineVariant, PaddingMode
from b64verify.generators import (
    Base64StringGenerator,
    ByteSequenceGenerator,
    ChunkedInput,
    ChunkedInputGenerator,
    ConfigurationGenerator,
    CustomAlphabetGenerator,
    InvalidInputGenerator,
    RejectedAlphabetGenerator,
    WithConfiguration,
    derive_seed,
)
from tests.strategies import alphabets, padding_modes, seeds

indices = st.integers(min_value=0, max_value=10_000)


class TestDeriveSeed:
    """SHA-256 child seed derivation."""

    def test_stable_value(self) -> None:
        assert derive_seed(0, 1) == derive_seed(0, 1)
        assert derive_seed(0, "roundtrip") == derive_seed(0, "roundtrip")

    def test_parts_distinguish(self) -> None:
        assert derive_seed(0, 1) != derive_seed(0, 2)
        assert derive_seed(0, 1) != derive_seed(1, 1)
        assert derive_seed(0, 1, 2) != derive_seed(0, 12)

    @given(seed=seeds, part=st.integers(min_value=0))
    def test_fits_64_bits(self, seed: int, part: int) -> None:
        assert 0 <= derive_seed(seed, part) < 2**64


class TestReproducibility:
    """Same seed and index always yield the same value."""

    @given(seed=seeds, index=indices)
    def test_byte_sequences(self, seed: int, index: int) -> None:
        """PROPERTY: produce(i) is independent of generator instance."""
        first = ByteSequenceGenerator(seed, max_size=512).produce(index)
        second = ByteSequenceGenerator(seed, max_size=512).produce(index)
        assert first == second
        assert first.provenance() == {"generator": "bytes", "seed": seed, "index": index}

    @given(seed=seeds, index=indices)
    def test_independent_of_draw_order(self, seed: int, index: int) -> None:
        """PROPERTY: Earlier draws never change a later value."""
        generator = ByteSequenceGenerator(seed, max_size=512)
        for _ in range(3):
            generator.draw()
        assert generator.produce(index) == ByteSequenceGenerator(seed, 512).produce(index)

    def test_draw_follows_stream(self) -> None:
        generator = ByteSequenceGenerator(5, max_size=64)
        drawn = [generator.draw() for _ in range(4)]
        assert drawn == list(ByteSequenceGenerator(5, max_size=64).stream(4))
        assert [g.index for g in drawn] == [0, 1, 2, 3]

    def test_seeds_differ(self) -> None:
        a = [g.value for g in ByteSequenceGenerator(1, max_size=256).stream(20)]
        b = [g.value for g in ByteSequenceGenerator(2, max_size=256).stream(20)]
        assert a != b


class TestGeneratorContracts:
    """Close, index and construction errors."""

    def test_produce_after_close_raises(self) -> None:
        generator = ByteSequenceGenerator(0, max_size=8)
        generator.close()
        assert generator.closed
        with pytest.raises(GenerationError, match="closed"):
            generator.produce(0)

    def test_close_is_idempotent(self) -> None:
        generator = ByteSequenceGenerator(0, max_size=8)
        generator.close()
        generator.close()
        assert generator.closed

    def test_context_manager_closes(self) -> None:
        with ByteSequenceGenerator(0, max_size=8) as generator:
            generator.produce(0)
        assert generator.closed

    def test_negative_index_raises(self) -> None:
        with pytest.raises(GenerationError, match="non-negative") as exc_info:
            ByteSequenceGenerator(0, max_size=8).produce(-1)
        context = exc_info.value.context
        assert context is not None
        assert context.component == "generator"
        assert context.detail == "bytes"

    @pytest.mark.parametrize(("min_size", "max_size"), [(-1, 4), (0, -1), (5, 4)])
    def test_bad_size_bounds(self, min_size: int, max_size: int) -> None:
        with pytest.raises(GenerationError):
            ByteSequenceGenerator(0, max_size=max_size, min_size=min_size)

    def test_invalid_generator_needs_room(self) -> None:
        with pytest.raises(GenerationError, match="at least 8"):
            InvalidInputGenerator(0, STANDARD, max_size=7)
        with pytest.raises(GenerationError, match="defect kind"):
            InvalidInputGenerator(0, STANDARD, max_size=64, defects=())

    def test_chunked_needs_two_chunks(self) -> None:
        with pytest.raises(GenerationError, match="max_chunks"):
            ChunkedInputGenerator(0, max_size=16, max_chunks=1)

    def test_configuration_needs_choices(self) -> None:
        with pytest.raises(GenerationError, match="must not be empty"):
            ConfigurationGenerator(0, TestConfig(), padding_modes=())


class TestByteSequences:
    """Length bounds and boundary coverage."""

    @given(seed=seeds, index=indices, bounds=st.tuples(st.integers(0, 64), st.integers(0, 64)))
    def test_within_bounds(self, seed: int, index: int, bounds: tuple[int, int]) -> None:
        """PROPERTY: Lengths stay inside [min_size, max_size]."""
        low, high = sorted(bounds)
        value = ByteSequenceGenerator(seed, max_size=high, min_size=low).produce(index).value
        assert low <= len(value) <= high

    def test_covers_edge_lengths(self) -> None:
        lengths = {len(g.value) for g in ByteSequenceGenerator(3, max_size=4096).stream(500)}
        assert {0, 1, 4096} <= lengths
        assert any(n % 3 == 2 for n in lengths)


class TestBase64Strings:
    """Well-formed strings."""

    @given(seed=seeds, index=indices, alphabet=alphabets, mode=padding_modes)
    def test_decodes_without_error(
        self, seed: int, index: int, alphabet: Alphabet, mode: PaddingMode
    ) -> None:
        """PROPERTY: Every generated string decodes under its padding policy."""
        text = Base64StringGenerator(seed, alphabet, mode, max_size=256).produce(index).value
        assert len(text) <= 256
        config = TestConfig(alphabet=alphabet, padding_mode=mode)
        decoded, error = ReferenceCodec().decode(text, config)
        assert error is None
        assert decoded is not None
        event(f"padded={'=' in text}")

    @given(seed=seeds, index=indices)
    def test_require_none_never_padded(self, seed: int, index: int) -> None:
        generator = Base64StringGenerator(seed, STANDARD, PaddingMode.REQUIRE_NONE, 128)
        assert "=" not in generator.produce(index).value


class TestInvalidInputs:
    """Malformed strings and their expected errors."""

    @given(
        seed=seeds,
        index=indices,
        alphabet=alphabets,
        mode=padding_modes,
        engine=st.sampled_from(list(EngineVariant)),
    )
    def test_expected_error_matches_reference(
        self,
        seed: int,
        index: int,
        alphabet: Alphabet,
        mode: PaddingMode,
        engine: EngineVariant,
    ) -> None:
        """PROPERTY: The recorded error wins under every padding mode and engine."""
        malformed = InvalidInputGenerator(seed, alphabet, max_size=128).produce(index).value
        config = TestConfig(alphabet=alphabet, padding_mode=mode, engine_variant=engine)
        assert ReferenceCodec().decode(malformed.text, config) == (None, malformed.expected)
        event(f"defect={malformed.defect}")

    @pytest.mark.parametrize("defect", list(DefectKind))
    def test_single_defect_kind(self, defect: DefectKind) -> None:
        generator = InvalidInputGenerator(9, URL_SAFE, max_size=64, defects=[defect])
        assert {g.value.defect for g in generator.stream(30)} == {defect}


class TestAlphabetGenerators:
    """Custom and rejected tables."""

    @given(seed=seeds, index=indices)
    def test_custom_alphabets_valid(self, seed: int, index: int) -> None:
        alphabet = CustomAlphabetGenerator(seed).produce(index).value
        assert len(set(alphabet.symbols)) == 64

    @given(seed=seeds, index=indices)
    def test_rejected_tables_refused(self, seed: int, index: int) -> None:
        """PROPERTY: Every rejected table raises ConfigurationError."""
        symbols = RejectedAlphabetGenerator(seed).produce(index).value
        with pytest.raises(ConfigurationError):
            Alphabet.custom(symbols)


class TestChunkedInputs:
    """Split points and chunk reconstruction."""

    def test_chunks_keep_empty_pieces(self) -> None:
        assert ChunkedInput(b"abcdef", (2, 2, 5)).chunks() == [b"ab", b"", b"cde", b"f"]

    def test_text_chunks_proportional(self) -> None:
        chunked = ChunkedInput(b"abcdef", (3,))
        assert chunked.text_chunks("YWJjZGVm") == ["YWJj", "ZGVm"]

    def test_text_chunks_of_empty_data(self) -> None:
        assert ChunkedInput(b"", (0, 0)).text_chunks("") == ["", "", ""]

    @given(seed=seeds, index=indices)
    def test_chunks_reassemble(self, seed: int, index: int) -> None:
        """PROPERTY: Joined chunks equal the data; split count is in range."""
        chunked = ChunkedInputGenerator(seed, max_size=256, max_chunks=8).produce(index).value
        assert b"".join(chunked.chunks()) == chunked.data
        assert 1 <= len(chunked.splits) <= 7
        assert list(chunked.splits) == sorted(chunked.splits)


class TestConfigurationGenerators:
    """Configuration draws and attachment."""

    @given(seed=seeds, index=indices)
    def test_limits_come_from_base(self, seed: int, index: int) -> None:
        base = TestConfig(iteration_count=3, max_input_size=77)
        config = ConfigurationGenerator(seed, base).produce(index).value
        assert (config.iteration_count, config.max_input_size) == (3, 77)

    def test_fixed_alphabet(self) -> None:
        generator = ConfigurationGenerator(0, TestConfig(), alphabet=URL_SAFE)
        assert {g.value.alphabet for g in generator.stream(20)} == {URL_SAFE}

    def test_with_configuration_provenance(self) -> None:
        inner = ByteSequenceGenerator(11, max_size=32)
        configs = ConfigurationGenerator(12, TestConfig())
        generated = WithConfiguration(inner, configs).produce(4)
        assert generated.value == inner.produce(4).value
        assert generated.config == configs.produce(4).value
        assert generated.generator == "bytes+configuration"
        assert (generated.seed, generated.index) == (11, 4)

    def test_with_configuration_closes_both(self) -> None:
        inner = ByteSequenceGenerator(0, max_size=8)
        configs = ConfigurationGenerator(0, TestConfig())
        composite = WithConfiguration(inner, configs)
        composite.close()
        assert inner.closed
        assert configs.closed
        with pytest.raises(GenerationError):
            composite.produce(0)
