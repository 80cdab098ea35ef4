"""Enumerations for b64verify type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class AlphabetKind(StrEnum):
    """Family of a codec alphabet.

    StrEnum provides automatic string conversion: str(AlphabetKind.STANDARD) == "standard"
    """

    STANDARD = "standard"
    """RFC 4648 section 4: A-Z a-z 0-9 + /"""

    URL_SAFE = "url_safe"
    """RFC 4648 section 5: A-Z a-z 0-9 - _"""

    IMAP_MUTF7 = "imap_mutf7"
    """RFC 3501 modified UTF-7: A-Z a-z 0-9 + ,"""

    CUSTOM = "custom"
    """User supplied table of 64 distinct printable symbols"""


class PaddingMode(StrEnum):
    """Padding policy governing both encode output and decode acceptance."""

    CANONICAL = "canonical"
    """Encode with padding, decode with or without it"""

    NONE = "none"
    """Encode without padding, decode with or without it"""

    INDIFFERENT = "indifferent"
    """Encode with padding, decode with or without it"""

    REQUIRE_CANONICAL = "require_canonical"
    """Encode with padding, reject decode input lacking canonical padding"""

    REQUIRE_NONE = "require_none"
    """Encode without padding, reject decode input carrying any padding"""

    @property
    def encode_pads(self) -> bool:
        """Whether encode output carries padding symbols."""
        return self not in (PaddingMode.NONE, PaddingMode.REQUIRE_NONE)

    @property
    def decode_policy(self) -> "PaddingMode":
        """Decode acceptance policy (INDIFFERENT, REQUIRE_CANONICAL or REQUIRE_NONE)."""
        match self:
            case PaddingMode.REQUIRE_CANONICAL | PaddingMode.REQUIRE_NONE:
                return self
            case _:
                return PaddingMode.INDIFFERENT


class EngineVariant(StrEnum):
    """Codec engine implementation selector."""

    GENERAL_PURPOSE = "general_purpose"
    """Table-translated standard library transform"""

    NAIVE = "naive"
    """Bit-packing reference transform, one group at a time"""


class PropertyCategory(StrEnum):
    """Area of codec behavior a property checks."""

    ROUNDTRIP = "roundtrip"
    ALPHABET = "alphabet"
    PADDING = "padding"
    LENGTH = "length"
    ERRORS = "errors"
    STREAMING = "streaming"
    CONFIGURATION = "configuration"
    BUFFERS = "buffers"
    EDGE_CASES = "edge_cases"


class Outcome(StrEnum):
    """Final outcome of a property run."""

    PASSED = "passed"
    FAILED = "failed"
    TIMEOUT = "timeout"


class PropertyState(StrEnum):
    """Lifecycle state of a property inside a run.

    Pending -> Running -> [Shrinking] -> {Passed | Failed | Timeout} -> Reported
    """

    PENDING = "pending"
    RUNNING = "running"
    SHRINKING = "shrinking"
    PASSED = "passed"
    FAILED = "failed"
    TIMEOUT = "timeout"
    REPORTED = "reported"


class DefectKind(StrEnum):
    """Single invariant violated by a malformed encoded string."""

    INVALID_BYTE = "invalid_byte"
    INVALID_LENGTH = "invalid_length"
    INVALID_LAST_SYMBOL = "invalid_last_symbol"
    INVALID_PADDING = "invalid_padding"


__all__ = [
    "AlphabetKind",
    "DefectKind",
    "EngineVariant",
    "Outcome",
    "PaddingMode",
    "PropertyCategory",
    "PropertyState",
]
