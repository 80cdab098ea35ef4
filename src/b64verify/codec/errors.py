"""Codec error taxonomy.

Decode and slice operations report failures as immutable values returned
next to the result, never by raising:

    >>> data, error = codec.decode("QUJD!", config)
    >>> data is None
    True
    >>> error
    InvalidByte(position=4, byte=33)

A codec that raises instead is considered faulty; the executor records the
exception as a PredicateFault.

Positions are byte offsets into the UTF-8 form of the decoded text.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "BufferTooSmall",
    "CodecError",
    "InvalidByte",
    "InvalidLastSymbol",
    "InvalidLength",
    "InvalidPadding",
]


@dataclass(frozen=True, slots=True)
class CodecError:
    """Base class for codec error values."""

    def describe(self) -> str:
        """Human-readable one-line description."""
        return repr(self)


@dataclass(frozen=True, slots=True)
class InvalidByte(CodecError):
    """A byte outside the alphabet, or padding followed by a non-padding byte.

    Attributes:
        position: Offset of the offending byte
        byte: The offending byte value
    """

    position: int
    byte: int

    def describe(self) -> str:
        return f"invalid byte {chr(self.byte)!r} (0x{self.byte:02x}) at offset {self.position}"


@dataclass(frozen=True, slots=True)
class InvalidLength(CodecError):
    """Symbol count leaves a final group of a single symbol.

    Attributes:
        length: Number of alphabet symbols in the input (padding excluded)
    """

    length: int

    def describe(self) -> str:
        return f"invalid symbol count {self.length}"


@dataclass(frozen=True, slots=True)
class InvalidLastSymbol(CodecError):
    """Final symbol encodes non-zero trailing bits.

    Attributes:
        position: Offset of the final symbol
        byte: The final symbol
    """

    position: int
    byte: int

    def describe(self) -> str:
        return f"non-canonical last symbol {chr(self.byte)!r} at offset {self.position}"


@dataclass(frozen=True, slots=True)
class InvalidPadding(CodecError):
    """Padding violates the group shape or the decode policy.

    Attributes:
        position: Offset of the first offending padding symbol, or the end of
            input when required padding is missing
    """

    position: int

    def describe(self) -> str:
        return f"invalid padding at offset {self.position}"


@dataclass(frozen=True, slots=True)
class BufferTooSmall(CodecError):
    """Output buffer cannot hold the result of a slice operation.

    Attributes:
        required: Bytes the operation needs
        provided: Bytes the caller supplied
    """

    required: int
    provided: int

    def describe(self) -> str:
        return f"buffer too small: {self.required} bytes required, {self.provided} provided"
