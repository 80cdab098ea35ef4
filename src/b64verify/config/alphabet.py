"""Codec alphabets.

An Alphabet is the 64-symbol table used to represent 6-bit groups. The three
built-in alphabets are module-level singletons; custom alphabets are validated
at construction so that an invalid table never reaches the codec.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType

from b64verify.constants import (
    ALPHABET_SIZE,
    IMAP_MUTF7_SYMBOLS,
    PAD_SYMBOL,
    PRINTABLE_MAX,
    PRINTABLE_MIN,
    STANDARD_SYMBOLS,
    URL_SAFE_SYMBOLS,
)
from b64verify.diagnostics.errors import ConfigurationError, FaultContext
from b64verify.enums import AlphabetKind

__all__ = [
    "IMAP_MUTF7",
    "STANDARD",
    "URL_SAFE",
    "Alphabet",
    "validate_symbols",
]


def validate_symbols(symbols: str) -> None:
    """Check that a symbol table is a usable custom alphabet.

    Args:
        symbols: Candidate table

    Raises:
        ConfigurationError: If the table is not exactly 64 distinct printable
            ASCII symbols, or contains the padding symbol.
    """
    context = FaultContext(component="config", operation="alphabet", detail=symbols)
    if len(symbols) != ALPHABET_SIZE:
        msg = f"Custom alphabet must have {ALPHABET_SIZE} symbols, got {len(symbols)}"
        raise ConfigurationError(msg, context)
    seen: set[str] = set()
    for index, symbol in enumerate(symbols):
        if not PRINTABLE_MIN <= ord(symbol) <= PRINTABLE_MAX:
            msg = f"Custom alphabet symbol {symbol!r} at index {index} is not printable ASCII"
            raise ConfigurationError(msg, context)
        if symbol == PAD_SYMBOL:
            msg = f"Custom alphabet contains the padding symbol at index {index}"
            raise ConfigurationError(msg, context)
        if symbol in seen:
            msg = f"Custom alphabet repeats symbol {symbol!r} at index {index}"
            raise ConfigurationError(msg, context)
        seen.add(symbol)


@dataclass(frozen=True, slots=True)
class Alphabet:
    """Immutable 64-symbol alphabet.

    Use the STANDARD, URL_SAFE and IMAP_MUTF7 singletons or ``Alphabet.custom``.
    Constructing an Alphabet directly validates the table as well.

    Attributes:
        kind: Alphabet family
        symbols: The 64 symbols, index i encoding the 6-bit value i
        index: Read-only symbol -> value lookup (derived)

    Example:
        >>> Alphabet.custom("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_").kind
        <AlphabetKind.CUSTOM: 'custom'>
        >>> Alphabet.custom("A" * 64)
        Traceback (most recent call last):
        ...
        ConfigurationError: Custom alphabet repeats symbol 'A' at index 1
    """

    kind: AlphabetKind
    symbols: str
    index: MappingProxyType[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate the symbol table and build the reverse index.

        Raises:
            ConfigurationError: If the table is invalid, or a built-in kind is
                paired with a table other than its own.
        """
        validate_symbols(self.symbols)
        builtin = _BUILTIN_SYMBOLS.get(self.kind)
        if builtin is not None and builtin != self.symbols:
            msg = f"Alphabet kind {self.kind} requires its built-in symbol table"
            raise ConfigurationError(msg, FaultContext(component="config", operation="alphabet"))
        object.__setattr__(
            self, "index", MappingProxyType({s: i for i, s in enumerate(self.symbols)})
        )

    @classmethod
    def custom(cls, symbols: str) -> Alphabet:
        """Create a validated custom alphabet.

        Raises:
            ConfigurationError: If ``symbols`` is not a valid table
        """
        return cls(AlphabetKind.CUSTOM, symbols)

    @classmethod
    def named(cls, name: str) -> Alphabet:
        """Return the built-in alphabet called ``name`` (an AlphabetKind value).

        Raises:
            ConfigurationError: If ``name`` is unknown or is ``custom``
        """
        try:
            kind = AlphabetKind(name)
        except ValueError:
            kind = None
        if kind is None or kind is AlphabetKind.CUSTOM:
            choices = ", ".join(k for k in _BUILTIN_SYMBOLS)
            msg = f"Unknown built-in alphabet {name!r} (choose from {choices})"
            raise ConfigurationError(msg, FaultContext(component="config", operation="alphabet"))
        return _BUILTINS[kind]

    def __contains__(self, symbol: object) -> bool:
        return isinstance(symbol, str) and symbol in self.index

    def __len__(self) -> int:
        return ALPHABET_SIZE

    @property
    def ascii_bytes(self) -> bytes:
        """Symbols as ASCII bytes (index i is the symbol for value i)."""
        return self.symbols.encode("ascii")


_BUILTIN_SYMBOLS: dict[AlphabetKind, str] = {
    AlphabetKind.STANDARD: STANDARD_SYMBOLS,
    AlphabetKind.URL_SAFE: URL_SAFE_SYMBOLS,
    AlphabetKind.IMAP_MUTF7: IMAP_MUTF7_SYMBOLS,
}

STANDARD = Alphabet(AlphabetKind.STANDARD, STANDARD_SYMBOLS)
URL_SAFE = Alphabet(AlphabetKind.URL_SAFE, URL_SAFE_SYMBOLS)
IMAP_MUTF7 = Alphabet(AlphabetKind.IMAP_MUTF7, IMAP_MUTF7_SYMBOLS)

_BUILTINS: dict[AlphabetKind, Alphabet] = {
    AlphabetKind.STANDARD: STANDARD,
    AlphabetKind.URL_SAFE: URL_SAFE,
    AlphabetKind.IMAP_MUTF7: IMAP_MUTF7,
}
