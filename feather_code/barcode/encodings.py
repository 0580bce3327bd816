"""
Symbol encodings for Code128 datums.

A datum may be given either as raw integers or as named ``Pattern`` tags.
Framing, checksum and decoding only talk to a ``SymbolEncoding``, so the same
algorithm runs over both representations.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any

from feather_code.barcode.errors import InvalidSymbolError
from feather_code.models.symbology import (
    CODE_A,
    CODE_B,
    CODE_C,
    FNC1,
    FNC2,
    FNC3,
    SHIFT,
    STOP,
    Pattern,
    Symbology,
    pattern_from_value,
    render_value,
)

# Largest value an unsigned 8-bit symbol can hold
MAX_RAW_VALUE = 255

SWITCH_VALUES = {
    Symbology.A: CODE_A,
    Symbology.B: CODE_B,
    Symbology.C: CODE_C,
}

# FNC 4 shares its value with the switch code of the other text symbology
FNC4_VALUES = {
    Symbology.A: CODE_A,
    Symbology.B: CODE_B,
}


class SymbolEncoding(ABC):
    """
    Contract every Code128 symbol representation satisfies.

    Subclasses only define how symbols convert to and from raw values; the
    structural symbols and character rendering are derived from that.
    """

    name: str = "abstract"

    def __init__(self, strict: bool = False):
        """
        Initialize encoding.

        Args:
            strict: Reject symbol values above 106 instead of accepting them
        """
        self.strict = strict

    @abstractmethod
    def from_value(self, value: int) -> Any:
        """Convert a raw numeric value to a symbol."""

    @abstractmethod
    def to_value(self, symbol: Any) -> int:
        """Convert a symbol to its raw numeric value."""

    @abstractmethod
    def accepts(self, symbol: Any) -> bool:
        """Check whether a value is a symbol of this encoding."""

    def stop(self) -> Any:
        return self.from_value(STOP)

    def start(self, symbology: Symbology) -> Any:
        return self.from_value(symbology.value)

    def switch(self, symbology: Symbology) -> Any:
        return self.from_value(SWITCH_VALUES[symbology])

    def shift(self) -> Any:
        return self.from_value(SHIFT)

    def fnc1(self) -> Any:
        return self.from_value(FNC1)

    def fnc2(self) -> Any:
        return self.from_value(FNC2)

    def fnc3(self) -> Any:
        return self.from_value(FNC3)

    def fnc4(self, symbology: Symbology) -> Any | None:
        """FNC 4 symbol for symbologies A and B; symbology C has none."""
        value = FNC4_VALUES.get(symbology)
        if value is None:
            return None
        return self.from_value(value)

    def repr(self, symbol: Any, symbology: Symbology) -> str:
        """Character or digit pair a symbol denotes in the given symbology."""
        return render_value(self.to_value(symbol), symbology)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SymbolEncoding):
            return NotImplemented
        return type(self) is type(other) and self.strict == other.strict

    def __hash__(self) -> int:
        return hash((type(self), self.strict))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(strict={self.strict})"


class RawEncoding(SymbolEncoding):
    """Symbols as plain unsigned 8-bit integers."""

    name = "raw"

    @property
    def max_value(self) -> int:
        return STOP if self.strict else MAX_RAW_VALUE

    def from_value(self, value: int) -> int:
        if not self.accepts(value):
            raise InvalidSymbolError(value, f"expected an integer from 0 to {self.max_value}")
        return int(value)

    def to_value(self, symbol: int) -> int:
        return int(symbol)

    def accepts(self, symbol: Any) -> bool:
        # bool is an int subclass but never a symbol
        if isinstance(symbol, bool) or not isinstance(symbol, int):
            return False
        return 0 <= symbol <= self.max_value


class PatternEncoding(SymbolEncoding):
    """Symbols as named ``Pattern`` tags."""

    name = "pattern"

    def from_value(self, value: int) -> Pattern:
        """
        Convert a raw value to its pattern.

        Values above 106 become the stop pattern unless the encoding is strict.
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidSymbolError(value, "expected an integer")
        try:
            return pattern_from_value(value, strict=self.strict)
        except ValueError as e:
            raise InvalidSymbolError(value, str(e)) from e

    def to_value(self, symbol: Pattern) -> int:
        return symbol.value

    def accepts(self, symbol: Any) -> bool:
        return isinstance(symbol, Pattern)


def encoding_for(symbols: Iterable[Any], strict: bool = False) -> SymbolEncoding:
    """
    Pick the encoding matching a symbol sequence.

    Sequences made entirely of ``Pattern`` tags use ``PatternEncoding``;
    anything else is treated as raw integers.
    """
    symbols = list(symbols)
    if symbols and all(isinstance(s, Pattern) for s in symbols):
        return PatternEncoding(strict=strict)
    return RawEncoding(strict=strict)


def validate_symbols(symbols: Iterable[Any], encoding: SymbolEncoding) -> None:
    """
    Check that every symbol belongs to the encoding.

    Raises:
        InvalidSymbolError: For the first symbol the encoding does not accept
    """
    for symbol in symbols:
        if not encoding.accepts(symbol):
            raise InvalidSymbolError(symbol, f"not a {encoding.name} symbol")
