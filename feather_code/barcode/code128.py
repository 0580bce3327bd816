"""
Immutable Code128 datum.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from feather_code.barcode.decoder import decode_code128
from feather_code.barcode.encodings import (
    RawEncoding,
    SymbolEncoding,
    encoding_for,
    validate_symbols,
)
from feather_code.barcode.validator import (
    Code128Frame,
    frame_code128,
    validate_code128_checksum,
)


@dataclass(frozen=True)
class Code128:
    """
    A Code128 datum: ``[start, data..., check, stop]``.

    Symbols are raw integers or ``Pattern`` tags; the encoding is detected
    from the symbols when not given. Every operation is a pure read.

    Example:
        >>> Code128((103, 48, 42, 42, 17, 18, 19, 35, 54, 106)).decode()
        'PJJ123C'
    """

    symbols: tuple[Any, ...]
    encoding: SymbolEncoding | None = field(default=None, compare=False)

    def __post_init__(self):
        symbols = tuple(self.symbols)
        encoding = self.encoding or encoding_for(symbols)
        validate_symbols(symbols, encoding)

        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "symbols", symbols)
        object.__setattr__(self, "encoding", encoding)

    @classmethod
    def from_values(
        cls,
        values: Iterable[int],
        encoding: SymbolEncoding | None = None,
    ) -> "Code128":
        """
        Build a datum from raw numeric values.

        Args:
            values: Raw symbol values
            encoding: Target representation (default: raw integers)
        """
        encoding = encoding or RawEncoding()
        return cls(tuple(encoding.from_value(v) for v in values), encoding)

    def __len__(self) -> int:
        return len(self.symbols)

    def values(self) -> tuple[int, ...]:
        """Raw numeric value of every symbol."""
        return tuple(self.encoding.to_value(s) for s in self.symbols)

    def frame(self) -> Code128Frame | None:
        """Start symbology, data symbols and check symbol, or None if malformed."""
        return frame_code128(self.symbols, self.encoding)

    def checksum(self) -> bool:
        """True if the datum is framed correctly and its check symbol matches."""
        return validate_code128_checksum(self.symbols, self.encoding)

    def decode(self) -> str:
        """
        Decode the datum to text.

        Raises:
            InvalidLengthError: If the datum is too short
            BadFormatError: If start or stop symbols are missing
            DecodeError: If a data symbol is invalid in its position
        """
        return decode_code128(self.symbols, self.encoding)
