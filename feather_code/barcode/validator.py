"""
Framing and checksum validation for Code128 datums.
"""

from collections.abc import Sequence
from typing import Any, NamedTuple

from feather_code.barcode.encodings import SymbolEncoding, encoding_for, validate_symbols
from feather_code.barcode.errors import InvalidSymbolError
from feather_code.models.symbology import Symbology

# Start, check and stop symbols plus at least one data symbol
MIN_LENGTH = 4

CHECKSUM_MODULUS = 103


class Code128Frame(NamedTuple):
    """The parts of a framed Code128 datum."""

    symbology: Symbology
    data: tuple[Any, ...]
    check: Any


def frame_code128(
    symbols: Sequence[Any],
    encoding: SymbolEncoding | None = None,
) -> Code128Frame | None:
    """
    Split a datum into start symbology, data symbols and check symbol.

    A datum is framed as ``[start, data..., check, stop]``. Only the shape is
    validated here, not the checksum.

    Args:
        symbols: Full symbol sequence
        encoding: Symbol encoding (detected from the symbols if omitted)

    Returns:
        The frame, or None if the sequence is not a Code128 datum
    """
    if encoding is None:
        encoding = encoding_for(symbols)

    symbols = tuple(symbols)
    if len(symbols) < MIN_LENGTH:
        return None

    start, rest = symbols[0], symbols[1:]

    # Trailing stop
    if not rest or rest[-1] != encoding.stop():
        return None
    rest = rest[:-1]

    # Check symbol directly before stop
    if not rest:
        return None
    check, data = rest[-1], rest[:-1]

    for symbology in Symbology:
        if start == encoding.start(symbology):
            return Code128Frame(symbology, data, check)

    return None


def calculate_code128_checksum(
    symbology: Symbology,
    data: Sequence[Any],
    encoding: SymbolEncoding,
) -> int:
    """
    Calculate the Code128 check value.

    Algorithm:
    1. Start with the value of the start symbol
    2. Add each data symbol value multiplied by its position (1, 2, 3, ...)
    3. Checksum = sum mod 103
    """
    total = symbology.value
    for position, symbol in enumerate(data, start=1):
        total += encoding.to_value(symbol) * position

    return total % CHECKSUM_MODULUS


def validate_code128_checksum(
    symbols: Sequence[Any],
    encoding: SymbolEncoding | None = None,
) -> bool:
    """
    Validate Code128 framing and checksum.

    Args:
        symbols: Full symbol sequence including start, check and stop

    Returns:
        True if the datum is framed correctly and its check symbol matches
    """
    if encoding is None:
        encoding = encoding_for(symbols)
    if not all(encoding.accepts(s) for s in symbols):
        return False

    frame = frame_code128(symbols, encoding)
    if frame is None:
        return False

    expected = calculate_code128_checksum(frame.symbology, frame.data, encoding)
    return encoding.from_value(expected) == frame.check


def is_valid_code128(symbols: Sequence[Any]) -> tuple[bool, Symbology | None, str]:
    """
    Validate a Code128 datum completely.

    Args:
        symbols: Full symbol sequence

    Returns:
        Tuple of (is_valid, symbology, error_message)
    """
    if len(symbols) < MIN_LENGTH:
        return False, None, f"Unsupported datum length: {len(symbols)}"

    encoding = encoding_for(symbols)
    try:
        validate_symbols(symbols, encoding)
    except InvalidSymbolError as e:
        return False, None, str(e)

    frame = frame_code128(symbols, encoding)
    if frame is None:
        return False, None, "Missing Code128 start or stop symbol"

    if validate_code128_checksum(symbols, encoding):
        return True, frame.symbology, ""
    return False, frame.symbology, "Invalid Code128 checksum"
