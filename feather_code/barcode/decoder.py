"""
Code128 decoder: symbology state machine and scan result facade.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

import structlog

from feather_code.barcode.encodings import SymbolEncoding, encoding_for, validate_symbols
from feather_code.barcode.errors import (
    BadFormatError,
    Code128Error,
    DecodeError,
    InvalidLengthError,
    InvalidSymbolError,
)
from feather_code.barcode.validator import (
    MIN_LENGTH,
    frame_code128,
    validate_code128_checksum,
)
from feather_code.config import get_settings
from feather_code.models.symbology import (
    CODE_A,
    CODE_B,
    CODE_C,
    FNC3,
    PLAIN_LIMIT_AB,
    PLAIN_LIMIT_C,
    Symbology,
    SymbolKind,
    render_value,
    symbol_kind,
)

logger = structlog.get_logger(__name__)


class DecodeState(str, Enum):
    """State of the Code128 decode state machine."""

    A = "A"
    B = "B"
    C = "C"
    SHIFT_A = "shift_A"  # one symbol in A, then back to B
    SHIFT_B = "shift_B"  # one symbol in B, then back to A
    DONE = "done"

    @classmethod
    def from_symbology(cls, symbology: Symbology) -> "DecodeState":
        return cls(symbology.name)


# Switch code -> state it selects
_SWITCH_TARGETS = {
    CODE_A: DecodeState.A,
    CODE_B: DecodeState.B,
    CODE_C: DecodeState.C,
}

# Shift code in A or B -> one-symbol shift state
_SHIFT_TARGETS = {
    DecodeState.A: DecodeState.SHIFT_B,
    DecodeState.B: DecodeState.SHIFT_A,
}

# Shift state -> (symbology of the shifted symbol, state to return to)
_SHIFTS = {
    DecodeState.SHIFT_A: (Symbology.A, DecodeState.B),
    DecodeState.SHIFT_B: (Symbology.B, DecodeState.A),
}


def transition(state: DecodeState, value: int) -> tuple[DecodeState, str | None]:
    """
    Advance the decode state machine by one symbol.

    Args:
        state: Current state
        value: Raw value of the next symbol

    Returns:
        Tuple of (next_state, decoded_text or None)

    Raises:
        DecodeError: If the symbol is not valid in the current state
    """
    if state == DecodeState.DONE:
        raise DecodeError(value, state, "symbol after stop")

    if state in _SHIFTS:
        symbology, return_state = _SHIFTS[state]
        if 0 <= value < PLAIN_LIMIT_AB:
            return return_state, render_value(value, symbology) or None
        raise DecodeError(value, state, "unexpected shifted encoding")

    # Every value below 100 is a digit pair in C, control codes included
    if state == DecodeState.C and 0 <= value < PLAIN_LIMIT_C:
        return state, render_value(value, Symbology.C)

    kind = symbol_kind(value)

    if kind == SymbolKind.PLAIN and 0 <= value < FNC3:
        return state, render_value(value, Symbology[state.value])
    if kind == SymbolKind.STOP:
        return DecodeState.DONE, None
    if kind == SymbolKind.FUNCTION:
        return state, None
    if kind == SymbolKind.SHIFT and state in _SHIFT_TARGETS:
        return _SHIFT_TARGETS[state], None
    if kind == SymbolKind.SWITCH:
        # Switching to the active symbology is FNC 4, consumed as a no-op
        return _SWITCH_TARGETS[value], None

    raise DecodeError(value, state)


def decode_code128(
    symbols: Sequence[Any],
    encoding: SymbolEncoding | None = None,
) -> str:
    """
    Decode a Code128 datum to text.

    The checksum is not verified here; use ``validate_code128_checksum`` for
    that.

    Args:
        symbols: Full symbol sequence including start, check and stop
        encoding: Symbol encoding (detected from the symbols if omitted)

    Returns:
        Decoded text

    Raises:
        InvalidSymbolError: If a value is not a symbol of the encoding
        InvalidLengthError: If the datum is too short
        BadFormatError: If start or stop symbols are missing
        DecodeError: If a data symbol is invalid in its position
    """
    if len(symbols) < MIN_LENGTH:
        raise InvalidLengthError(len(symbols))

    if encoding is None:
        encoding = encoding_for(symbols)
    validate_symbols(symbols, encoding)

    frame = frame_code128(symbols, encoding)
    if frame is None:
        raise BadFormatError("unrecognized format")

    state = DecodeState.from_symbology(frame.symbology)
    decoded: list[str] = []

    for symbol in frame.data:
        try:
            state, text = transition(state, encoding.to_value(symbol))
        except DecodeError as e:
            # Report the symbol in the caller's representation
            raise DecodeError(symbol, e.state, e.description) from e

        if state == DecodeState.DONE:
            break
        if text:
            decoded.append(text)

    return "".join(decoded)


@dataclass
class Code128Result:
    """Result of decoding a Code128 datum."""

    symbols: tuple[int, ...]
    symbology: Symbology | None
    text: str
    is_valid: bool
    checksum_valid: bool
    length_valid: bool
    error: str | None = None


class Code128Decoder:
    """
    Decoder turning Code128 symbol sequences into scan results.

    Accepts raw integer symbols or ``Pattern`` tags. Malformed input never
    raises; the failure is reported in ``Code128Result.error``.
    """

    def __init__(
        self,
        require_checksum: bool | None = None,
        strict_symbols: bool | None = None,
    ):
        """
        Initialize decoder.

        Args:
            require_checksum: Treat a checksum mismatch as invalid (default: from settings)
            strict_symbols: Reject symbol values above 106 (default: from settings)
        """
        if require_checksum is None or strict_symbols is None:
            settings = get_settings()
            if require_checksum is None:
                require_checksum = settings.require_checksum
            if strict_symbols is None:
                strict_symbols = settings.strict_symbols

        self.require_checksum = require_checksum
        self.strict_symbols = strict_symbols

    def decode(self, symbols: Iterable[Any]) -> Code128Result:
        """
        Decode a single datum.

        Args:
            symbols: Symbol sequence including start, check and stop

        Returns:
            Scan result
        """
        symbols = tuple(symbols)
        encoding = encoding_for(symbols, strict=self.strict_symbols)
        length_valid = len(symbols) >= MIN_LENGTH

        try:
            validate_symbols(symbols, encoding)
        except InvalidSymbolError as e:
            return self._error_result(symbols, length_valid, str(e))

        checksum_valid = validate_code128_checksum(symbols, encoding)

        try:
            text = decode_code128(symbols, encoding)
        except Code128Error as e:
            return self._error_result(symbols, length_valid, str(e), checksum_valid)

        frame = frame_code128(symbols, encoding)
        error = None
        if self.require_checksum and not checksum_valid:
            error = "Invalid Code128 checksum"
            logger.info("Code128 checksum mismatch", length=len(symbols))
        else:
            logger.debug(
                "Decoded Code128 datum",
                symbology=frame.symbology.name,
                length=len(symbols),
            )

        return Code128Result(
            symbols=tuple(encoding.to_value(s) for s in symbols),
            symbology=frame.symbology,
            text=text,
            is_valid=error is None,
            checksum_valid=checksum_valid,
            length_valid=length_valid,
            error=error,
        )

    def _error_result(
        self,
        symbols: tuple[Any, ...],
        length_valid: bool,
        error: str,
        checksum_valid: bool = False,
    ) -> Code128Result:
        """Build the result for a datum that could not be decoded."""
        logger.info("Code128 decode failed", error=error, length=len(symbols))
        return Code128Result(
            symbols=tuple(
                int(s) for s in symbols if isinstance(s, int) and not isinstance(s, bool)
            ),
            symbology=None,
            text="",
            is_valid=False,
            checksum_valid=checksum_valid,
            length_valid=length_valid,
            error=error,
        )

    def decode_batch(self, datums: Iterable[Iterable[Any]]) -> list[Code128Result]:
        """Decode several datums, one result per datum."""
        results = [self.decode(symbols) for symbols in datums]
        logger.debug(
            "Decoded Code128 batch",
            count=len(results),
            valid=sum(1 for r in results if r.is_valid),
        )
        return results


def decode_symbols(
    symbols: Iterable[Any],
    require_checksum: bool | None = None,
    strict_symbols: bool | None = None,
) -> Code128Result:
    """
    Convenience function to decode a Code128 symbol sequence.

    Args:
        symbols: Symbol sequence
        require_checksum: Treat a checksum mismatch as invalid (default: from settings)
        strict_symbols: Reject symbol values above 106 (default: from settings)

    Returns:
        Scan result
    """
    decoder = Code128Decoder(require_checksum=require_checksum, strict_symbols=strict_symbols)
    return decoder.decode(symbols)
