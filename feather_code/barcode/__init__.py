"""
Code128 framing, checksum and decoding.
"""

from feather_code.barcode.code128 import Code128
from feather_code.barcode.decoder import (
    Code128Decoder,
    Code128Result,
    DecodeState,
    decode_code128,
    decode_symbols,
    transition,
)
from feather_code.barcode.encodings import (
    PatternEncoding,
    RawEncoding,
    SymbolEncoding,
    encoding_for,
)
from feather_code.barcode.errors import (
    BadFormatError,
    Code128Error,
    DecodeError,
    InvalidLengthError,
    InvalidSymbolError,
)
from feather_code.barcode.validator import (
    Code128Frame,
    calculate_code128_checksum,
    frame_code128,
    is_valid_code128,
    validate_code128_checksum,
)

__all__ = [
    "Code128",
    "Code128Decoder",
    "Code128Result",
    "DecodeState",
    "decode_code128",
    "decode_symbols",
    "transition",
    "PatternEncoding",
    "RawEncoding",
    "SymbolEncoding",
    "encoding_for",
    "BadFormatError",
    "Code128Error",
    "DecodeError",
    "InvalidLengthError",
    "InvalidSymbolError",
    "Code128Frame",
    "calculate_code128_checksum",
    "frame_code128",
    "is_valid_code128",
    "validate_code128_checksum",
]
