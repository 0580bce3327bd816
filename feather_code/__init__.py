"""
Code128 symbol codec: framing, checksum validation and decoding.
"""

from feather_code.barcode import (
    Code128,
    Code128Decoder,
    Code128Error,
    Code128Result,
    decode_symbols,
)
from feather_code.models import Pattern, Symbology

__version__ = "0.1.0"

__all__ = [
    "Code128",
    "Code128Decoder",
    "Code128Error",
    "Code128Result",
    "Pattern",
    "Symbology",
    "decode_symbols",
]
