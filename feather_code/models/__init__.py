"""
Code128 symbol alphabet models.
"""

from feather_code.models.symbology import (
    STOP,
    Pattern,
    SymbolKind,
    Symbology,
    pattern_from_value,
    render_value,
    symbol_kind,
)

__all__ = [
    "STOP",
    "Pattern",
    "SymbolKind",
    "Symbology",
    "pattern_from_value",
    "render_value",
    "symbol_kind",
]
