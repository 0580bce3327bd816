"""
Errors raised while framing and decoding Code128 datums.
"""

from typing import Any


class Code128Error(ValueError):
    """Base class for Code128 decode failures."""


class InvalidLengthError(Code128Error):
    """Datum is shorter than start, check and stop symbols allow."""

    def __init__(self, length: int):
        self.length = length
        super().__init__(f"Invalid Code128 length: {length}")


class BadFormatError(Code128Error):
    """Datum has no recognizable start/check/stop framing."""

    def __init__(self, description: str):
        self.description = description
        super().__init__(f"Bad Code128 format: {description}")


class DecodeError(Code128Error):
    """A data symbol is not valid in the current decode state."""

    def __init__(self, symbol: Any, state: Any, description: str = "unrecognized encoding"):
        self.symbol = symbol
        self.state = state
        self.description = description
        state_name = getattr(state, "name", state)
        super().__init__(f"{description} {symbol!r} in state {state_name}")


class InvalidSymbolError(Code128Error):
    """A value cannot be represented in the chosen symbol encoding."""

    def __init__(self, symbol: Any, reason: str = "not a Code128 symbol"):
        self.symbol = symbol
        self.reason = reason
        super().__init__(f"Invalid symbol {symbol!r}: {reason}")
