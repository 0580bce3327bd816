"""
Code128 symbol alphabet: symbologies, pattern tags and character rendering.
"""

from enum import Enum, IntEnum

# Function and control codes
FNC3 = 96
FNC2 = 97
SHIFT = 98
CODE_C = 99
CODE_B = 100
CODE_A = 101
FNC1 = 102

# Frame boundaries
START_A = 103
START_B = 104
START_C = 105
STOP = 106

# Values below this are plain characters in symbologies A and B
PLAIN_LIMIT_AB = 98
# Values below this are digit pairs in symbology C
PLAIN_LIMIT_C = 100


class Symbology(IntEnum):
    """
    Code128 alphabets, valued by their start codes.

    - A: ASCII 00 to 95 (upper case, digits, punctuation, control characters)
    - B: ASCII 32 to 127 (upper and lower case, digits, punctuation)
    - C: high density numeric, one symbol per digit pair
    """

    A = START_A
    B = START_B
    C = START_C


class SymbolKind(str, Enum):
    """Role a symbol value plays in a datum."""

    PLAIN = "plain"
    FUNCTION = "function"
    SHIFT = "shift"
    SWITCH = "switch"
    START = "start"
    STOP = "stop"


class Pattern(IntEnum):
    """
    Named Code128 patterns.

    Each pattern maps to a different character depending on the active
    symbology:

    Pattern | A       | B       | C
    --------|---------|---------|--------
    C0      | space   | space   | 00
    C33     | A       | A       | 33
    C64     | NUL     | `       | 64
    C95     | US      | DEL     | 95
    C96     | FNC 3   | FNC 3   | 96
    C97     | FNC 2   | FNC 2   | 97
    C98     | Shift B | Shift A | 98
    C99     | Code C  | Code C  | 99
    C100    | Code B  | FNC 4   | Code B
    C101    | FNC 4   | Code A  | Code A
    C102    | FNC 1   | FNC 1   | FNC 1
    C103    | Start A | Start A | Start A
    C104    | Start B | Start B | Start B
    C105    | Start C | Start C | Start C
    C106    | stop    | stop    | stop
    """

    C0 = 0
    C1 = 1
    C2 = 2
    C3 = 3
    C4 = 4
    C5 = 5
    C6 = 6
    C7 = 7
    C8 = 8
    C9 = 9
    C10 = 10
    C11 = 11
    C12 = 12
    C13 = 13
    C14 = 14
    C15 = 15
    C16 = 16
    C17 = 17
    C18 = 18
    C19 = 19
    C20 = 20
    C21 = 21
    C22 = 22
    C23 = 23
    C24 = 24
    C25 = 25
    C26 = 26
    C27 = 27
    C28 = 28
    C29 = 29
    C30 = 30
    C31 = 31
    C32 = 32
    C33 = 33
    C34 = 34
    C35 = 35
    C36 = 36
    C37 = 37
    C38 = 38
    C39 = 39
    C40 = 40
    C41 = 41
    C42 = 42
    C43 = 43
    C44 = 44
    C45 = 45
    C46 = 46
    C47 = 47
    C48 = 48
    C49 = 49
    C50 = 50
    C51 = 51
    C52 = 52
    C53 = 53
    C54 = 54
    C55 = 55
    C56 = 56
    C57 = 57
    C58 = 58
    C59 = 59
    C60 = 60
    C61 = 61
    C62 = 62
    C63 = 63
    C64 = 64
    C65 = 65
    C66 = 66
    C67 = 67
    C68 = 68
    C69 = 69
    C70 = 70
    C71 = 71
    C72 = 72
    C73 = 73
    C74 = 74
    C75 = 75
    C76 = 76
    C77 = 77
    C78 = 78
    C79 = 79
    C80 = 80
    C81 = 81
    C82 = 82
    C83 = 83
    C84 = 84
    C85 = 85
    C86 = 86
    C87 = 87
    C88 = 88
    C89 = 89
    C90 = 90
    C91 = 91
    C92 = 92
    C93 = 93
    C94 = 94
    C95 = 95
    C96 = 96
    C97 = 97
    C98 = 98
    C99 = 99
    C100 = 100
    C101 = 101
    C102 = 102
    C103 = 103
    C104 = 104
    C105 = 105
    C106 = 106


def pattern_from_value(value: int, strict: bool = False) -> Pattern:
    """
    Convert a raw symbol value to its pattern tag.

    Values above 106 collapse to the stop pattern unless ``strict`` is set,
    in which case they are rejected with ``ValueError``.
    """
    if value < 0:
        raise ValueError(f"Symbol value cannot be negative: {value}")
    if value >= STOP:
        if strict and value > STOP:
            raise ValueError(f"Symbol value out of range: {value}")
        return Pattern.C106
    return Pattern(value)


def symbol_kind(value: int) -> SymbolKind:
    """Classify a raw symbol value by its structural role."""
    if value == STOP:
        return SymbolKind.STOP
    if START_A <= value <= START_C:
        return SymbolKind.START
    if value == SHIFT:
        return SymbolKind.SHIFT
    if CODE_C <= value <= CODE_A:
        return SymbolKind.SWITCH
    if value in (FNC1, FNC2, FNC3):
        return SymbolKind.FUNCTION
    return SymbolKind.PLAIN


def render_value(value: int, symbology: Symbology) -> str:
    """
    Render a plain symbol value as text in the given symbology.

    Symbology A maps 0-63 to ASCII 32-95 and 64-95 to ASCII 0-31, symbology B
    maps 0-95 to ASCII 32-127 and symbology C maps 0-99 to a digit pair.
    Values without a character in the symbology render as an empty string.
    """
    if symbology == Symbology.C:
        if 0 <= value < PLAIN_LIMIT_C:
            return f"{value // 10}{value % 10}"
        return ""

    if not 0 <= value < FNC3:
        return ""
    if symbology == Symbology.A and value >= 64:
        return chr(value - 64)
    return chr(value + 32)
