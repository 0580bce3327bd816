"""
Tests for the Code128 decode state machine and decoder.
"""

import pytest

from feather_code.barcode.decoder import (
    Code128Decoder,
    DecodeState,
    decode_code128,
    decode_symbols,
    transition,
)
from feather_code.barcode.encodings import PatternEncoding
from feather_code.barcode.errors import (
    BadFormatError,
    Code128Error,
    DecodeError,
    InvalidLengthError,
    InvalidSymbolError,
)
from feather_code.models.symbology import Pattern, Symbology

PJJ123C = [103, 48, 42, 42, 17, 18, 19, 35, 54, 106]
COUNTRY_CODE = [105, 102, 42, 18, 40, 20, 50, 101, 16, 92, 106]
HELLO_WORLD = [104, 40, 69, 76, 76, 79, 0, 55, 79, 82, 76, 68, 43, 106]
SHIFTED = [103, 51, 40, 98, 73, 38, 52, 100, 98, 1, 34, 106]


class TestTransition:
    """Tests for single state machine steps."""

    def test_plain_symbols(self):
        """Test that plain symbols emit text and keep the state."""
        assert transition(DecodeState.A, 33) == (DecodeState.A, "A")
        assert transition(DecodeState.A, 65) == (DecodeState.A, "\x01")
        assert transition(DecodeState.B, 65) == (DecodeState.B, "a")
        assert transition(DecodeState.C, 99) == (DecodeState.C, "99")
        assert transition(DecodeState.C, 5) == (DecodeState.C, "05")
        assert transition(DecodeState.C, 98) == (DecodeState.C, "98")

    def test_switches_from_a(self):
        """Test symbology switches in A."""
        assert transition(DecodeState.A, 100) == (DecodeState.B, None)
        assert transition(DecodeState.A, 99) == (DecodeState.C, None)
        assert transition(DecodeState.A, 98) == (DecodeState.SHIFT_B, None)

    def test_switches_from_b(self):
        """Test symbology switches in B."""
        assert transition(DecodeState.B, 101) == (DecodeState.A, None)
        assert transition(DecodeState.B, 99) == (DecodeState.C, None)
        assert transition(DecodeState.B, 98) == (DecodeState.SHIFT_A, None)

    def test_switches_from_c(self):
        """Test symbology switches in C."""
        assert transition(DecodeState.C, 100) == (DecodeState.B, None)
        assert transition(DecodeState.C, 101) == (DecodeState.A, None)

    @pytest.mark.parametrize(
        "state, value",
        [
            (DecodeState.A, 96),
            (DecodeState.A, 97),
            (DecodeState.A, 101),
            (DecodeState.A, 102),
            (DecodeState.B, 96),
            (DecodeState.B, 97),
            (DecodeState.B, 100),
            (DecodeState.B, 102),
            (DecodeState.C, 102),
        ],
    )
    def test_function_codes_are_no_ops(self, state, value):
        """Test that FNC 1-4 produce nothing and keep the state."""
        next_state, text = transition(state, value)
        assert next_state == state
        assert not text

    @pytest.mark.parametrize("state", [DecodeState.A, DecodeState.B, DecodeState.C])
    def test_stop_terminates(self, state):
        """Test that the stop symbol ends decoding."""
        assert transition(state, 106) == (DecodeState.DONE, None)

    def test_shift_returns(self):
        """Test that shifted symbols decode in the other symbology once."""
        assert transition(DecodeState.SHIFT_B, 73) == (DecodeState.A, "i")
        assert transition(DecodeState.SHIFT_A, 1) == (DecodeState.B, "!")
        assert transition(DecodeState.SHIFT_A, 65) == (DecodeState.B, "\x01")

    @pytest.mark.parametrize("value", [98, 99, 100, 101, 102, 103, 106])
    def test_shift_requires_plain_symbol(self, value):
        """Test that a shift must be followed by a plain symbol."""
        with pytest.raises(DecodeError):
            transition(DecodeState.SHIFT_A, value)
        with pytest.raises(DecodeError):
            transition(DecodeState.SHIFT_B, value)

    @pytest.mark.parametrize(
        "state, value",
        [
            (DecodeState.A, 103),
            (DecodeState.B, 105),
            (DecodeState.C, 105),
            (DecodeState.C, 104),
            (DecodeState.A, 200),
            (DecodeState.B, -1),
        ],
    )
    def test_unrecognized_symbols(self, state, value):
        """Test that symbols outside the state's alphabet are errors."""
        with pytest.raises(DecodeError) as exc_info:
            transition(state, value)
        assert exc_info.value.symbol == value
        assert exc_info.value.state == state

    @pytest.mark.parametrize("state", [DecodeState.A, DecodeState.B, DecodeState.C])
    def test_start_codes_rejected_in_data(self, state):
        """Test that start codes never appear between start and check."""
        for value in (103, 104, 105):
            with pytest.raises(DecodeError):
                transition(state, value)

    def test_every_value_classified(self):
        """Test that each value 0-106 is consumed or rejected in every text state."""
        for state in (DecodeState.A, DecodeState.B, DecodeState.C):
            outcomes = set()
            for value in range(107):
                try:
                    outcomes.add(transition(state, value)[0])
                except DecodeError:
                    outcomes.add("error")
            assert state in outcomes
            assert DecodeState.DONE in outcomes
            assert "error" in outcomes

    def test_done_is_terminal(self):
        """Test that nothing is accepted after stop."""
        with pytest.raises(DecodeError):
            transition(DecodeState.DONE, 0)

    def test_initial_state(self):
        """Test mapping of start symbology to initial state."""
        assert DecodeState.from_symbology(Symbology.A) == DecodeState.A
        assert DecodeState.from_symbology(Symbology.C) == DecodeState.C


class TestDecodeCode128:
    """Tests for decoding whole datums."""

    def test_symbology_a(self):
        """Test decoding a datum in symbology A."""
        assert decode_code128(PJJ123C) == "PJJ123C"

    def test_symbology_c_with_switch(self):
        """Test decoding C with FNC 1 and a switch to A."""
        assert decode_code128(COUNTRY_CODE) == "42184020500"

    def test_symbology_b(self):
        """Test decoding a datum in symbology B."""
        assert decode_code128(HELLO_WORLD) == "Hello World"

    def test_shift(self):
        """Test decoding a datum using shift twice."""
        assert decode_code128(SHIFTED) == "SHiFT!"

    def test_patterns(self):
        """Test that pattern tags decode like raw values."""
        encoding = PatternEncoding()
        symbols = [encoding.from_value(v) for v in COUNTRY_CODE]
        assert decode_code128(symbols) == "42184020500"
        assert decode_code128(symbols, encoding) == "42184020500"

    def test_checksum_not_required(self):
        """Test that decoding ignores the check symbol."""
        symbols = list(PJJ123C)
        symbols[-2] = 0
        assert decode_code128(symbols) == "PJJ123C"

    def test_stop_in_data_terminates(self):
        """Test that a stop inside the data ends decoding."""
        assert decode_code128([104, 33, 106, 34, 7, 106]) == "A"

    @pytest.mark.parametrize("symbols", [[], [103], [103, 106], [103, 3, 106]])
    def test_invalid_length(self, symbols):
        """Test rejection of short sequences."""
        with pytest.raises(InvalidLengthError) as exc_info:
            decode_code128(symbols)
        assert exc_info.value.length == len(symbols)

    def test_bad_format(self):
        """Test rejection of unframed sequences."""
        with pytest.raises(BadFormatError):
            decode_code128([1, 2, 3, 4, 5])
        with pytest.raises(BadFormatError):
            decode_code128([103, 48, 15, 105])

    def test_decode_error_reports_symbol(self):
        """Test that the offending symbol is reported as given."""
        with pytest.raises(DecodeError) as exc_info:
            decode_code128([Pattern.C105, Pattern.C103, Pattern.C0, Pattern.C106])
        assert exc_info.value.symbol is Pattern.C103
        assert exc_info.value.state == DecodeState.C

    def test_shift_misuse(self):
        """Test that shift followed by a switch is an error."""
        with pytest.raises(DecodeError):
            decode_code128([104, 98, 99, 0, 106])

    def test_foreign_values(self):
        """Test that non-symbol values raise a typed error."""
        with pytest.raises(InvalidSymbolError):
            decode_code128([104, "a", 0, 106])

    def test_errors_are_value_errors(self):
        """Test that decode failures can be caught as ValueError."""
        with pytest.raises(ValueError):
            decode_code128([103])
        assert issubclass(Code128Error, ValueError)


class TestCode128Decoder:
    """Tests for the scan result facade."""

    def test_valid(self):
        """Test a fully valid datum."""
        result = Code128Decoder(require_checksum=True, strict_symbols=False).decode(SHIFTED)
        assert result.is_valid
        assert result.checksum_valid
        assert result.length_valid
        assert result.text == "SHiFT!"
        assert result.symbology == Symbology.A
        assert result.symbols == tuple(SHIFTED)
        assert result.error is None

    def test_patterns_reported_as_values(self):
        """Test that pattern input is reported as raw values."""
        symbols = [Pattern(v) for v in HELLO_WORLD]
        result = Code128Decoder(require_checksum=True, strict_symbols=False).decode(symbols)
        assert result.is_valid
        assert result.text == "Hello World"
        assert result.symbols == tuple(HELLO_WORLD)

    def test_checksum_mismatch(self):
        """Test that a wrong check symbol invalidates the result but keeps the text."""
        symbols = list(PJJ123C)
        symbols[-2] = 0
        result = Code128Decoder(require_checksum=True, strict_symbols=False).decode(symbols)
        assert not result.is_valid
        assert not result.checksum_valid
        assert result.text == "PJJ123C"
        assert "checksum" in result.error.lower()

    def test_checksum_optional(self):
        """Test decoding without requiring the checksum."""
        symbols = list(PJJ123C)
        symbols[-2] = 0
        result = Code128Decoder(require_checksum=False, strict_symbols=False).decode(symbols)
        assert result.is_valid
        assert not result.checksum_valid
        assert result.error is None

    def test_too_short(self):
        """Test that short input yields an error result."""
        result = Code128Decoder(require_checksum=True, strict_symbols=False).decode([103, 106])
        assert not result.is_valid
        assert not result.length_valid
        assert result.symbology is None
        assert "length" in result.error.lower()

    def test_decode_error(self):
        """Test that decode errors are captured in the result."""
        result = Code128Decoder(require_checksum=True, strict_symbols=False).decode(
            [105, 103, 0, 106]
        )
        assert not result.is_valid
        assert result.text == ""
        assert result.error

    def test_strict_symbols(self):
        """Test that strict decoding rejects values above 106."""
        symbols = [104, 200, 0, 106]
        strict = Code128Decoder(require_checksum=False, strict_symbols=True).decode(symbols)
        assert not strict.is_valid
        assert "200" in strict.error

        lenient = Code128Decoder(require_checksum=False, strict_symbols=False).decode(symbols)
        assert not lenient.is_valid
        assert "200" in lenient.error

    def test_foreign_values(self):
        """Test that foreign values never raise from the facade."""
        result = Code128Decoder(require_checksum=True, strict_symbols=False).decode(
            [104, None, "x", 106]
        )
        assert not result.is_valid
        assert result.symbols == (104, 106)

    def test_defaults_from_settings(self, monkeypatch):
        """Test that unset options come from settings."""
        from feather_code.config import get_settings

        monkeypatch.setenv("STRICT_SYMBOLS", "true")
        monkeypatch.setenv("REQUIRE_CHECKSUM", "false")
        get_settings.cache_clear()
        try:
            decoder = Code128Decoder()
            assert decoder.strict_symbols
            assert not decoder.require_checksum
        finally:
            get_settings.cache_clear()

    def test_decode_batch(self):
        """Test decoding several datums."""
        decoder = Code128Decoder(require_checksum=True, strict_symbols=False)
        results = decoder.decode_batch([PJJ123C, COUNTRY_CODE, [103]])
        assert [r.text for r in results] == ["PJJ123C", "42184020500", ""]
        assert [r.is_valid for r in results] == [True, True, False]

    def test_decode_symbols(self):
        """Test the convenience function."""
        result = decode_symbols(COUNTRY_CODE)
        assert result.is_valid
        assert result.text == "42184020500"

    def test_decode_symbols_reads_settings(self, monkeypatch):
        """Test that the convenience function follows configured strictness."""
        from feather_code.config import get_settings

        monkeypatch.setenv("STRICT_SYMBOLS", "true")
        monkeypatch.setenv("REQUIRE_CHECKSUM", "false")
        get_settings.cache_clear()
        try:
            result = decode_symbols([104, 200, 0, 106])
            assert not result.is_valid
            assert "invalid symbol 200" in result.error.lower()

            result = decode_symbols([104, 33, 0, 106])
            assert result.is_valid
            assert not result.checksum_valid
        finally:
            get_settings.cache_clear()
