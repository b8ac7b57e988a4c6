"""Tests for analysis/numeric.py."""

from __future__ import annotations

import pytest

from symboltip.analysis.numeric import (
    NumericForm,
    canonical_bytes,
    decompose,
    round_trip,
    to_bin_string,
    to_hex_string,
)
from symboltip.fragments import NumericTriple
from symboltip.model.symbols import NumericValue, PrimitiveType


class TestDecompose:
    """Decimal, hex and binary forms."""

    def test_given_minus_one_int_when_decomposed_then_all_bits_set(self) -> None:
        # When
        triple = decompose(NumericValue(-1, PrimitiveType.INT))

        # Then
        assert triple == NumericTriple(
            decimal="-1",
            hexadecimal="FFFF FFFF",
            binary="11111111 11111111 11111111 11111111",
        )

    def test_given_zero_when_decomposed_then_binary_is_single_zero_byte(self) -> None:
        triple = decompose(NumericValue(0, PrimitiveType.INT))

        assert triple is not None
        assert triple.decimal == "0"
        assert triple.hexadecimal == "0000 0000"
        assert triple.binary == "00000000"

    def test_given_uint_max_when_decomposed_then_unsigned_decimal(self) -> None:
        triple = decompose(NumericValue(4294967295, PrimitiveType.UINT))

        assert triple is not None
        assert triple.decimal == "4294967295"
        assert triple.hexadecimal == "FFFF FFFF"

    @pytest.mark.parametrize(
        ("value", "expected_hex", "expected_bin"),
        [
            (NumericValue(255, PrimitiveType.BYTE), "FF", "11111111"),
            (NumericValue(-128, PrimitiveType.SBYTE), "80", "10000000"),
            (NumericValue(65, PrimitiveType.CHAR), "0041", "01000001"),
            (NumericValue(1, PrimitiveType.LONG), "0000 0000 0000 0001", "00000001"),
            (NumericValue(256, PrimitiveType.USHORT), "0100", "00000001 00000000"),
        ],
    )
    def test_given_integral_widths_when_decomposed_then_grouped_per_width(
        self, value: NumericValue, expected_hex: str, expected_bin: str
    ) -> None:
        """Leading zero bytes are dropped from binary but kept in hex."""
        triple = decompose(value)

        assert triple is not None
        assert triple.hexadecimal == expected_hex
        assert triple.binary == expected_bin

    def test_given_negated_literal_when_decomposed_then_value_is_negative(self) -> None:
        """A literal under unary minus renders the negated value."""
        triple = decompose(NumericValue(5, PrimitiveType.INT), NumericForm.NEGATIVE)

        assert triple is not None
        assert triple.decimal == "-5"
        assert triple.hexadecimal == "FFFF FFFB"

    def test_given_negated_unsigned_literal_when_decomposed_then_signed_decimal(self) -> None:
        triple = decompose(NumericValue(1, PrimitiveType.UINT), NumericForm.NEGATIVE)

        assert triple is not None
        assert triple.decimal == "-1"

    def test_given_unsigned_form_when_decomposed_then_unsigned_decimal(self) -> None:
        triple = decompose(NumericValue(-1, PrimitiveType.INT), NumericForm.UNSIGNED)

        assert triple is not None
        assert triple.decimal == "4294967295"

    @pytest.mark.parametrize(
        "value",
        [
            NumericValue(1.5, PrimitiveType.DOUBLE),
            NumericValue(2.0, PrimitiveType.SINGLE),
            NumericValue(1, PrimitiveType.DECIMAL),
            NumericValue(True, PrimitiveType.BOOLEAN),
        ],
    )
    def test_given_non_integral_when_decomposed_then_none(self, value: NumericValue) -> None:
        assert decompose(value) is None
        assert canonical_bytes(value) is None


class TestRoundTrip:
    """The rendered forms describe the original value."""

    @pytest.mark.parametrize(
        "value",
        [
            NumericValue(-1, PrimitiveType.INT),
            NumericValue(-32768, PrimitiveType.SHORT),
            NumericValue(2**64 - 1, PrimitiveType.ULONG),
            NumericValue(-(2**63), PrimitiveType.LONG),
        ],
    )
    def test_given_value_when_round_tripped_then_equal(self, value: NumericValue) -> None:
        assert round_trip(value) == value.value

    def test_given_hex_and_binary_when_parsed_then_same_bits(self) -> None:
        """Hex and binary strings encode the same bit pattern."""
        triple = decompose(NumericValue(-12345, PrimitiveType.INT))

        assert triple is not None
        from_hex = int(triple.hexadecimal.replace(" ", ""), 16)
        from_bin = int(triple.binary.replace(" ", ""), 2)
        assert from_hex == from_bin == (-12345) & 0xFFFFFFFF


class TestStringHelpers:
    def test_hex_of_unsupported_width_is_empty(self) -> None:
        assert to_hex_string(b"\x01\x02\x03") == ""

    def test_bin_of_all_zero_bytes(self) -> None:
        assert to_bin_string(b"\x00\x00") == "00000000"
