"""Decimal, hexadecimal and binary breakdown of integral constants.

All functions are pure. The three strings of a NumericTriple are derived
from one big-endian byte sequence, so they always describe the same bit
pattern:

    >>> decompose(NumericValue(-1, PrimitiveType.INT))
    NumericTriple(decimal='-1', hexadecimal='FFFF FFFF', binary='11111111 11111111 11111111 11111111')
"""

from __future__ import annotations

from enum import Enum

from symboltip.fragments import NumericTriple
from symboltip.model.symbols import NumericValue, PrimitiveType


class NumericForm(str, Enum):
    NONE = "none"
    NEGATIVE = "negative"  # literal preceded by unary minus
    UNSIGNED = "unsigned"  # render the decimal as the unsigned counterpart


def to_bytes(value: int, width: int) -> bytes:
    """Two's-complement big-endian bytes of `value` truncated to `width` bytes."""
    return (value & ((1 << (width * 8)) - 1)).to_bytes(width, "big")


def from_bytes(data: bytes, *, signed: bool) -> int:
    return int.from_bytes(data, "big", signed=signed)


def to_hex_string(data: bytes) -> str:
    """Two hex digits per byte; 4 and 8 byte values are grouped in 2-byte words."""
    if len(data) in (1, 2):
        return data.hex().upper()
    if len(data) in (4, 8):
        return " ".join(data[i : i + 2].hex().upper() for i in range(0, len(data), 2))
    return ""


def to_bin_string(data: bytes) -> str:
    """8-bit groups separated by spaces, leading zero bytes dropped.

    Never empty: an all-zero value renders as a single zero byte.
    """
    groups: list[str] = []
    for byte in data:
        if byte == 0 and not groups:
            continue
        groups.append(f"{byte:08b}")
    return " ".join(groups) if groups else "00000000"


def _renders_signed(primitive: PrimitiveType, form: NumericForm) -> bool:
    if form is NumericForm.UNSIGNED:
        return False
    # A negated unsigned literal is promoted to a signed value
    return primitive.is_signed or form is NumericForm.NEGATIVE


def canonical_bytes(value: NumericValue, form: NumericForm = NumericForm.NONE) -> bytes | None:
    """The bit pattern `decompose` renders, or None for non-integral values."""
    primitive = value.type
    if not primitive.is_integral or isinstance(value.value, bool):
        return None
    number = int(value.value)
    if form is NumericForm.NEGATIVE:
        number = -number
    return to_bytes(number, primitive.byte_width)


def decompose(value: NumericValue, form: NumericForm = NumericForm.NONE) -> NumericTriple | None:
    """Break an integral or char constant into its three textual forms.

    Returns None for floating point, decimal and boolean constants.
    """
    data = canonical_bytes(value, form)
    if data is None:
        return None
    decimal = str(from_bytes(data, signed=_renders_signed(value.type, form)))
    return NumericTriple(decimal=decimal, hexadecimal=to_hex_string(data), binary=to_bin_string(data))


def round_trip(value: NumericValue, form: NumericForm = NumericForm.NONE) -> int | None:
    """Reconstruct the rendered decimal value from the decomposed bytes."""
    data = canonical_bytes(value, form)
    if data is None:
        return None
    return from_bytes(data, signed=_renders_signed(value.type, form))
