"""
Strict base-10 numeric literal grammar.

Python's int() and float() accept surrounding whitespace and digit
separators ("1_000"); flag and document values must not. These parsers
accept only:

    integer:  [+-]?[0-9]+          (no sign for unsigned widths)
    float:    [+-]?(digits[.digits]|.digits)([eE][+-]?digits)?
              [+-]?(inf|infinity|nan)   (case-insensitive)

Range checks are made against the declared bit width.
"""

from __future__ import annotations

import math
import re
import struct

from binder_kernel.exceptions import NumericOverflowError, ValueParseError

_SIGNED_INT_RE = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_INT_RE = re.compile(r"[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
    r"|[+-]?(?:inf|infinity|nan)",
    re.IGNORECASE,
)


def int_bounds(bits: int, signed: bool) -> tuple[int, int]:
    """Inclusive (min, max) representable by an integer of the given width."""
    if signed:
        return -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    return 0, (1 << bits) - 1


def int_type_name(bits: int, signed: bool) -> str:
    return f"{'int' if signed else 'uint'}{bits}"


def check_int_range(value: int, bits: int, signed: bool, literal: object = None) -> int:
    """Return `value` unchanged, or raise NumericOverflowError."""
    low, high = int_bounds(bits, signed)
    if value < low or value > high:
        raise NumericOverflowError(
            value if literal is None else literal, int_type_name(bits, signed)
        )
    return value


def parse_int_literal(text: str, bits: int = 64, signed: bool = True) -> int:
    """
    Parse a base-10 integer literal constrained to `bits`.

    Raises:
        ValueParseError: text is not an integer literal.
        NumericOverflowError: literal is outside the width's range.
    """
    pattern = _SIGNED_INT_RE if signed else _UNSIGNED_INT_RE
    if not pattern.fullmatch(text):
        raise ValueParseError(text, int_type_name(bits, signed))
    return check_int_range(int(text), bits, signed, literal=text)


def parse_float_literal(text: str, bits: int = 64) -> float:
    """
    Parse a base-10 floating literal at single (32) or double (64) precision.

    Raises:
        ValueParseError: malformed text, or a finite literal that is not
            representable at the requested precision.
    """
    if not _FLOAT_RE.fullmatch(text):
        raise ValueParseError(text, f"float{bits}")
    value = float(text)
    if bits == 32:
        return to_float32(value, literal=text)
    if math.isinf(value) and "inf" not in text.lower():
        raise ValueParseError(text, "float64", "value out of range")
    return value


def fits_float32(value: float) -> bool:
    """True when `value` is exactly representable as a single-precision float."""
    if not math.isfinite(value):
        return True
    try:
        return struct.unpack("f", struct.pack("f", value))[0] == value
    except OverflowError:
        return False


def to_float32(value: float, literal: object = None) -> float:
    """Round a double to the nearest single-precision value."""
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        raise ValueParseError(
            str(value if literal is None else literal), "float32", "value out of range"
        ) from None
