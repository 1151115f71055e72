"""Byte-unit suffixed integers: "512B", "4k", "2M", "1.5G", "1T"."""

from __future__ import annotations

import math

from binder_kernel.domain.numeric import (
    check_int_range,
    parse_float_literal,
    parse_int_literal,
)
from binder_kernel.exceptions import NumericOverflowError, ValueParseError

UNIT_MULTIPLIERS: dict[str, int] = {
    "B": 1,
    "K": 1 << 10,
    "M": 1 << 20,
    "G": 1 << 30,
    "T": 1 << 40,
}


def parse_unit_suffixed(text: str, fallback_error: Exception) -> int:
    """
    Parse numeric text ending in a unit letter into a signed 64-bit integer.

    The unit letter is case-insensitive. The prefix is parsed as an integer
    literal, or failing that as a float literal whose product with the
    multiplier is truncated toward zero ("0.5k" -> 512).

    If `text` does not end in a unit letter, `fallback_error` is raised
    unchanged so the caller's original diagnostic survives.

    Callers narrowing the result to a smaller width must range-check it.

    Raises:
        fallback_error: no unit letter.
        ValueParseError: malformed prefix.
        NumericOverflowError: result does not fit 64 bits.
    """
    multiplier = UNIT_MULTIPLIERS.get(text[-1:].upper()) if text else None
    if multiplier is None:
        raise fallback_error

    prefix = text[:-1]
    try:
        value = parse_int_literal(prefix, 64) * multiplier
    except (ValueParseError, NumericOverflowError):
        number = parse_float_literal(prefix, 64)
        product = number * multiplier
        if math.isnan(product):
            raise ValueParseError(text, "int64", "not a number") from None
        if math.isinf(product):
            raise NumericOverflowError(text, "int64") from None
        value = int(product)
    return check_int_range(value, 64, True, literal=text)
