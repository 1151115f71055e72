"""
ValueCoercer -- convert one scalar dynamic value into a declared type.

Dispatch order:
    1. value already fits the declared type   -> returned verbatim
    2. declared type is text                  -> format_value(), never fails
    3. converter registered for (source kind, destination kind)
    4. anything else                          -> UnsupportedCoercionError

Built-in converters:

    Source   | Destination | Behaviour
    ---------|-------------|-------------------------------------------------
    text     | int / uint  | base-10 literal in range, else unit suffix (2M)
    text     | float       | base-10 float literal at declared precision
    text     | duration    | duration literal ("1h30m")
    float    | int / uint  | truncate toward zero, no range check
    float    | float32     | round to single precision, Overflow past its range
    int      | int / uint  | only reached when out of range -> Overflow

Converters return the new value; they never touch the destination. The
caller stores the result only on success.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from datetime import timedelta
from typing import Any

from binder_kernel.domain.durations import format_duration, parse_duration
from binder_kernel.domain.numeric import (
    check_int_range,
    parse_float_literal,
    parse_int_literal,
    to_float32,
)
from binder_kernel.domain.type_kinds import (
    TypeDescriptor,
    TypeKind,
    describe,
    is_assignable,
    value_kind,
)
from binder_kernel.domain.units import parse_unit_suffixed
from binder_kernel.exceptions import (
    NumericOverflowError,
    UnsupportedCoercionError,
    ValueParseError,
)

Converter = Callable[[Any, TypeDescriptor], Any]


def format_value(value: Any) -> str:
    """Human-readable text for any dynamic value."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, timedelta):
        return format_duration(value)
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(format_value(item) for item in value) + "]"
    return str(value)


def text_to_integer(value: str, declared: TypeDescriptor) -> int:
    signed = declared.kind is TypeKind.INT
    try:
        return parse_int_literal(value, declared.bits, signed)
    except (ValueParseError, NumericOverflowError) as exc:
        parsed = parse_unit_suffixed(value, exc)
    return check_int_range(parsed, declared.bits, signed, literal=value)


def text_to_float(value: str, declared: TypeDescriptor) -> float:
    return parse_float_literal(value, declared.bits)


def text_to_duration(value: str, declared: TypeDescriptor) -> timedelta:
    return parse_duration(value)


def float_to_integer(value: float, declared: TypeDescriptor) -> int:
    if not math.isfinite(value):
        raise NumericOverflowError(value, declared.name)
    return int(value)


def float_to_float(value: float, declared: TypeDescriptor) -> float:
    if declared.bits != 32:
        return value
    try:
        return to_float32(value)
    except ValueParseError:
        raise NumericOverflowError(value, declared.name) from None


def integer_to_integer(value: int, declared: TypeDescriptor) -> int:
    return check_int_range(value, declared.bits, declared.kind is TypeKind.INT)


_DEFAULT_CONVERTERS: dict[tuple[TypeKind, TypeKind], Converter] = {
    (TypeKind.TEXT, TypeKind.INT): text_to_integer,
    (TypeKind.TEXT, TypeKind.UINT): text_to_integer,
    (TypeKind.TEXT, TypeKind.FLOAT): text_to_float,
    (TypeKind.TEXT, TypeKind.DURATION): text_to_duration,
    (TypeKind.FLOAT, TypeKind.INT): float_to_integer,
    (TypeKind.FLOAT, TypeKind.UINT): float_to_integer,
    (TypeKind.FLOAT, TypeKind.FLOAT): float_to_float,
    (TypeKind.INT, TypeKind.INT): integer_to_integer,
    (TypeKind.INT, TypeKind.UINT): integer_to_integer,
}


class ValueCoercer:
    """
    Table-driven scalar converter.

    The table is keyed by (source kind, destination kind); ``register``
    adds or replaces an entry for this instance only.
    """

    def __init__(self) -> None:
        self._converters: dict[tuple[TypeKind, TypeKind], Converter] = dict(
            _DEFAULT_CONVERTERS
        )

    def register(
        self,
        source_kind: TypeKind,
        destination_kind: TypeKind,
        converter: Converter,
    ) -> None:
        """Install `converter` for the given kind pair."""
        self._converters[(source_kind, destination_kind)] = converter

    def converter_for(
        self,
        source_kind: TypeKind,
        destination_kind: TypeKind,
    ) -> Converter | None:
        return self._converters.get((source_kind, destination_kind))

    def coerce(self, value: Any, declared: Any) -> Any:
        """
        Convert `value` to the declared type.

        Args:
            value: A scalar dynamic value (not None).
            declared: A TypeDescriptor or a type annotation.

        Returns:
            The converted value.

        Raises:
            CoercionError subclass describing why conversion failed.
        """
        declared = describe(declared)
        if is_assignable(value, declared):
            return value
        if declared.kind is TypeKind.TEXT:
            return format_value(value)

        converter = self.converter_for(value_kind(value), declared.kind)
        if converter is None:
            raise UnsupportedCoercionError(type(value).__name__, declared.name)
        return converter(value, declared)
