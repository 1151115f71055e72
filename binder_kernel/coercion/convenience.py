"""
Single-value entry points built on the coercers.

``coerce_value`` converts any dynamic value to any declared type. The
``as_*`` wrappers fix the declared type and raise the same typed
exceptions; ``as_string`` cannot fail.
"""

from __future__ import annotations

from typing import Any

from binder_kernel.coercion.scalar import ValueCoercer
from binder_kernel.coercion.sequence import CollectionCoercer
from binder_kernel.domain.fields import record_fields
from binder_kernel.domain.type_kinds import (
    Float32,
    Float64,
    Int64,
    TypeKind,
    Uint64,
    describe,
    is_assignable,
    is_sequence,
    zero_value,
)
from binder_kernel.exceptions import UnsettableFieldError

_value_coercer = ValueCoercer()
_collection_coercer = CollectionCoercer(_value_coercer)


def coerce_value(value: Any, declared: Any) -> Any:
    """
    Convert `value` to `declared` (a type annotation or TypeDescriptor).

    None yields the declared type's zero value. A sequence goes through
    the collection coercer unless the destination is text, where it is
    formatted; every other value goes through the scalar coercer.
    """
    declared = describe(declared)
    if value is None:
        return zero_value(declared)
    if is_assignable(value, declared):
        return value
    if is_sequence(value) and declared.kind is not TypeKind.TEXT:
        return _collection_coercer.coerce_sequence(value, declared)
    return _value_coercer.coerce(value, declared)


def coerce_into(target: Any, name: str, value: Any, *, write_protected: bool = True) -> None:
    """
    Coerce `value` into the field `name` of the record `target`.

    The field is left untouched when conversion fails.

    Raises:
        KeyError: `target` has no field called `name`.
        UnsettableFieldError: the field has no usable setter.
        CoercionError subclass: the value could not be converted.
    """
    for accessor in record_fields(target, write_protected=write_protected):
        if accessor.name != name:
            continue
        if accessor.setter is None:
            raise UnsettableFieldError(name, accessor.unsettable_reason)
        accessor.setter(coerce_value(value, accessor.declared))
        return
    raise KeyError(f"{type(target).__name__} has no field {name!r}")


def as_int(value: Any) -> int:
    return coerce_value(value, int)


def as_int64(value: Any) -> int:
    return coerce_value(value, Int64)


def as_uint(value: Any) -> int:
    return coerce_value(value, Uint64)


def as_uint64(value: Any) -> int:
    return coerce_value(value, Uint64)


def as_float32(value: Any) -> float:
    return coerce_value(value, Float32)


def as_float64(value: Any) -> float:
    return coerce_value(value, Float64)


def as_string(value: Any) -> str:
    return coerce_value(value, str)
