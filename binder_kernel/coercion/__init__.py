"""Coercion engine: scalar and sequence converters plus single-value helpers."""

from binder_kernel.coercion.convenience import (
    as_float32,
    as_float64,
    as_int,
    as_int64,
    as_string,
    as_uint,
    as_uint64,
    coerce_into,
    coerce_value,
)
from binder_kernel.coercion.scalar import ValueCoercer, format_value
from binder_kernel.coercion.sequence import CollectionCoercer

__all__ = [
    "CollectionCoercer",
    "ValueCoercer",
    "as_float32",
    "as_float64",
    "as_int",
    "as_int64",
    "as_string",
    "as_uint",
    "as_uint64",
    "coerce_into",
    "coerce_value",
    "format_value",
]
