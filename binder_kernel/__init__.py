"""
Binder Kernel

Binds loosely-typed mappings (parsed flags, decoded documents) into the
fields of typed records:
- Naming patterns map field names to source keys ("--%s", "-%s")
- Text, float and sequence values are coerced to the declared field type
- Byte-unit suffixes on integers ("2M", "0.5k")
- Every field failure is collected and reported together
"""

__version__ = "0.1.0"

from binder_kernel.exceptions import (
    BindError,
    BinderError,
    CardinalityMismatchError,
    CoercionError,
    ElementCoercionError,
    FieldError,
    FieldNotFoundError,
    NumericOverflowError,
    UnsettableFieldError,
    UnsupportedCoercionError,
    ValueParseError,
)
from binder_kernel.domain.durations import format_duration, parse_duration
from binder_kernel.domain.dtos import FieldBinding, FieldFailure
from binder_kernel.domain.fields import record_fields
from binder_kernel.domain.type_kinds import (
    Duration,
    Float32,
    Float64,
    Int,
    Int8,
    Int16,
    Int32,
    Int64,
    TypeDescriptor,
    TypeKind,
    Uint,
    Uint8,
    Uint16,
    Uint32,
    Uint64,
    Width,
    describe,
)
from binder_kernel.domain.units import parse_unit_suffixed
from binder_kernel.coercion import (
    CollectionCoercer,
    ValueCoercer,
    as_float32,
    as_float64,
    as_int,
    as_int64,
    as_string,
    as_uint,
    as_uint64,
    coerce_into,
    coerce_value,
    format_value,
)
from binder_kernel.services import RecordBinder, bind, resolve

__all__ = [
    "BindError",
    "BinderError",
    "CardinalityMismatchError",
    "CoercionError",
    "CollectionCoercer",
    "Duration",
    "ElementCoercionError",
    "FieldBinding",
    "FieldError",
    "FieldFailure",
    "FieldNotFoundError",
    "Float32",
    "Float64",
    "Int",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "NumericOverflowError",
    "RecordBinder",
    "TypeDescriptor",
    "TypeKind",
    "Uint",
    "Uint8",
    "Uint16",
    "Uint32",
    "Uint64",
    "UnsettableFieldError",
    "UnsupportedCoercionError",
    "ValueCoercer",
    "ValueParseError",
    "Width",
    "as_float32",
    "as_float64",
    "as_int",
    "as_int64",
    "as_string",
    "as_uint",
    "as_uint64",
    "bind",
    "coerce_into",
    "coerce_value",
    "describe",
    "format_duration",
    "format_value",
    "parse_duration",
    "parse_unit_suffixed",
    "record_fields",
    "resolve",
]
