"""
Pure domain layer: type descriptors, literal grammars and the field
accessor table. ZERO I/O, no logging.
"""

from binder_kernel.domain.durations import format_duration, parse_duration
from binder_kernel.domain.dtos import FieldBinding, FieldFailure
from binder_kernel.domain.fields import FieldAccessor, record_fields
from binder_kernel.domain.type_kinds import (
    TypeDescriptor,
    TypeKind,
    Width,
    describe,
    is_assignable,
    value_kind,
    zero_value,
)
from binder_kernel.domain.units import UNIT_MULTIPLIERS, parse_unit_suffixed

__all__ = [
    "FieldAccessor",
    "FieldBinding",
    "FieldFailure",
    "TypeDescriptor",
    "TypeKind",
    "UNIT_MULTIPLIERS",
    "Width",
    "describe",
    "format_duration",
    "is_assignable",
    "parse_duration",
    "parse_unit_suffixed",
    "record_fields",
    "value_kind",
    "zero_value",
]
