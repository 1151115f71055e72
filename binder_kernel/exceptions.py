"""
Typed exception hierarchy for the binder kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Binding runs over many fields and reports every failure at once. Callers
that react to a failure (retry with other patterns, report a bad flag,
fall back to a default) must be able to tell the failures apart without
parsing message text.

Every exception therefore:
  1. Has its own class (catch by type, not message)
  2. Has a CODE class attribute (machine-readable, stable)
  3. Carries structured DATA as attributes (type names, keys, lengths)

Example - WRONG way to handle errors:
    try:
        as_int(value)
    except Exception as e:
        if "out of range" in str(e):  # FRAGILE
            ...

Example - RIGHT way:
    try:
        as_int(value)
    except NumericOverflowError as e:
        report(e.code, e.literal, e.type_name)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    BinderError (base)
    |
    +-- CoercionError
    |   +-- ValueParseError
    |   +-- NumericOverflowError
    |   +-- UnsupportedCoercionError
    |   +-- CardinalityMismatchError
    |   +-- ElementCoercionError
    |
    +-- FieldError
    |   +-- FieldNotFoundError
    |   +-- UnsettableFieldError
    |
    +-- BindError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category   | Code                    | When Raised
-----------|-------------------------|---------------------------------------------
Coercion   | PARSE_ERROR             | Malformed numeric, duration or unit text
           | OVERFLOW                | Value outside the destination width
           | UNSUPPORTED_COERCION    | No conversion between the two kinds
           | CARDINALITY_MISMATCH    | Sequence length can't fill a scalar field
           | ELEMENT_COERCION_FAILED | One or more sequence elements failed
-----------|-------------------------|---------------------------------------------
Field      | NOT_FOUND               | No naming pattern matched a source key
           | UNSETTABLE_FIELD        | Destination field cannot be written
-----------|-------------------------|---------------------------------------------
Bind       | BIND_FAILED             | Aggregate of every failure of one bind call

===============================================================================
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from binder_kernel.domain.dtos import FieldFailure


class BinderError(Exception):
    """
    Base exception for all binder kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "BINDER_ERROR"


# Coercion-related exceptions


class CoercionError(BinderError):
    """Base exception for value conversion errors."""

    code: str = "COERCION_ERROR"


class ValueParseError(CoercionError):
    """Text could not be parsed into the requested kind of value."""

    code: str = "PARSE_ERROR"

    def __init__(self, literal: str, expected: str, reason: str = "invalid syntax"):
        self.literal = literal
        self.expected = expected
        self.reason = reason
        super().__init__(f"cannot parse {literal!r} as {expected}: {reason}")


class NumericOverflowError(CoercionError):
    """Numeric value does not fit the destination's bit width."""

    code: str = "OVERFLOW"

    def __init__(self, literal: Any, type_name: str):
        self.literal = literal
        self.type_name = type_name
        super().__init__(f"value {literal!r} out of range for {type_name}")


class UnsupportedCoercionError(CoercionError):
    """No conversion is defined between the source and destination types."""

    code: str = "UNSUPPORTED_COERCION"

    def __init__(self, source_type: str, destination_type: str):
        self.source_type = source_type
        self.destination_type = destination_type
        super().__init__(
            f"don't know how to coerce {source_type} to {destination_type}"
        )


class CardinalityMismatchError(CoercionError):
    """A sequence with other than one element was bound to a scalar field."""

    code: str = "CARDINALITY_MISMATCH"

    def __init__(self, field_name: str, length: int, destination_type: str):
        self.field_name = field_name
        self.length = length
        self.destination_type = destination_type
        super().__init__(
            f"can't coerce a sequence of {length} element(s) "
            f"into scalar {destination_type}"
        )


class ElementCoercionError(CoercionError):
    """
    One or more elements of a sequence failed to convert.

    Carries every element failure and the partially converted container so
    the caller can still store the elements that succeeded.
    """

    code: str = "ELEMENT_COERCION_FAILED"

    def __init__(self, field_name: str, failures: list[FieldFailure], partial: Any):
        self.field_name = field_name
        self.failures = tuple(failures)
        self.partial = partial
        super().__init__("\n".join(f.message for f in self.failures))


# Field-related exceptions


class FieldError(BinderError):
    """Base exception for destination field errors."""

    code: str = "FIELD_ERROR"


class FieldNotFoundError(FieldError):
    """No naming pattern produced a key present in the source mapping."""

    code: str = "NOT_FOUND"

    def __init__(self, field_name: str, attempted_keys: list[str]):
        self.field_name = field_name
        self.attempted_keys = tuple(attempted_keys)
        keys = ", ".join(repr(k) for k in self.attempted_keys)
        super().__init__(f"not found in source (attempted keys: {keys})")


class UnsettableFieldError(FieldError):
    """Destination field cannot be written, even through the escape hatch."""

    code: str = "UNSETTABLE_FIELD"

    def __init__(self, field_name: str, reason: str):
        self.field_name = field_name
        self.reason = reason
        super().__init__(f"field cannot be set: {reason}")


# Aggregate


class BindError(BinderError):
    """
    Every failure accumulated by one bind call.

    The message is the per-field messages joined by newlines; `failures`
    keeps them as structured (field, code, message) records.
    """

    code: str = "BIND_FAILED"

    def __init__(self, record_type: str, failures: list[FieldFailure]):
        self.record_type = record_type
        self.failures = tuple(failures)
        super().__init__("\n".join(f.message for f in self.failures))

    @property
    def fields(self) -> tuple[str, ...]:
        """Names of the fields that failed, in processing order."""
        return tuple(f.field for f in self.failures)
