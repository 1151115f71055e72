"""
DTOs -- immutable records that flow through a bind call.

Responsibility:
    FieldBinding pairs a field with the source key and value it resolved
    to. FieldFailure is the structured unit of error aggregation: one per
    failed field or sequence element.

Architecture position:
    Kernel > Domain -- pure, no I/O, no logging.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from binder_kernel.exceptions import BinderError


@dataclass(frozen=True)
class FieldBinding:
    """A field paired with the source entry it resolved to."""

    field_name: str
    key: str
    value: Any


@dataclass(frozen=True)
class FieldFailure:
    """
    A single accumulated failure.

    Contract:
        `field` is the field name, or `name[index]` for sequence elements.
        `message` is a single line prefixed with `field`.
    """

    field: str
    code: str
    message: str

    @classmethod
    def from_error(cls, field: str, error: BinderError) -> FieldFailure:
        """Build a failure record from a typed kernel exception."""
        return cls(field=field, code=error.code, message=f"{field}: {error}")
