"""Binding services: field resolution and record binding."""

from binder_kernel.services.field_resolver import (
    IDENTITY_PATTERN,
    render_key,
    resolve,
    validate_pattern,
)
from binder_kernel.services.record_binder import RecordBinder, bind

__all__ = [
    "IDENTITY_PATTERN",
    "RecordBinder",
    "bind",
    "render_key",
    "resolve",
    "validate_pattern",
]
