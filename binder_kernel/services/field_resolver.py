"""
FieldResolver -- find the source entry for a field via naming patterns.

A naming pattern is a %-style template with exactly one ``%s`` slot:
``"--%s"`` turns field ``verbose`` into the key ``"--verbose"``. Patterns
are tried in the caller's order and the first key present in the source
wins, even when its value is None. With no patterns the field name itself
is the key.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from binder_kernel.domain.dtos import FieldBinding
from binder_kernel.exceptions import FieldNotFoundError

IDENTITY_PATTERN = "%s"


def validate_pattern(pattern: str) -> str:
    """
    Return `pattern` if it has exactly one ``%s`` slot.

    Raises:
        ValueError: not a string, or zero / several / unknown slots.
    """
    if not isinstance(pattern, str):
        raise ValueError(f"Naming pattern must be a string, got {type(pattern).__name__}")
    slots = pattern.replace("%%", "").count("%s")
    if slots != 1:
        raise ValueError(
            f"Naming pattern {pattern!r} must contain exactly one %s slot, found {slots}"
        )
    try:
        pattern % ("",)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid naming pattern {pattern!r}: {exc}") from exc
    return pattern


def render_key(pattern: str, field_name: str) -> str:
    """Substitute `field_name` into `pattern`."""
    return pattern % (field_name,)


def resolve(
    field_name: str,
    source: Mapping[str, Any],
    patterns: Sequence[str] = (),
) -> FieldBinding:
    """
    Resolve `field_name` to its entry in `source`.

    Returns:
        FieldBinding with the matched key and its value.

    Raises:
        FieldNotFoundError: no pattern produced a present key; lists every
            attempted key in trial order.
    """
    attempted: list[str] = []
    for pattern in patterns or (IDENTITY_PATTERN,):
        key = render_key(pattern, field_name)
        if key in source:
            return FieldBinding(field_name=field_name, key=key, value=source[key])
        attempted.append(key)
    raise FieldNotFoundError(field_name, attempted)
