"""
Field accessor table for destination records.

Responsibility:
    Describe every field of a record instance as a ``FieldAccessor``: name,
    declared type descriptor and a setter. The binder never calls setattr()
    itself; it goes through these accessors.

Protected fields:
    Two kinds of field refuse an ordinary setattr():
      - private fields, recognised by a leading underscore
      - fields of frozen dataclasses (FrozenInstanceError)
    When ``write_protected`` is true their setter writes with
    ``object.__setattr__``, bypassing the class's own __setattr__. When it is
    false they get no setter, and binding them reports UnsettableField.

    Read-only properties never get a setter.
"""

from __future__ import annotations

import dataclasses
import typing
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, ClassVar, get_origin, get_type_hints

from binder_kernel.domain.type_kinds import TypeDescriptor, describe


@dataclass(frozen=True)
class FieldAccessor:
    """One row of the accessor table."""

    name: str
    declared: TypeDescriptor
    private: bool
    setter: Callable[[Any], None] | None
    unsettable_reason: str | None = None

    @property
    def key_name(self) -> str:
        """Field name with leading underscores removed."""
        return self.name.lstrip("_") or self.name


def _is_classvar(annotation: Any) -> bool:
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def _field_names(cls: type, hints: dict[str, Any]) -> list[str]:
    if dataclasses.is_dataclass(cls):
        return [f.name for f in dataclasses.fields(cls)]
    return [name for name, hint in hints.items() if not _is_classvar(hint)]


def _is_frozen(cls: type) -> bool:
    params = getattr(cls, "__dataclass_params__", None)
    return bool(params and params.frozen)


def record_fields(target: Any, *, write_protected: bool = True) -> tuple[FieldAccessor, ...]:
    """
    Build the accessor table for `target`, in field declaration order.

    Raises:
        TypeError: target is a class, or an instance without annotated fields.
    """
    if isinstance(target, type):
        raise TypeError(f"Expected a record instance, got the class {target.__name__}")
    cls = type(target)
    hints = get_type_hints(cls, include_extras=True)
    names = _field_names(cls, hints)
    if not names:
        raise TypeError(f"{cls.__name__} declares no annotated fields to bind")

    frozen = _is_frozen(cls)
    accessors = []
    for name in names:
        private = name.startswith("_")
        setter, reason = _make_setter(target, cls, name, private, frozen, write_protected)
        accessors.append(
            FieldAccessor(
                name=name,
                declared=describe(hints.get(name, typing.Any)),
                private=private,
                setter=setter,
                unsettable_reason=reason,
            )
        )
    return tuple(accessors)


def _make_setter(
    target: Any,
    cls: type,
    name: str,
    private: bool,
    frozen: bool,
    write_protected: bool,
) -> tuple[Callable[[Any], None] | None, str | None]:
    attr = getattr(cls, name, None)
    if isinstance(attr, property) and attr.fset is None:
        return None, "read-only property"

    if not (private or frozen):
        def set_public(value: Any) -> None:
            setattr(target, name, value)

        return set_public, None

    if not write_protected:
        return None, "private field" if private else "frozen dataclass field"

    def set_protected(value: Any) -> None:
        object.__setattr__(target, name, value)

    return set_protected, None
