"""
Type descriptors -- the declared type of a destination, as a tagged variant.

Responsibility:
    Reduce a Python annotation (``int``, ``list[Int32]``, ``timedelta | None``)
    to a ``TypeDescriptor`` whose ``kind`` selects a converter, and classify
    runtime values into the same kinds. Also defines the zero value of each
    kind and the structural "directly assignable" test.

Architecture position:
    Kernel > Domain -- pure, no I/O.

Width markers:
    Python's ``int`` is unbounded, so fixed widths are declared with
    ``typing.Annotated``::

        @dataclass
        class Limits:
            retries: Uint8
            offset: Int32
            ratio: Float32

    A plain ``int`` is a signed 64-bit integer and a plain ``float`` a
    double.
"""

from __future__ import annotations

import collections.abc
import types
from dataclasses import dataclass, replace
from datetime import timedelta
from enum import Enum
from typing import Annotated, Any, Union, get_args, get_origin

from binder_kernel.domain.numeric import fits_float32, int_bounds, int_type_name


class TypeKind(str, Enum):
    """Kinds of destination and source values understood by the coercers."""

    BOOL = "bool"
    INT = "int"
    UINT = "uint"
    FLOAT = "float"
    TEXT = "text"
    DURATION = "duration"
    SEQUENCE = "sequence"
    ANY = "any"
    OTHER = "other"


@dataclass(frozen=True)
class Width:
    """Annotated metadata declaring the bit width of an int or float."""

    bits: int
    signed: bool = True


Int8 = Annotated[int, Width(8)]
Int16 = Annotated[int, Width(16)]
Int32 = Annotated[int, Width(32)]
Int64 = Annotated[int, Width(64)]
Int = Int64
Uint8 = Annotated[int, Width(8, signed=False)]
Uint16 = Annotated[int, Width(16, signed=False)]
Uint32 = Annotated[int, Width(32, signed=False)]
Uint64 = Annotated[int, Width(64, signed=False)]
Uint = Uint64
Float32 = Annotated[float, Width(32)]
Float64 = Annotated[float, Width(64)]
Duration = timedelta


@dataclass(frozen=True)
class TypeDescriptor:
    """
    Declared type of a destination slot.

    ``bits`` is set for INT, UINT and FLOAT. ``element`` and ``container``
    are set for SEQUENCE. ``python_type`` is kept for OTHER so values can be
    matched with isinstance().
    """

    kind: TypeKind
    bits: int | None = None
    element: TypeDescriptor | None = None
    container: type = list
    nullable: bool = False
    python_type: Any = None

    @property
    def name(self) -> str:
        """Human-readable type name used in error messages."""
        if self.kind in (TypeKind.INT, TypeKind.UINT):
            base = int_type_name(self.bits, self.kind is TypeKind.INT)
        elif self.kind is TypeKind.FLOAT:
            base = f"float{self.bits}"
        elif self.kind is TypeKind.SEQUENCE:
            if self.container is tuple:
                base = f"tuple[{self.element.name}, ...]"
            else:
                base = f"list[{self.element.name}]"
        elif self.kind is TypeKind.OTHER:
            base = getattr(self.python_type, "__name__", repr(self.python_type))
        else:
            base = _KIND_NAMES[self.kind]
        return f"{base} | None" if self.nullable else base


_KIND_NAMES = {
    TypeKind.BOOL: "bool",
    TypeKind.TEXT: "str",
    TypeKind.DURATION: "timedelta",
    TypeKind.ANY: "Any",
}

ANY = TypeDescriptor(TypeKind.ANY)

_SIMPLE: dict[Any, TypeDescriptor] = {
    bool: TypeDescriptor(TypeKind.BOOL),
    int: TypeDescriptor(TypeKind.INT, bits=64),
    float: TypeDescriptor(TypeKind.FLOAT, bits=64),
    str: TypeDescriptor(TypeKind.TEXT),
    timedelta: TypeDescriptor(TypeKind.DURATION),
    Any: ANY,
    object: ANY,
}

_SEQUENCE_ORIGINS = (
    list,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
)


def describe(annotation: Any) -> TypeDescriptor:
    """
    Build the descriptor for a type annotation.

    Accepts an existing TypeDescriptor unchanged, so callers can pass either.
    """
    if isinstance(annotation, TypeDescriptor):
        return annotation

    if isinstance(annotation, type) or annotation is Any:
        simple = _SIMPLE.get(annotation)
        if simple is not None:
            return simple

    origin = get_origin(annotation)
    args = get_args(annotation)

    if origin is Annotated:
        base = args[0]
        for extra in args[1:]:
            if isinstance(extra, Width):
                return _with_width(base, extra)
        return describe(base)

    if origin is Union or origin is types.UnionType:
        members = [a for a in args if a is not type(None)]
        if len(members) == 1 and len(members) < len(args):
            return replace(describe(members[0]), nullable=True)
        return TypeDescriptor(TypeKind.OTHER, python_type=annotation)

    if annotation is list or origin in _SEQUENCE_ORIGINS:
        element = describe(args[0]) if args else ANY
        return TypeDescriptor(TypeKind.SEQUENCE, element=element, container=list)

    if annotation is tuple or origin is tuple:
        if not args or (len(args) == 2 and args[1] is Ellipsis):
            element = describe(args[0]) if args else ANY
            return TypeDescriptor(TypeKind.SEQUENCE, element=element, container=tuple)
        return TypeDescriptor(TypeKind.OTHER, python_type=tuple)

    return TypeDescriptor(TypeKind.OTHER, python_type=annotation)


def _with_width(base: Any, width: Width) -> TypeDescriptor:
    if base is int:
        kind = TypeKind.INT if width.signed else TypeKind.UINT
        if width.bits not in (8, 16, 32, 64):
            raise ValueError(f"Unsupported integer width: {width.bits}")
        return TypeDescriptor(kind, bits=width.bits)
    if base is float:
        if width.bits not in (32, 64):
            raise ValueError(f"Unsupported float width: {width.bits}")
        return TypeDescriptor(TypeKind.FLOAT, bits=width.bits)
    raise ValueError(f"Width applies to int or float, not {base!r}")


def value_kind(value: Any) -> TypeKind:
    """Kind of a runtime dynamic value. None has no kind and is handled first."""
    if isinstance(value, bool):
        return TypeKind.BOOL
    if isinstance(value, int):
        return TypeKind.INT
    if isinstance(value, float):
        return TypeKind.FLOAT
    if isinstance(value, str):
        return TypeKind.TEXT
    if isinstance(value, timedelta):
        return TypeKind.DURATION
    if isinstance(value, (list, tuple)):
        return TypeKind.SEQUENCE
    return TypeKind.OTHER


def is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_assignable(value: Any, declared: TypeDescriptor) -> bool:
    """
    True when `value` can be stored in a `declared` slot without conversion.

    Integers must also lie within the declared width, float32 slots only
    take values float32 represents exactly, and sequences must be of the
    declared container type with every element assignable.
    """
    kind = declared.kind
    if kind is TypeKind.ANY:
        return True
    if value is None:
        return declared.nullable
    if kind is TypeKind.BOOL:
        return isinstance(value, bool)
    if kind in (TypeKind.INT, TypeKind.UINT):
        if not isinstance(value, int) or isinstance(value, bool):
            return False
        low, high = int_bounds(declared.bits, kind is TypeKind.INT)
        return low <= value <= high
    if kind is TypeKind.FLOAT:
        if not isinstance(value, float):
            return False
        return declared.bits != 32 or fits_float32(value)
    if kind is TypeKind.TEXT:
        return isinstance(value, str)
    if kind is TypeKind.DURATION:
        return isinstance(value, timedelta)
    if kind is TypeKind.SEQUENCE:
        return type(value) is declared.container and all(
            is_assignable(item, declared.element) for item in value
        )
    python_type = declared.python_type
    return isinstance(python_type, type) and isinstance(value, python_type)


def zero_value(declared: TypeDescriptor) -> Any:
    """The value a slot takes when the source holds an explicit nil."""
    if declared.nullable:
        return None
    kind = declared.kind
    if kind is TypeKind.BOOL:
        return False
    if kind in (TypeKind.INT, TypeKind.UINT):
        return 0
    if kind is TypeKind.FLOAT:
        return 0.0
    if kind is TypeKind.TEXT:
        return ""
    if kind is TypeKind.DURATION:
        return timedelta(0)
    if kind is TypeKind.SEQUENCE:
        return declared.container()
    return None
