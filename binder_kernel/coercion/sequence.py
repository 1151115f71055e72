"""CollectionCoercer -- sequence-valued sources into sequence or scalar slots."""

from __future__ import annotations

from typing import Any

from binder_kernel.coercion.scalar import ValueCoercer
from binder_kernel.domain.dtos import FieldFailure
from binder_kernel.domain.type_kinds import (
    TypeDescriptor,
    TypeKind,
    describe,
    is_assignable,
    is_sequence,
    zero_value,
)
from binder_kernel.exceptions import (
    CardinalityMismatchError,
    CoercionError,
    ElementCoercionError,
)


class CollectionCoercer:
    """
    Extends a ValueCoercer to sequence sources.

    Sequence destinations are rebuilt element by element. A failed element
    keeps its zero value at its index and does not stop its siblings; all
    element failures are raised together as ElementCoercionError, which
    also carries the partially converted container.

    Scalar destinations accept a sequence of exactly one element, which is
    unwrapped.
    """

    def __init__(self, value_coercer: ValueCoercer | None = None) -> None:
        self.value_coercer = value_coercer or ValueCoercer()

    def coerce_sequence(self, value: Any, declared: Any, field_name: str = "value") -> Any:
        declared = describe(declared)
        if declared.kind is TypeKind.SEQUENCE:
            return self._coerce_elements(value, declared, field_name)
        if declared.kind is TypeKind.ANY:
            return value
        if len(value) != 1:
            raise CardinalityMismatchError(field_name, len(value), declared.name)
        return self.coerce_element(value[0], declared, field_name)

    def coerce_element(self, item: Any, declared: TypeDescriptor, path: str) -> Any:
        """Coerce one element, recursing into nested sequences."""
        if item is None:
            return zero_value(declared)
        if is_assignable(item, declared):
            return item
        if is_sequence(item):
            return self.coerce_sequence(item, declared, path)
        return self.value_coercer.coerce(item, declared)

    def _coerce_elements(self, value: Any, declared: TypeDescriptor, field_name: str) -> Any:
        element = declared.element
        items: list[Any] = []
        failures: list[FieldFailure] = []
        for index, item in enumerate(value):
            path = f"{field_name}[{index}]"
            try:
                items.append(self.coerce_element(item, element, path))
            except ElementCoercionError as exc:
                items.append(exc.partial)
                failures.extend(exc.failures)
            except CoercionError as exc:
                items.append(zero_value(element))
                failures.append(FieldFailure.from_error(path, exc))

        result = declared.container(items)
        if failures:
            raise ElementCoercionError(field_name, failures, result)
        return result
