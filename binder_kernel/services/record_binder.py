"""
RecordBinder -- populate a typed record from a loosely-typed mapping.

Responsibility:
    For every declared field of the destination record: resolve its source
    entry through the naming patterns, convert the value to the field's
    declared type, and store it. Failures are collected per field and
    surfaced together at the end of the call.

Architecture position:
    Kernel > Services -- orchestrates FieldResolver, ValueCoercer and
    CollectionCoercer over the accessor table from ``domain.fields``.

Invariants enforced:
    - Fields are processed in declaration order and independently: a
      failure on one field never prevents processing of the others.
    - First matching pattern wins, in the caller's order.
    - A None source value sets the field to its zero value (no failure);
      a missing key is a NotFound failure and leaves the field unchanged.
    - Partial mutation persists: fields that bound successfully stay set
      when BindError is raised for others.

Failure modes:
    - BindError with one FieldFailure per failed field / sequence element.
    - ValueError for a malformed naming pattern (before any field is
      touched).
    - TypeError when the target is not a record instance.

Concurrency:
    No locking. Do not bind the same record from several threads at once;
    sources and pattern lists are only read and may be shared.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from binder_kernel.coercion.scalar import ValueCoercer
from binder_kernel.coercion.sequence import CollectionCoercer
from binder_kernel.domain.dtos import FieldFailure
from binder_kernel.domain.fields import FieldAccessor, record_fields
from binder_kernel.domain.type_kinds import is_assignable, is_sequence, zero_value
from binder_kernel.exceptions import (
    BindError,
    CoercionError,
    ElementCoercionError,
    FieldNotFoundError,
    UnsettableFieldError,
)
from binder_kernel.logging_config import LogContext, get_logger
from binder_kernel.services.field_resolver import resolve, validate_pattern

if TYPE_CHECKING:
    from binder_config.schema import BinderConfig

logger = get_logger("services.record_binder")


class RecordBinder:
    """
    Binds source mappings into record instances.

    Contract:
        ``bind(target, source, *patterns)`` mutates `target` in place and
        returns None, or raises BindError listing every failed field.

    Non-goals:
        - Does NOT parse flags, JSON or YAML into the source mapping.
        - Does NOT validate values beyond type compatibility.
    """

    def __init__(
        self,
        config: BinderConfig | None = None,
        value_coercer: ValueCoercer | None = None,
    ):
        """
        Args:
            config: Default patterns and protected-field policy.
            value_coercer: Scalar coercer; a fresh default one if omitted.
        """
        if config is None:
            from binder_config.schema import BinderConfig

            config = BinderConfig()
        self._config = config
        self._value_coercer = value_coercer or ValueCoercer()
        self._collection_coercer = CollectionCoercer(self._value_coercer)

    @property
    def config(self) -> BinderConfig:
        return self._config

    def bind(self, target: Any, source: Mapping[str, Any], *patterns: str) -> None:
        """
        Bind `source` into the fields of `target`.

        Args:
            target: Record instance (dataclass or annotated class).
            source: Mapping of string keys to dynamic values.
            patterns: Naming patterns tried in order; falls back to the
                configured patterns, then to the field name verbatim.

        Raises:
            BindError: one or more fields failed; the others are bound.
        """
        active = tuple(validate_pattern(p) for p in patterns or self._config.patterns)
        accessors = record_fields(target, write_protected=self._config.write_protected)
        record_type = type(target).__name__

        failures: list[FieldFailure] = []
        with LogContext.bind(record_type=record_type):
            for accessor in accessors:
                with LogContext.bind(field_name=accessor.name):
                    field_failures = self._bind_field(accessor, source, active)
                for failure in field_failures:
                    logger.warning(
                        "field_bind_failed",
                        extra={"field": failure.field, "code": failure.code},
                    )
                failures.extend(field_failures)

            logger.info(
                "bind_completed",
                extra={
                    "field_count": len(accessors),
                    "failure_count": len(failures),
                },
            )

        if failures:
            raise BindError(record_type, failures)

    def _bind_field(
        self,
        accessor: FieldAccessor,
        source: Mapping[str, Any],
        patterns: tuple[str, ...],
    ) -> list[FieldFailure]:
        name = accessor.name
        if accessor.setter is None:
            error = UnsettableFieldError(name, accessor.unsettable_reason)
            return [FieldFailure.from_error(name, error)]

        key_name = accessor.key_name if self._config.strip_private_prefix else name
        try:
            binding = resolve(key_name, source, patterns)
        except FieldNotFoundError as exc:
            return [FieldFailure.from_error(name, exc)]

        value = binding.value
        declared = accessor.declared
        failures: list[FieldFailure] = []

        if value is None:
            converted, strategy = zero_value(declared), "zero"
        elif is_assignable(value, declared):
            converted, strategy = value, "direct"
        else:
            try:
                if is_sequence(value):
                    strategy = "sequence"
                    converted = self._collection_coercer.coerce_sequence(value, declared, name)
                else:
                    strategy = "scalar"
                    converted = self._value_coercer.coerce(value, declared)
            except ElementCoercionError as exc:
                # Elements that converted are still stored
                converted = exc.partial
                failures.extend(exc.failures)
            except CoercionError as exc:
                return [FieldFailure.from_error(name, exc)]

        try:
            accessor.setter(converted)
        except (AttributeError, TypeError) as exc:
            error = UnsettableFieldError(name, str(exc))
            return [*failures, FieldFailure.from_error(name, error)]

        logger.debug(
            "field_bound",
            extra={"source_key": binding.key, "strategy": strategy},
        )
        return failures


_default_binder: RecordBinder | None = None


def bind(target: Any, source: Mapping[str, Any], *patterns: str) -> None:
    """
    Bind `source` into `target` with the default binder.

    Example::

        @dataclass
        class Options:
            sizes: list[int] = field(default_factory=list)
            verbose: bool = False
            name: str = ""

        opts = Options()
        bind(opts, {"--sizes": ["5", "12", "0.5k"], "--verbose": True,
                    "-name": "hello"}, "--%s", "-%s")
        # Options(sizes=[5, 12, 512], verbose=True, name='hello')
    """
    global _default_binder
    if _default_binder is None:
        _default_binder = RecordBinder()
    _default_binder.bind(target, source, *patterns)
