"""
BinderConfig schema.

Settings that shape every bind call of a RecordBinder. YAML files are
parsed into this type by ``binder_config.loader``; code may also build it
directly.
"""

from __future__ import annotations

from dataclasses import dataclass

from binder_kernel.services.field_resolver import validate_pattern


@dataclass(frozen=True)
class BinderConfig:
    """
    Binder settings.

    patterns:
        Naming patterns used when a bind call supplies none. Empty means
        the field name is the key.
    write_protected:
        Write private (``_name``) and frozen-dataclass fields through the
        escape hatch. When false such fields fail with UnsettableField.
    strip_private_prefix:
        Render private field ``_token`` as key name ``token``. Off by
        default: keys use the field name verbatim.
    """

    patterns: tuple[str, ...] = ()
    write_protected: bool = True
    strip_private_prefix: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.patterns, str):
            raise ValueError("patterns must be a sequence of strings, not a single string")
        object.__setattr__(self, "patterns", tuple(self.patterns))
        for pattern in self.patterns:
            validate_pattern(pattern)
        for name in ("write_protected", "strip_private_prefix"):
            if not isinstance(getattr(self, name), bool):
                raise ValueError(f"{name} must be a boolean, got {getattr(self, name)!r}")
