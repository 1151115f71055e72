"""
binder_config -- settings for the record binder.

Architecture position:
    Sits above ``binder_kernel``. The kernel never imports this package at
    module load; ``RecordBinder`` accepts a ``BinderConfig`` instance.
"""

from __future__ import annotations

from pathlib import Path

from binder_config.loader import load_binder_config, load_yaml_file, parse_binder_config
from binder_config.schema import BinderConfig
from binder_kernel.services.record_binder import RecordBinder


def binder_from_file(path: str | Path) -> RecordBinder:
    """Build a RecordBinder configured from a YAML settings file."""
    return RecordBinder(load_binder_config(path))


__all__ = [
    "BinderConfig",
    "binder_from_file",
    "load_binder_config",
    "load_yaml_file",
    "parse_binder_config",
]
