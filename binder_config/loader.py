"""
Configuration Loader (``binder_config.loader``).

Responsibility
--------------
Loads binder settings from YAML and parses them into a frozen
``BinderConfig``. Only binder settings are read here; the source mappings
being bound are produced elsewhere.

A settings file is either flat or nested under a ``binder`` key::

    binder:
      patterns: ["--%s", "-%s"]
      write_protected: true
      strip_private_prefix: false

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Unknown keys, wrong types or bad patterns  -> ``ValueError``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from binder_config.schema import BinderConfig

_KNOWN_KEYS = frozenset({"patterns", "write_protected", "strip_private_prefix"})


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ValueError: if the document is not a mapping.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at top level, got {type(data).__name__}")
    return data


def parse_binder_config(data: dict[str, Any]) -> BinderConfig:
    """Parse a ``BinderConfig`` from a dict."""
    section = data.get("binder", data)
    if section is None:
        return BinderConfig()
    if not isinstance(section, dict):
        raise ValueError(f"binder section must be a mapping, got {type(section).__name__}")

    unknown = sorted(set(section) - _KNOWN_KEYS)
    if unknown:
        raise ValueError(f"Unknown binder setting(s): {', '.join(unknown)}")

    patterns = section.get("patterns") or ()
    if isinstance(patterns, str):
        patterns = (patterns,)
    if not isinstance(patterns, (list, tuple)):
        raise ValueError(f"patterns must be a list, got {type(patterns).__name__}")

    return BinderConfig(
        patterns=tuple(patterns),
        write_protected=section.get("write_protected", True),
        strip_private_prefix=section.get("strip_private_prefix", False),
    )


def load_binder_config(path: str | Path) -> BinderConfig:
    """Load and parse a binder settings file."""
    return parse_binder_config(load_yaml_file(Path(path)))
