"""
Duration literals: "300ms", "-1.5h", "1h30m", "2h45m10.5s".

Grammar: an optional sign followed by one or more (decimal number, unit)
pairs, or the bare literal "0". Units are ns, us (also µs / μs), ms, s, m
and h. Values are accumulated in integer nanoseconds and must fit a signed
64-bit count; the resulting timedelta is truncated toward zero to
microsecond resolution.
"""

from __future__ import annotations

import re
from datetime import timedelta

from binder_kernel.exceptions import ValueParseError

_NANOS_PER_UNIT: dict[str, int] = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # micro sign
    "μs": 1_000,  # greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

_COMPONENT_RE = re.compile(r"(?P<whole>[0-9]*)(?:\.(?P<frac>[0-9]*))?(?P<unit>[^0-9.]*)")
_MAX_NANOS = (1 << 63) - 1


def parse_duration(text: str) -> timedelta:
    """Parse a duration literal into a timedelta."""
    rest = text
    negative = False
    if rest[:1] in ("+", "-"):
        negative = rest[0] == "-"
        rest = rest[1:]
    if rest == "0":
        return timedelta(0)
    if not rest:
        raise ValueParseError(text, "duration")

    limit = _MAX_NANOS + 1 if negative else _MAX_NANOS
    total = 0
    while rest:
        match = _COMPONENT_RE.match(rest)
        whole, frac, unit = match["whole"], match["frac"] or "", match["unit"]
        if not whole and not frac:
            raise ValueParseError(text, "duration")
        if not unit:
            raise ValueParseError(text, "duration", "missing unit")
        scale = _NANOS_PER_UNIT.get(unit)
        if scale is None:
            raise ValueParseError(text, "duration", f"unknown unit {unit!r}")
        nanos = int(whole or "0") * scale
        if frac:
            nanos += int(frac) * scale // 10 ** len(frac)
        total += nanos
        if total > limit:
            raise ValueParseError(text, "duration", "value out of range")
        rest = rest[match.end():]

    micros = total // 1000
    return timedelta(microseconds=-micros if negative else micros)


def _trim_fraction(whole: int, fraction: int, digits: int) -> str:
    if not fraction:
        return str(whole)
    return f"{whole}.{fraction:0{digits}d}".rstrip("0")


def format_duration(value: timedelta) -> str:
    """
    Render a timedelta in the same grammar parse_duration accepts.

    Examples: "0s", "750µs", "1.5ms", "45s", "1m30.5s", "1h0m0s".
    """
    micros = (value.days * 86_400 + value.seconds) * 1_000_000 + value.microseconds
    sign = "-" if micros < 0 else ""
    micros = abs(micros)
    if micros == 0:
        return "0s"
    if micros < 1000:
        return f"{sign}{micros}µs"
    if micros < 1_000_000:
        return f"{sign}{_trim_fraction(micros // 1000, micros % 1000, 3)}ms"

    seconds, fraction = divmod(micros, 1_000_000)
    hours, seconds = divmod(seconds, 3600)
    minutes, seconds = divmod(seconds, 60)
    text = f"{_trim_fraction(seconds, fraction, 6)}s"
    if hours:
        return f"{sign}{hours}h{minutes}m{text}"
    if minutes:
        return f"{sign}{minutes}m{text}"
    return f"{sign}{text}"
