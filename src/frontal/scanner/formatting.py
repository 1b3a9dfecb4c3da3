"""Human-readable renderings of byte counts and durations."""

from __future__ import annotations

import math

_UNITS = ("Bytes", "KB", "MB")
_K = 1024


def format_bytes(n: int | float) -> str:
    """Render a byte count with the largest unit whose magnitude is >= 1.

    >>> format_bytes(1536)
    '1.5 KB'
    """
    if n < 0 or (isinstance(n, float) and math.isnan(n)):
        raise ValueError(f"byte count must be non-negative, got {n!r}")
    if n == 0:
        return "0 Bytes"

    index = 0
    while index < len(_UNITS) - 1 and n >= _K ** (index + 1):
        index += 1

    scaled = f"{n / _K ** index:.2f}".rstrip("0").rstrip(".")
    return f"{scaled} {_UNITS[index]}"


def format_ms(value) -> str:
    if not _is_number(value):
        return "--"
    return f"{round_half_up(value)} ms"


def format_transfer_bytes(value) -> str:
    """One-decimal byte rendering used for audit savings."""
    if not _is_number(value):
        return "--"
    if value < _K:
        return f"{round_half_up(value)} B"
    if value < _K * _K:
        return f"{value / _K:.1f} KB"
    return f"{value / (_K * _K):.1f} MB"


def round_half_up(value: float, ndigits: int = 0) -> int | float:
    """Round with halves rounding up, to an int unless ndigits is given.

    >>> round_half_up(12.25, 1)
    12.3
    """
    if ndigits:
        factor = 10**ndigits
        return math.floor(value * factor + 0.5) / factor
    return int(math.floor(value + 0.5))


def _is_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isnan(value)
