"""Row normalization and numeric coercion helpers."""

import math
from collections.abc import Iterable, Mapping
from typing import Any


def normalize_keys(row: Mapping[Any, Any]) -> dict[str, Any]:
    """Return a copy of ``row`` with lower-cased keys."""
    return {str(key).lower(): value for key, value in row.items()}


def normalize_rows(rows: Iterable[Mapping[Any, Any]]) -> list[dict[str, Any]]:
    return [normalize_keys(row) for row in rows]


def is_blank(value: Any) -> bool:
    """True for values that count as missing: None, empty text and NaN."""
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    return isinstance(value, float) and math.isnan(value)


def as_native(value: int | float) -> int | float:
    """Collapse integral floats to int so counts stay counts."""
    if isinstance(value, int):
        return value
    return int(value) if math.isfinite(value) and value.is_integer() else value


def coerce_number(value: Any, *, default: int | float | None = 0) -> int | float | None:
    """Read a numeric cell.

    Blank cells are zero; text that is not a finite number yields ``default``.
    """
    if is_blank(value):
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return as_native(value) if math.isfinite(value) else default
    try:
        number = float(str(value).strip())
    except ValueError:
        return default
    return as_native(number) if math.isfinite(number) else default


def coerce_impressions(value: Any, *, default: int | float | None = 0) -> int | float | None:
    """Read an impressions cell that may contain thousands separators."""
    if isinstance(value, str):
        value = value.replace(",", "")
    return coerce_number(value, default=default)


def coerce_ctr(value: Any) -> float:
    """Read a click-through rate as a ratio.

    ``"12.5%"`` becomes 0.125; plain numbers are already ratios.
    """
    if isinstance(value, str) and value.strip().endswith("%"):
        percent = coerce_number(value.strip()[:-1])
        return percent / 100
    return float(coerce_number(value))
