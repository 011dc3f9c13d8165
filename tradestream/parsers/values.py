"""
Numeric and time parsing for exchange CSV fields.

Exports from recognized exchanges are expected to carry well-formed values,
so these parsers raise ``ValueError`` instead of falling back to a default.
"""

from __future__ import annotations

import math

import pandas as pd


def parse_text(value: str, name: str = "text") -> str:
    """Return a non-empty string cell with surrounding whitespace removed."""
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Missing {name} field")
    return value.strip()


def parse_number(value: str) -> float:
    """Parse a decimal string like '1,234.5678' into a float."""
    if not isinstance(value, str) or not value.strip():
        raise ValueError("Empty numeric field")

    cleaned = value.strip().replace(",", "")
    try:
        result = float(cleaned)
    except ValueError:
        raise ValueError(f"Invalid numeric field: {value!r}") from None

    if not math.isfinite(result):
        raise ValueError(f"Non-finite numeric field: {value!r}")
    return result


def parse_time(value: str) -> int:
    """Parse a date string into Unix epoch milliseconds.

    Strings without an offset are exchange UTC times.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValueError("Empty date field")

    try:
        ts = pd.to_datetime(value.strip(), utc=True)
    except (ValueError, TypeError) as e:
        raise ValueError(f"Invalid date field: {value!r}") from e

    if pd.isna(ts):
        raise ValueError(f"Invalid date field: {value!r}")
    return int(ts.value // 1_000_000)
