from __future__ import annotations

import math
import numbers
import re
from collections.abc import Callable
from datetime import date, datetime, timedelta
from typing import Any

import pandas as pd

"""Date normalization for raw spreadsheet cells.

A raw value is turned into one canonical calendar date by trying, in strict
priority order:

1. spreadsheet serial numbers (1900 epoch, serial 25569 = 1970-01-01) within a
   plausible window, rewritten as a DD-MM-YY string and fed to step 2
2. strict DD-MM-YY (day first, two digit year -> 20YY)
3. ISO 8601 calendar date prefix YYYY-MM-DD
4. fixed-format fallbacks: DD-MM-YY, DD-MM-YYYY, DD/MM/YYYY

Serials and strings go through the same day-first rule, so a value can never
be read month-first. Anything else is unparseable and yields None; callers
drop the owning row or date group. Nothing here raises.
"""

__all__ = [
    "normalize_date",
    "serial_to_date",
    "parse_strict_dd_mm_yy",
    "parse_iso_date",
    "is_plausible_serial",
    "SERIAL_EPOCH_OFFSET",
    "SERIAL_MIN",
    "SERIAL_MAX",
]

SERIAL_EPOCH_OFFSET = 25569  # serial of 1970-01-01
SERIAL_MIN = 36526  # 2000-01-01
SERIAL_MAX = 73051  # 2100-01-01 (exclusive), last date DD-MM-YY can express

_UNIX_EPOCH = date(1970, 1, 1)
_STRICT_DD_MM_YY = re.compile(r"^(\d{2})-(\d{2})-(\d{2})$")
_ISO_PREFIX = re.compile(r"^(\d{4})-(\d{2})-(\d{2})")
_NUMERIC_TEXT = re.compile(r"^\d+(?:\.\d+)?$")

# Legacy inputs: 4-digit years, slashes, single-digit fields
FALLBACK_FORMATS: tuple[str, ...] = ("%d-%m-%y", "%d-%m-%Y", "%d/%m/%Y")


def _as_serial(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        number = float(value)
        return None if math.isnan(number) else number
    if isinstance(value, str) and _NUMERIC_TEXT.match(value.strip()):
        return float(value.strip())
    return None


def is_plausible_serial(serial: float) -> bool:
    return SERIAL_MIN <= serial < SERIAL_MAX


def serial_to_date(serial: float) -> date:
    """Convert a spreadsheet serial to a calendar date; the time-of-day fraction is discarded."""
    return _UNIX_EPOCH + timedelta(days=math.floor(serial) - SERIAL_EPOCH_OFFSET)


def parse_strict_dd_mm_yy(text: str) -> date | None:
    m = _STRICT_DD_MM_YY.match(text)
    if not m:
        return None
    day, month, year = int(m.group(1)), int(m.group(2)), 2000 + int(m.group(3))
    if not 1 <= day <= 31 or not 1 <= month <= 12:
        return None
    try:
        # date() re-validates day against the month length (e.g. 31-04-25)
        return date(year, month, day)
    except ValueError:
        return None


def parse_iso_date(text: str) -> date | None:
    if len(text) < 10:
        return None
    m = _ISO_PREFIX.match(text)
    if not m:
        return None
    try:
        return date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    except ValueError:
        return None


def _parse_fallback(text: str) -> date | None:
    for fmt in FALLBACK_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


_STRING_RULES: tuple[Callable[[str], date | None], ...] = (
    parse_strict_dd_mm_yy,
    parse_iso_date,
    _parse_fallback,
)


def _normalize_text(text: str) -> date | None:
    for rule in _STRING_RULES:
        parsed = rule(text)
        if parsed is not None:
            return parsed
    return None


def normalize_date(value: Any) -> date | None:
    """Normalize a raw cell value to a canonical date.

    Args:
        value: Serial number, date string, or a native date/datetime cell

    Returns:
        The canonical date, or None when no rule matches.

    Examples:
        >>> normalize_date("10-03-25")
        datetime.date(2025, 3, 10)
        >>> normalize_date("10-13-25") is None
        True
        >>> normalize_date(45726)
        datetime.date(2025, 3, 10)
    """
    # NaT subclasses datetime but carries no date
    if value is None or value is pd.NaT:
        return None
    # Typed date cells (pandas/openpyxl) are already unambiguous
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    serial = _as_serial(value)
    if serial is not None:
        if not is_plausible_serial(serial):
            return None
        return parse_strict_dd_mm_yy(serial_to_date(serial).strftime("%d-%m-%y"))

    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    return _normalize_text(text)
