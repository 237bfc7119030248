from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

"""Header resolution for loosely-named spreadsheet columns.

Source files spell the same column differently ("Order Number", "order_number",
"ORDER-NUMBER", "  Order Number"). Headers are compared on a normalized
form: lowercase, BOM removed, `_`/`-` turned into spaces, whitespace runs
collapsed, trimmed. Matching is exact on that form, never edit-distance based.
"""

__all__ = [
    "normalize_header_name",
    "build_header_lookup",
    "resolve_field",
    "has_any_header",
]

_SEPARATORS = re.compile(r"[_\-]")
_WHITESPACE = re.compile(r"\s+")


def normalize_header_name(header: str) -> str:
    text = str(header).lower().replace("\ufeff", "")
    text = _SEPARATORS.sub(" ", text)
    text = _WHITESPACE.sub(" ", text)
    return text.strip()


def build_header_lookup(row: Mapping[str, Any]) -> dict[str, Any]:
    """Build a normalized-header -> raw value map for one row.

    When two raw headers normalize to the same key the later column wins,
    mirroring a plain dict rebuild over the row's keys.
    """
    return {normalize_header_name(key): value for key, value in row.items()}


def resolve_field(row: Mapping[str, Any], candidates: Iterable[str], default: Any = None) -> Any:
    """Return the value of the first candidate header present in the row.

    Args:
        row: Raw row (header -> cell value)
        candidates: Header spellings, most preferred first
        default: Returned when no candidate matches

    Returns:
        The raw cell value of the first matching candidate, even if that cell
        is empty; `default` when none of the candidates is a column of the row.
    """
    lookup = build_header_lookup(row)
    for candidate in candidates:
        norm = normalize_header_name(candidate)
        if norm in lookup:
            return lookup[norm]
    return default


def has_any_header(columns: Iterable[str], candidates: Iterable[str]) -> bool:
    header_set = {normalize_header_name(c) for c in columns}
    return any(normalize_header_name(c) in header_set for c in candidates)
