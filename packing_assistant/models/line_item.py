from __future__ import annotations

from dataclasses import dataclass

"""Line item models for parsed order contents.

LineItem is what the item list grammars produce. ClassifiedItem is a display
projection computed on demand from a LineItem name and is never stored on an
OrderEvent, so classification always reflects the current packaging rules.
"""

__all__ = [
    "LineItem",
    "ClassifiedItem",
    "EventStats",
]


@dataclass(frozen=True)
class LineItem:
    """One (name, quantity) pair parsed from an items cell or notes field."""
    name: str
    quantity: int = 1  # always >= 1
    raw_text: str | None = None  # source fragment / line, before quantity extraction


@dataclass(frozen=True)
class ClassifiedItem:
    """SKU / title split of a LineItem name."""
    sku: str  # may be empty
    title: str  # never empty, falls back to the raw name
    quantity: int


@dataclass(frozen=True)
class EventStats:
    hampers: int
    units: int
