from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any

from .line_item import ClassifiedItem, EventStats

"""Detail view data for one OrderEvent.

Everything a consumer needs to show an event's detail (dates, item table,
notes, remaining fields) without re-deriving anything. Layout is not modeled.
"""

__all__ = [
    "StatusCategory",
    "KeyDates",
    "EventDetail",
]


class StatusCategory(Enum):
    PENDING = "pending"
    PRINTED = "printed"
    PACKED = "packed"
    SHIPPED = "shipped"
    CANCELLED = "cancelled"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class KeyDates:
    delivery: date
    dispatch: date
    packing: date
    collateral: date
    holding: date
    dispatch_derived: bool = False  # True when computed from lead times
    packing_derived: bool = False


@dataclass(frozen=True)
class EventDetail:
    title: str
    status: str
    status_category: StatusCategory
    key_dates: KeyDates
    items: list[ClassifiedItem]
    stats: EventStats
    notes: str  # Notes and Gift Message, blank-line separated
    fields: list[tuple[str, Any]]  # display fields present in the row
    extra: list[tuple[str, Any]]  # every other non-empty column
    raw_items_text: str  # shown when no items were parsed
