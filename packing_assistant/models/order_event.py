from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime, time, tzinfo
from enum import Enum
from typing import Any

from .line_item import LineItem

"""OrderEvent domain model.

One OrderEvent exists per (order, resolved delivery date) pair. A source row
normally yields one event; a row whose items cell carries per-item date tags
yields one event per distinct tag.
"""

__all__ = [
    "ItemSource",
    "OrderEvent",
]


class ItemSource(Enum):
    """Where the event's item list came from.

    - DATE_GROUP: injected per-date list built from tagged fragments (never re-parsed)
    - OFFLINE: offline-items grammar over the primary items cell
    - NOTES: notes grammar fallback
    - NONE: nothing parsed
    """
    DATE_GROUP = "date_group"
    OFFLINE = "offline"
    NOTES = "notes"
    NONE = "none"


@dataclass(frozen=True)
class OrderEvent:
    """Canonical delivery event produced by the materializer."""
    order_id: str
    date: date  # canonical date, never re-interpreted once set
    items: tuple[LineItem, ...]
    source_row: Mapping[str, Any]  # read-only back reference for display of untouched fields
    item_source: ItemSource = ItemSource.NONE
    row_number: int = 0  # 1-based position in the source batch
    date_tag: str | None = None  # "DD-MM-YY" tag when split from a dated group
    tz: tzinfo | None = None

    @property
    def title(self) -> str:
        return self.order_id

    @property
    def start(self) -> datetime:
        return datetime.combine(self.date, time.min, tzinfo=self.tz)

    @property
    def end(self) -> datetime:
        return datetime.combine(self.date, time.max, tzinfo=self.tz)
