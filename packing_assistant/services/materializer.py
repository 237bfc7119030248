from __future__ import annotations

import logging
import math
import numbers
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any
from zoneinfo import ZoneInfo

import pandas as pd

from ..models.config_models import IngestConfig
from ..models.line_item import LineItem
from ..models.order_event import ItemSource, OrderEvent
from ..models.skip_record import (
    MISSING_ORDER_ID,
    UNPARSEABLE_DATE_TAG,
    UNPARSEABLE_DELIVERY_DATE,
    SkipRecord,
)
from .date_normalizer import normalize_date
from .header_resolver import resolve_field
from .item_parser import consolidate_items, parse_notes, parse_offline_cell, split_items_list

"""Event materialization: one raw row -> zero or more OrderEvents.

Rows without an order id are skipped before any date work. When the items cell
carries per-item "DD-MM-YY-" tags, the row fans out into one event per distinct
tag (first-seen order) with only that tag's items; tags that do not normalize
are dropped with their fragments. Otherwise the row becomes a single event
dated by its delivery-date field, or is skipped when that date is unparseable.

The row itself is never modified; events keep it as a read-only reference.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "RowOutcome",
    "cell_text",
    "resolve_order_id",
    "items_cell_text",
    "parse_line_items",
    "find_date_groups",
    "materialize_row",
    "expand_row",
]

_DATE_TAG = re.compile(r"^(\d{2}-\d{2}-\d{2})-(.+)$")


@dataclass(frozen=True)
class RowOutcome:
    """Result of materializing one row: its events plus drop bookkeeping."""
    events: list[OrderEvent] = field(default_factory=list)
    skips: list[SkipRecord] = field(default_factory=list)
    dropped_groups: int = 0
    dropped_fragments: int = 0

    @property
    def skipped(self) -> bool:
        return not self.events and any(s.reason != UNPARSEABLE_DATE_TAG for s in self.skips)


def cell_text(value: Any) -> str:
    """Render a raw cell as text; empty cells (None/NaN/NaT) become ""."""
    if value is None or value is pd.NaT:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            # 1001.0 from a numeric column is order "1001"
            return str(int(value))
    return str(value)


def resolve_order_id(row: Mapping[str, Any], config: IngestConfig) -> str | None:
    raw = resolve_field(row, config.synonyms.order_id)
    # A numeric zero cell is a blank id; the text "0" is a real one
    if isinstance(raw, numbers.Number) and raw == 0:
        return None
    order_id = cell_text(raw).strip()
    return order_id or None


def items_cell_text(row: Mapping[str, Any], config: IngestConfig) -> str:
    """Text of the cell that may carry dated fragments (scheduled first, then items)."""
    scheduled = cell_text(resolve_field(row, config.synonyms.scheduled_items))
    if scheduled:
        return scheduled
    return cell_text(resolve_field(row, config.synonyms.items))


def parse_line_items(row: Mapping[str, Any], config: IngestConfig) -> tuple[list[LineItem], ItemSource]:
    """Parse a row's items from the primary items cell, falling back to notes.

    The notes grammar runs only when the primary cell is empty or yields no
    items at all. The result is consolidated by case-insensitive name.
    """
    offline = cell_text(resolve_field(row, config.synonyms.items))
    notes = cell_text(resolve_field(row, config.synonyms.notes))

    parsed: list[LineItem] = []
    source = ItemSource.NONE
    if offline.strip():
        parsed = parse_offline_cell(offline)
        source = ItemSource.OFFLINE
    if not parsed and notes.strip():
        parsed = parse_notes(notes)
        source = ItemSource.NOTES
    if not parsed:
        return [], ItemSource.NONE
    return consolidate_items(parsed), source


def find_date_groups(fragments: list[str]) -> dict[str, list[str]]:
    """Group tagged fragments by their DD-MM-YY tag, in first-seen tag order.

    Untagged fragments are not part of any group.
    """
    groups: dict[str, list[str]] = {}
    for fragment in fragments:
        m = _DATE_TAG.match(fragment)
        if m:
            groups.setdefault(m.group(1), []).append(m.group(2))
    return groups


@lru_cache(maxsize=16)
def _zone(name: str) -> ZoneInfo:
    return ZoneInfo(name)


def materialize_row(
    row: Mapping[str, Any],
    config: IngestConfig | None = None,
    *,
    row_number: int = 0,
    file_name: str = "",
) -> RowOutcome:
    """Materialize OrderEvents for a single raw row.

    Args:
        row: Raw row (header -> cell value); left untouched
        config: Field vocabulary (defaults to IngestConfig.default())
        row_number: 1-based row position, carried into events and skip records
        file_name: Source file name for skip records

    Returns:
        RowOutcome with 0..N events. Never raises for bad cell content.
    """
    cfg = config or IngestConfig.default()
    tz = _zone(cfg.timezone) if cfg.timezone else None

    order_id = resolve_order_id(row, cfg)
    if order_id is None:
        logger.debug(f"row {row_number}: no order id, skipped")
        return RowOutcome(skips=[SkipRecord.create(file_name, row_number, MISSING_ORDER_ID, "")])

    groups = find_date_groups(split_items_list(items_cell_text(row, cfg)))
    if groups:
        events: list[OrderEvent] = []
        skips: list[SkipRecord] = []
        dropped_groups = 0
        dropped_fragments = 0
        for tag, remainders in groups.items():
            delivery = normalize_date(tag)
            if delivery is None:
                dropped_groups += 1
                dropped_fragments += len(remainders)
                logger.debug(
                    f"row {row_number}: order {order_id} date tag {tag!r} unparseable, "
                    f"{len(remainders)} fragment(s) dropped"
                )
                skips.append(SkipRecord.create(file_name, row_number, UNPARSEABLE_DATE_TAG, tag))
                continue
            items = parse_offline_cell(", ".join(remainders))
            source = ItemSource.DATE_GROUP
            if not items:
                items, source = parse_line_items(row, cfg)
            events.append(
                OrderEvent(
                    order_id=order_id,
                    date=delivery,
                    items=tuple(items),
                    source_row=row,
                    item_source=source,
                    row_number=row_number,
                    date_tag=tag,
                    tz=tz,
                )
            )
        return RowOutcome(
            events=events,
            skips=skips,
            dropped_groups=dropped_groups,
            dropped_fragments=dropped_fragments,
        )

    raw_delivery = resolve_field(row, cfg.synonyms.delivery_date)
    delivery = normalize_date(raw_delivery)
    if delivery is None:
        logger.debug(f"row {row_number}: order {order_id} delivery date {raw_delivery!r} unparseable, skipped")
        return RowOutcome(
            skips=[
                SkipRecord.create(file_name, row_number, UNPARSEABLE_DELIVERY_DATE, cell_text(raw_delivery))
            ]
        )
    items, source = parse_line_items(row, cfg)
    return RowOutcome(
        events=[
            OrderEvent(
                order_id=order_id,
                date=delivery,
                items=tuple(items),
                source_row=row,
                item_source=source,
                row_number=row_number,
                tz=tz,
            )
        ]
    )


def expand_row(row: Mapping[str, Any], config: IngestConfig | None = None) -> list[OrderEvent]:
    """Pure RawRow -> OrderEvents mapping (drop bookkeeping discarded)."""
    return materialize_row(row, config).events
