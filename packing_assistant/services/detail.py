from __future__ import annotations

from collections.abc import Mapping
from datetime import date, timedelta
from typing import Any

from ..models.config_models import IngestConfig
from ..models.event_detail import EventDetail, KeyDates, StatusCategory
from ..models.line_item import EventStats
from ..models.order_event import OrderEvent
from .classifier import classify_item
from .date_normalizer import normalize_date
from .header_resolver import normalize_header_name, resolve_field
from .materializer import cell_text
from .stats import compute_stats

"""Event detail projection and one-line event summary.

Builds the data behind an event's detail view from the event and its source
row: status category, key dates (explicit or derived from lead times), the
classified item table, notes and the leftover columns.
"""

__all__ = [
    "status_category",
    "key_dates",
    "leftover_fields",
    "display_field_values",
    "build_event_detail",
    "render_event_summary",
]

# Checked in order, substring match on the lowercased status
_STATUS_KEYWORDS: tuple[tuple[str, StatusCategory], ...] = (
    ("pending", StatusCategory.PENDING),
    ("printed", StatusCategory.PRINTED),
    ("packed", StatusCategory.PACKED),
    ("shipped", StatusCategory.SHIPPED),
    ("cancel", StatusCategory.CANCELLED),
)


def status_category(raw_status: Any) -> StatusCategory:
    text = cell_text(raw_status).lower()
    for keyword, category in _STATUS_KEYWORDS:
        if keyword in text:
            return category
    return StatusCategory.UNKNOWN


def _explicit_or_offset(raw: Any, delivery: date, offset_days: int) -> tuple[date, bool]:
    parsed = normalize_date(raw)
    if parsed is not None:
        return parsed, False
    return delivery - timedelta(days=max(1, offset_days)), True


def key_dates(event: OrderEvent, config: IngestConfig | None = None) -> KeyDates:
    """Delivery, dispatch and packing dates for an event.

    Dispatch and packing come from their own columns when parseable, else
    delivery minus the configured lead time (at least one day). Collateral
    and holding have no column and are always delivery minus their lead time.
    """
    cfg = config or IngestConfig.default()
    row = event.source_row
    dispatch, dispatch_derived = _explicit_or_offset(
        resolve_field(row, cfg.synonyms.dispatch_date), event.date, cfg.lead_times.dispatchers
    )
    packing, packing_derived = _explicit_or_offset(
        resolve_field(row, cfg.synonyms.packing_date), event.date, cfg.lead_times.packers
    )
    return KeyDates(
        delivery=event.date,
        dispatch=dispatch,
        packing=packing,
        collateral=event.date - timedelta(days=cfg.lead_times.collaterals),
        holding=event.date - timedelta(days=cfg.lead_times.holders),
        dispatch_derived=dispatch_derived,
        packing_derived=packing_derived,
    )


def _has_content(value: Any) -> bool:
    text = cell_text(value).strip()
    return text != "" and text.lower() != "null"


def leftover_fields(row: Mapping[str, Any], config: IngestConfig | None = None) -> list[tuple[str, Any]]:
    """Columns not covered by the display fields, in source order, empty values removed."""
    cfg = config or IngestConfig.default()
    excluded = {normalize_header_name(h) for h in cfg.display_fields}
    return [
        (key, value)
        for key, value in row.items()
        if normalize_header_name(key) not in excluded and _has_content(value)
    ]


def display_field_values(row: Mapping[str, Any], config: IngestConfig | None = None) -> list[tuple[str, Any]]:
    cfg = config or IngestConfig.default()
    out: list[tuple[str, Any]] = []
    for header in cfg.display_fields:
        value = resolve_field(row, [header])
        if _has_content(value):
            out.append((header, value))
    return out


def render_event_summary(stats: EventStats) -> str:
    return f"Hampers: {stats.hampers} • Units: {stats.units}"


def build_event_detail(event: OrderEvent, config: IngestConfig | None = None) -> EventDetail:
    cfg = config or IngestConfig.default()
    row = event.source_row
    status = cell_text(resolve_field(row, cfg.synonyms.status)).strip()

    notes_parts = [
        cell_text(resolve_field(row, cfg.synonyms.notes)).strip(),
        cell_text(resolve_field(row, cfg.synonyms.gift_message)).strip(),
    ]
    raw_items = (
        cell_text(resolve_field(row, cfg.synonyms.items))
        or cell_text(resolve_field(row, cfg.synonyms.notes))
        or "-"
    )

    return EventDetail(
        title=event.title,
        status=status,
        status_category=status_category(status),
        key_dates=key_dates(event, cfg),
        items=[classify_item(item) for item in event.items],
        stats=compute_stats(event, cfg.packaging_codes),
        notes="\n\n".join(p for p in notes_parts if p),
        fields=display_field_values(row, cfg),
        extra=leftover_fields(row, cfg),
        raw_items_text=raw_items,
    )
