from __future__ import annotations

from collections.abc import Iterable

from ..models.config_models import IngestConfig
from ..models.line_item import EventStats, LineItem
from ..models.order_event import OrderEvent
from .classifier import packaging_matcher, split_sku_title

"""Per-event aggregate counts.

Recomputed on every call: classification rules (packaging codes) can change
independently of already materialized events.
"""

__all__ = [
    "compute_item_stats",
    "compute_stats",
]

DEFAULT_PACKAGING_CODES = IngestConfig.default().packaging_codes


def compute_item_stats(
    items: Iterable[LineItem], packaging_codes: Iterable[str] = DEFAULT_PACKAGING_CODES
) -> EventStats:
    """Sum units over all items and hampers over items with a packaging SKU."""
    matcher = packaging_matcher(packaging_codes)
    units = 0
    hampers = 0
    for item in items:
        qty = item.quantity or 1
        units += qty
        sku, _ = split_sku_title(item.name)
        # SKU prefix only; a code inside the title does not count
        if matcher.match(sku):
            hampers += qty
    return EventStats(hampers=hampers, units=units)


def compute_stats(
    event: OrderEvent, packaging_codes: Iterable[str] = DEFAULT_PACKAGING_CODES
) -> EventStats:
    return compute_item_stats(event.items, packaging_codes)
