from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the order sheet ingestion pipeline.

These are the only externally configurable surfaces of the pipeline: ordered
header synonym lists per logical field, the packaging code set, lead times used
to derive key dates, and the display field vocabulary. The YAML loader in
packing_assistant/config/loader.py overlays user values on `IngestConfig.default()`.
"""

__all__ = [
    "FieldSynonyms",
    "LeadTimes",
    "IngestConfig",
    "DEFAULT_DISPLAY_FIELDS",
]


DEFAULT_DISPLAY_FIELDS: tuple[str, ...] = (
    "Order Number",
    "Order Status",
    "Delivery Date",
    "Dispatch Date",
    "Packing Date",
    "Rack",
    "Area",
    "Customer Name",
    "Customer Email",
    "Customer Phone",
    "Billing Address",
    "Billing City",
    "Billing State",
    "Billing Pincode",
    "Shipping Address",
    "Shipping City",
    "Shipping State",
    "Shipping Pincode",
    "Offline Order Items",
    "Notes",
    "Gift Message",
)


@dataclass(frozen=True)
class FieldSynonyms:
    """Ordered header candidates per logical field (most preferred first)."""
    order_id: tuple[str, ...] = (
        "Order Number", "Order No", "Order#", "Order Id", "OrderID", "Order Alias",
    )
    delivery_date: tuple[str, ...] = (
        "Delivery Date", "Delivery Dt", "DeliveryDate", "Delivery", "Dispatch Date (First)",
    )
    # Cells that may carry per-item "DD-MM-YY-" date tags; tried before `items`
    scheduled_items: tuple[str, ...] = ("Add Offline Order", "Add Order")
    items: tuple[str, ...] = (
        "Offline Order Items", "Items", "Products Ordered", "Add Offline Order", "Add Order",
    )
    notes: tuple[str, ...] = ("Notes", "Special Instructions")
    status: tuple[str, ...] = ("Order Status", "Status")
    dispatch_date: tuple[str, ...] = ("Dispatch Date",)
    packing_date: tuple[str, ...] = ("Packing Date",)
    gift_message: tuple[str, ...] = ("Gift Message",)

    def for_field(self, name: str) -> tuple[str, ...]:
        return getattr(self, name)


@dataclass(frozen=True)
class LeadTimes:
    """Day offsets (T - X) from delivery used when a row lacks explicit dates."""
    packers: int = 2
    collaterals: int = 2
    dispatchers: int = 1
    holders: int = 0


@dataclass(frozen=True)
class IngestConfig:
    """Root configuration object for ingestion and event detail projection."""
    synonyms: FieldSynonyms = field(default_factory=FieldSynonyms)
    packaging_codes: tuple[str, ...] = ("PKG", "HAMP", "BOX", "BAG")
    lead_times: LeadTimes = field(default_factory=LeadTimes)
    display_fields: tuple[str, ...] = DEFAULT_DISPLAY_FIELDS
    timezone: str | None = None  # None -> naive local start/end instants

    @staticmethod
    def default() -> IngestConfig:
        return IngestConfig()
