"""Domain models for the order sheet ingestion pipeline."""

from .config_models import FieldSynonyms, IngestConfig, LeadTimes
from .event_detail import EventDetail, KeyDates, StatusCategory
from .ingest_result import FileStat, IngestResult
from .line_item import ClassifiedItem, EventStats, LineItem
from .order_event import ItemSource, OrderEvent
from .skip_record import SkipRecord

__all__ = [
    # Configuration models
    "FieldSynonyms",
    "IngestConfig",
    "LeadTimes",
    # Pipeline models
    "LineItem",
    "ClassifiedItem",
    "EventStats",
    "ItemSource",
    "OrderEvent",
    "SkipRecord",
    "IngestResult",
    "FileStat",
    # Detail view
    "EventDetail",
    "KeyDates",
    "StatusCategory",
]
