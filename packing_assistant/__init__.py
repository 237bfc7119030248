"""Normalize loosely-structured order exports into dated delivery events."""

from .models import IngestConfig, LineItem, OrderEvent
from .services.classifier import split_sku_title
from .services.date_normalizer import normalize_date
from .services.ingest import ingest_file, ingest_rows
from .services.materializer import expand_row
from .services.stats import compute_stats

__version__ = "0.3.0"

__all__ = [
    "IngestConfig",
    "LineItem",
    "OrderEvent",
    "compute_stats",
    "expand_row",
    "ingest_file",
    "ingest_rows",
    "normalize_date",
    "split_sku_title",
]
