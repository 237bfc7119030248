from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .order_event import OrderEvent
from .skip_record import SkipRecord

"""Ingestion result models.

IngestResult is what one batch (one sheet) produces; FileStat is the per-file
line kept by the CLI when several files are ingested in one run.
"""

__all__ = [
    "IngestResult",
    "FileStat",
]


@dataclass(frozen=True)
class IngestResult:
    """Events and counters for a single ingested batch."""
    events: list[OrderEvent]
    total_rows: int
    skipped_rows: int  # rows without order id or parseable delivery date
    dropped_groups: int  # date-tag groups whose tag failed to normalize
    dropped_fragments: int  # fragments lost with those groups
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    skips: list[SkipRecord] = field(default_factory=list)
    file_name: str = ""


@dataclass(frozen=True)
class FileStat:
    """Per-file outcome for a CLI run."""
    file_name: str
    status: str  # success/failed
    events: int
    rows: int
    skipped_rows: int
    dropped_groups: int
    elapsed_seconds: float
    error: str | None = None
