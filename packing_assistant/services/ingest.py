from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..excel.reader import MissingColumnsError, SheetHeaderError, read_order_sheet
from ..models.config_models import IngestConfig
from ..models.ingest_result import IngestResult
from ..models.order_event import OrderEvent
from ..models.skip_record import SkipRecord
from .header_resolver import has_any_header
from .materializer import materialize_row

"""Batch ingestion: raw rows -> ordered OrderEvents.

Validates once per batch that an order-id column and a delivery-date column
exist under some accepted spelling (batch-level failure otherwise), then maps
the materializer over the rows. Rows are independent; output order is row
order, then date-tag first-seen order within a row.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "REQUIRED_FIELDS",
    "validate_headers",
    "ingest_rows",
    "ingest_file",
]

REQUIRED_FIELDS: tuple[str, ...] = ("order_id", "delivery_date")


def validate_headers(columns: Iterable[str], config: IngestConfig) -> None:
    """Check that every required logical field has a column.

    Raises:
        MissingColumnsError: naming each missing field and its accepted spellings
    """
    cols = list(columns)
    missing = []
    for name in REQUIRED_FIELDS:
        candidates = config.synonyms.for_field(name)
        if not has_any_header(cols, candidates):
            missing.append(f"{name} (one of {list(candidates)})")
    if missing:
        raise MissingColumnsError(f"missing required columns: {', '.join(missing)}")


def ingest_rows(
    rows: Sequence[Mapping[str, Any]],
    config: IngestConfig | None = None,
    *,
    columns: Iterable[str] | None = None,
    file_name: str = "",
) -> IngestResult:
    """Ingest a batch of raw rows.

    Args:
        rows: Raw rows in source order
        config: Field vocabulary (defaults to IngestConfig.default())
        columns: Header row; taken from the first row's keys when omitted
        file_name: Source name for diagnostics

    Returns:
        IngestResult with events and drop counters

    Raises:
        SheetHeaderError: no header can be determined (no columns, no rows)
        MissingColumnsError: order id or delivery date column missing
    """
    cfg = config or IngestConfig.default()
    start_time = datetime.now(UTC)

    if columns is None:
        if not rows:
            raise SheetHeaderError("batch has no rows and no header")
        columns = list(rows[0].keys())
    validate_headers(columns, cfg)

    events: list[OrderEvent] = []
    skips: list[SkipRecord] = []
    skipped_rows = 0
    dropped_groups = 0
    dropped_fragments = 0
    for index, row in enumerate(rows, start=1):
        outcome = materialize_row(row, cfg, row_number=index, file_name=file_name)
        events.extend(outcome.events)
        skips.extend(outcome.skips)
        if outcome.skipped:
            skipped_rows += 1
        dropped_groups += outcome.dropped_groups
        dropped_fragments += outcome.dropped_fragments

    end_time = datetime.now(UTC)
    elapsed = (end_time - start_time).total_seconds()
    logger.debug(
        f"ingested {file_name or '<rows>'}: rows={len(rows)} events={len(events)} "
        f"skipped_rows={skipped_rows} dropped_groups={dropped_groups}"
    )
    return IngestResult(
        events=events,
        total_rows=len(rows),
        skipped_rows=skipped_rows,
        dropped_groups=dropped_groups,
        dropped_fragments=dropped_fragments,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=elapsed,
        skips=skips,
        file_name=file_name,
    )


def ingest_file(path: Path, config: IngestConfig | None = None) -> IngestResult:
    """Read the first sheet of `path` and ingest it."""
    sheet = read_order_sheet(path)
    return ingest_rows(sheet.rows, config, columns=sheet.columns, file_name=path.name)
