from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""SkipRecord model for ingestion diagnostics.

Rows and date groups that the pipeline drops are not errors; they are simply
absent from the output. A SkipRecord keeps a trace of each drop so callers can
surface counts or write them out as JSON Lines without changing that policy.
"""

__all__ = [
    "SkipRecord",
    "MISSING_ORDER_ID",
    "UNPARSEABLE_DELIVERY_DATE",
    "UNPARSEABLE_DATE_TAG",
]

MISSING_ORDER_ID = "MISSING_ORDER_ID"
UNPARSEABLE_DELIVERY_DATE = "UNPARSEABLE_DELIVERY_DATE"
UNPARSEABLE_DATE_TAG = "UNPARSEABLE_DATE_TAG"


@dataclass(frozen=True)
class SkipRecord:
    """Structured skip record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Source file name ("" when rows did not come from a file)
        row: Row number (1-based, first data row = 1)
        reason: Skip classification in UPPER_SNAKE_CASE format
        detail: Offending raw value or short description
    """
    timestamp: str
    file: str
    row: int
    reason: str
    detail: str

    @staticmethod
    def create(file: str, row: int, reason: str, detail: str) -> SkipRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return SkipRecord(timestamp=ts, file=file, row=row, reason=reason, detail=detail)

    def to_json_line(self) -> str:
        """Serialize to a JSON Lines entry with a fixed key set."""
        return json.dumps(asdict(self), ensure_ascii=False)
