from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.skip_record import SkipRecord

"""Skip log buffering.

Skipped rows and dropped date groups are collected during a run and written as
JSON Lines (fixed key set) to `logs/skipped-YYYYMMDD-HHMMSS.log` (UTC) on
flush. The file path is fixed on first access; later flushes append to it.
"""

__all__ = [
    "SkipRecord",
    "SkipLogBuffer",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class SkipLogBuffer:
    """In-memory buffer for skip records. Single-threaded use only."""
    def __init__(self, logs_dir: Path | None = None) -> None:
        self._records: list[SkipRecord] = []
        self._file_path: Path | None = None
        self._logs_dir = logs_dir or LOGS_DIR

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"skipped-{stamp}.log"
        return self._file_path

    def append(self, record: SkipRecord) -> None:
        self._records.append(record)

    def extend(self, records: list[SkipRecord]) -> None:
        self._records.extend(records)

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._records)

    def flush(self) -> Path | None:
        """Append buffered records to the log file; None when nothing was buffered."""
        if not self._records:
            return None
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
