from __future__ import annotations

from ..models.ingest_result import FileStat

"""SUMMARY line rendering for a CLI run.

Format:
SUMMARY files={total}/{total} success={success} failed={failed} events={events}
rows={rows} skipped_rows={skipped} dropped_groups={groups} elapsed_sec={elapsed}
"""

__all__ = [
    "format_seconds",
    "render_summary_line",
]


def format_seconds(value: float) -> str:
    """Integers without decimals, small values without scientific notation."""
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(value)


def render_summary_line(total_files: int, stats: list[FileStat], elapsed_seconds: float) -> str:
    """Render the SUMMARY line for a run over `total_files` input files.

    Examples:
        >>> stat = FileStat("orders.xlsx", "success", events=3, rows=2,
        ...                 skipped_rows=0, dropped_groups=0, elapsed_seconds=0.5)
        >>> render_summary_line(1, [stat], 2.0)
        'SUMMARY files=1/1 success=1 failed=0 events=3 rows=2 skipped_rows=0 dropped_groups=0 elapsed_sec=2'
    """
    success = sum(1 for s in stats if s.status == "success")
    failed = sum(1 for s in stats if s.status != "success")
    return (
        f"SUMMARY files={total_files}/{total_files} "
        f"success={success} "
        f"failed={failed} "
        f"events={sum(s.events for s in stats)} "
        f"rows={sum(s.rows for s in stats)} "
        f"skipped_rows={sum(s.skipped_rows for s in stats)} "
        f"dropped_groups={sum(s.dropped_groups for s in stats)} "
        f"elapsed_sec={format_seconds(elapsed_seconds)}"
    )
