from __future__ import annotations

import re

from packing_assistant.models.ingest_result import FileStat
from packing_assistant.services.summary import format_seconds, render_summary_line

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+files=([0-9]+)/(\1)\s+success=([0-9]+)\s+failed=([0-9]+)\s+"
    r"events=([0-9]+)\s+rows=([0-9]+)\s+skipped_rows=([0-9]+)\s+dropped_groups=([0-9]+)\s+"
    r"elapsed_sec=([0-9]+\.?[0-9]*)$"
)


def _stat(name: str, status: str = "success", events: int = 0, rows: int = 0, skipped: int = 0, groups: int = 0):
    return FileStat(
        file_name=name,
        status=status,
        events=events,
        rows=rows,
        skipped_rows=skipped,
        dropped_groups=groups,
        elapsed_seconds=0.1,
    )


def test_render_summary_line_all_success():
    line = render_summary_line(2, [_stat("a.xlsx", events=5, rows=4, skipped=1), _stat("b.csv", events=2, rows=2, groups=1)], 2.0)
    m = SUMMARY_PATTERN.match(line)
    assert m, line
    assert m.group(1) == "2"
    assert m.group(3) == "2"
    assert m.group(4) == "0"
    assert m.group(5) == "7"
    assert m.group(6) == "6"
    assert m.group(7) == "1"
    assert m.group(8) == "1"
    assert m.group(9) == "2"


def test_render_summary_line_partial_failure():
    line = render_summary_line(2, [_stat("a.xlsx", events=1, rows=1), _stat("bad.csv", status="failed")], 0.25)
    assert "success=1 failed=1" in line
    assert line.endswith("elapsed_sec=0.25")


def test_render_summary_line_no_files():
    assert render_summary_line(0, [], 0.0) == (
        "SUMMARY files=0/0 success=0 failed=0 events=0 rows=0 skipped_rows=0 dropped_groups=0 elapsed_sec=0"
    )


def test_format_seconds_avoids_scientific_notation():
    assert format_seconds(0.0000123) == "0.000012"
    assert "e" not in format_seconds(1.5e-05)
    assert format_seconds(3.0) == "3"
