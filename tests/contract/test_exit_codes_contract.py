from __future__ import annotations

from pathlib import Path

from packing_assistant.cli import main as cli_main
from packing_assistant.cli.app import EXIT_FATAL, EXIT_PARTIAL_FAILURE, EXIT_SUCCESS_ALL

"""Exit code contract: 0 all files ingested, 2 some file failed, 1 fatal."""

GOOD_CSV = "Order Number,Delivery Date,Items\nA-1,10-03-25,BOX - 1\n"
BAD_CSV = "Order Number,Ship Date\nA-1,10-03-25\n"


def test_exit_codes_constants():
    assert (EXIT_SUCCESS_ALL, EXIT_FATAL, EXIT_PARTIAL_FAILURE) == (0, 1, 2)


def test_exit_success(temp_workdir: Path, make_csv):
    make_csv(temp_workdir / "data", "good.csv", GOOD_CSV)
    assert cli_main(["data"]) == EXIT_SUCCESS_ALL


def test_exit_partial(temp_workdir: Path, make_csv):
    make_csv(temp_workdir / "data", "good.csv", GOOD_CSV)
    make_csv(temp_workdir / "data", "bad.csv", BAD_CSV)
    assert cli_main(["data"]) == EXIT_PARTIAL_FAILURE


def test_exit_all_failed(temp_workdir: Path, make_csv):
    make_csv(temp_workdir / "data", "bad.csv", BAD_CSV)
    assert cli_main(["data"]) == EXIT_PARTIAL_FAILURE


def test_exit_fatal_on_missing_path(temp_workdir: Path):
    assert cli_main(["nowhere"]) == EXIT_FATAL


def test_exit_fatal_on_empty_directory(temp_workdir: Path):
    assert cli_main(["data"]) == EXIT_FATAL


def test_exit_partial_on_unreadable_workbook(temp_workdir: Path, make_csv, capsys):
    data = temp_workdir / "data"
    make_csv(data, "a.csv", GOOD_CSV)
    # Legacy OLE header under an .xlsx name
    (data / "b.xlsx").write_bytes(b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1" + b"\x00" * 504)
    (data / "c.xls").write_bytes(b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1" + b"\x00" * 504)
    assert cli_main(["data"]) == EXIT_PARTIAL_FAILURE
    out = capsys.readouterr().out
    assert "ERROR b.xlsx:" in out
    assert "c.xls" not in out
    assert "SUMMARY files=2/2 success=1 failed=1 events=1" in out


def test_exit_partial_on_explicit_xls(temp_workdir: Path, make_csv, capsys):
    make_csv(temp_workdir / "data", "a.csv", GOOD_CSV)
    legacy = temp_workdir / "data" / "old.xls"
    legacy.write_bytes(b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1")
    assert cli_main(["data/a.csv", str(legacy)]) == EXIT_PARTIAL_FAILURE
    assert "ERROR old.xls: unsupported file type: old.xls" in capsys.readouterr().out
