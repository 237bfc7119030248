from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

"""Order sheet reader (CSV / XLSX).

Only the first sheet of a workbook is read. Row 1 is the header row and every
following non-empty row becomes a raw row dict. Empty cells become "" and no
other value is altered: typing and date interpretation happen downstream.
CSV cells are read as text so order numbers keep leading zeros.
"""

__all__ = [
    "SUPPORTED_SUFFIXES",
    "SheetHeaderError",
    "MissingColumnsError",
    "UnsupportedFileError",
    "SheetData",
    "read_order_sheet",
    "frame_to_rows",
]

# Legacy .xls needs xlrd, which is not part of the stack
SUPPORTED_SUFFIXES = (".xlsx", ".csv")


class SheetHeaderError(Exception):
    """Raised when the sheet has no header row or no data rows."""

class MissingColumnsError(Exception):
    """Raised when required logical columns are missing from the sheet header."""

class UnsupportedFileError(Exception):
    """Raised for files that are neither CSV nor Excel workbooks."""

@dataclass
class SheetData:
    sheet_name: str
    columns: list[str]
    rows: list[dict[str, Any]]


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def frame_to_rows(df: pd.DataFrame) -> tuple[list[str], list[dict[str, Any]]]:
    """Convert a header-applied DataFrame to (columns, raw row dicts).

    Fully empty rows are dropped; empty cells become "".
    """
    columns = [str(c) for c in df.columns]
    rows: list[dict[str, Any]] = []
    for values in df.itertuples(index=False, name=None):
        if all(_is_empty(v) for v in values):
            continue
        row: dict[str, Any] = {}
        for col, val in zip(columns, values, strict=False):
            row[col] = "" if _is_empty(val) and not isinstance(val, str) else val
        rows.append(row)
    return columns, rows


def read_order_sheet(path: Path) -> SheetData:
    """Read the first sheet of an order export.

    Parameters
    ----------
    path: CSV or Excel file path

    Raises
    ------
    UnsupportedFileError: unknown suffix
    SheetHeaderError: no header row / no data rows
    """
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise UnsupportedFileError(f"unsupported file type: {path.name}")

    try:
        if suffix == ".csv":
            df = pd.read_csv(path, dtype=str, keep_default_na=False)
            sheet_name = path.stem
        else:
            xls = pd.ExcelFile(path, engine="openpyxl")
            if not xls.sheet_names:
                raise SheetHeaderError(f"'{path.name}' has no sheets")
            sheet_name = str(xls.sheet_names[0])
            df = xls.parse(sheet_name, header=0, dtype=object)
    except pd.errors.EmptyDataError as e:
        raise SheetHeaderError(f"'{path.name}' has no header row") from e

    columns, rows = frame_to_rows(df)
    if not rows:
        raise SheetHeaderError(f"'{path.name}' has no rows in its first sheet")
    return SheetData(sheet_name=sheet_name, columns=columns, rows=rows)
