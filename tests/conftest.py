# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
from typing import Any

import pandas as pd
import pytest

from packing_assistant.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("PACKING_ASSISTANT_CONFIG", raising=False)
        yield p


@pytest.fixture(autouse=True)
def _fresh_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_config_yaml() -> str:
    return """synonyms:
  order_id: [Order Ref, Order Number]
  delivery_date: [Ship On]
packaging_codes: [CRATE, BOX]
lead_times:
  packers: 3
  dispatchers: 2
timezone: UTC
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "ingest.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def order_rows() -> list[dict[str, Any]]:
    return [
        {
            "Order Number": "BOS-1001",
            "Delivery Date": "10-03-25",
            "Order Status": "Packed",
            "Offline Order Items": "PKG-BOX-Deluxe Hamper - 2, CARD-Greeting card",
            "Notes": "",
            "Rack": "R1",
        },
        {
            "Order Number": "BOS-1002",
            "Delivery Date": "",
            "Order Status": "Pending",
            "Add Offline Order": "10-03-25-HAMP-Mini - 1,11-03-25-BAG-Tote - 3",
            "Offline Order Items": "",
            "Notes": "",
            "Rack": "",
        },
        {
            "Order Number": "",
            "Delivery Date": "12-03-25",
            "Order Status": "",
            "Offline Order Items": "ABC - 1",
            "Notes": "",
            "Rack": "",
        },
        {
            "Order Number": "BOS-1004",
            "Delivery Date": "31-04-25",
            "Order Status": "",
            "Offline Order Items": "",
            "Notes": "- 2 x Gift Box",
            "Rack": "",
        },
    ]


def _make_excel(directory: Path, name: str, rows: list[list[object]]) -> Path:
    """Write a single-sheet workbook; first list is the header row."""
    p = directory / name
    with pd.ExcelWriter(p, engine="openpyxl") as writer:
        pd.DataFrame(rows[1:], columns=rows[0]).to_excel(writer, sheet_name="BOS", index=False)
    return p


def _make_csv(directory: Path, name: str, text: str) -> Path:
    p = directory / name
    p.write_text(text, encoding="utf-8")
    return p


@pytest.fixture()
def make_excel():
    return _make_excel


@pytest.fixture()
def make_csv():
    return _make_csv
