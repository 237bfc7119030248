from __future__ import annotations

from datetime import date
from pathlib import Path

import pandas as pd
import pytest

from packing_assistant.excel.reader import MissingColumnsError, SheetHeaderError
from packing_assistant.models.config_models import IngestConfig
from packing_assistant.models.skip_record import MISSING_ORDER_ID, UNPARSEABLE_DELIVERY_DATE
from packing_assistant.services.ingest import ingest_file, ingest_rows, validate_headers


def test_ingest_rows_events_and_counters(order_rows):
    result = ingest_rows(order_rows, file_name="bos.xlsx")
    assert [(e.order_id, e.date) for e in result.events] == [
        ("BOS-1001", date(2025, 3, 10)),
        ("BOS-1002", date(2025, 3, 10)),
        ("BOS-1002", date(2025, 3, 11)),
    ]
    assert [e.row_number for e in result.events] == [1, 2, 2]
    assert result.total_rows == 4
    assert result.skipped_rows == 2
    assert result.dropped_groups == 0
    assert [s.reason for s in result.skips] == [MISSING_ORDER_ID, UNPARSEABLE_DELIVERY_DATE]
    assert {s.file for s in result.skips} == {"bos.xlsx"}
    assert result.elapsed_seconds >= 0


def test_validate_headers_accepts_synonyms():
    validate_headers(["order_id", "DELIVERY-DT", "Items"], IngestConfig.default())


def test_missing_required_columns_is_batch_failure():
    rows = [{"Order Number": "A", "Ship Date": "10-03-25"}]
    with pytest.raises(MissingColumnsError) as e:
        ingest_rows(rows)
    assert "delivery_date" in str(e.value)
    assert "order_id" not in str(e.value)


def test_empty_batch_without_columns():
    with pytest.raises(SheetHeaderError):
        ingest_rows([])


def test_empty_batch_with_columns():
    result = ingest_rows([], columns=["Order Number", "Delivery Date"])
    assert result.events == []
    assert result.total_rows == 0


def test_rows_lacking_fields_yield_no_error():
    rows = [{"Order Number": "", "Delivery Date": ""}, {"Order Number": "X", "Delivery Date": "nope"}]
    result = ingest_rows(rows)
    assert result.events == []
    assert result.skipped_rows == 2


def test_ingest_file_csv(temp_workdir: Path, make_csv):
    path = make_csv(
        temp_workdir / "data",
        "orders.csv",
        'Order Number,Delivery Date,Offline Order Items\n'
        '00123,10-03-25,"PKG-Hamper - 2, Card"\n'
        '00124,45727,BOX\n',
    )
    result = ingest_file(path)
    assert [(e.order_id, e.date) for e in result.events] == [
        ("00123", date(2025, 3, 10)),
        ("00124", date(2025, 3, 11)),
    ]
    assert result.file_name == "orders.csv"


def test_missing_timestamp_in_dataframe_rows_skips_row():
    df = pd.DataFrame(
        {
            "Order Number": ["A", "B"],
            "Delivery Date": [pd.Timestamp("2025-03-10"), pd.NaT],
        }
    )
    result = ingest_rows(df.to_dict("records"))
    assert [(e.order_id, e.date) for e in result.events] == [("A", date(2025, 3, 10))]
    assert result.skipped_rows == 1
    assert result.skips[0].reason == UNPARSEABLE_DELIVERY_DATE
    assert result.skips[0].detail == ""


def test_numeric_zero_order_id_is_missing():
    rows = [
        {"Order Number": 0, "Delivery Date": "10-03-25"},
        {"Order Number": "0", "Delivery Date": "10-03-25"},
    ]
    result = ingest_rows(rows)
    assert [e.order_id for e in result.events] == ["0"]
    assert result.skipped_rows == 1
    assert result.skips[0].reason == MISSING_ORDER_ID
