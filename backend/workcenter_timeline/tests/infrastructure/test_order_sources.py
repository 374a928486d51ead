"""
Unit Tests for order sources.
"""

import pytest

from workcenter_timeline.domain.shared.exceptions import OrderSourceError
from workcenter_timeline.infrastructure.order_sources import (
    CsvOrderSource,
    InMemoryOrderSource,
    OrderSource,
)

CSV_HEADER = (
    "order_number,material_number,target_quantity,confirmed_quantity,"
    "component_check,demand_check,production_resource_tool_check,"
    "planned_start_time,planned_end_time,actual_start_time,actual_end_time\n"
)


class TestInMemoryOrderSource:
    def test_returns_copy_of_records(self, make_record):
        source = InMemoryOrderSource([make_record("A")])

        records = source.list_orders()
        records.clear()

        assert len(source.list_orders()) == 1
        assert isinstance(source, OrderSource)


class TestCsvOrderSource:
    def test_reads_and_converts_rows(self, tmp_path):
        path = tmp_path / "orders.csv"
        path.write_text(
            CSV_HEADER
            + "A,MAT-1,100,25,true,0,x,2024-07-10T06:00:00,2024-07-10T14:00:00,,\n"
        )

        (record,) = CsvOrderSource(path).list_orders()

        assert record["order_number"] == "A"
        assert record["target_quantity"] == 100
        assert record["confirmed_quantity"] == 25
        assert record["component_check"] is True
        assert record["demand_check"] is False
        assert record["production_resource_tool_check"] is True
        assert record["actual_start_time"] == ""

    def test_rows_without_order_number_skipped(self, tmp_path):
        path = tmp_path / "orders.csv"
        path.write_text(
            CSV_HEADER
            + ",MAT-1,100,0,0,0,0,2024-07-10T06:00:00,2024-07-10T14:00:00,,\n"
            + "B,MAT-2,10,0,0,0,0,2024-07-10T06:00:00,2024-07-10T14:00:00,,\n"
        )

        records = CsvOrderSource(path).list_orders()

        assert [r["order_number"] for r in records] == ["B"]

    def test_blank_integer_cell_is_omitted(self, tmp_path):
        path = tmp_path / "orders.csv"
        path.write_text(
            CSV_HEADER + "A,MAT-1,100,,0,0,0,2024-07-10T06:00:00,2024-07-10T14:00:00,,\n"
        )

        (record,) = CsvOrderSource(path).list_orders()

        assert "confirmed_quantity" not in record

    def test_missing_file_raises_source_error(self, tmp_path):
        with pytest.raises(OrderSourceError) as exc_info:
            CsvOrderSource(tmp_path / "missing.csv").list_orders()
        assert exc_info.value.source.endswith("missing.csv")

    def test_undecodable_file_raises_source_error(self, tmp_path):
        path = tmp_path / "orders.csv"
        path.write_bytes(CSV_HEADER.encode() + b"\xff\xfe,MAT-1\n")

        with pytest.raises(OrderSourceError, match="Malformed order CSV"):
            CsvOrderSource(path).list_orders()
