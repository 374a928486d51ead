"""
Order sources.

The board treats an order source as a black box with ``list_orders()``.
Records may be ready-made orders or raw mappings; the repository boundary
validates them either way.
"""

import csv
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from workcenter_timeline.core.observability import get_logger
from workcenter_timeline.domain.scheduling.entities.order import WorkCenterOrder
from workcenter_timeline.domain.shared.exceptions import OrderSourceError

logger = get_logger(__name__)

OrderRecord = WorkCenterOrder | Mapping[str, Any]

BOOLEAN_COLUMNS = (
    "component_check",
    "demand_check",
    "production_resource_tool_check",
)
INTEGER_COLUMNS = (
    "target_quantity",
    "confirmed_quantity",
    "operation_counter",
    "parent_operation_counter",
)


@runtime_checkable
class OrderSource(Protocol):
    def list_orders(self) -> list[OrderRecord]:
        ...


class InMemoryOrderSource:
    """Serves a fixed list of records."""

    def __init__(self, records: Iterable[OrderRecord] = ()) -> None:
        self._records = list(records)

    def list_orders(self) -> list[OrderRecord]:
        return list(self._records)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "y", "x"}


class CsvOrderSource:
    """
    Reads order records from a CSV export with one order per row.

    Column names match the order fields. Empty cells are passed through as
    blanks, which the order model treats as "not yet happened" for instants.
    Rows without an order number are skipped.
    """

    def __init__(self, path: str | Path, encoding: str = "utf-8") -> None:
        self.path = Path(path)
        self.encoding = encoding

    def list_orders(self) -> list[OrderRecord]:
        try:
            with self.path.open("r", newline="", encoding=self.encoding) as file:
                reader = csv.DictReader(file)
                records = []
                # Start from 2 since header is row 1
                for row_num, row in enumerate(reader, start=2):
                    record = self._convert_row(row)
                    if not record.get("order_number"):
                        logger.warning(
                            "Skipping CSV row without order number",
                            path=str(self.path),
                            row=row_num,
                        )
                        continue
                    records.append(record)
        except OSError as e:
            raise OrderSourceError(
                f"Cannot read order CSV: {e}", source=str(self.path)
            ) from e
        except (csv.Error, UnicodeDecodeError) as e:
            raise OrderSourceError(
                f"Malformed order CSV: {e}", source=str(self.path)
            ) from e

        logger.info("Read orders from CSV", path=str(self.path), count=len(records))
        return records

    @staticmethod
    def _convert_row(row: Mapping[str, str | None]) -> dict[str, Any]:
        record: dict[str, Any] = {}
        for key, value in row.items():
            if key is None:
                continue
            key = key.strip()
            value = (value or "").strip()
            if key in BOOLEAN_COLUMNS:
                record[key] = _parse_bool(value)
            elif key in INTEGER_COLUMNS:
                if not value:
                    continue
                # Leave unparsable numbers for the order model to reject.
                record[key] = int(value) if value.lstrip("-").isdigit() else value
            else:
                record[key] = value
        return record
