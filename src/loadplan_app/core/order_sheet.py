from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from openpyxl import load_workbook

from assembly_core.catalog import Catalog, normalize_box_key
from assembly_core.models import OrderLine
from assembly_core.units import parse_units

logger = logging.getLogger(__name__)

REF = "REF"
PRODUCT = "PRODUCT"
BOX_USED = "BOX USED (BOX1 OR BOX2)"
ORDER_UNITS = "ORDER IN UNITS"
HEADER_LABELS = (REF, PRODUCT, BOX_USED, ORDER_UNITS)
HEADER_SEARCH_LIMIT = 20

Row = Sequence[Any]


class OrderSheetError(ValueError):
    """The order sheet cannot be read or has no recognisable header."""


def _cell_text(value: Any) -> str:
    return str(value).strip() if value is not None else ""


def read_sheet_rows(path: "str | Path") -> List[Row]:
    """Rows of the first worksheet (xlsx/xlsm) or of a CSV file, blank rows dropped."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Order file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".csv":
        with open(path, "r", encoding="utf-8-sig", newline="") as f:
            rows: List[Row] = [row for row in csv.reader(f)]
    elif suffix in (".xlsx", ".xlsm"):
        try:
            workbook = load_workbook(path, read_only=True, data_only=True)
        except Exception as e:
            raise OrderSheetError(f"Cannot open workbook {path}: {e}") from e
        try:
            sheet = workbook.worksheets[0]
            rows = [list(row) for row in sheet.iter_rows(values_only=True)]
        finally:
            workbook.close()
    else:
        raise OrderSheetError(f"Unsupported order file type: {path.suffix or path.name}")

    return [row for row in rows if any(_cell_text(cell) for cell in row)]


def find_header_row(
    rows: Sequence[Row],
    labels: Sequence[str] = HEADER_LABELS,
    search_limit: int = HEADER_SEARCH_LIMIT,
) -> Tuple[int, Dict[str, int]]:
    """Index of the header row and the column of every label."""
    for index, row in enumerate(rows[:search_limit]):
        cells = [_cell_text(cell).upper() for cell in row]
        if all(label in cells for label in labels):
            return index, {label: cells.index(label) for label in labels}
    raise OrderSheetError(
        "Could not find header row with " + " / ".join(labels)
    )


def _get(row: Row, column: int) -> Any:
    return row[column] if column < len(row) else None


def parse_order_rows(
    rows: Sequence[Row],
    catalog: Catalog,
    header: Optional[Tuple[int, Dict[str, int]]] = None,
) -> List[OrderLine]:
    """Order lines below the header, up to the first row without a REF.

    SKUs the catalog does not know are left out here; the engine never sees
    them.
    """
    header_index, columns = header or find_header_row(rows)
    lines: List[OrderLine] = []
    for row in rows[header_index + 1 :]:
        sku = _cell_text(_get(row, columns[REF]))
        if not sku:
            break
        if sku not in catalog:
            logger.debug("Skipping unknown SKU %s", sku)
            continue
        name = _cell_text(_get(row, columns[PRODUCT])) or sku
        lines.append(
            OrderLine(
                sku=sku,
                display_name=name,
                box_type_key=normalize_box_key(_cell_text(_get(row, columns[BOX_USED]))),
                requested_units=parse_units(_get(row, columns[ORDER_UNITS])),
            )
        )
    return lines


def load_orders(path: "str | Path", catalog: Catalog) -> List[OrderLine]:
    rows = read_sheet_rows(path)
    lines = parse_order_rows(rows, catalog)
    logger.info("Read %d order lines from %s", len(lines), path)
    return lines
