"""Parse uploaded inventory spreadsheets into editable draft rows."""
from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Union

import openpyxl
import pandas as pd

from src.models.product import ACTIVE_FIELD, COST_FIELD, ID_FIELD, NAME_FIELD, QUANTITY_FIELD
from src.services.utils import generate_product_id, number_or_default, parse_number

logger = logging.getLogger(__name__)

# Accepted header spellings per field, first match wins.
_HEADER_ALIASES = {
    NAME_FIELD: ("product_name", "Product Name", "name"),
    QUANTITY_FIELD: ("quantity", "Quantity", "qty"),
    COST_FIELD: ("cost", "Cost", "price", "unit_price"),
}

TEMPLATE_COLUMNS = [NAME_FIELD, QUANTITY_FIELD, COST_FIELD]
_TEMPLATE_SAMPLE = ["Sample Product", 10, 150.00]

# Minimum accepted quantity / cost for uploaded rows
MIN_VALUE = 1


def _read_frame(source: Union[str, Path, bytes], filename: str | None) -> pd.DataFrame:
    name = (filename or (str(source) if not isinstance(source, bytes) else "")).lower()
    handle = io.BytesIO(source) if isinstance(source, bytes) else str(source)
    if name.endswith(".csv"):
        return pd.read_csv(handle, dtype=object, keep_default_na=False)
    # First sheet only
    return pd.read_excel(handle, sheet_name=0, dtype=object)


def _pick(record: dict, field: str):
    for header in _HEADER_ALIASES[field]:
        value = record.get(header)
        if value is not None and value != "" and not (isinstance(value, float) and pd.isna(value)):
            return value
    return None


def parse_inventory_file(
    source: Union[str, Path, bytes], filename: str | None = None
) -> list[dict]:
    """Parse the first sheet of an .xlsx/.xls/.csv upload.

    Args:
        source: File path or raw bytes (e.g. from an upload).
        filename: Original file name, used to tell CSV from Excel for bytes.

    Returns:
        List of ``{"product_name", "quantity", "cost"}`` dicts. Quantity and
        cost default to 1 when missing or not numeric. A file that cannot
        be read yields an empty list.
    """
    try:
        frame = _read_frame(source, filename)
    except Exception:
        logger.exception("Failed to parse inventory file %s", filename or source)
        return []

    rows: list[dict] = []
    for record in frame.to_dict(orient="records"):
        raw_name = _pick(record, NAME_FIELD)
        rows.append({
            NAME_FIELD: str(raw_name).strip() if raw_name is not None else "",
            QUANTITY_FIELD: number_or_default(_pick(record, QUANTITY_FIELD), MIN_VALUE, integer=True),
            COST_FIELD: number_or_default(_pick(record, COST_FIELD), MIN_VALUE),
        })
    logger.info("Parsed %d rows from %s", len(rows), filename or "upload")
    return rows


def build_template() -> bytes:
    """Return a one-row .xlsx template with the expected headers."""
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Template"
    ws.append(TEMPLATE_COLUMNS)
    ws.append(_TEMPLATE_SAMPLE)
    buf = io.BytesIO()
    wb.save(buf)
    wb.close()
    return buf.getvalue()


def staged_value(field: str, raw):
    """Convert an edited preview cell without defaulting.

    Unlike parsing, a zero or blank stays as typed so validation flags it.
    """
    if field == NAME_FIELD:
        return "" if raw is None else str(raw)
    number = parse_number(raw)
    if number is None:
        return None
    return int(number) if field == QUANTITY_FIELD else number


def is_valid_row(row: dict) -> bool:
    name = str(row.get(NAME_FIELD) or "").strip()
    quantity = parse_number(row.get(QUANTITY_FIELD)) or 0
    cost = parse_number(row.get(COST_FIELD)) or 0
    return bool(name) and quantity >= MIN_VALUE and cost >= MIN_VALUE


class ImportStaging:
    """Editable list of parsed rows awaiting confirmation."""

    def __init__(self, rows: list[dict] | None = None):
        self.rows: list[dict] = [dict(r) for r in rows or []]

    def __len__(self) -> int:
        return len(self.rows)

    def load(self, source: Union[str, Path, bytes], filename: str | None = None) -> int:
        """Replace the staged rows with a parsed file; returns the row count."""
        self.rows = parse_inventory_file(source, filename)
        return len(self.rows)

    def update_row(self, index: int, **patch) -> dict:
        """Replace fields of one row in place."""
        self.rows[index] = {**self.rows[index], **patch}
        return self.rows[index]

    def remove_row(self, index: int) -> None:
        del self.rows[index]

    def clear(self) -> None:
        self.rows = []

    def invalid_count(self) -> int:
        return sum(1 for r in self.rows if not is_valid_row(r))

    def prepare_batch(self) -> list[dict]:
        """Rows ready for upsert: every row gets an id and is marked active."""
        batch = []
        for row in self.rows:
            record = dict(row)
            record[NAME_FIELD] = str(record.get(NAME_FIELD) or "").strip()
            if not record.get(ID_FIELD):
                record[ID_FIELD] = generate_product_id()
            record[ACTIVE_FIELD] = True
            batch.append(record)
        return batch
