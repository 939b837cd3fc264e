"""CSV text <-> report row conversion."""
import csv
import io
import math
import re
from typing import Any

from contentops.config import settings
from contentops.utils.helpers import utc_now

_NUMBER = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")
_ISO_DATE_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}")

ROW_INDEX_KEY = "row_index"
DATE_MARKER_SUFFIX = "_is_date"
RESERVED_HEADER_SUFFIX = "_column"
EMPTY_EXPORT = "No data available for export\n"


class CSVParseError(ValueError):
    """Raised when uploaded CSV text cannot be turned into report rows."""


def _clean(cell: str) -> str:
    return cell.strip().replace('"', "")


def _coerce(value: str) -> Any:
    if not _NUMBER.match(value):
        return value
    number = float(value)
    if not math.isfinite(number):
        # JSONB has no representation for inf
        return value
    if number.is_integer() and "." not in value and "e" not in value.lower():
        return int(value)
    return number


def _header_key(header: str) -> str:
    """Rename headers that would clash with the importer's own row keys."""
    if header == ROW_INDEX_KEY or header.endswith(DATE_MARKER_SUFFIX):
        return f"{header}{RESERVED_HEADER_SUFFIX}"
    return header


def _is_blank_line(values: list[str]) -> bool:
    return not values or (len(values) == 1 and not values[0].strip())


def parse_csv_text(text: str) -> tuple[list[str], list[dict[str, Any]]]:
    """Split CSV text into headers and row dicts.

    Numeric cells become numbers, every row gets its position under
    ``row_index`` and ISO-looking date cells get a ``<header>_is_date`` marker.
    Quoted cells may span lines. Rows whose cells are all empty are skipped
    and do not take a ``row_index``. A header named ``row_index`` or ending in
    ``_is_date`` is stored as ``<header>_column``.
    """
    reader = csv.reader(io.StringIO(text, newline=""), skipinitialspace=True)
    first = next((values for values in reader if not _is_blank_line(values)), None)
    if first is None:
        raise CSVParseError("CSV is empty")

    headers = [_header_key(_clean(cell)) for cell in first]
    if not any(headers):
        raise CSVParseError("CSV header row is empty")

    rows: list[dict[str, Any]] = []
    for values in reader:
        cells = [_clean(cell) for cell in values]
        if not any(cells):
            continue
        if len(rows) >= settings.CSV_MAX_ROWS:
            raise CSVParseError(f"CSV has more than {settings.CSV_MAX_ROWS} data rows")
        row: dict[str, Any] = {ROW_INDEX_KEY: len(rows)}
        for position, header in enumerate(headers):
            value = cells[position] if position < len(cells) else ""
            row[header] = _coerce(value) if value else value
            if isinstance(row[header], str) and _ISO_DATE_PREFIX.match(row[header]):
                row[f"{header}{DATE_MARKER_SUFFIX}"] = True
        rows.append(row)

    if not rows:
        raise CSVParseError("CSV has a header but no data rows")
    return headers, rows




def build_metadata(headers: list[str], rows: list[dict[str, Any]]) -> dict[str, Any]:
    return {
        "headers": headers,
        "row_count": len(rows),
        "import_date": utc_now().isoformat(),
    }


def _export_headers(rows: list) -> list[str]:
    first = next((row for row in rows if isinstance(row, dict)), None)
    if first is None:
        return []
    return [key for key in first if key != ROW_INDEX_KEY and not key.endswith(DATE_MARKER_SUFFIX)]


def rows_to_csv(rows: Any) -> str:
    """Regenerate CSV text from stored rows, dropping importer helper keys."""
    if not isinstance(rows, list):
        return EMPTY_EXPORT
    headers = _export_headers(rows)
    if not headers:
        return EMPTY_EXPORT

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(headers)
    for row in rows:
        if isinstance(row, dict):
            writer.writerow([row.get(header, "") for header in headers])
    return buffer.getvalue()


def export_report_csv(raw_csv_text: str | None, rows: Any) -> str:
    """Prefer the original upload text; fall back to regenerating it."""
    if raw_csv_text:
        return raw_csv_text
    return rows_to_csv(rows)
