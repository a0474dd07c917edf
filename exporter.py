"""Export of typed records to delimited or structured text.

Only content is produced here; writing it somewhere is up to the caller
(see services.exports). CSV output is readable by the ingestion modules: rows
end with "\\n", line breaks inside fields are flattened to spaces, and
csv.writer quotes fields holding the delimiter or a quote.
"""

import csv
import io
import json
import re
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Sequence

_CSV_HEADERS: Dict[str, List[str]] = {
    "transactions": [
        "date",
        "description",
        "amount",
        "category",
        "needWant",
        "merchantName",
        "memo",
        "autoCategorized",
    ],
    "categories": ["id", "name", "color", "type", "keywords", "needWant", "budgeted"],
    "rules": ["id", "pattern", "category", "matchType", "caseSensitive", "priority"],
    "bills": [
        "id",
        "name",
        "amount",
        "dueDate",
        "frequency",
        "category",
        "memo",
        "paidDates",
    ],
    "incomes": ["id", "name", "amount", "startDate", "frequency", "category", "memo"],
}

_MIME_TYPES = {"csv": "text/csv", "json": "application/json"}

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


@dataclass
class ExportResult:
    content: str
    filename: str
    mime_type: str


def _plain(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def format_field(value: Any) -> str:
    """Render one value as CSV field text.

    Lists are joined with ", " and line breaks become spaces, since the
    ingestion tokenizer reads one record per line.
    """
    if isinstance(value, (list, tuple)):
        text = ", ".join(_plain(item) for item in value)
    else:
        text = _plain(value)
    return _LINE_BREAK_RE.sub(" ", text)


def _csv_fields(record) -> Dict[str, Any]:
    data = record.to_dict()
    # to_dict() renders decimals as floats for JSON; keep exact text in CSV
    for name in ("amount", "budgeted"):
        if isinstance(getattr(record, name, None), Decimal):
            data[name] = getattr(record, name)
    if "paidDates" in data:
        data["paidDates"] = list(record.paid_dates)
    return data


def to_csv(kind: str, records: Sequence, delimiter: str = ",") -> str:
    """Render records of one kind as delimited text with a header row."""
    headers = _CSV_HEADERS[kind]
    buffer = io.StringIO()
    writer = csv.writer(buffer, delimiter=delimiter, lineterminator="\n")

    writer.writerow(headers)
    for record in records:
        data = _csv_fields(record)
        writer.writerow([format_field(data.get(h)) for h in headers])

    return buffer.getvalue().removesuffix("\n")


def to_json(records: Sequence) -> str:
    """Render records as a pretty-printed JSON array."""
    return json.dumps([record.to_dict() for record in records], indent=2, ensure_ascii=False)


def export_records(kind: str, records: Sequence, fmt: str = "csv") -> ExportResult:
    """Export records of ``kind`` as "csv" or "json".

    Raises:
        ValueError: If the kind or format is unknown.
    """
    if kind not in _CSV_HEADERS:
        raise ValueError(f"Unknown export kind: {kind}")
    if fmt not in _MIME_TYPES:
        raise ValueError(f"Unknown export format: {fmt}")

    content = to_csv(kind, records) if fmt == "csv" else to_json(records)
    return ExportResult(
        content=content,
        filename=f"{kind}.{fmt}",
        mime_type=_MIME_TYPES[fmt],
    )


def export_transactions(transactions, fmt: str = "csv") -> ExportResult:
    return export_records("transactions", transactions, fmt)


def export_categories(categories, fmt: str = "csv") -> ExportResult:
    return export_records("categories", categories, fmt)


def export_rules(rules, fmt: str = "csv") -> ExportResult:
    return export_records("rules", rules, fmt)


def export_bills(bills, fmt: str = "csv") -> ExportResult:
    return export_records("bills", bills, fmt)


def export_incomes(incomes, fmt: str = "csv") -> ExportResult:
    return export_records("incomes", incomes, fmt)
