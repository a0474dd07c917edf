from datetime import date
from typing import Dict, List, Optional

from ingestion import recurring
from ingestion.ids import IdAllocator, uuid_allocator
from ingestion.structured import detect_format
from models.recurring import Bill

_CSV_HEADERS = ["name", "amount", "dueDate"]
_DATE_KEYS = ("dueDate", "startDate")


def item_to_bill(
    item: dict,
    allocate_id: IdAllocator = uuid_allocator,
    today: Optional[date] = None,
    row_index: int = 0,
    skipped: Optional[list] = None,
) -> Optional[Bill]:
    """Convert a bill mapping (CSV row by header, or JSON object) to a Bill."""
    return recurring.item_to_definition(
        Bill, item, _DATE_KEYS, allocate_id, today, row_index, skipped
    )


def row_to_bill(
    row: List[str],
    columns: Dict[str, int],
    allocate_id: IdAllocator = uuid_allocator,
    today: Optional[date] = None,
    row_index: int = 0,
    skipped: Optional[list] = None,
) -> Optional[Bill]:
    """Convert a CSV row to a Bill using strict header positions."""
    return recurring.row_to_definition(
        Bill, row, columns, _DATE_KEYS, allocate_id, today, row_index, skipped
    )


def import_csv(
    text: str,
    allocate_id: IdAllocator = uuid_allocator,
    today: Optional[date] = None,
    skipped: Optional[list] = None,
) -> List[Bill]:
    """
    Import bills from delimited text.

    Expected format:
    - Header row (line 1): must contain name,amount,dueDate; id, frequency,
      category, memo/notes and paidDates are optional
    - Bill rows (line 2+)

    dueDate may be a full date or a bare day of month, resolved against
    ``today``.
    """
    return recurring.import_csv(
        Bill, text, _CSV_HEADERS, _DATE_KEYS, allocate_id, today, skipped
    )


def import_json(
    text: str,
    allocate_id: IdAllocator = uuid_allocator,
    today: Optional[date] = None,
    skipped: Optional[list] = None,
) -> List[Bill]:
    """Import bills from a JSON array of objects."""
    return recurring.import_json(
        Bill, text, "bills", _DATE_KEYS, allocate_id, today, skipped
    )


def ingest(
    text: str,
    fmt: Optional[str] = None,
    allocate_id: IdAllocator = uuid_allocator,
    skipped: Optional[list] = None,
    today: Optional[date] = None,
) -> List[Bill]:
    """Import bills from CSV or JSON text (detected when ``fmt`` is None)."""
    fmt = fmt or detect_format(text)
    if fmt == "json":
        return import_json(text, allocate_id, today, skipped)
    return import_csv(text, allocate_id, today, skipped)
