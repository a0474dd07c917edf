from datetime import date
from typing import Dict, List, Optional

from ingestion import recurring
from ingestion.ids import IdAllocator, uuid_allocator
from ingestion.structured import detect_format
from models.recurring import RecurringIncome

_CSV_HEADERS = ["name", "amount", "startDate"]
_DATE_KEYS = ("startDate",)


def item_to_income(
    item: dict,
    allocate_id: IdAllocator = uuid_allocator,
    today: Optional[date] = None,
    row_index: int = 0,
    skipped: Optional[list] = None,
) -> Optional[RecurringIncome]:
    """Convert an income mapping (CSV row by header, or JSON object) to RecurringIncome."""
    return recurring.item_to_definition(
        RecurringIncome, item, _DATE_KEYS, allocate_id, today, row_index, skipped
    )


def row_to_income(
    row: List[str],
    columns: Dict[str, int],
    allocate_id: IdAllocator = uuid_allocator,
    today: Optional[date] = None,
    row_index: int = 0,
    skipped: Optional[list] = None,
) -> Optional[RecurringIncome]:
    return recurring.row_to_definition(
        RecurringIncome, row, columns, _DATE_KEYS, allocate_id, today, row_index, skipped
    )


def import_csv(
    text: str,
    allocate_id: IdAllocator = uuid_allocator,
    today: Optional[date] = None,
    skipped: Optional[list] = None,
) -> List[RecurringIncome]:
    """
    Import recurring income from delimited text.

    Expected format:
    - Header row (line 1): must contain name,amount,startDate; id, frequency,
      category and memo are optional
    - Income rows (line 2+)
    """
    return recurring.import_csv(
        RecurringIncome, text, _CSV_HEADERS, _DATE_KEYS, allocate_id, today, skipped
    )


def import_json(
    text: str,
    allocate_id: IdAllocator = uuid_allocator,
    today: Optional[date] = None,
    skipped: Optional[list] = None,
) -> List[RecurringIncome]:
    """Import recurring income from a JSON array of objects."""
    return recurring.import_json(
        RecurringIncome, text, "incomes", _DATE_KEYS, allocate_id, today, skipped
    )


def ingest(
    text: str,
    fmt: Optional[str] = None,
    allocate_id: IdAllocator = uuid_allocator,
    skipped: Optional[list] = None,
    today: Optional[date] = None,
) -> List[RecurringIncome]:
    """Import recurring income from CSV or JSON text (detected when ``fmt`` is None)."""
    fmt = fmt or detect_format(text)
    if fmt == "json":
        return import_json(text, allocate_id, today, skipped)
    return import_csv(text, allocate_id, today, skipped)
