import logging
from decimal import Decimal
from typing import Dict, List, Optional, Set

from ingestion.coercion import cell, parse_decimal, split_list
from ingestion.errors import FieldCoercionError
from ingestion.headers import resolve_strict
from ingestion.ids import IdAllocator, unique_slug, uuid_allocator
from ingestion.structured import detect_format, load_json_array
from ingestion.tokenizer import parse_delimited
from models.category import CATEGORY_TYPES, NEED_WANT_VALUES, Category

logger = logging.getLogger(__name__)

_CSV_HEADERS = ["name", "color", "type"]


def _budgeted(value, row_index: int, skipped: Optional[list]):
    try:
        return abs(parse_decimal(value, field="budgeted"))
    except FieldCoercionError as e:
        e.at_row(row_index)
        logger.warning(f"Using budgeted=0 for row {row_index}: {e}")
        if skipped is not None:
            skipped.append(e)
        return Decimal("0")


def item_to_category(
    item: dict,
    used_ids: Set[str],
    allocate_id: IdAllocator = uuid_allocator,
    row_index: int = 0,
    skipped: Optional[list] = None,
) -> Category:
    """Convert a mapping of category fields to a Category.

    CSV rows (keyed by header) and JSON objects share this path. Bad values
    fall back to defaults rather than dropping the category.

    Args:
        item: Field mapping with camelCase keys.
        used_ids: Ids already assigned in this import; updated in place.
        allocate_id: Fallback allocator for names that cannot be slugified.
        row_index: Source position, for error context.
        skipped: Optional list collecting coercion errors.
    """
    name = str(item.get("name") or "").strip() or "Unnamed"

    category_id = str(item.get("id") or "").strip()
    if category_id and category_id not in used_ids:
        used_ids.add(category_id)
    else:
        category_id = unique_slug(name, used_ids, allocate_id)

    category_type = str(item.get("type") or "").strip().lower()
    if category_type not in CATEGORY_TYPES:
        if category_type:
            logger.warning(
                f"Unknown category type '{category_type}' for '{name}', using 'expense'"
            )
        category_type = "expense"

    need_want = str(item.get("needWant") or "").strip().lower()

    return Category(
        id=category_id,
        name=name,
        color=str(item.get("color") or "").strip() or "#808080",
        type=category_type,
        keywords=split_list(item.get("keywords")),
        budgeted=_budgeted(item.get("budgeted"), row_index, skipped),
        need_want=need_want if need_want in NEED_WANT_VALUES else None,
    )


def row_to_category(
    row: List[str],
    columns: Dict[str, int],
    used_ids: Set[str],
    allocate_id: IdAllocator = uuid_allocator,
    row_index: int = 0,
    skipped: Optional[list] = None,
) -> Category:
    """Convert a CSV row to a Category using strict header positions."""
    item = {header: cell(row, index) for header, index in columns.items()}
    return item_to_category(item, used_ids, allocate_id, row_index, skipped)


def import_csv(
    text: str,
    allocate_id: IdAllocator = uuid_allocator,
    skipped: Optional[list] = None,
) -> List[Category]:
    """
    Import categories from delimited text.

    Expected format:
    - Header row (line 1): must contain name,color,type; id, keywords,
      needWant and budgeted are optional
    - Category rows (line 2+)

    Raises:
        FormatError: If the file is empty or a required header is missing.
    """
    iterator = iter(parse_delimited(text))
    columns = resolve_strict(next(iterator), _CSV_HEADERS)
    logger.info("Validated categories CSV header")

    used_ids: Set[str] = set()
    categories = [
        row_to_category(row, columns, used_ids, allocate_id, line_num, skipped)
        for line_num, row in enumerate(iterator, start=2)
    ]

    logger.info(f"Successfully imported {len(categories)} categories")
    return categories


def import_json(
    text: str,
    allocate_id: IdAllocator = uuid_allocator,
    skipped: Optional[list] = None,
) -> List[Category]:
    """Import categories from a JSON array of objects.

    Raises:
        FormatError: If the text is not JSON or the root is not an array.
    """
    data = load_json_array(text, "categories")
    return items_to_categories(data, allocate_id, skipped)


def items_to_categories(
    data: list,
    allocate_id: IdAllocator = uuid_allocator,
    skipped: Optional[list] = None,
) -> List[Category]:
    """Convert already-decoded category objects, skipping non-objects."""
    used_ids: Set[str] = set()
    categories = []
    for index, item in enumerate(data, start=1):
        if not isinstance(item, dict):
            logger.warning(f"Skipping element {index}: not an object")
            continue
        categories.append(item_to_category(item, used_ids, allocate_id, index, skipped))

    logger.info(f"Successfully imported {len(categories)} categories")
    return categories


def ingest(
    text: str,
    fmt: Optional[str] = None,
    allocate_id: IdAllocator = uuid_allocator,
    skipped: Optional[list] = None,
) -> List[Category]:
    """Import categories from CSV or JSON text (detected when ``fmt`` is None)."""
    fmt = fmt or detect_format(text)
    if fmt == "json":
        return import_json(text, allocate_id, skipped)
    return import_csv(text, allocate_id, skipped)
