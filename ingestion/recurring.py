"""Shared normalization for recurring bills and income definitions."""

import logging
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Sequence, Type, TypeVar

from ingestion.coercion import cell, parse_anchor_date, parse_date, parse_decimal, split_list
from ingestion.errors import FieldCoercionError
from ingestion.headers import resolve_strict
from ingestion.ids import IdAllocator, uuid_allocator
from ingestion.structured import load_json_array
from ingestion.tokenizer import parse_delimited
from models.recurring import FREQUENCIES, Bill, RecurringDefinition

logger = logging.getLogger(__name__)

D = TypeVar("D", bound=RecurringDefinition)


def _note(e: FieldCoercionError, row_index: int, skipped: Optional[list]) -> None:
    e.at_row(row_index)
    if skipped is not None:
        skipped.append(e)


def item_to_definition(
    cls: Type[D],
    item: dict,
    date_keys: Sequence[str],
    allocate_id: IdAllocator = uuid_allocator,
    today: Optional[date] = None,
    row_index: int = 0,
    skipped: Optional[list] = None,
) -> Optional[D]:
    """Convert a mapping of recurring-entry fields to ``cls``.

    Args:
        cls: RecurringIncome or Bill.
        item: Field mapping with camelCase keys.
        date_keys: Keys to read the anchor date from, first non-empty wins.
        allocate_id: Allocator for entries without an id.
        today: Current date; resolves day-of-month anchors and replaces
            missing or invalid anchor dates.
        row_index: Source position, for error context.
        skipped: Optional list collecting coercion errors.

    Returns:
        The definition, or None when the anchor date is unusable and no
        ``today`` was given.
    """
    name = str(item.get("name") or "").strip()

    try:
        amount = abs(parse_decimal(item.get("amount")))
    except FieldCoercionError as e:
        _note(e, row_index, skipped)
        logger.warning(f"Using amount=0 for '{name}' (row {row_index}): {e}")
        amount = Decimal("0")

    raw_date = next((item[k] for k in date_keys if item.get(k) not in (None, "")), None)
    try:
        start_date = parse_anchor_date(raw_date, date_keys[0], today)
    except FieldCoercionError as e:
        _note(e, row_index, skipped)
        if today is None:
            logger.warning(f"Skipping '{name}' (row {row_index}): {e}")
            return None
        logger.warning(f"Using {today.isoformat()} for '{name}' (row {row_index}): {e}")
        start_date = today

    frequency = str(item.get("frequency") or "").strip() or "monthly"
    if frequency not in FREQUENCIES:
        logger.warning(
            f"Unknown frequency '{frequency}' for '{name}' (row {row_index}); "
            "it will not produce occurrences"
        )

    fields = dict(
        id=str(item.get("id") or "").strip() or allocate_id(),
        name=name,
        amount=amount,
        start_date=start_date,
        frequency=frequency,
        category=str(item.get("category") or "").strip(),
        memo=str(item.get("memo") or item.get("notes") or ""),
    )

    if issubclass(cls, Bill):
        paid_dates = []
        for value in split_list(item.get("paidDates")):
            try:
                paid_dates.append(parse_date(value, "paidDates"))
            except FieldCoercionError as e:
                _note(e, row_index, skipped)
                logger.warning(f"Ignoring paid date for '{name}' (row {row_index}): {e}")
        fields["paid_dates"] = paid_dates

    return cls(**fields)


def row_to_definition(
    cls: Type[D],
    row: List[str],
    columns: Dict[str, int],
    date_keys: Sequence[str],
    allocate_id: IdAllocator = uuid_allocator,
    today: Optional[date] = None,
    row_index: int = 0,
    skipped: Optional[list] = None,
) -> Optional[D]:
    """Convert a CSV row to ``cls`` using strict header positions."""
    item = {header: cell(row, index) for header, index in columns.items()}
    return item_to_definition(
        cls, item, date_keys, allocate_id, today, row_index, skipped
    )


def import_csv(
    cls: Type[D],
    text: str,
    required: Sequence[str],
    date_keys: Sequence[str],
    allocate_id: IdAllocator = uuid_allocator,
    today: Optional[date] = None,
    skipped: Optional[list] = None,
) -> List[D]:
    """Import recurring definitions from delimited text with strict headers.

    Raises:
        FormatError: If the file is empty or a required header is missing.
    """
    iterator = iter(parse_delimited(text))
    columns = resolve_strict(next(iterator), required)
    logger.info(f"Validated {cls.kind} CSV header")

    definitions = []
    for line_num, row in enumerate(iterator, start=2):
        definition = row_to_definition(
            cls, row, columns, date_keys, allocate_id, today, line_num, skipped
        )
        if definition is not None:
            definitions.append(definition)

    logger.info(f"Successfully imported {len(definitions)} {cls.kind} definitions")
    return definitions


def import_json(
    cls: Type[D],
    text: str,
    kind_label: str,
    date_keys: Sequence[str],
    allocate_id: IdAllocator = uuid_allocator,
    today: Optional[date] = None,
    skipped: Optional[list] = None,
) -> List[D]:
    """Import recurring definitions from a JSON array of objects.

    Raises:
        FormatError: If the text is not JSON or the root is not an array.
    """
    data = load_json_array(text, kind_label)

    definitions = []
    for index, item in enumerate(data, start=1):
        if not isinstance(item, dict):
            logger.warning(f"Skipping element {index}: not an object")
            continue
        definition = item_to_definition(
            cls, item, date_keys, allocate_id, today, index, skipped
        )
        if definition is not None:
            definitions.append(definition)

    logger.info(f"Successfully imported {len(definitions)} {cls.kind} definitions")
    return definitions
