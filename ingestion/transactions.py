import logging
from typing import Any, List, Optional

from ingestion.coercion import cell, parse_bool, parse_decimal
from ingestion.errors import FieldCoercionError, FormatError
from ingestion.headers import TransactionColumns, resolve_fuzzy
from ingestion.ids import IdAllocator, uuid_allocator
from ingestion.structured import detect_format, load_json_array
from ingestion.tokenizer import parse_delimited
from models.category import NEED_WANT_VALUES
from models.transaction import UNCATEGORIZED, Transaction

logger = logging.getLogger(__name__)


def _need_want(value: Any) -> Optional[str]:
    text = str(value or "").strip().lower()
    return text if text in NEED_WANT_VALUES else None


def _flag(value: Any) -> bool:
    try:
        return parse_bool(value, "autoCategorized")
    except FieldCoercionError as e:
        logger.debug(f"Treating autoCategorized as false: {e}")
        return False


def row_to_transaction(
    row: List[str],
    columns: TransactionColumns,
    allocate_id: IdAllocator = uuid_allocator,
) -> Optional[Transaction]:
    """Convert a CSV row to a Transaction object.

    Args:
        row: Tokenized CSV row.
        columns: Column indices resolved from the header row.
        allocate_id: Id allocator for the new record.

    Returns:
        Transaction object, or None when date or description is empty.

    Raises:
        FieldCoercionError: If the amount is not a finite number.
    """
    date_str = cell(row, columns.date)
    description = cell(row, columns.description)
    amount = parse_decimal(cell(row, columns.amount))

    if not date_str or not description:
        return None

    merchant_name = cell(row, columns.merchant_name) or cell(row, columns.friendly_name)

    return Transaction(
        id=allocate_id(),
        date=date_str,
        description=description,
        amount=amount,
        category=cell(row, columns.category) or UNCATEGORIZED,
        need_want=_need_want(cell(row, columns.need_want)),
        auto_categorized=_flag(cell(row, columns.auto_categorized)),
        merchant_name=merchant_name or description,
        memo=cell(row, columns.memo),
    )


def item_to_transaction(
    item: dict, allocate_id: IdAllocator = uuid_allocator
) -> Transaction:
    """Convert a decoded JSON object to a Transaction.

    Raises:
        FieldCoercionError: If the amount is not a finite number.
    """
    description = str(item.get("description") or "")
    return Transaction(
        id=str(item.get("id") or allocate_id()),
        date=str(item.get("date") or ""),
        description=description,
        amount=parse_decimal(item.get("amount")),
        category=item.get("category") or UNCATEGORIZED,
        need_want=_need_want(item.get("needWant")),
        auto_categorized=_flag(item.get("autoCategorized")),
        merchant_name=item.get("merchantName") or item.get("friendlyName") or description,
        memo=item.get("memo") or "",
    )


def import_csv(
    text: str,
    allocate_id: IdAllocator = uuid_allocator,
    skipped: Optional[list] = None,
) -> List[Transaction]:
    """
    Import transactions from delimited text.

    Expected format:
    - Header row (line 1): loosely named columns; date, description and amount
      are required, category/needWant/autoCategorized/merchant/name/memo optional
    - Transaction rows (line 2+)

    Rows whose amount does not parse are dropped, as are rows missing a date
    or description.

    Raises:
        FormatError: If the file is empty, has no data rows, or lacks a
            required column.
    """
    rows = parse_delimited(text)
    if len(rows) < 2:
        raise FormatError("CSV file must have at least a header row and one data row")

    iterator = iter(rows)
    columns = resolve_fuzzy(next(iterator))
    logger.info(f"Resolved transaction columns: {columns}")

    transactions = []
    for line_num, row in enumerate(iterator, start=2):
        try:
            transaction = row_to_transaction(row, columns, allocate_id)
        except FieldCoercionError as e:
            e.at_row(line_num)
            logger.warning(f"Skipping line {line_num}: {e}")
            if skipped is not None:
                skipped.append(e)
            continue

        if transaction is None:
            logger.warning(f"Skipping line {line_num} with missing date/description: {row}")
            continue
        transactions.append(transaction)

    logger.info(f"Successfully imported {len(transactions)} transactions")
    return transactions


def import_json(
    text: str,
    allocate_id: IdAllocator = uuid_allocator,
    skipped: Optional[list] = None,
) -> List[Transaction]:
    """Import transactions from a JSON array of objects.

    Raises:
        FormatError: If the text is not JSON or the root is not an array.
    """
    data = load_json_array(text, "transactions")

    transactions = []
    for index, item in enumerate(data, start=1):
        if not isinstance(item, dict):
            logger.warning(f"Skipping element {index}: not an object")
            continue
        try:
            transactions.append(item_to_transaction(item, allocate_id))
        except FieldCoercionError as e:
            e.at_row(index)
            logger.warning(f"Skipping element {index}: {e}")
            if skipped is not None:
                skipped.append(e)

    logger.info(f"Successfully imported {len(transactions)} transactions")
    return transactions


def ingest(
    text: str,
    fmt: Optional[str] = None,
    allocate_id: IdAllocator = uuid_allocator,
    skipped: Optional[list] = None,
) -> List[Transaction]:
    """Import transactions from CSV or JSON text (detected when ``fmt`` is None)."""
    fmt = fmt or detect_format(text)
    if fmt == "json":
        return import_json(text, allocate_id, skipped)
    return import_csv(text, allocate_id, skipped)
