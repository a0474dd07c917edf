"""Header resolution for delimited-text imports.

Strict mode requires exact header names (categories, rules, recurring entries).
Fuzzy mode maps loosely named transaction columns by substring tokens.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from ingestion.errors import FormatError


def clean_header(value: str) -> str:
    """Trim a header and strip one layer of surrounding quotes."""
    value = value.strip()
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value


def resolve_strict(header_row: Sequence[str], required: Sequence[str]) -> Dict[str, int]:
    """Map header names to column indices, requiring every name in ``required``.

    Args:
        header_row: Raw header fields.
        required: Header names that must be present (exact match).

    Returns:
        Dict of header name to column index. Duplicate headers keep their
        first position.

    Raises:
        FormatError: If any required header is missing.
    """
    columns: Dict[str, int] = {}
    for index, raw in enumerate(header_row):
        columns.setdefault(clean_header(raw), index)

    missing = [name for name in required if name not in columns]
    if missing:
        raise FormatError(
            f"Missing required columns: {', '.join(missing)}",
            field=missing[0],
            row_index=1,
        )

    return columns


@dataclass
class TransactionColumns:
    """Column indices resolved for a transaction import."""

    date: int
    description: int
    amount: int
    category: Optional[int] = None
    need_want: Optional[int] = None
    auto_categorized: Optional[int] = None
    merchant_name: Optional[int] = None
    friendly_name: Optional[int] = None
    memo: Optional[int] = None


_FUZZY_MATCHERS: Dict[str, Callable[[str], bool]] = {
    "date": lambda h: "date" in h,
    "description": lambda h: "desc" in h,
    "amount": lambda h: "amount" in h,
    "category": lambda h: "category" in h or "cat" in h,
    "need_want": lambda h: "need" in h or "want" in h,
    "auto_categorized": lambda h: "auto" in h,
    "merchant_name": lambda h: "merchant" in h,
    "friendly_name": lambda h: "friendly" in h or ("name" in h and "merchant" not in h),
    "memo": lambda h: "memo" in h or "note" in h,
}

_REQUIRED_FUZZY = ("date", "description", "amount")


def _find_column(headers: List[str], matcher: Callable[[str], bool]) -> Optional[int]:
    for index, header in enumerate(headers):
        if matcher(header):
            return index
    return None


def resolve_fuzzy(header_row: Sequence[str]) -> TransactionColumns:
    """Resolve transaction columns from loosely named headers.

    The first column whose lowercased header contains a field's token wins.

    Raises:
        FormatError: If date, description, or amount cannot be found.
    """
    headers = [clean_header(h).lower() for h in header_row]
    found = {
        name: _find_column(headers, matcher) for name, matcher in _FUZZY_MATCHERS.items()
    }

    missing = [name for name in _REQUIRED_FUZZY if found[name] is None]
    if missing:
        raise FormatError(
            "CSV must have columns for: date, description, and amount "
            f"(missing: {', '.join(missing)})",
            field=missing[0],
            row_index=1,
        )

    return TransactionColumns(**found)
