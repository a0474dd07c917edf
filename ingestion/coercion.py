"""Field coercion helpers shared by the record normalizers.

Each helper raises FieldCoercionError on bad input. Callers decide whether the
record is dropped or the field falls back to a default.
"""

import calendar
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional, Sequence

from ingestion.errors import FieldCoercionError

_TRUE_VALUES = ("true", "yes", "1")
_FALSE_VALUES = ("false", "no", "0", "")


def cell(row: Sequence[str], index: Optional[int]) -> str:
    """Return the field at ``index`` or "" when the column is absent or short."""
    if index is None or index >= len(row):
        return ""
    return row[index]


def parse_decimal(value: Any, field: str = "amount") -> Decimal:
    """Parse a number without locale rules.

    Missing and empty values parse as zero. Thousands separators are removed.

    Raises:
        FieldCoercionError: If the value is not a finite number.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, bool):
        raise FieldCoercionError(f"invalid {field}: {value!r}", field=field, value=value)

    if isinstance(value, (int, float)):
        text = str(value)
    else:
        text = str(value).strip().strip('"').replace(",", "")

    if not text:
        return Decimal("0")

    try:
        number = Decimal(text)
    except InvalidOperation as exc:
        raise FieldCoercionError(
            f"invalid {field}: {value!r}", field=field, value=value
        ) from exc

    if not number.is_finite():
        raise FieldCoercionError(
            f"{field} is not a finite number: {value!r}", field=field, value=value
        )
    return number


def parse_bool(value: Any, field: str) -> bool:
    """Parse a boolean flag from JSON or CSV text.

    Raises:
        FieldCoercionError: If a string value is not a recognised flag.
    """
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise FieldCoercionError(f"invalid {field}: {value!r}", field=field, value=value)


def parse_positive_int(value: Any, field: str) -> int:
    """Parse a strictly positive integer.

    Raises:
        FieldCoercionError: If the value is missing, not an integer, or < 1.
    """
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError) as exc:
        raise FieldCoercionError(
            f"invalid {field}: {value!r}", field=field, value=value
        ) from exc
    if number < 1:
        raise FieldCoercionError(
            f"{field} must be positive: {value!r}", field=field, value=value
        )
    return number


def split_list(value: Any) -> List[str]:
    """Split a comma-separated value (or a JSON list) into trimmed, non-empty tokens."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        tokens = [str(item).strip() for item in value]
    else:
        tokens = [token.strip() for token in str(value).split(",")]
    return [token for token in tokens if token]


def parse_date(value: Any, field: str) -> date:
    """Parse an ISO (YYYY-MM-DD) or US (MM/DD/YYYY) calendar date.

    Raises:
        FieldCoercionError: If the value is not a date in either format.
    """
    if isinstance(value, date):
        return value
    text = str(value or "").strip()
    for fmt in ("%Y-%m-%d", "%m/%d/%Y"):
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise FieldCoercionError(f"invalid {field}: {value!r}", field=field, value=value)


def parse_anchor_date(value: Any, field: str, today: Optional[date]) -> date:
    """Parse the anchor date of a recurring entry.

    Besides full dates, a bare day-of-month (1-31) is accepted and placed in
    the month of ``today``, clamped to that month's length.

    Raises:
        FieldCoercionError: If the value is not a date, or is a day-of-month
            with no ``today`` to resolve it against.
    """
    text = str(value if value is not None else "").strip()
    if text.isdigit():
        day = int(text)
        if not 1 <= day <= 31:
            raise FieldCoercionError(
                f"{field} day out of range: {value!r}", field=field, value=value
            )
        if today is None:
            raise FieldCoercionError(
                f"{field} is a day of month but no current date was given",
                field=field,
                value=value,
            )
        last_day = calendar.monthrange(today.year, today.month)[1]
        return date(today.year, today.month, min(day, last_day))
    return parse_date(value, field)
