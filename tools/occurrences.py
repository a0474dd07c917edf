"""Expansion of recurring definitions into dated occurrences."""

import calendar
from datetime import date, timedelta
from typing import Iterable, List

from logger import get_logger
from models.occurrence import Occurrence
from models.recurring import Bill, RecurringDefinition

logger = get_logger()

_STEP_DAYS = {"weekly": 7, "bi-weekly": 14}


def days_in_month(year: int, month: int) -> int:
    """Number of days in a zero-based ``month`` of ``year``."""
    return calendar.monthrange(year, month + 1)[1]


def _occurrence(definition: RecurringDefinition, occurrence_date: date) -> Occurrence:
    is_paid = isinstance(definition, Bill) and definition.is_paid(occurrence_date)
    return Occurrence(
        definition=definition,
        occurrence_date=occurrence_date,
        day=occurrence_date.day,
        is_paid=is_paid,
    )


def _stepped_dates(start: date, step_days: int, month_start: date, month_end: date) -> List[date]:
    # Skip whole steps that land before the month; output is identical to
    # walking from the start date one step at a time.
    current = start
    if current < month_start:
        steps = -(-(month_start - current).days // step_days)
        current = current + timedelta(days=steps * step_days)

    dates = []
    while current <= month_end:
        dates.append(current)
        current += timedelta(days=step_days)
    return dates


def _clamped_date(start: date, year: int, month: int) -> date:
    day = min(start.day, days_in_month(year, month))
    return date(year, month + 1, day)


def expand_occurrences(
    definition: RecurringDefinition, year: int, month: int
) -> List[Occurrence]:
    """Produce the occurrences of ``definition`` within one month.

    Args:
        definition: Recurring income or bill.
        year: Target year.
        month: Target month, zero-based (0 = January).

    Returns:
        Occurrences sorted by date. Unknown frequencies produce none.

    Raises:
        ValueError: If ``month`` is outside 0-11.
    """
    if not 0 <= month <= 11:
        raise ValueError(f"month must be between 0 and 11, got {month}")

    start = definition.start_date
    month_start = date(year, month + 1, 1)
    month_end = date(year, month + 1, days_in_month(year, month))
    frequency = definition.frequency

    if frequency in _STEP_DAYS:
        dates = _stepped_dates(start, _STEP_DAYS[frequency], month_start, month_end)

    elif frequency == "monthly":
        dates = [_clamped_date(start, year, month)]

    elif frequency == "quarterly":
        # Quarter months are start month + 0/3/6/9 with no wrap into the next
        # year, so a November start only ever lands in November.
        start_month = start.month - 1
        dates = [
            _clamped_date(start, year, month)
            for quarter in range(4)
            if start_month + quarter * 3 == month
        ]

    elif frequency == "yearly":
        dates = [_clamped_date(start, year, month)] if start.month - 1 == month else []

    elif frequency == "one-time":
        dates = [start] if month_start <= start <= month_end else []

    else:
        logger.warning(
            f"Unknown frequency '{frequency}' for '{definition.name}'; no occurrences"
        )
        return []

    occurrences = [_occurrence(definition, d) for d in dates if d >= start]
    return sorted(occurrences, key=lambda o: o.occurrence_date)


def expand_all(
    definitions: Iterable[RecurringDefinition], year: int, month: int
) -> List[Occurrence]:
    """Expand several definitions into one date-sorted list of occurrences."""
    occurrences = []
    for definition in definitions:
        occurrences.extend(expand_occurrences(definition, year, month))
    return sorted(occurrences, key=lambda o: o.occurrence_date)
