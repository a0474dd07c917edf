"""Recurring income and bill definitions."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import ClassVar, List

FREQUENCIES = ("weekly", "bi-weekly", "monthly", "quarterly", "yearly", "one-time")


@dataclass
class RecurringDefinition:
    """Common shape of a recurring income or bill.

    Attributes:
        id: Definition identifier.
        name: Display name, e.g. "Rent".
        amount: Non-negative amount per occurrence.
        start_date: Anchor date of the first occurrence.
        frequency: One of FREQUENCIES. Unknown values are kept as imported
            and expand to no occurrences.
        category: Category name.
        memo: Free-form note.
    """

    kind: ClassVar[str] = ""
    date_key: ClassVar[str] = "startDate"

    id: str
    name: str
    amount: Decimal
    start_date: date
    frequency: str = "monthly"
    category: str = ""
    memo: str = ""

    def to_dict(self) -> dict:
        """Convert definition to its structured-text shape."""
        return {
            "id": self.id,
            "name": self.name,
            "amount": float(self.amount),
            self.date_key: self.start_date.isoformat(),
            "frequency": self.frequency,
            "category": self.category,
            "memo": self.memo,
        }


@dataclass
class RecurringIncome(RecurringDefinition):
    kind: ClassVar[str] = "income"


@dataclass
class Bill(RecurringDefinition):
    """A recurring bill. ``paid_dates`` marks settled occurrences."""

    kind: ClassVar[str] = "bill"
    date_key: ClassVar[str] = "dueDate"

    paid_dates: List[date] = field(default_factory=list)

    def is_paid(self, occurrence_date: date) -> bool:
        return occurrence_date in self.paid_dates

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["paidDates"] = [d.isoformat() for d in self.paid_dates]
        return data
