"""Dated occurrence of a recurring definition within one month."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from models.recurring import RecurringDefinition


@dataclass(frozen=True)
class Occurrence:
    """One concrete instance of a recurring definition.

    Occurrences are computed on demand and never stored.

    Attributes:
        definition: The income or bill this occurrence belongs to.
        occurrence_date: Concrete calendar date.
        day: Day of month of ``occurrence_date``.
        is_paid: True for bill occurrences listed in the bill's paid dates.
    """

    definition: RecurringDefinition
    occurrence_date: date
    day: int
    is_paid: bool = False

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def amount(self) -> Decimal:
        return self.definition.amount

    @property
    def category(self) -> str:
        return self.definition.category

    @property
    def kind(self) -> str:
        return self.definition.kind

    def to_dict(self) -> dict:
        """Definition fields merged with the occurrence fields."""
        data = self.definition.to_dict()
        data.update(
            {
                "kind": self.kind,
                "occurrenceDate": self.occurrence_date.isoformat(),
                "day": self.day,
                "isPaid": self.is_paid,
            }
        )
        return data
