from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

UNCATEGORIZED = "Uncategorized"


@dataclass
class Transaction:
    id: str
    date: str  # calendar date as it appeared in the source
    description: str
    amount: Decimal  # signed: positive = inflow, negative = outflow
    category: str = UNCATEGORIZED
    need_want: Optional[str] = None  # 'need', 'want', or None
    auto_categorized: bool = False
    merchant_name: str = ""
    memo: str = ""

    def __post_init__(self):
        if not self.merchant_name:
            self.merchant_name = self.description

    @property
    def is_outflow(self) -> bool:
        return self.amount < 0

    def to_dict(self) -> dict:
        """Convert transaction to its structured-text shape."""
        return {
            "id": self.id,
            "date": self.date,
            "description": self.description,
            "amount": float(self.amount),
            "category": self.category,
            "needWant": self.need_want,
            "autoCategorized": self.auto_categorized,
            "merchantName": self.merchant_name,
            "memo": self.memo,
        }
