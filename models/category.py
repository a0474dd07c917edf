"""Category model for transaction categorization."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

CATEGORY_TYPES = ("income", "expense", "both")
NEED_WANT_VALUES = ("need", "want")
UNCATEGORIZED_ID = "uncategorized"


@dataclass
class Category:
    """Represents a budgeting category.

    Attributes:
        id: Unique slug, e.g. "food".
        name: Unique human label, e.g. "Food & Dining".
        color: Display token, opaque to the matcher.
        type: 'income', 'expense', or 'both'. Decides which amount signs the
            category's keywords apply to.
        keywords: Match keywords; list order is priority within the category.
        budgeted: Non-negative monthly budget.
        need_want: Optional 'need' / 'want' classification.
    """

    id: str
    name: str
    color: str = "#808080"
    type: str = "expense"
    keywords: List[str] = field(default_factory=list)
    budgeted: Decimal = Decimal("0")
    need_want: Optional[str] = None

    def accepts_amount(self, amount) -> bool:
        """Whether this category's keywords apply to an amount with this sign."""
        if self.type == "both":
            return True
        if self.type == "income":
            return amount > 0
        if self.type == "expense":
            return amount < 0
        return False

    def to_dict(self) -> dict:
        """Convert category to its structured-text shape."""
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "type": self.type,
            "keywords": list(self.keywords),
            "budgeted": float(self.budgeted),
            "needWant": self.need_want,
        }
