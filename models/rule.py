"""Custom categorization rule model."""

from dataclasses import dataclass

MATCH_TYPES = ("contains", "exact", "startsWith", "endsWith")


@dataclass
class Rule:
    """Maps descriptions matching ``pattern`` to ``category``.

    Attributes:
        id: Rule identifier.
        pattern: Text to look for in a transaction description.
        category: Target category name.
        match_type: 'contains', 'exact', 'startsWith', or 'endsWith'.
        case_sensitive: Compare without lowercasing when True.
        priority: Positive integer; lower values are evaluated first.
    """

    id: str
    pattern: str
    category: str
    match_type: str = "contains"
    case_sensitive: bool = False
    priority: int = 1

    def matches(self, description: str) -> bool:
        """Check whether ``description`` satisfies this rule."""
        if self.case_sensitive:
            text, pattern = description, self.pattern
        else:
            text, pattern = description.lower(), self.pattern.lower()

        if self.match_type == "contains":
            return pattern in text
        if self.match_type == "exact":
            return text == pattern
        if self.match_type == "startsWith":
            return text.startswith(pattern)
        if self.match_type == "endsWith":
            return text.endswith(pattern)
        return False

    def to_dict(self) -> dict:
        """Convert rule to its structured-text shape."""
        return {
            "id": self.id,
            "pattern": self.pattern,
            "category": self.category,
            "matchType": self.match_type,
            "caseSensitive": self.case_sensitive,
            "priority": self.priority,
        }
