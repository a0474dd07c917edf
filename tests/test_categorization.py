from dataclasses import replace
from decimal import Decimal

import pytest

from categorization import auto_categorize, categorize, match_rule
from defaults.loader import load_default_categories
from models.category import Category
from models.rule import Rule
from models.transaction import Transaction


@pytest.fixture
def default_categories():
    return load_default_categories()


class TestCategorize:
    """Tests for the categorize function."""

    @pytest.mark.parametrize("description", ["Starbucks coffee", "SALARY", "random"])
    def test_existing_category_is_kept(self, default_categories, description):
        """Test that an explicit category is never overridden."""
        result = categorize(description, Decimal("-5.00"), "Groceries", default_categories)

        assert result.category == "Groceries"
        assert result.was_auto_categorized is False
        assert result.match_type == "manual"

    def test_keyword_match(self, default_categories):
        """Test matching a default category keyword."""
        result = categorize("Starbucks coffee", Decimal("-5.00"), None, default_categories)

        assert result.category == "Food & Dining"
        assert result.was_auto_categorized is True
        assert result.matched_keyword == "coffee"

    def test_no_match_outflow_is_uncategorized(self, default_categories):
        """Test the outflow default is not marked auto-categorized."""
        result = categorize("Random Store", Decimal("-5.00"), None, default_categories)

        assert result.category == "Uncategorized"
        assert result.was_auto_categorized is False

    def test_no_match_inflow_is_income(self, default_categories):
        """Test the inflow default is marked auto-categorized."""
        result = categorize("Freelance payment", Decimal("500"), None, default_categories)

        assert result.category == "Income"
        assert result.was_auto_categorized is True

    def test_zero_amount_is_uncategorized(self, default_categories):
        """Test that a zero amount takes the outflow default."""
        result = categorize("Random Store", Decimal("0"), None, default_categories)

        assert result.category == "Uncategorized"

    def test_uncategorized_existing_is_replaced(self, default_categories):
        """Test that "Uncategorized" does not count as an explicit category."""
        result = categorize("NETFLIX.COM", Decimal("-15.49"), "Uncategorized", default_categories)

        assert result.category == "Entertainment"

    def test_income_keywords_ignored_for_outflows(self, default_categories):
        """Test the sign gate on income-type categories."""
        result = categorize("Refund fee", Decimal("-2"), None, default_categories)

        assert result.category == "Bills & Fees"

    def test_expense_keywords_ignored_for_inflows(self, default_categories):
        """Test the sign gate on expense-type categories."""
        result = categorize("Amazon refund", Decimal("20"), None, default_categories)

        assert result.category == "Income"
        assert result.match_type == "keyword"

    def test_category_order_is_precedence(self):
        """Test that the first category in the list wins."""
        categories = [
            Category(id="a", name="A", type="both", keywords=["shop"]),
            Category(id="b", name="B", type="both", keywords=["coffee shop"]),
        ]

        assert categorize("coffee shop", Decimal("-1"), None, categories).category == "A"

    def test_disabled_keywords(self, default_categories):
        """Test that disabled keywords are skipped for their category."""
        result = categorize(
            "Starbucks",
            Decimal("-5"),
            None,
            default_categories,
            disabled_keywords={"Food & Dining": ["starbucks"]},
        )

        assert result.category == "Uncategorized"

    def test_substring_match_falls_through_to_later_category(self, default_categories):
        """Test that keywords match anywhere inside words."""
        result = categorize(
            "Starbucks coffee",
            Decimal("-5"),
            None,
            default_categories,
            disabled_keywords={"Food & Dining": ["coffee", "starbucks"]},
        )

        assert result.category == "Bills & Fees"
        assert result.matched_keyword == "fee"

    def test_defaults_used_when_no_categories(self):
        """Test that the packaged set is used by default."""
        assert categorize("Starbucks coffee", Decimal("-5")).category == "Food & Dining"


class TestRules:
    """Tests for custom rule precedence."""

    def test_rule_beats_keyword(self, default_categories):
        """Test that a matching rule is applied before keywords."""
        rules = [Rule(id="r1", pattern="starbucks", category="Treats")]

        result = categorize("Starbucks coffee", Decimal("-5"), None, default_categories, rules)

        assert result.category == "Treats"
        assert result.was_auto_categorized is True
        assert result.match_type == "rule"

    def test_rule_does_not_override_existing(self, default_categories):
        """Test that explicit categories still win over rules."""
        rules = [Rule(id="r1", pattern="starbucks", category="Treats")]

        result = categorize("Starbucks", Decimal("-5"), "Groceries", default_categories, rules)

        assert result.category == "Groceries"

    def test_lowest_priority_wins(self):
        """Test that rules are evaluated by ascending priority."""
        rules = [
            Rule(id="r1", pattern="uber", category="Travel", priority=5),
            Rule(id="r2", pattern="uber eats", category="Food & Dining", priority=2),
        ]

        assert match_rule("UBER EATS 123", rules).id == "r2"

    def test_equal_priority_keeps_input_order(self):
        """Test stable ordering among equal priorities."""
        rules = [
            Rule(id="r1", pattern="a", category="X", priority=1),
            Rule(id="r2", pattern="a", category="Y", priority=1),
        ]

        assert match_rule("a", rules).id == "r1"

    @pytest.mark.parametrize(
        "match_type,case_sensitive,description,expected",
        [
            ("exact", False, "rent payment", True),
            ("exact", False, "rent payment march", False),
            ("startsWith", False, "RENT PAYMENT MARCH", True),
            ("endsWith", False, "march rent payment", True),
            ("contains", True, "RENT PAYMENT", False),
            ("contains", True, "my Rent Payment", True),
        ],
    )
    def test_match_types(self, match_type, case_sensitive, description, expected):
        """Test each match type and case sensitivity."""
        rule = Rule(
            id="r",
            pattern="Rent Payment",
            category="Housing",
            match_type=match_type,
            case_sensitive=case_sensitive,
        )

        assert rule.matches(description) is expected


class TestAutoCategorize:
    """Tests for batch categorization."""

    def test_returns_new_transactions(self, default_categories):
        """Test that inputs are not modified and results are set."""
        transactions = [
            Transaction(id="1", date="2024-03-01", description="Starbucks coffee", amount=Decimal("-5")),
            Transaction(id="2", date="2024-03-02", description="Mystery", amount=Decimal("-9")),
            Transaction(
                id="3", date="2024-03-03", description="Starbucks", amount=Decimal("-5"), category="Gifts"
            ),
        ]
        originals = [replace(t) for t in transactions]

        result = auto_categorize(transactions, default_categories)

        assert transactions == originals
        assert [(t.category, t.auto_categorized) for t in result] == [
            ("Food & Dining", True),
            ("Uncategorized", False),
            ("Gifts", False),
        ]
