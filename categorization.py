"""Auto-categorization of transactions by rules and keywords.

Precedence, highest first:

1. An explicit category other than "Uncategorized" is kept as is.
2. Custom rules, when supplied, in priority order.
3. Category keywords, in category list order. A category's keywords only
   apply to amounts of a matching sign: income categories to inflows,
   expense categories to outflows, "both" categories to any amount.
4. Sign default: inflows become "Income" (auto-categorized), everything
   else stays "Uncategorized" (not auto-categorized).
"""

from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence

from defaults.loader import load_default_categories
from logger import get_logger
from models.category import UNCATEGORIZED_ID, Category
from models.rule import Rule
from models.transaction import UNCATEGORIZED, Transaction

logger = get_logger()

INCOME = "Income"


@dataclass(frozen=True)
class CategorizationResult:
    category: str
    was_auto_categorized: bool
    match_type: str  # 'manual', 'rule', 'keyword', or 'default'
    matched_keyword: Optional[str] = None


def _is_uncategorized(category: Category) -> bool:
    return category.id == UNCATEGORIZED_ID or category.name == UNCATEGORIZED


def match_rule(description: str, rules: Sequence[Rule]) -> Optional[Rule]:
    """Return the highest-precedence rule matching ``description``.

    Rules are tried by ascending priority; ties keep their input order.
    """
    for rule in sorted(rules, key=lambda r: r.priority):
        if rule.matches(description):
            return rule
    return None


def categorize(
    description: str,
    amount,
    existing_category: Optional[str] = None,
    categories: Optional[Sequence[Category]] = None,
    rules: Optional[Sequence[Rule]] = None,
    disabled_keywords: Optional[Dict[str, List[str]]] = None,
) -> CategorizationResult:
    """Decide the category for a single transaction.

    Args:
        description: Transaction description.
        amount: Signed amount; positive = inflow.
        existing_category: Category already on the transaction, if any.
        categories: Ordered category list. Defaults to the packaged set.
        rules: Optional custom rules, checked before keywords.
        disabled_keywords: Category name -> keywords to ignore for it.

    Returns:
        CategorizationResult with the chosen category and whether it was
        assigned automatically.
    """
    if existing_category and existing_category != UNCATEGORIZED:
        return CategorizationResult(existing_category, False, "manual")

    if rules:
        rule = match_rule(description, rules)
        if rule is not None:
            return CategorizationResult(rule.category, True, "rule")

    if categories is None:
        categories = load_default_categories()
    disabled_keywords = disabled_keywords or {}

    desc = description.lower()
    for category in categories:
        if _is_uncategorized(category) or not category.accepts_amount(amount):
            continue

        disabled = disabled_keywords.get(category.name, [])
        for keyword in category.keywords:
            if keyword not in disabled and keyword.lower() in desc:
                return CategorizationResult(category.name, True, "keyword", keyword)

    if amount > 0:
        return CategorizationResult(INCOME, True, "default")

    return CategorizationResult(UNCATEGORIZED, False, "default")


def auto_categorize(
    transactions: List[Transaction],
    categories: Optional[Sequence[Category]] = None,
    rules: Optional[Sequence[Rule]] = None,
) -> List[Transaction]:
    """Categorize a batch of transactions.

    Args:
        transactions: Normalized transactions. They are not modified.
        categories: Ordered category list. Defaults to the packaged set.
        rules: Optional custom rules.

    Returns:
        New Transaction objects with category and auto_categorized set.
    """
    if categories is None:
        categories = load_default_categories()

    logger.info(
        f"Auto-categorization called with {len(transactions)} transactions, "
        f"{len(categories)} categories, "
        f"{len(rules or [])} rules"
    )

    results = []
    for txn in transactions:
        result = categorize(
            txn.description, txn.amount, txn.category, categories, rules
        )
        results.append(
            replace(
                txn,
                category=result.category,
                auto_categorized=result.was_auto_categorized,
            )
        )
        if result.match_type in ("rule", "keyword"):
            logger.debug(
                f"Transaction {txn.id[:8]}... matched {result.match_type} -> {result.category}"
            )

    categorized_count = sum(1 for txn in results if txn.auto_categorized)
    logger.info(
        f"Successfully auto-categorized {categorized_count}/{len(transactions)} transactions"
    )
    return results
