"""Matching transactions to bill occurrences.

A transaction is scored against every occurrence of the month: 40 points for
a description match, 30 for an amount within tolerance (plus 10 when exact),
and up to 30 for date proximity (3 points lost per day). The best-scoring
occurrence that satisfies the required criteria wins.
"""

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import List, Optional, Sequence

from config import BillMatchingSettings
from ingestion.coercion import parse_date
from ingestion.errors import FieldCoercionError
from logger import get_logger
from models.occurrence import Occurrence
from models.recurring import Bill
from models.transaction import Transaction
from tools.occurrences import expand_all

logger = get_logger()


@dataclass
class BillMatch:
    transaction: Transaction
    occurrence: Optional[Occurrence] = None
    score: int = 0
    description_match: bool = False
    amount_match: bool = False
    date_proximity: Optional[int] = None  # days between transaction and due date
    within_window: bool = False


def description_matches(transaction: Transaction, bill_name: str) -> bool:
    """Loose name comparison between a transaction and a bill."""
    trans_desc = (transaction.merchant_name or transaction.description).lower()
    bill_lower = bill_name.lower()

    if not trans_desc or not bill_lower:
        return False
    if bill_lower in trans_desc or trans_desc in bill_lower:
        return True

    # "Electric Bill" vs "City Electric Co": share a significant word
    bill_words = [w for w in bill_lower.split() if len(w) > 3]
    trans_words = [w for w in trans_desc.split() if len(w) > 3]
    return any(
        t in b or b in t for b in bill_words for t in trans_words
    )


def match_transaction_to_bill(
    transaction: Transaction,
    occurrences: Sequence[Occurrence],
    settings: BillMatchingSettings,
) -> BillMatch:
    """Find the best bill occurrence for one transaction.

    Only outflows are considered, and transactions whose date does not parse
    never match.
    """
    best = BillMatch(transaction=transaction)
    if transaction.amount >= 0:
        return best

    try:
        transaction_date = parse_date(transaction.date, "date")
    except FieldCoercionError as e:
        logger.debug(f"Not matching transaction {transaction.id}: {e}")
        return best

    paid_amount = abs(transaction.amount)

    for occurrence in occurrences:
        candidate = BillMatch(transaction=transaction, occurrence=occurrence)

        if description_matches(transaction, occurrence.name):
            candidate.score += 40
            candidate.description_match = True

        amount_diff = abs(paid_amount - occurrence.amount)
        if amount_diff <= settings.amount_tolerance:
            candidate.score += 30
            candidate.amount_match = True
            if amount_diff < Decimal("0.01"):
                candidate.score += 10

        days = abs((transaction_date - occurrence.occurrence_date).days)
        candidate.date_proximity = days
        if days <= settings.date_window_days:
            candidate.within_window = True
            candidate.score += max(0, 30 - days * 3)

        meets_requirements = (
            (not settings.require_description_match or candidate.description_match)
            and (not settings.require_amount_match or candidate.amount_match)
            and (not settings.require_date_window or candidate.within_window)
        )
        if meets_requirements and candidate.score > best.score:
            best = candidate

    return best


def reconcile_bills(
    bills: Sequence[Bill],
    transactions: Sequence[Transaction],
    year: int,
    month: int,
    settings: BillMatchingSettings,
) -> List[Bill]:
    """Mark bill occurrences of a month as paid from matching transactions.

    Args:
        bills: Bill definitions. They are not modified.
        transactions: Candidate payments.
        year: Target year.
        month: Target month, zero-based.
        settings: Matching thresholds.

    Returns:
        New Bill objects; matched occurrence dates are added to paid_dates.
    """
    occurrences = expand_all(bills, year, month)

    paid = {}
    for transaction in transactions:
        match = match_transaction_to_bill(transaction, occurrences, settings)
        if match.occurrence is None or match.score < settings.minimum_score:
            continue
        bill_id = match.occurrence.definition.id
        paid.setdefault(bill_id, set()).add(match.occurrence.occurrence_date)
        logger.info(
            f"Matched '{transaction.description}' to '{match.occurrence.name}' "
            f"due {match.occurrence.occurrence_date.isoformat()} (score {match.score})"
        )

    updated = []
    for bill in bills:
        new_dates = paid.get(bill.id, set()) - set(bill.paid_dates)
        if new_dates:
            bill = replace(bill, paid_dates=sorted([*bill.paid_dates, *new_dates]))
        updated.append(bill)
    return updated
