import pytest
from datetime import date
from decimal import Decimal

from models.recurring import Bill, RecurringIncome
from tools.occurrences import days_in_month, expand_all, expand_occurrences


def make_income(start, frequency="monthly", name="Paycheck", amount="1000"):
    return RecurringIncome(
        id="inc-1",
        name=name,
        amount=Decimal(amount),
        start_date=start,
        frequency=frequency,
    )


def dates_of(occurrences):
    return [o.occurrence_date for o in occurrences]


class TestDaysInMonth:
    """Tests for days_in_month function."""

    def test_leap_february(self):
        """Test February length in leap and common years."""
        assert days_in_month(2024, 1) == 29
        assert days_in_month(2023, 1) == 28
        assert days_in_month(1900, 1) == 28
        assert days_in_month(2000, 1) == 29

    def test_other_months(self):
        """Test 30 and 31 day months."""
        assert days_in_month(2024, 3) == 30
        assert days_in_month(2024, 11) == 31


class TestMonthly:
    """Tests for monthly expansion."""

    def test_clamps_to_leap_day(self):
        """Test that a 31st anchor clamps to Feb 29 in a leap year."""
        occurrences = expand_occurrences(make_income(date(2024, 1, 31)), 2024, 1)

        assert dates_of(occurrences) == [date(2024, 2, 29)]
        assert occurrences[0].day == 29
        assert occurrences[0].amount == Decimal("1000")

    def test_clamps_to_feb_28(self):
        """Test clamping in a common year."""
        occurrences = expand_occurrences(make_income(date(2023, 1, 31)), 2023, 1)

        assert dates_of(occurrences) == [date(2023, 2, 28)]

    def test_before_start_is_empty(self):
        """Test that months before the anchor produce nothing."""
        assert expand_occurrences(make_income(date(2024, 5, 10)), 2024, 3) == []

    def test_start_month_itself(self):
        """Test the anchor month yields the anchor date."""
        occurrences = expand_occurrences(make_income(date(2024, 5, 10)), 2024, 4)

        assert dates_of(occurrences) == [date(2024, 5, 10)]


class TestStepped:
    """Tests for weekly and bi-weekly expansion."""

    def test_weekly_march(self):
        """Test weekly occurrences stay within the target month."""
        occurrences = expand_occurrences(make_income(date(2024, 3, 1), "weekly"), 2024, 2)

        assert dates_of(occurrences) == [
            date(2024, 3, 1),
            date(2024, 3, 8),
            date(2024, 3, 15),
            date(2024, 3, 22),
            date(2024, 3, 29),
        ]

    def test_weekly_from_earlier_anchor(self):
        """Test stepping from an anchor months before the target."""
        occurrences = expand_occurrences(make_income(date(2024, 1, 3), "weekly"), 2024, 1)

        assert dates_of(occurrences) == [
            date(2024, 2, 7),
            date(2024, 2, 14),
            date(2024, 2, 21),
            date(2024, 2, 28),
        ]

    def test_weekly_anchor_mid_month(self):
        """Test that nothing is emitted before the anchor."""
        occurrences = expand_occurrences(make_income(date(2024, 3, 20), "weekly"), 2024, 2)

        assert dates_of(occurrences) == [date(2024, 3, 20), date(2024, 3, 27)]

    def test_bi_weekly(self):
        """Test 14-day steps across a month boundary."""
        occurrences = expand_occurrences(make_income(date(2024, 1, 5), "bi-weekly"), 2024, 1)

        assert dates_of(occurrences) == [date(2024, 2, 2), date(2024, 2, 16)]

    def test_anchor_after_month(self):
        """Test that a future anchor gives no occurrences."""
        assert expand_occurrences(make_income(date(2024, 4, 1), "weekly"), 2024, 2) == []


class TestQuarterlyYearly:
    """Tests for quarterly, yearly and one-time expansion."""

    def test_quarterly_months(self):
        """Test quarter months follow the anchor month in 3-month steps."""
        income = make_income(date(2024, 1, 15), "quarterly")

        hits = [m for m in range(12) if expand_occurrences(income, 2024, m)]

        assert hits == [0, 3, 6, 9]

    def test_quarterly_does_not_wrap_year(self):
        """Test that a November anchor only lands in November."""
        income = make_income(date(2023, 11, 30), "quarterly")

        assert [m for m in range(12) if expand_occurrences(income, 2024, m)] == [10]
        assert dates_of(expand_occurrences(income, 2024, 10)) == [date(2024, 11, 30)]

    def test_quarterly_clamps_day(self):
        """Test quarterly day clamping."""
        income = make_income(date(2024, 1, 31), "quarterly")

        assert dates_of(expand_occurrences(income, 2024, 3)) == [date(2024, 4, 30)]

    def test_yearly(self):
        """Test yearly occurrences only in the anchor month."""
        income = make_income(date(2020, 2, 29), "yearly")

        assert dates_of(expand_occurrences(income, 2023, 1)) == [date(2023, 2, 28)]
        assert expand_occurrences(income, 2023, 2) == []
        assert expand_occurrences(income, 2019, 1) == []

    def test_one_time(self):
        """Test one-time definitions occur once on the anchor date."""
        income = make_income(date(2024, 6, 12), "one-time")

        assert dates_of(expand_occurrences(income, 2024, 5)) == [date(2024, 6, 12)]
        assert expand_occurrences(income, 2025, 5) == []


class TestEdgeCases:
    """Tests for unknown frequencies, paid flags and batching."""

    def test_unknown_frequency_is_empty(self):
        """Test that a corrupted frequency produces no occurrences."""
        income = make_income(date(2024, 1, 1), "fortnightly")

        assert expand_occurrences(income, 2024, 0) == []

    def test_month_out_of_range(self):
        """Test that months are zero-based and validated."""
        with pytest.raises(ValueError, match="between 0 and 11"):
            expand_occurrences(make_income(date(2024, 1, 1)), 2024, 12)

    def test_bill_paid_flag(self):
        """Test that paid dates mark bill occurrences."""
        bill = Bill(
            id="b1",
            name="Gym",
            amount=Decimal("25"),
            start_date=date(2024, 1, 5),
            frequency="weekly",
            paid_dates=[date(2024, 1, 12)],
        )

        occurrences = expand_occurrences(bill, 2024, 0)

        assert [o.is_paid for o in occurrences] == [False, True, False, False]
        assert occurrences[0].kind == "bill"

    def test_occurrence_to_dict(self):
        """Test the structured shape of an occurrence."""
        occurrence = expand_occurrences(make_income(date(2024, 1, 31)), 2024, 1)[0]

        data = occurrence.to_dict()

        assert data["occurrenceDate"] == "2024-02-29"
        assert data["startDate"] == "2024-01-31"
        assert data["day"] == 29
        assert data["kind"] == "income"
        assert data["isPaid"] is False

    def test_expand_all_is_sorted(self):
        """Test that several definitions merge into one sorted list."""
        definitions = [
            make_income(date(2024, 1, 20), name="Late"),
            make_income(date(2024, 1, 3), name="Early"),
            make_income(date(2024, 1, 1), "bogus", name="Broken"),
        ]

        occurrences = expand_all(definitions, 2024, 2)

        assert [o.name for o in occurrences] == ["Early", "Late"]
