"""Unit tests for the upcoming payments / income engine"""

import copy
import pytest
from datetime import date, datetime, timedelta, timezone
from bizbook_api.domain.exceptions import InvalidWindowError
from bizbook_api.domain.models import IncomeSource, PayableAccount, PaymentRecord
from bizbook_api.domain.upcoming import (
    due_label,
    filter_due_soon,
    filter_upcoming_income,
    has_recent_payment,
    normalize_account_type,
)

TODAY = date(2024, 6, 12)  # Wednesday
NOW = datetime(2024, 6, 12, 9, 30, tzinfo=timezone.utc)


def make_account(account_id: str, due: date | None, account_type: str = "credit_card", payment: float = 25.0):
    return PayableAccount(
        id=account_id,
        account_type=account_type,
        display_name=f"Account {account_id}",
        balance=500.0,
        recurring_payment_amount=payment,
        interest_rate=19.99,
        next_due_date=due,
        credit_limit=1000.0 if account_type == "credit_card" else None,
    )


def make_payment(account_id: str, paid_date: datetime | None, status: str = "paid", account_type: str = "credit_card"):
    return PaymentRecord(
        id=f"pay-{account_id}",
        account_id=account_id,
        account_type=account_type,
        amount=25.0,
        status=status,
        paid_date=paid_date,
    )


def test_end_to_end_recently_paid_account_is_hidden():
    """Account paid 5 days ago disappears; the unpaid one is listed with its countdown"""
    account_a = make_account("A", TODAY + timedelta(days=2))
    account_b = make_account("B", TODAY + timedelta(days=4))
    payments = [make_payment("B", NOW - timedelta(days=5))]

    items = filter_due_soon([account_a, account_b], payments, window="all", today=TODAY, now=NOW)

    assert [item.item_id for item in items] == ["A"]
    assert items[0].days_until_due == 2
    assert items[0].label == "2 days"


@pytest.mark.parametrize("window", ["all", "week", "month"])
def test_recent_payment_excluded_for_every_window(window):
    account = make_account("A", TODAY + timedelta(days=1))
    payments = [make_payment("A", NOW - timedelta(days=1))]

    assert filter_due_soon([account], payments, window=window, today=TODAY, now=NOW) == []


def test_payment_older_than_thirty_days_reappears():
    account = make_account("A", TODAY)
    payments = [make_payment("A", NOW - timedelta(days=30, seconds=1))]

    items = filter_due_soon([account], payments, today=TODAY, now=NOW)

    assert [item.item_id for item in items] == ["A"]


def test_payment_just_inside_thirty_days_still_suppresses():
    account = make_account("A", TODAY)
    payments = [make_payment("A", NOW - timedelta(days=29, hours=23))]

    assert filter_due_soon([account], payments, today=TODAY, now=NOW) == []


@pytest.mark.parametrize("status", ["pending", "failed", "cancelled"])
def test_only_paid_status_suppresses(status):
    account = make_account("A", TODAY)
    payments = [make_payment("A", NOW - timedelta(days=1), status=status)]

    assert len(filter_due_soon([account], payments, today=TODAY, now=NOW)) == 1


def test_paid_record_without_paid_date_does_not_suppress():
    account = make_account("A", TODAY)
    payments = [make_payment("A", None)]

    assert len(filter_due_soon([account], payments, today=TODAY, now=NOW)) == 1


def test_hyphenated_account_type_matches():
    account = make_account("A", TODAY, account_type="credit_card")
    payments = [make_payment("A", NOW - timedelta(days=2), account_type="credit-card")]

    assert filter_due_soon([account], payments, today=TODAY, now=NOW) == []


def test_payment_for_other_account_type_does_not_suppress():
    """A loan payment never hides a card that happens to share the id"""
    account = make_account("A", TODAY, account_type="credit_card")
    payments = [make_payment("A", NOW - timedelta(days=2), account_type="loan")]

    assert len(filter_due_soon([account], payments, today=TODAY, now=NOW)) == 1


def test_foreign_payment_records_are_ignored():
    """Records for accounts outside the caller's own set fail open"""
    payments = [make_payment("someone-else", NOW - timedelta(days=1))]

    assert has_recent_payment("someone-else", "credit_card", payments, {"A"}, NOW) is False
    assert has_recent_payment("A", "credit_card", payments, {"A"}, NOW) is False


def test_naive_paid_date_treated_as_utc():
    account = make_account("A", TODAY)
    naive = (NOW - timedelta(days=3)).replace(tzinfo=None)

    assert filter_due_soon([account], [make_payment("A", naive)], today=TODAY, now=NOW) == []


def test_week_window_is_sunday_to_saturday():
    accounts = [
        make_account("sat-before", date(2024, 6, 8)),
        make_account("sunday", date(2024, 6, 9)),
        make_account("saturday", date(2024, 6, 15)),
        make_account("sunday-after", date(2024, 6, 16)),
    ]

    items = filter_due_soon(accounts, [], window="week", today=TODAY, now=NOW)

    assert {item.item_id for item in items} == {"sunday", "saturday"}


def test_week_window_when_today_is_sunday():
    sunday = date(2024, 6, 9)
    accounts = [make_account("same-day", sunday), make_account("next-sunday", date(2024, 6, 16))]

    items = filter_due_soon(accounts, [], window="week", today=sunday, now=NOW)

    assert [item.item_id for item in items] == ["same-day"]


def test_month_window_is_calendar_month():
    accounts = [
        make_account("early", date(2024, 6, 1)),
        make_account("late", date(2024, 6, 30)),
        make_account("next-month", date(2024, 7, 1)),
        make_account("last-year", date(2023, 6, 15)),
    ]

    items = filter_due_soon(accounts, [], window="month", today=TODAY, now=NOW)

    assert [item.item_id for item in items] == ["early", "late"]


def test_missing_due_date_only_in_all_window():
    account = make_account("A", None)

    all_items = filter_due_soon([account], [], window="all", today=TODAY, now=NOW)
    assert all_items[0].days_until_due == 0
    assert all_items[0].label == "Due Today"

    assert filter_due_soon([account], [], window="week", today=TODAY, now=NOW) == []
    assert filter_due_soon([account], [], window="month", today=TODAY, now=NOW) == []


def test_sorted_most_overdue_first():
    accounts = [
        make_account("later", TODAY + timedelta(days=10)),
        make_account("overdue", TODAY - timedelta(days=3)),
        make_account("today", TODAY),
    ]

    items = filter_due_soon(accounts, [], today=TODAY, now=NOW)

    assert [item.item_id for item in items] == ["overdue", "today", "later"]
    assert [item.days_until_due for item in items] == [-3, 0, 10]
    assert items[0].label == "3 days overdue"


def test_repeated_runs_identical_and_inputs_untouched():
    accounts = [make_account("A", TODAY + timedelta(days=2)), make_account("B", TODAY - timedelta(days=1))]
    payments = [make_payment("C", NOW - timedelta(days=1))]
    accounts_before = copy.deepcopy(accounts)
    payments_before = copy.deepcopy(payments)

    first = filter_due_soon(accounts, payments, window="all", today=TODAY, now=NOW)
    second = filter_due_soon(accounts, payments, window="all", today=TODAY, now=NOW)

    assert first == second
    assert accounts == accounts_before
    assert payments == payments_before


def test_unknown_window_rejected():
    with pytest.raises(InvalidWindowError):
        filter_due_soon([], [], window="year", today=TODAY, now=NOW)


@pytest.mark.parametrize(
    "days,label",
    [(0, "Due Today"), (1, "Due Tomorrow"), (-1, "1 days overdue"), (-12, "12 days overdue"), (7, "7 days")],
)
def test_due_label(days, label):
    assert due_label(days) == label


def test_normalize_account_type():
    assert normalize_account_type("credit-card") == "credit_card"
    assert normalize_account_type("Monthly-Payment") == "monthly_payment"
    assert normalize_account_type("loan") == "loan"


def test_upcoming_income_skips_inactive_and_sorts():
    incomes = [
        IncomeSource(id="1", source="Salary", amount=3000.0, frequency="biweekly", next_pay_date=date(2024, 6, 14)),
        IncomeSource(id="2", source="Rent", amount=800.0, frequency="monthly", next_pay_date=date(2024, 6, 13)),
        IncomeSource(id="3", source="Old gig", amount=50.0, frequency="weekly", next_pay_date=TODAY, is_active=False),
        IncomeSource(id="4", source="Dividends", amount=120.0, frequency="annually", next_pay_date=date(2024, 9, 1)),
    ]

    week = filter_upcoming_income(incomes, window="week", today=TODAY)
    assert [item.name for item in week] == ["Rent", "Salary"]
    assert week[0].label == "Due Tomorrow"
    assert week[0].item_type == "income"

    everything = filter_upcoming_income(incomes, window="all", today=TODAY)
    assert [item.item_id for item in everything] == ["2", "1", "4"]
