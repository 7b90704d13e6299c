"""Upcoming payments / upcoming income engine - due dates, windows, and recency suppression"""

from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Set

from bizbook_api.domain.exceptions import InvalidWindowError
from bizbook_api.domain.models import IncomeSource, PayableAccount, PaymentRecord, UpcomingItem
from bizbook_api.utils.date_utils import as_utc, same_month, utc_now, week_bounds

WINDOWS = ("all", "week", "month")

# Accounts marked paid are hidden from upcoming payments for this long
RECENT_PAYMENT_WINDOW = timedelta(days=30)


def normalize_account_type(account_type: str) -> str:
    """'credit-card' and 'credit_card' name the same account type"""
    return (account_type or "").strip().lower().replace("-", "_")


def has_recent_payment(
    account_id: str,
    account_type: str,
    payments: Iterable[PaymentRecord],
    owned_account_ids: Set[str],
    now: Optional[datetime] = None,
) -> bool:
    """
    True if the account has a completed payment within the last 30 days.

    Requirements:
    - Only status == "paid" records with a paid_date count
    - Account type compared after hyphen/underscore normalization
    - now - paid_date < 30 days (a payment exactly 30 days old no longer counts)
    - Records for accounts outside the caller's own account set are ignored,
      so a foreign record can never hide one of the caller's debts
    """
    if account_id not in owned_account_ids:
        return False

    now = as_utc(now or utc_now())
    wanted_type = normalize_account_type(account_type)

    for payment in payments:
        if payment.account_id not in owned_account_ids:
            continue
        if payment.account_id != account_id:
            continue
        if normalize_account_type(payment.account_type) != wanted_type:
            continue
        if payment.status != "paid" or payment.paid_date is None:
            continue
        if now - as_utc(payment.paid_date) < RECENT_PAYMENT_WINDOW:
            return True

    return False


def days_until(due_date: Optional[date], today: date) -> int:
    """Whole days from today to the due date; negative when overdue, 0 when unknown"""
    if due_date is None:
        return 0
    return (due_date - today).days


def due_label(days_until_due: int) -> str:
    if days_until_due == 0:
        return "Due Today"
    if days_until_due == 1:
        return "Due Tomorrow"
    if days_until_due < 0:
        return f"{abs(days_until_due)} days overdue"
    return f"{days_until_due} days"


def in_window(due_date: Optional[date], window: str, today: date) -> bool:
    """
    Calendar window check.

    - all:   everything, including items with no due date
    - week:  Sunday..Saturday week containing today
    - month: same calendar month and year as today
    """
    if window not in WINDOWS:
        raise InvalidWindowError(f"Unknown window '{window}', expected one of {', '.join(WINDOWS)}")

    if window == "all":
        return True

    if due_date is None:
        return False

    if window == "week":
        start, end = week_bounds(today)
        return start <= due_date <= end

    return same_month(due_date, today)


def _build_items(candidates, window: str, today: date) -> List[UpcomingItem]:
    items = []
    for item_id, item_type, name, amount, due_date in candidates:
        if not in_window(due_date, window, today):
            continue
        days = days_until(due_date, today)
        items.append(
            UpcomingItem(
                item_id=item_id,
                item_type=item_type,
                name=name,
                amount=amount,
                due_date=due_date,
                days_until_due=days,
                label=due_label(days),
            )
        )

    # sorted() is stable: ties keep input order
    return sorted(items, key=lambda item: item.days_until_due)


def filter_due_soon(
    accounts: List[PayableAccount],
    payments: List[PaymentRecord],
    window: str = "all",
    today: Optional[date] = None,
    now: Optional[datetime] = None,
) -> List[UpcomingItem]:
    """
    Main entry point for the upcoming payments list.

    Flow:
    1. Drop accounts paid within the last 30 days
    2. Compute days until due
    3. Apply the all/week/month window
    4. Sort soonest (most overdue) first and attach display labels
    """
    if window not in WINDOWS:
        raise InvalidWindowError(f"Unknown window '{window}', expected one of {', '.join(WINDOWS)}")

    today = today or date.today()
    owned_ids = {account.id for account in accounts}

    candidates = [
        (
            account.id,
            normalize_account_type(account.account_type),
            account.display_name,
            account.recurring_payment_amount,
            account.next_due_date,
        )
        for account in accounts
        if not has_recent_payment(account.id, account.account_type, payments, owned_ids, now)
    ]

    return _build_items(candidates, window, today)


def filter_upcoming_income(
    incomes: List[IncomeSource],
    window: str = "all",
    today: Optional[date] = None,
) -> List[UpcomingItem]:
    """Upcoming income list: same windowing and ordering as payments, without recency suppression"""
    if window not in WINDOWS:
        raise InvalidWindowError(f"Unknown window '{window}', expected one of {', '.join(WINDOWS)}")

    today = today or date.today()

    candidates = [
        (income.id, "income", income.source, income.amount, income.next_pay_date)
        for income in incomes
        if income.is_active
    ]

    return _build_items(candidates, window, today)


def total_amount(items: List[UpcomingItem]) -> float:
    return sum(item.amount for item in items)
