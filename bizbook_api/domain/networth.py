"""Net worth, credit utilization, and liquidity metrics"""

from datetime import date
from typing import Dict, List, Optional, Tuple

from bizbook_api.domain.income import total_monthly_expenses, total_monthly_income
from bizbook_api.domain.models import (
    AssetHolding,
    ExpenseItem,
    IncomeSource,
    LiabilityBalance,
    NetWorthBreakdown,
    OverviewMetrics,
    PayableAccount,
    SnapshotPoint,
)
from bizbook_api.utils.date_utils import one_year_before

ASSET_CATEGORIES: Dict[str, str] = {
    "cash_liquid": "cash_liquid_assets",
    "investments": "investment_assets",
    "real_estate": "real_estate_assets",
    "vehicles": "vehicle_assets",
    "personal_property": "personal_property_assets",
    "business": "business_assets",
}

LIABILITY_CATEGORIES: Dict[str, str] = {
    "consumer_debt": "consumer_debt",
    "vehicle_loans": "vehicle_loans",
    "real_estate": "real_estate_debt",
    "education": "education_debt",
    "business": "business_debt",
    "taxes_bills": "taxes_bills",
}


def credit_utilization(cards: List[PayableAccount]) -> float:
    """Used / limit as a percentage; 0 when no limit is on file"""
    total_limit = sum(card.credit_limit or 0.0 for card in cards)
    total_used = sum(card.balance for card in cards)
    return (total_used / total_limit) * 100 if total_limit > 0 else 0.0


def available_cash(incomes: List[IncomeSource], expenses: List[ExpenseItem]) -> float:
    """Raw income minus raw expenses, floored at zero"""
    total_income = sum(i.amount for i in incomes)
    total_expenses = sum(e.amount for e in expenses)
    return max(0.0, total_income - total_expenses)


def compute_overview(
    cards: List[PayableAccount],
    loans: List[PayableAccount],
    incomes: List[IncomeSource],
    expenses: List[ExpenseItem],
) -> OverviewMetrics:
    """
    Derive dashboard summary metrics from already-fetched collections.

    - total_debt: card + loan balances
    - available_cash: max(0, income - expenses)
    - available_credit: total card limit - total card balance (may go negative when over limit)
    - total_liquidity: available_cash + available_credit
    """
    total_debt = sum(account.balance for account in [*cards, *loans])
    total_monthly_payments = sum(account.recurring_payment_amount for account in [*cards, *loans])

    total_credit_limit = sum(card.credit_limit or 0.0 for card in cards)
    total_credit_used = sum(card.balance for card in cards)
    available_credit = total_credit_limit - total_credit_used

    cash = available_cash(incomes, expenses)

    return OverviewMetrics(
        total_debt=total_debt,
        total_monthly_payments=total_monthly_payments,
        total_monthly_income=total_monthly_income(incomes),
        total_monthly_expenses=total_monthly_expenses(expenses),
        available_cash=cash,
        total_credit_limit=total_credit_limit,
        total_credit_used=total_credit_used,
        available_credit=available_credit,
        credit_utilization=credit_utilization(cards),
        total_liquidity=cash + available_credit,
    )


def compose_net_worth(
    assets: List[AssetHolding],
    liabilities: List[LiabilityBalance],
    cards: List[PayableAccount],
) -> NetWorthBreakdown:
    """
    Bucket assets and liabilities into fixed categories.

    Asset values are scaled by ownership percentage. Types outside the
    known categories do not count toward either total. Available credit
    here is per card and never negative (an over-limit card adds 0).
    """
    breakdown = NetWorthBreakdown()

    for asset in assets:
        attr = ASSET_CATEGORIES.get(asset.asset_type)
        if attr is None:
            continue
        adjusted = asset.current_value * (asset.ownership_percentage / 100)
        setattr(breakdown, attr, getattr(breakdown, attr) + adjusted)

    for liability in liabilities:
        attr = LIABILITY_CATEGORIES.get(liability.liability_type)
        if attr is None:
            continue
        setattr(breakdown, attr, getattr(breakdown, attr) + liability.current_balance)

    breakdown.available_credit = sum(
        max(0.0, (card.credit_limit or 0.0) - card.balance) for card in cards
    )

    return breakdown


def percent_change(current: float, previous: Optional[float]) -> Optional[float]:
    if previous is None or previous == 0:
        return None
    return round((current - previous) / abs(previous) * 100, 2)


def snapshot_changes(
    net_worth: float,
    snapshot_date: date,
    history: List[SnapshotPoint],
) -> Tuple[Optional[float], Optional[float]]:
    """
    Month-over-month and year-over-year change for a new snapshot.

    MoM compares against the latest snapshot dated before snapshot_date;
    YoY against the latest snapshot dated on or before one year earlier.
    """
    earlier = sorted(
        (point for point in history if point.snapshot_date < snapshot_date),
        key=lambda point: point.snapshot_date,
    )
    previous = earlier[-1].net_worth if earlier else None

    cutoff = one_year_before(snapshot_date)
    year_prior = [point for point in earlier if point.snapshot_date <= cutoff]
    previous_year = year_prior[-1].net_worth if year_prior else None

    return percent_change(net_worth, previous), percent_change(net_worth, previous_year)
