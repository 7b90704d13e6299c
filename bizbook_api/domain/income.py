"""Frequency normalization of income and recurring expenses to monthly figures"""

from typing import Dict, List

from bizbook_api.domain.models import ExpenseItem, IncomeSource

# Fixed multipliers; dashboards are defined against these (4.33 ~ 52/12)
FREQUENCY_MULTIPLIERS: Dict[str, float] = {
    "weekly": 4.33,
    "biweekly": 2.17,
    "monthly": 1.0,
}


def monthly_equivalent(amount: float, frequency: str) -> float:
    """
    Convert an amount stated at some frequency into a monthly amount.

    weekly x4.33, biweekly x2.17, monthly x1, annually /12.
    Unknown frequencies are treated as already monthly.
    """
    if frequency == "annually":
        return amount / 12
    return amount * FREQUENCY_MULTIPLIERS.get(frequency, 1.0)


def total_monthly_income(incomes: List[IncomeSource]) -> float:
    return sum(monthly_equivalent(i.amount, i.frequency) for i in incomes if i.is_active)


def total_monthly_expenses(expenses: List[ExpenseItem]) -> float:
    """Monthly cost of recurring expenses; one-off expenses are ignored"""
    return sum(
        monthly_equivalent(e.amount, e.frequency or "monthly")
        for e in expenses
        if e.is_recurring
    )
