"""Unit tests for monthly income/expense normalization"""

import pytest
from bizbook_api.domain.income import monthly_equivalent, total_monthly_expenses, total_monthly_income
from bizbook_api.domain.models import ExpenseItem, IncomeSource


@pytest.mark.parametrize(
    "amount,frequency,expected",
    [
        (100, "weekly", 433.0),
        (100, "biweekly", 217.0),
        (1200, "annually", 100.0),
        (500, "monthly", 500.0),
        (250, "quarterly", 250.0),  # unknown frequency treated as monthly
    ],
)
def test_monthly_equivalent(amount, frequency, expected):
    assert monthly_equivalent(amount, frequency) == pytest.approx(expected)


def test_total_monthly_income_counts_active_sources_only():
    incomes = [
        IncomeSource(id="1", source="Salary", amount=1000.0, frequency="weekly"),
        IncomeSource(id="2", source="Consulting", amount=1200.0, frequency="annually"),
        IncomeSource(id="3", source="Side gig", amount=999.0, frequency="monthly", is_active=False),
    ]

    assert total_monthly_income(incomes) == pytest.approx(4330.0 + 100.0)


def test_total_monthly_income_empty():
    assert total_monthly_income([]) == 0


def test_total_monthly_expenses_ignores_one_off_expenses():
    expenses = [
        ExpenseItem(id="1", description="Gym", amount=10.0, is_recurring=True, frequency="weekly"),
        ExpenseItem(id="2", description="Streaming", amount=15.0, is_recurring=True, frequency=None),
        ExpenseItem(id="3", description="Laptop", amount=1500.0, is_recurring=False),
    ]

    assert total_monthly_expenses(expenses) == pytest.approx(43.3 + 15.0)
