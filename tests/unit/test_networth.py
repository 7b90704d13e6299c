"""Unit tests for overview metrics and net worth composition"""

import pytest
from datetime import date
from bizbook_api.domain.models import (
    AssetHolding,
    ExpenseItem,
    IncomeSource,
    LiabilityBalance,
    PayableAccount,
    SnapshotPoint,
)
from bizbook_api.domain.networth import (
    available_cash,
    compose_net_worth,
    compute_overview,
    credit_utilization,
    percent_change,
    snapshot_changes,
)


def card(balance: float, limit: float | None, minimum: float = 25.0) -> PayableAccount:
    return PayableAccount(
        id=f"card-{balance}-{limit}",
        account_type="credit_card",
        display_name="Card",
        balance=balance,
        recurring_payment_amount=minimum,
        credit_limit=limit,
    )


def loan(balance: float, monthly: float) -> PayableAccount:
    return PayableAccount(
        id=f"loan-{balance}",
        account_type="loan",
        display_name="Loan",
        balance=balance,
        recurring_payment_amount=monthly,
    )


def test_credit_utilization_zero_limit_is_zero():
    assert credit_utilization([card(100.0, 0.0)]) == 0.0
    assert credit_utilization([card(100.0, None)]) == 0.0
    assert credit_utilization([]) == 0.0


def test_credit_utilization_percentage():
    assert credit_utilization([card(250.0, 1000.0), card(250.0, 1000.0)]) == pytest.approx(25.0)


def test_available_cash_never_negative():
    incomes = [IncomeSource(id="1", source="Salary", amount=1000.0, frequency="monthly")]
    expenses = [ExpenseItem(id="1", description="Rent", amount=1500.0)]

    assert available_cash(incomes, expenses) == 0.0


def test_compute_overview():
    cards = [card(400.0, 2000.0, minimum=35.0), card(600.0, 1000.0, minimum=40.0)]
    loans = [loan(10_000.0, 300.0)]
    incomes = [IncomeSource(id="1", source="Salary", amount=1000.0, frequency="weekly")]
    expenses = [ExpenseItem(id="1", description="Groceries", amount=300.0)]

    metrics = compute_overview(cards, loans, incomes, expenses)

    assert metrics.total_debt == pytest.approx(11_000.0)
    assert metrics.total_monthly_payments == pytest.approx(375.0)
    assert metrics.total_monthly_income == pytest.approx(4330.0)
    assert metrics.available_cash == pytest.approx(700.0)  # raw income - raw expenses
    assert metrics.total_credit_limit == pytest.approx(3000.0)
    assert metrics.total_credit_used == pytest.approx(1000.0)
    assert metrics.available_credit == pytest.approx(2000.0)
    assert metrics.credit_utilization == pytest.approx(100 / 3)
    assert metrics.total_liquidity == pytest.approx(2700.0)


def test_compute_overview_empty_collections():
    metrics = compute_overview([], [], [], [])

    assert metrics.total_debt == 0
    assert metrics.credit_utilization == 0.0
    assert metrics.total_liquidity == 0.0


def test_compose_net_worth_buckets_and_ownership():
    assets = [
        AssetHolding(asset_type="cash_liquid", current_value=5000.0),
        AssetHolding(asset_type="real_estate", current_value=400_000.0, ownership_percentage=50.0),
        AssetHolding(asset_type="vehicles", current_value=20_000.0),
        AssetHolding(asset_type="collectibles", current_value=9_999.0),  # unknown type, not counted
    ]
    liabilities = [
        LiabilityBalance(liability_type="real_estate", current_balance=150_000.0),
        LiabilityBalance(liability_type="education", current_balance=30_000.0),
        LiabilityBalance(liability_type="taxes_bills", current_balance=2_000.0),
    ]
    cards = [card(300.0, 1000.0), card(1200.0, 1000.0)]  # second card is over limit

    breakdown = compose_net_worth(assets, liabilities, cards)

    assert breakdown.real_estate_assets == pytest.approx(200_000.0)
    assert breakdown.total_assets == pytest.approx(225_000.0)
    assert breakdown.real_estate_debt == pytest.approx(150_000.0)
    assert breakdown.total_liabilities == pytest.approx(182_000.0)
    assert breakdown.net_worth == pytest.approx(43_000.0)
    assert breakdown.available_credit == pytest.approx(700.0)
    assert breakdown.buying_power == pytest.approx(5700.0)


def test_percent_change():
    assert percent_change(110.0, 100.0) == 10.0
    assert percent_change(-50.0, -100.0) == 50.0
    assert percent_change(100.0, 0.0) is None
    assert percent_change(100.0, None) is None


def test_snapshot_changes_against_previous_and_year_prior():
    history = [
        SnapshotPoint(snapshot_date=date(2023, 5, 1), net_worth=40_000.0),
        SnapshotPoint(snapshot_date=date(2023, 6, 1), net_worth=50_000.0),
        SnapshotPoint(snapshot_date=date(2024, 5, 1), net_worth=80_000.0),
    ]

    mom, yoy = snapshot_changes(88_000.0, date(2024, 6, 1), history)

    assert mom == 10.0
    assert yoy == 76.0


def test_snapshot_changes_without_history():
    assert snapshot_changes(1000.0, date(2024, 6, 1), []) == (None, None)


def test_snapshot_changes_ignores_later_snapshots():
    history = [SnapshotPoint(snapshot_date=date(2024, 7, 1), net_worth=1.0)]

    assert snapshot_changes(1000.0, date(2024, 6, 1), history) == (None, None)
