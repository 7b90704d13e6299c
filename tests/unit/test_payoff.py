"""Unit tests for debt payoff projection"""

import pytest
from datetime import date, timedelta
from bizbook_api.domain.exceptions import PaymentTooSmallError
from bizbook_api.domain.payoff import MAX_MONTHS, calculate_payoff


def test_zero_interest_payoff():
    plan = calculate_payoff(balance=1000.0, interest_rate=0.0, monthly_payment=100.0, start_date=date(2024, 1, 1))

    assert plan.months == 10
    assert plan.total_interest == 0.0
    assert plan.total_paid == 1000.0
    assert plan.payoff_date == date(2024, 1, 1) + timedelta(days=300)
    assert plan.schedule[-1].balance == 0.0


def test_final_month_pays_only_remaining_balance():
    plan = calculate_payoff(balance=250.0, interest_rate=0.0, monthly_payment=100.0)

    assert plan.months == 3
    assert plan.schedule[-1].principal == pytest.approx(50.0)


def test_interest_accrues_monthly():
    plan = calculate_payoff(balance=1200.0, interest_rate=12.0, monthly_payment=100.0)

    # First month: 1% of 1200
    assert plan.schedule[0].interest == pytest.approx(12.0)
    assert plan.schedule[0].principal == pytest.approx(88.0)
    assert plan.months == 13
    assert plan.total_paid == pytest.approx(1200.0 + plan.total_interest)


def test_extra_payment_shortens_payoff():
    base = calculate_payoff(balance=5000.0, interest_rate=18.0, monthly_payment=150.0)
    faster = calculate_payoff(balance=5000.0, interest_rate=18.0, monthly_payment=150.0, extra_payment=100.0)

    assert faster.months < base.months
    assert faster.total_interest < base.total_interest


def test_payment_below_interest_rejected():
    with pytest.raises(PaymentTooSmallError):
        calculate_payoff(balance=10_000.0, interest_rate=24.0, monthly_payment=200.0)


def test_month_cap_counts_only_payments_made():
    """Barely-above-interest payment hits the cap with a balance still owed"""
    plan = calculate_payoff(balance=100_000.0, interest_rate=12.0, monthly_payment=1000.001)

    assert plan.months == MAX_MONTHS
    assert plan.schedule[-1].balance > 0
    assert plan.total_paid == pytest.approx(MAX_MONTHS * 1000.001, abs=0.01)
    assert plan.total_paid < 100_000.0 + plan.total_interest
