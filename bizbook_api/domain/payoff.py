"""Debt payoff projection - fixed monthly payment amortization"""

from datetime import date, timedelta
from typing import Optional

from bizbook_api.domain.exceptions import PaymentTooSmallError
from bizbook_api.domain.models import PayoffMonth, PayoffPlan

MAX_MONTHS = 1200  # 100 years


def calculate_payoff(
    balance: float,
    interest_rate: float,
    monthly_payment: float,
    extra_payment: float = 0.0,
    start_date: Optional[date] = None,
) -> PayoffPlan:
    """
    Project how long a fixed monthly payment takes to clear a balance.

    Requirements:
    - Monthly rate = APR / 100 / 12, interest accrues before each payment
    - Final month pays only the remaining balance
    - Stops after MAX_MONTHS even if a balance remains; total_paid then
      counts only the payments made, not the leftover balance
    - Payoff date approximated as start_date + months * 30 days

    Raises:
        PaymentTooSmallError: payment does not exceed the first month's interest
    """
    monthly_rate = interest_rate / 100 / 12
    total_payment = monthly_payment + extra_payment

    if total_payment <= balance * monthly_rate:
        raise PaymentTooSmallError("Monthly payment is too small to cover interest charges")

    if start_date is None:
        start_date = date.today()

    remaining = balance
    months = 0
    total_interest = 0.0
    schedule = []

    while remaining > 0 and months < MAX_MONTHS:
        interest = remaining * monthly_rate
        principal = min(total_payment - interest, remaining)
        if principal <= 0:
            break

        remaining -= principal
        total_interest += interest
        months += 1

        schedule.append(
            PayoffMonth(
                month=months,
                payment=principal + interest,
                principal=principal,
                interest=interest,
                balance=max(remaining, 0.0),
            )
        )

    return PayoffPlan(
        months=months,
        total_interest=round(total_interest, 2),
        total_paid=round(sum(month.payment for month in schedule), 2),
        payoff_date=start_date + timedelta(days=months * 30),
        schedule=schedule,
    )
