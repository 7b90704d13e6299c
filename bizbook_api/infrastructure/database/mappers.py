"""Convert ORM rows into domain dataclasses consumed by the aggregation engine"""

from typing import Optional

from bizbook_api.domain.models import (
    AssetHolding,
    ExpenseItem,
    IncomeSource,
    LiabilityBalance,
    PayableAccount,
    PaymentRecord,
    SnapshotPoint,
)
from bizbook_api.infrastructure.database.models import (
    Asset,
    CreditCard,
    Expense,
    Income,
    Liability,
    Loan,
    MonthlyPayment,
    NetWorthSnapshot,
    Payment,
)


def _num(value: Optional[float]) -> float:
    return float(value) if value is not None else 0.0


def card_to_account(card: CreditCard) -> PayableAccount:
    return PayableAccount(
        id=str(card.id),
        account_type="credit_card",
        display_name=card.card_name,
        balance=_num(card.balance),
        recurring_payment_amount=_num(card.minimum_payment),
        interest_rate=_num(card.interest_rate),
        next_due_date=card.due_date,
        credit_limit=float(card.credit_limit) if card.credit_limit is not None else None,
    )


def loan_to_account(loan: Loan) -> PayableAccount:
    # Fall back to the minimum payment when no monthly payment is on file
    payment = loan.monthly_payment if loan.monthly_payment is not None else loan.minimum_payment
    return PayableAccount(
        id=str(loan.id),
        account_type="loan",
        display_name=loan.loan_name,
        balance=_num(loan.current_balance),
        recurring_payment_amount=_num(payment),
        interest_rate=_num(loan.interest_rate),
        next_due_date=loan.due_date,
    )


def monthly_payment_to_account(bill: MonthlyPayment) -> PayableAccount:
    return PayableAccount(
        id=str(bill.id),
        account_type="monthly_payment",
        display_name=bill.payment_name,
        balance=0.0,
        recurring_payment_amount=_num(bill.amount),
        next_due_date=bill.due_date,
    )


def to_income_source(income: Income) -> IncomeSource:
    return IncomeSource(
        id=str(income.id),
        source=income.source,
        amount=_num(income.amount),
        frequency=income.frequency,
        next_pay_date=income.next_pay_date,
        is_active=bool(income.is_active),
    )


def to_expense_item(expense: Expense) -> ExpenseItem:
    return ExpenseItem(
        id=str(expense.id),
        description=expense.description,
        amount=_num(expense.amount),
        is_recurring=bool(expense.is_recurring),
        frequency=expense.frequency,
    )


def to_payment_record(payment: Payment) -> PaymentRecord:
    return PaymentRecord(
        id=str(payment.id),
        account_id=str(payment.account_id),
        account_type=payment.account_type,
        amount=_num(payment.amount),
        status=payment.status,
        paid_date=payment.paid_date,
    )


def to_asset_holding(asset: Asset) -> AssetHolding:
    ownership = asset.ownership_percentage
    return AssetHolding(
        asset_type=asset.asset_type,
        current_value=_num(asset.current_value),
        ownership_percentage=float(ownership) if ownership is not None else 100.0,
    )


def to_liability_balance(liability: Liability) -> LiabilityBalance:
    return LiabilityBalance(
        liability_type=liability.liability_type,
        current_balance=_num(liability.current_balance),
    )


def to_snapshot_point(snapshot: NetWorthSnapshot) -> SnapshotPoint:
    return SnapshotPoint(snapshot_date=snapshot.snapshot_date, net_worth=_num(snapshot.net_worth))
