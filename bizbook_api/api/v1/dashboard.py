"""Dashboard routes - upcoming payments/income, overview metrics, payoff projection"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from bizbook_api.api.dependencies import get_current_user
from bizbook_api.api.v1.schemas import (
    Envelope,
    IdentitySchema,
    OverviewSchema,
    PayoffRequest,
    PayoffResponse,
    UpcomingItemSchema,
    UpcomingList,
)
from bizbook_api.domain.networth import compute_overview
from bizbook_api.domain.payoff import calculate_payoff
from bizbook_api.domain.upcoming import filter_due_soon, filter_upcoming_income, total_amount
from bizbook_api.infrastructure.clients.identity import Identity
from bizbook_api.infrastructure.database import mappers
from bizbook_api.infrastructure.database.models import CreditCard, Expense, Income, Loan, MonthlyPayment
from bizbook_api.infrastructure.database.repositories import PaymentRepository, Repository
from bizbook_api.infrastructure.database.session import get_db

router = APIRouter()

WINDOW_DESCRIPTION = "all | week (Sunday-Saturday) | month (calendar month)"


@router.get("/upcoming-payments", response_model=Envelope[UpcomingList])
def upcoming_payments(
    window: str = Query("all", description=WINDOW_DESCRIPTION),
    db: Session = Depends(get_db),
    user: Identity = Depends(get_current_user),
):
    """
    Active cards, loans and monthly bills ordered by due date.

    Accounts with a paid payment in the last 30 days are left out.
    """
    cards = Repository(db, CreditCard, user.user_id).find_many(CreditCard.is_active.is_(True))
    loans = Repository(db, Loan, user.user_id).find_many(Loan.is_active.is_(True))
    bills = Repository(db, MonthlyPayment, user.user_id).find_many(MonthlyPayment.is_active.is_(True))
    payments = PaymentRepository(db, user.user_id).find_many()

    accounts = (
        [mappers.card_to_account(c) for c in cards]
        + [mappers.loan_to_account(l) for l in loans]
        + [mappers.monthly_payment_to_account(b) for b in bills]
    )
    items = filter_due_soon(accounts, [mappers.to_payment_record(p) for p in payments], window=window)

    return Envelope(
        data=UpcomingList(
            window=window,
            total_amount=total_amount(items),
            items=[UpcomingItemSchema.model_validate(item) for item in items],
        ),
        total=len(items),
    )


@router.get("/upcoming-income", response_model=Envelope[UpcomingList])
def upcoming_income(
    window: str = Query("all", description=WINDOW_DESCRIPTION),
    db: Session = Depends(get_db),
    user: Identity = Depends(get_current_user),
):
    incomes = Repository(db, Income, user.user_id).find_many()
    items = filter_upcoming_income([mappers.to_income_source(i) for i in incomes], window=window)

    return Envelope(
        data=UpcomingList(
            window=window,
            total_amount=total_amount(items),
            items=[UpcomingItemSchema.model_validate(item) for item in items],
        ),
        total=len(items),
    )


@router.get("/overview", response_model=Envelope[OverviewSchema])
def overview(
    db: Session = Depends(get_db),
    user: Identity = Depends(get_current_user),
):
    """Debt, income, cash, credit utilization and liquidity summary"""
    cards = Repository(db, CreditCard, user.user_id).find_many()
    loans = Repository(db, Loan, user.user_id).find_many()
    incomes = Repository(db, Income, user.user_id).find_many()
    expenses = Repository(db, Expense, user.user_id).find_many()

    metrics = compute_overview(
        cards=[mappers.card_to_account(c) for c in cards],
        loans=[mappers.loan_to_account(l) for l in loans],
        incomes=[mappers.to_income_source(i) for i in incomes],
        expenses=[mappers.to_expense_item(e) for e in expenses],
    )
    return Envelope(data=OverviewSchema.model_validate(metrics))


@router.post("/calculate-payoff", response_model=Envelope[PayoffResponse])
def payoff(body: PayoffRequest, user: Identity = Depends(get_current_user)):
    plan = calculate_payoff(
        balance=body.balance,
        interest_rate=body.interest_rate,
        monthly_payment=body.monthly_payment,
        extra_payment=body.extra_payment,
    )
    return Envelope(data=PayoffResponse.model_validate(plan))


@router.get("/me", response_model=Envelope[IdentitySchema])
def current_identity(user: Identity = Depends(get_current_user)):
    return Envelope(data=IdentitySchema.model_validate(user))
