"""Payment routes, including the two-step mark-as-paid transaction"""

import logging
import time
import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from bizbook_api.api.dependencies import get_current_user, get_request_id
from bizbook_api.api.v1.schemas import (
    Envelope,
    MarkAsPaidRequest,
    MarkPaidRequest,
    PaymentCreate,
    PaymentRead,
)
from bizbook_api.domain.upcoming import normalize_account_type
from bizbook_api.infrastructure.clients.identity import Identity
from bizbook_api.infrastructure.database.repositories import PaymentRepository
from bizbook_api.infrastructure.database.session import get_db
from bizbook_api.infrastructure.observability.logging import log_payment_marked_paid
from bizbook_api.infrastructure.observability.metrics import (
    payment_mark_failures_counter,
    record_payment_marked_paid,
)

router = APIRouter()


@router.get("/payments", response_model=Envelope[List[PaymentRead]])
def list_payments(
    account_id: Optional[uuid.UUID] = Query(None, description="Restrict to one account"),
    account_type: Optional[str] = Query(None, description="credit_card | loan | monthly_payment"),
    db: Session = Depends(get_db),
    user: Identity = Depends(get_current_user),
):
    """List the caller's payments, optionally for a single account (both filters required together)"""
    repo = PaymentRepository(db, user.user_id)

    if account_id is not None and account_type:
        payments = repo.get_payments_by_account(account_id, normalize_account_type(account_type))
    else:
        payments = repo.find_many()

    data = [PaymentRead.model_validate(p) for p in payments]
    return Envelope(data=data, total=len(data))


@router.post("/payments", response_model=Envelope[PaymentRead], status_code=201)
def create_payment(
    body: PaymentCreate,
    db: Session = Depends(get_db),
    user: Identity = Depends(get_current_user),
):
    """Record a pending payment"""
    repo = PaymentRepository(db, user.user_id)
    payment = repo.create_pending(**body.model_dump())
    db.commit()
    return Envelope(data=PaymentRead.model_validate(payment))


@router.patch("/payments/{payment_id}/mark-paid", response_model=Envelope[PaymentRead])
def mark_payment_paid(
    payment_id: uuid.UUID,
    body: Optional[MarkPaidRequest] = None,
    db: Session = Depends(get_db),
    user: Identity = Depends(get_current_user),
):
    """
    Transition an existing payment to paid, stamping paid_date with the current time.

    Repeating the call on a paid payment is a no-op that returns it as stored.
    """
    body = body or MarkPaidRequest()
    repo = PaymentRepository(db, user.user_id)

    existing = repo.find_one(payment_id)
    if existing is None:
        raise HTTPException(status_code=404, detail="Payment not found")
    already_paid = existing.status == "paid"

    payment = repo.mark_paid(payment_id, confirmation_number=body.confirmation_number, notes=body.notes)
    db.commit()
    if not already_paid:
        record_payment_marked_paid(payment.account_type)
    return Envelope(data=PaymentRead.model_validate(payment), message="Payment marked as paid successfully")


@router.post("/payments/mark-as-paid", response_model=Envelope[PaymentRead], status_code=201)
def mark_as_paid(
    body: MarkAsPaidRequest,
    request: Request,
    db: Session = Depends(get_db),
    user: Identity = Depends(get_current_user),
):
    """
    Record that a due amount was paid.

    Flow:
    1. Verify the account belongs to the caller
    2. Create a pending payment and commit it
    3. Transition it to paid (paid_date = now) and commit

    If step 3 fails the pending record is kept; upcoming payments only
    honor paid records, so the account simply stays listed as due.
    Repeated calls create repeated payments.
    """
    start_time = time.time()
    request_id = get_request_id(request)
    repo = PaymentRepository(db, user.user_id)

    if not repo.account_exists(body.account_id, body.account_type):
        raise HTTPException(status_code=404, detail="Account not found")

    # 1. Pending record
    payment = repo.create_pending(
        account_id=body.account_id,
        account_type=body.account_type,
        amount=body.amount,
        payment_method=body.payment_method,
        confirmation_number=body.confirmation_number,
        notes=body.notes,
    )
    db.commit()
    payment_id = payment.id

    # 2. Transition to paid
    try:
        payment = repo.mark_paid(payment_id)
        db.commit()
    except Exception as e:
        db.rollback()
        payment_mark_failures_counter.inc()
        logging.error(
            f"Payment {payment_id} left pending: {e}",
            extra={"request_id": request_id, "user_id": user.user_id},
        )
        raise HTTPException(status_code=500, detail="Payment recorded but could not be marked as paid")

    duration_ms = (time.time() - start_time) * 1000
    record_payment_marked_paid(body.account_type)
    log_payment_marked_paid(request_id, user.user_id, body.account_type, body.amount, duration_ms)

    return Envelope(
        data=PaymentRead.model_validate(payment),
        message="Payment marked as paid. This account won't appear in upcoming payments for 30 days.",
    )
