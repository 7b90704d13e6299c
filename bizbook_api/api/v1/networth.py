"""Net worth calculation and snapshot history routes"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from bizbook_api.api.dependencies import get_current_user, get_request_id
from bizbook_api.api.v1.schemas import (
    Envelope,
    NetWorthCalculation,
    NetWorthSnapshotRead,
    SnapshotCreateRequest,
)
from bizbook_api.domain.models import NetWorthBreakdown
from bizbook_api.domain.networth import compose_net_worth, snapshot_changes
from bizbook_api.infrastructure.clients.identity import Identity
from bizbook_api.infrastructure.database import mappers
from bizbook_api.infrastructure.database.models import Asset, CreditCard, Liability
from bizbook_api.infrastructure.database.repositories import NetWorthSnapshotRepository, Repository
from bizbook_api.infrastructure.database.session import get_db
from bizbook_api.infrastructure.observability.logging import log_snapshot_created
from bizbook_api.infrastructure.observability.metrics import snapshot_counter

router = APIRouter()

CATEGORY_FIELDS = (
    "cash_liquid_assets",
    "investment_assets",
    "real_estate_assets",
    "vehicle_assets",
    "personal_property_assets",
    "business_assets",
    "consumer_debt",
    "vehicle_loans",
    "real_estate_debt",
    "education_debt",
    "business_debt",
    "taxes_bills",
)


def _current_breakdown(db: Session, user_id: str) -> NetWorthBreakdown:
    assets = Repository(db, Asset, user_id).find_many()
    liabilities = Repository(db, Liability, user_id).find_many()
    cards = Repository(db, CreditCard, user_id).find_many()

    return compose_net_worth(
        assets=[mappers.to_asset_holding(a) for a in assets],
        liabilities=[mappers.to_liability_balance(l) for l in liabilities],
        cards=[mappers.card_to_account(c) for c in cards],
    )


def _round(value: float) -> float:
    return round(value, 2)


@router.post("/calculate-net-worth", response_model=Envelope[NetWorthCalculation])
def calculate_net_worth(
    db: Session = Depends(get_db),
    user: Identity = Depends(get_current_user),
):
    """Current net worth and buying power from assets, liabilities and cards (nothing persisted)"""
    breakdown = _current_breakdown(db, user.user_id)

    calculation = NetWorthCalculation(
        total_assets=_round(breakdown.total_assets),
        total_liabilities=_round(breakdown.total_liabilities),
        net_worth=_round(breakdown.net_worth),
        buying_power=_round(breakdown.buying_power),
        liquid_assets=_round(breakdown.cash_liquid_assets),
        available_credit=_round(breakdown.available_credit),
        **{field: _round(getattr(breakdown, field)) for field in CATEGORY_FIELDS},
    )
    return Envelope(data=calculation)


@router.get("/net-worth-snapshots", response_model=Envelope[List[NetWorthSnapshotRead]])
def list_snapshots(
    db: Session = Depends(get_db),
    user: Identity = Depends(get_current_user),
):
    snapshots = NetWorthSnapshotRepository(db, user.user_id).history()
    data = [NetWorthSnapshotRead.model_validate(s) for s in snapshots]
    return Envelope(data=data, total=len(data))


@router.get("/net-worth-snapshots/latest", response_model=Envelope[NetWorthSnapshotRead])
def latest_snapshot(
    db: Session = Depends(get_db),
    user: Identity = Depends(get_current_user),
):
    snapshot = NetWorthSnapshotRepository(db, user.user_id).latest()
    if snapshot is None:
        raise HTTPException(status_code=404, detail="No net worth snapshots found")
    return Envelope(data=NetWorthSnapshotRead.model_validate(snapshot))


@router.post("/net-worth-snapshots", response_model=Envelope[NetWorthSnapshotRead], status_code=201)
def create_snapshot(
    request: Request,
    body: Optional[SnapshotCreateRequest] = None,
    db: Session = Depends(get_db),
    user: Identity = Depends(get_current_user),
):
    """
    Record the current net worth.

    Category totals come from the caller's assets and liabilities;
    month-over-month and year-over-year changes are computed against
    earlier snapshots. Snapshots are never updated afterwards.
    """
    snapshot_date = (body.snapshot_date if body else None) or date.today()
    repo = NetWorthSnapshotRepository(db, user.user_id)

    breakdown = _current_breakdown(db, user.user_id)
    history = [mappers.to_snapshot_point(s) for s in repo.history()]
    mom, yoy = snapshot_changes(breakdown.net_worth, snapshot_date, history)

    snapshot = repo.create(
        {
            "snapshot_date": snapshot_date,
            "total_assets": _round(breakdown.total_assets),
            "total_liabilities": _round(breakdown.total_liabilities),
            "net_worth": _round(breakdown.net_worth),
            "month_over_month_change": mom,
            "year_over_year_change": yoy,
            **{field: _round(getattr(breakdown, field)) for field in CATEGORY_FIELDS},
        }
    )
    db.commit()

    snapshot_counter.inc()
    log_snapshot_created(get_request_id(request), user.user_id, breakdown.net_worth, mom)

    return Envelope(data=NetWorthSnapshotRead.model_validate(snapshot))
