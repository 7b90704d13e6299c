"""Generic CRUD routes for user-owned entities"""

import uuid
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Type

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from pydantic import BaseModel
from sqlalchemy.orm import Session

from bizbook_api.api.dependencies import get_current_user
from bizbook_api.api.v1 import schemas
from bizbook_api.api.v1.schemas import Envelope, partial_model
from bizbook_api.infrastructure.clients.identity import Identity
from bizbook_api.infrastructure.database import models
from bizbook_api.infrastructure.database.repositories import Repository
from bizbook_api.infrastructure.database.session import get_db

ALL_OPERATIONS = ("list", "get", "create", "update", "delete")


def reject_null_required(patch: Dict[str, Any], create_schema: Type[BaseModel], model: Type[models.Base]) -> None:
    """PATCH may omit required fields but may not clear them, nor any NOT NULL column"""
    columns = model.__table__.columns
    cleared = [
        name
        for name, value in patch.items()
        if value is None
        and (create_schema.model_fields[name].is_required() or (name in columns and not columns[name].nullable))
    ]
    if cleared:
        raise HTTPException(status_code=400, detail=f"Field(s) cannot be null: {', '.join(cleared)}")


def build_crud_router(
    path: str,
    model: Type[models.Base],
    create_schema: Type[BaseModel],
    read_schema: Type[BaseModel],
    label: str,
    operations: Sequence[str] = ALL_OPERATIONS,
    date_field: Optional[str] = None,
) -> APIRouter:
    """
    Build list/get/create/update/delete routes for one entity.

    Every route is scoped to the authenticated user; records owned by
    someone else behave exactly like missing ones (404).

    Args:
        path: URL segment, e.g. "/credit-cards"
        label: Human name used in 404 messages, e.g. "Credit card"
        operations: Subset of ALL_OPERATIONS to expose
        date_field: Column allowing ?start_date=&end_date= filtering on list
    """
    router = APIRouter()
    update_schema = partial_model(create_schema, f"{create_schema.__name__.replace('Create', '')}Update")

    def repository(db: Session, user: Identity) -> Repository:
        return Repository(db, model, user.user_id)

    def not_found() -> HTTPException:
        return HTTPException(status_code=404, detail=f"{label} not found")

    if "list" in operations:

        @router.get(path, response_model=Envelope[List[read_schema]], name=f"list_{model.__tablename__}")
        def list_records(
            start_date: Optional[date] = Query(None, description="Inclusive lower bound on the record date"),
            end_date: Optional[date] = Query(None, description="Inclusive upper bound on the record date"),
            db: Session = Depends(get_db),
            user: Identity = Depends(get_current_user),
        ):
            criteria = []
            order_by = None
            if date_field is not None:
                column = getattr(model, date_field)
                order_by = column.desc()
                if start_date is not None:
                    criteria.append(column >= start_date)
                if end_date is not None:
                    criteria.append(column <= end_date)

            rows = repository(db, user).find_many(*criteria, order_by=order_by)
            data = [read_schema.model_validate(row) for row in rows]
            return Envelope(data=data, total=len(data))

    if "get" in operations:

        @router.get(f"{path}/{{record_id}}", response_model=Envelope[read_schema], name=f"get_{model.__tablename__}")
        def get_record(
            record_id: uuid.UUID,
            db: Session = Depends(get_db),
            user: Identity = Depends(get_current_user),
        ):
            row = repository(db, user).find_one(record_id)
            if row is None:
                raise not_found()
            return Envelope(data=read_schema.model_validate(row))

    if "create" in operations:

        @router.post(
            path,
            response_model=Envelope[read_schema],
            status_code=201,
            name=f"create_{model.__tablename__}",
        )
        def create_record(
            body: create_schema,
            db: Session = Depends(get_db),
            user: Identity = Depends(get_current_user),
        ):
            row = repository(db, user).create(body.model_dump())
            db.commit()
            return Envelope(data=read_schema.model_validate(row))

    if "update" in operations:

        @router.patch(f"{path}/{{record_id}}", response_model=Envelope[read_schema], name=f"update_{model.__tablename__}")
        def update_record(
            record_id: uuid.UUID,
            body: update_schema,
            db: Session = Depends(get_db),
            user: Identity = Depends(get_current_user),
        ):
            patch = body.model_dump(exclude_unset=True)
            reject_null_required(patch, create_schema, model)

            row = repository(db, user).update(record_id, patch)
            if row is None:
                raise not_found()
            db.commit()
            return Envelope(data=read_schema.model_validate(row))

    if "delete" in operations:

        @router.delete(f"{path}/{{record_id}}", status_code=204, name=f"delete_{model.__tablename__}")
        def delete_record(
            record_id: uuid.UUID,
            db: Session = Depends(get_db),
            user: Identity = Depends(get_current_user),
        ):
            if not repository(db, user).delete(record_id):
                raise not_found()
            db.commit()
            return Response(status_code=204)

    return router


router = APIRouter()

router.include_router(build_crud_router("/credit-cards", models.CreditCard, schemas.CreditCardCreate, schemas.CreditCardRead, "Credit card"))
router.include_router(build_crud_router("/loans", models.Loan, schemas.LoanCreate, schemas.LoanRead, "Loan"))
router.include_router(
    build_crud_router(
        "/monthly-payments",
        models.MonthlyPayment,
        schemas.MonthlyPaymentCreate,
        schemas.MonthlyPaymentRead,
        "Monthly payment",
    )
)
router.include_router(build_crud_router("/income", models.Income, schemas.IncomeCreate, schemas.IncomeRead, "Income"))
router.include_router(
    build_crud_router(
        "/expenses",
        models.Expense,
        schemas.ExpenseCreate,
        schemas.ExpenseRead,
        "Expense",
        date_field="expense_date",
    )
)
router.include_router(build_crud_router("/assets", models.Asset, schemas.AssetCreate, schemas.AssetRead, "Asset"))
router.include_router(
    build_crud_router("/liabilities", models.Liability, schemas.LiabilityCreate, schemas.LiabilityRead, "Liability")
)
router.include_router(
    build_crud_router(
        "/savings-goals",
        models.SavingsGoal,
        schemas.SavingsGoalCreate,
        schemas.SavingsGoalRead,
        "Savings goal",
    )
)
router.include_router(build_crud_router("/budgets", models.Budget, schemas.BudgetCreate, schemas.BudgetRead, "Budget"))
router.include_router(
    build_crud_router(
        "/investments",
        models.Investment,
        schemas.InvestmentCreate,
        schemas.InvestmentRead,
        "Investment",
    )
)
router.include_router(
    build_crud_router(
        "/business-profiles",
        models.BusinessProfile,
        schemas.BusinessProfileCreate,
        schemas.BusinessProfileRead,
        "Business profile",
    )
)
router.include_router(
    build_crud_router(
        "/business-credit-cards",
        models.BusinessCreditCard,
        schemas.BusinessCreditCardCreate,
        schemas.BusinessCreditCardRead,
        "Business credit card",
    )
)
router.include_router(
    build_crud_router(
        "/business-loans",
        models.BusinessLoan,
        schemas.BusinessLoanCreate,
        schemas.BusinessLoanRead,
        "Business loan",
    )
)
router.include_router(
    build_crud_router(
        "/business-revenue",
        models.BusinessRevenue,
        schemas.BusinessRevenueCreate,
        schemas.BusinessRevenueRead,
        "Business revenue",
        operations=("list", "create"),
        date_field="revenue_date",
    )
)
router.include_router(
    build_crud_router(
        "/business-expenses",
        models.BusinessExpense,
        schemas.BusinessExpenseCreate,
        schemas.BusinessExpenseRead,
        "Business expense",
        operations=("list", "create"),
        date_field="expense_date",
    )
)
router.include_router(build_crud_router("/vendors", models.Vendor, schemas.VendorCreate, schemas.VendorRead, "Vendor"))
router.include_router(
    build_crud_router(
        "/purchase-orders",
        models.PurchaseOrder,
        schemas.PurchaseOrderCreate,
        schemas.PurchaseOrderRead,
        "Purchase order",
    )
)
