"""Data access layer - user-scoped repositories per entity"""

import uuid
from datetime import date, datetime
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy.orm import Session

from bizbook_api.infrastructure.database.models import (
    Base,
    CreditCard,
    Loan,
    MonthlyPayment,
    NetWorthSnapshot,
    Payment,
    PurchaseOrder,
    PurchaseOrderItem,
)
from bizbook_api.utils.date_utils import utc_now

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    """
    Generic CRUD over one table, restricted to rows owned by `user_id`.

    Writes flush but never commit; the endpoint owns the transaction.
    """

    def __init__(self, db: Session, model: Type[ModelT], user_id: str):
        self.db = db
        self.model = model
        self.user_id = user_id

    def _query(self):
        return self.db.query(self.model).filter(self.model.user_id == self.user_id)

    def create(self, data: Dict[str, Any]) -> ModelT:
        record = self.model(**data, user_id=self.user_id)
        self.db.add(record)
        self.db.flush()  # Get ID without committing
        self.db.refresh(record)
        return record

    def find_many(self, *criteria, order_by=None, limit: Optional[int] = None) -> List[ModelT]:
        query = self._query()
        if criteria:
            query = query.filter(*criteria)
        query = query.order_by(order_by if order_by is not None else self.model.created_at.desc())
        if limit:
            query = query.limit(limit)
        return query.all()

    def find_one(self, record_id: uuid.UUID) -> Optional[ModelT]:
        return self._query().filter(self.model.id == record_id).first()

    def update(self, record_id: uuid.UUID, patch: Dict[str, Any]) -> Optional[ModelT]:
        record = self.find_one(record_id)
        if record is None:
            return None
        for field, value in patch.items():
            setattr(record, field, value)
        self.db.flush()
        self.db.refresh(record)
        return record

    def delete(self, record_id: uuid.UUID) -> bool:
        record = self.find_one(record_id)
        if record is None:
            return False
        self.db.delete(record)
        self.db.flush()
        return True


# Tables a payment may reference, keyed by normalized account type
PAYABLE_MODELS: Dict[str, Type[Base]] = {
    "credit_card": CreditCard,
    "loan": Loan,
    "monthly_payment": MonthlyPayment,
}


class PaymentRepository(Repository[Payment]):
    """Repository for payments and the pending -> paid transition"""

    def __init__(self, db: Session, user_id: str):
        super().__init__(db, Payment, user_id)

    def get_payments_by_account(self, account_id: uuid.UUID, account_type: str) -> List[Payment]:
        return self.find_many(
            Payment.account_id == account_id,
            Payment.account_type == account_type,
            order_by=Payment.payment_date.desc(),
        )

    def account_exists(self, account_id: uuid.UUID, account_type: str) -> bool:
        model = PAYABLE_MODELS.get(account_type)
        if model is None:
            return False
        return Repository(self.db, model, self.user_id).find_one(account_id) is not None

    def create_pending(
        self,
        account_id: uuid.UUID,
        account_type: str,
        amount: float,
        payment_date: Optional[date] = None,
        payment_method: Optional[str] = None,
        confirmation_number: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Payment:
        return self.create(
            {
                "account_id": account_id,
                "account_type": account_type,
                "amount": amount,
                "payment_date": payment_date or date.today(),
                "payment_method": payment_method,
                "confirmation_number": confirmation_number,
                "notes": notes,
                "status": "pending",
            }
        )

    def mark_paid(
        self,
        payment_id: uuid.UUID,
        confirmation_number: Optional[str] = None,
        notes: Optional[str] = None,
        paid_at: Optional[datetime] = None,
    ) -> Optional[Payment]:
        """
        Transition a payment to paid; optional fields only overwrite when given.

        A payment that is already paid is returned unchanged so its
        paid_date (and the upcoming-payments suppression window) stays put.
        """
        payment = self.find_one(payment_id)
        if payment is None or payment.status == "paid":
            return payment

        patch: Dict[str, Any] = {"status": "paid", "paid_date": paid_at or utc_now()}
        if confirmation_number is not None:
            patch["confirmation_number"] = confirmation_number
        if notes is not None:
            patch["notes"] = notes
        return self.update(payment_id, patch)


class NetWorthSnapshotRepository(Repository[NetWorthSnapshot]):
    """Append-only snapshot history ordered by snapshot_date"""

    def __init__(self, db: Session, user_id: str):
        super().__init__(db, NetWorthSnapshot, user_id)

    def history(self) -> List[NetWorthSnapshot]:
        return self.find_many(order_by=NetWorthSnapshot.snapshot_date.desc())

    def latest(self) -> Optional[NetWorthSnapshot]:
        snapshots = self.find_many(order_by=NetWorthSnapshot.snapshot_date.desc(), limit=1)
        return snapshots[0] if snapshots else None


class PurchaseOrderItemRepository:
    """Line items have no user_id column; ownership is checked through the parent order"""

    def __init__(self, db: Session, user_id: str):
        self.db = db
        self.user_id = user_id

    def _query(self):
        return (
            self.db.query(PurchaseOrderItem)
            .join(PurchaseOrder, PurchaseOrderItem.purchase_order_id == PurchaseOrder.id)
            .filter(PurchaseOrder.user_id == self.user_id)
        )

    def order_exists(self, purchase_order_id: uuid.UUID) -> bool:
        return Repository(self.db, PurchaseOrder, self.user_id).find_one(purchase_order_id) is not None

    def get_items(self, purchase_order_id: uuid.UUID) -> List[PurchaseOrderItem]:
        return (
            self._query()
            .filter(PurchaseOrderItem.purchase_order_id == purchase_order_id)
            .order_by(PurchaseOrderItem.line_number.asc())
            .all()
        )

    def find_one(self, item_id: uuid.UUID) -> Optional[PurchaseOrderItem]:
        return self._query().filter(PurchaseOrderItem.id == item_id).first()

    def create(self, data: Dict[str, Any]) -> PurchaseOrderItem:
        item = PurchaseOrderItem(**data)
        self.db.add(item)
        self.db.flush()
        self.db.refresh(item)
        return item

    def update(self, item_id: uuid.UUID, patch: Dict[str, Any]) -> Optional[PurchaseOrderItem]:
        item = self.find_one(item_id)
        if item is None:
            return None
        for field, value in patch.items():
            setattr(item, field, value)
        self.db.flush()
        self.db.refresh(item)
        return item

    def delete(self, item_id: uuid.UUID) -> bool:
        item = self.find_one(item_id)
        if item is None:
            return False
        self.db.delete(item)
        self.db.flush()
        return True
