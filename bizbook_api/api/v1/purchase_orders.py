"""Purchase order line item routes"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from bizbook_api.api.dependencies import get_current_user
from bizbook_api.api.v1.crud import reject_null_required
from bizbook_api.api.v1.schemas import Envelope, PurchaseOrderItemCreate, PurchaseOrderItemRead, partial_model
from bizbook_api.infrastructure.clients.identity import Identity
from bizbook_api.infrastructure.database.models import PurchaseOrderItem
from bizbook_api.infrastructure.database.repositories import PurchaseOrderItemRepository
from bizbook_api.infrastructure.database.session import get_db

router = APIRouter()

PurchaseOrderItemUpdate = partial_model(PurchaseOrderItemCreate, "PurchaseOrderItemUpdate")


@router.get("/purchase-orders/{purchase_order_id}/items", response_model=Envelope[List[PurchaseOrderItemRead]])
def list_items(
    purchase_order_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: Identity = Depends(get_current_user),
):
    repo = PurchaseOrderItemRepository(db, user.user_id)
    if not repo.order_exists(purchase_order_id):
        raise HTTPException(status_code=404, detail="Purchase order not found")

    data = [PurchaseOrderItemRead.model_validate(item) for item in repo.get_items(purchase_order_id)]
    return Envelope(data=data, total=len(data))


@router.post("/purchase-order-items", response_model=Envelope[PurchaseOrderItemRead], status_code=201)
def create_item(
    body: PurchaseOrderItemCreate,
    db: Session = Depends(get_db),
    user: Identity = Depends(get_current_user),
):
    repo = PurchaseOrderItemRepository(db, user.user_id)
    if not repo.order_exists(body.purchase_order_id):
        raise HTTPException(status_code=404, detail="Purchase order not found")

    item = repo.create(body.model_dump())
    db.commit()
    return Envelope(data=PurchaseOrderItemRead.model_validate(item))


@router.patch("/purchase-order-items/{item_id}", response_model=Envelope[PurchaseOrderItemRead])
def update_item(
    item_id: uuid.UUID,
    body: PurchaseOrderItemUpdate,
    db: Session = Depends(get_db),
    user: Identity = Depends(get_current_user),
):
    patch = body.model_dump(exclude_unset=True)
    reject_null_required(patch, PurchaseOrderItemCreate, PurchaseOrderItem)

    repo = PurchaseOrderItemRepository(db, user.user_id)
    if "purchase_order_id" in patch and not repo.order_exists(patch["purchase_order_id"]):
        raise HTTPException(status_code=404, detail="Purchase order not found")

    item = repo.find_one(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Purchase order item not found")

    # Line total follows quantity and price unless the caller sets it
    if ("quantity" in patch or "unit_price" in patch) and "total_price" not in patch:
        quantity = patch.get("quantity", item.quantity)
        unit_price = patch.get("unit_price", item.unit_price)
        patch["total_price"] = round(quantity * unit_price, 2)

    item = repo.update(item_id, patch)
    db.commit()
    return Envelope(data=PurchaseOrderItemRead.model_validate(item))


@router.delete("/purchase-order-items/{item_id}", status_code=204)
def delete_item(
    item_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: Identity = Depends(get_current_user),
):
    if not PurchaseOrderItemRepository(db, user.user_id).delete(item_id):
        raise HTTPException(status_code=404, detail="Purchase order item not found")
    db.commit()
    return Response(status_code=204)
