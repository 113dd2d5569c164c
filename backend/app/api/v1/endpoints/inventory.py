from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.orm import Session

from backend.app.core.database import get_db
from backend.app.models.inventory import InventoryItem
from backend.app.schemas.inventory import (
    InventoryOverview,
    ItemCreate,
    ItemOut,
    ItemUpdate,
)
from backend.app.services.inventory import (
    create_item,
    delete_item,
    get_inventory_overview,
    list_items,
    update_item,
)

router = APIRouter()


@router.get("/summary", response_model=InventoryOverview)
def get_summary(db: Session = Depends(get_db)) -> dict:
    return get_inventory_overview(db)


@router.get("", response_model=list[ItemOut])
def get_items(
    search: str | None = Query(None, description="Name or SKU contains"),
    db: Session = Depends(get_db),
) -> list[InventoryItem]:
    return list_items(db, search=search)


@router.post("", response_model=ItemOut, status_code=status.HTTP_201_CREATED)
def post_item(
    payload: ItemCreate,
    request: Request,
    db: Session = Depends(get_db),
) -> InventoryItem:
    try:
        return create_item(
            db,
            name=payload.name,
            stock_quantity=payload.stock_quantity,
            unit_price=payload.unit_price,
            sale_price=payload.sale_price,
            sku=payload.sku,
            supplier=payload.supplier,
            ip_address=request.client.host if request.client else None,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.patch("/{item_id}", response_model=ItemOut)
def patch_item(
    item_id: UUID,
    payload: ItemUpdate,
    request: Request,
    db: Session = Depends(get_db),
) -> InventoryItem:
    try:
        return update_item(
            db,
            item_id,
            payload.model_dump(exclude_unset=True),
            ip_address=request.client.host if request.client else None,
        )
    except ValueError as e:
        code = (
            status.HTTP_404_NOT_FOUND
            if "not found" in str(e)
            else status.HTTP_400_BAD_REQUEST
        )
        raise HTTPException(status_code=code, detail=str(e))


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_item(
    item_id: UUID,
    request: Request,
    db: Session = Depends(get_db),
) -> Response:
    try:
        delete_item(
            db, item_id, ip_address=request.client.host if request.client else None
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
