from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.orm import Session

from backend.app.core.database import get_db
from backend.app.models.order import OrderStatus
from backend.app.schemas.order import (
    OrderCreate,
    OrderDetailOut,
    OrderOut,
    OrderPaymentsOut,
    OrderUpdate,
    PaymentCreate,
    PaymentRecorded,
)
from backend.app.services.orders import (
    create_order,
    delete_order,
    delete_payment,
    get_order_detail,
    list_orders,
    list_payments,
    record_payment,
    update_order,
)

router = APIRouter()


# ─── Orders ───────────────────────────────────────────────────────────────────


@router.get("", response_model=list[OrderOut])
def get_orders(
    search: str | None = Query(None, description="Customer name or product"),
    status_filter: OrderStatus | None = Query(None, alias="status"),
    db: Session = Depends(get_db),
) -> list[dict]:
    return list_orders(db, search=search, status=status_filter)


@router.post("", response_model=OrderOut, status_code=status.HTTP_201_CREATED)
def post_order(
    payload: OrderCreate,
    request: Request,
    db: Session = Depends(get_db),
) -> dict:
    try:
        return create_order(
            db,
            order_date=payload.order_date,
            customer_name=payload.customer_name,
            product_description=payload.product_description,
            purchase_price=payload.purchase_price,
            sale_price=payload.sale_price,
            status=payload.status,
            merchandise_status=payload.merchandise_status,
            ip_address=request.client.host if request.client else None,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/{order_id}", response_model=OrderDetailOut)
def get_order(order_id: UUID, db: Session = Depends(get_db)) -> dict:
    try:
        return get_order_detail(db, order_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.patch("/{order_id}", response_model=OrderOut)
def patch_order(
    order_id: UUID,
    payload: OrderUpdate,
    request: Request,
    db: Session = Depends(get_db),
) -> dict:
    try:
        return update_order(
            db,
            order_id,
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


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_order(
    order_id: UUID,
    request: Request,
    db: Session = Depends(get_db),
) -> Response:
    try:
        delete_order(
            db, order_id, ip_address=request.client.host if request.client else None
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ─── Payments ─────────────────────────────────────────────────────────────────


@router.get("/{order_id}/payments", response_model=OrderPaymentsOut)
def get_payments(
    order_id: UUID,
    search: str | None = Query(None, description="Reference number contains"),
    db: Session = Depends(get_db),
) -> dict:
    try:
        return list_payments(db, order_id, search=search)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post(
    "/{order_id}/payments",
    response_model=PaymentRecorded,
    status_code=status.HTTP_201_CREATED,
)
def post_payment(
    order_id: UUID,
    payload: PaymentCreate,
    request: Request,
    db: Session = Depends(get_db),
) -> dict:
    try:
        return record_payment(
            db,
            order_id=order_id,
            amount=payload.amount,
            reference_number=payload.reference_number,
            payment_image_url=payload.payment_image_url,
            payment_date=payload.payment_date,
            ip_address=request.client.host if request.client else None,
        )
    except ValueError as e:
        code = (
            status.HTTP_404_NOT_FOUND
            if "not found" in str(e)
            else status.HTTP_400_BAD_REQUEST
        )
        raise HTTPException(status_code=code, detail=str(e))


@router.delete("/payments/{payment_id}", response_model=OrderOut)
def remove_payment(
    payment_id: UUID,
    request: Request,
    db: Session = Depends(get_db),
) -> dict:
    try:
        return delete_payment(
            db, payment_id, ip_address=request.client.host if request.client else None
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
