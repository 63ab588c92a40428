# storefront/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_checkout_service
from storefront.data.database import get_db
from storefront.domain.errors import (
    CheckoutError,
    EmptyCart,
    InsufficientStock,
    InvalidCartLine,
    ProductNotFound,
    TransientFailure,
)
from storefront.domain.schemas import CheckoutIn, CheckoutOut, OrderDetailOut, OrderOut
from storefront.services.checkout_service import CheckoutService
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])
admin_router = APIRouter(prefix="/admin/orders", tags=["admin"])

# kolejność ma znaczenie - pierwszy pasujący typ wygrywa
_CHECKOUT_STATUS = (
    (EmptyCart, 400),
    (InvalidCartLine, 400),
    (ProductNotFound, 404),
    (InsufficientStock, 409),
    (TransientFailure, 503),
)


def checkout_http_error(e: CheckoutError) -> HTTPException:
    for exc_type, status_code in _CHECKOUT_STATUS:
        if isinstance(e, exc_type):
            return HTTPException(status_code=status_code, detail=str(e))
    # PersistenceFailure i wszystko inne
    return HTTPException(status_code=500, detail=str(e))


@router.post("/checkout", response_model=CheckoutOut, status_code=201)
def checkout(
    payload: CheckoutIn,
    svc: CheckoutService = Depends(get_checkout_service),
):
    """
    Zamienia koszyk użytkownika na zamówienie.
    Wszystko albo nic - przy błędzie koszyk i stany magazynu bez zmian.
    """
    try:
        result = svc.checkout_cart(payload.user_id)
    except CheckoutError as e:
        raise checkout_http_error(e) from e

    return {
        "order_id": result.order_id,
        "total_amount": result.total_amount,
        "warnings": result.warnings,
    }


@router.get("/", response_model=List[OrderOut])
def list_orders(user_id: int = Query(...), db: Session = Depends(get_db)):
    return OrderService(db).list_user_orders(user_id)


@router.get("/{order_id}", response_model=OrderDetailOut)
def get_order(
    order_id: int,
    user_id: int = Query(...),
    db: Session = Depends(get_db),
):
    """
    Faktura: nagłówek + pozycje.
    """
    svc = OrderService(db)
    try:
        return svc.get_order(order_id, user_id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@admin_router.get("/", response_model=List[OrderOut])
def list_all_orders(user_id: int = Query(...), db: Session = Depends(get_db)):
    try:
        return OrderService(db).list_all_orders(user_id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
