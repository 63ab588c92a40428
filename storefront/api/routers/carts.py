# storefront/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_cart_store
from storefront.data.database import get_db
from storefront.domain.schemas import CartItemIn, CartItemUpdate, CartOut
from storefront.services.cart_service import CartService
from storefront.services.cart_store import CartStore

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(
    db: Session = Depends(get_db),
    cart_store: CartStore = Depends(get_cart_store),
):
    return CartService(db=db, cart_store=cart_store)


@router.get("/", response_model=CartOut)
def get_cart(user_id: int = Query(...), svc: CartService = Depends(get_service)):
    return svc.get_cart(user_id)


@router.post("/items", response_model=CartOut)
def add_item(
    payload: CartItemIn,
    user_id: int = Query(...),
    svc: CartService = Depends(get_service),
):
    try:
        return svc.add_product(
            user_id=user_id,
            product_id=payload.product_id,
            quantity=payload.quantity,
        )
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/items/{product_id}", response_model=CartOut)
def update_item(
    product_id: int,
    payload: CartItemUpdate,
    user_id: int = Query(...),
    svc: CartService = Depends(get_service),
):
    try:
        return svc.update_quantity(user_id, product_id, payload.quantity)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/items/{product_id}", response_model=CartOut)
def remove_item(
    product_id: int,
    user_id: int = Query(...),
    svc: CartService = Depends(get_service),
):
    return svc.remove_product(user_id, product_id)


@router.delete("/", response_model=CartOut)
def clear_cart(user_id: int = Query(...), svc: CartService = Depends(get_service)):
    return svc.clear_cart(user_id)
