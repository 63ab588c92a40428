# storefront/api/routers/products.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.schemas import ProductIn, ProductOut, ProductUpdate
from storefront.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["products"])
admin_router = APIRouter(prefix="/admin/products", tags=["admin"])


@router.get("/", response_model=List[ProductOut])
def list_products(
    search: str | None = Query(None),
    category: str | None = Query(None),
    db: Session = Depends(get_db),
):
    return ProductService(db).list_products(search=search, category=category)


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    try:
        return ProductService(db).get_product(product_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@admin_router.post("/", response_model=ProductOut, status_code=201)
def create_product(
    payload: ProductIn,
    user_id: int = Query(...),
    db: Session = Depends(get_db),
):
    try:
        return ProductService(db).create_product(user_id, payload)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))


@admin_router.put("/{product_id}", response_model=ProductOut)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    user_id: int = Query(...),
    db: Session = Depends(get_db),
):
    try:
        return ProductService(db).update_product(user_id, product_id, payload)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@admin_router.delete("/{product_id}", status_code=204)
def delete_product(
    product_id: int,
    user_id: int = Query(...),
    db: Session = Depends(get_db),
):
    try:
        ProductService(db).delete_product(user_id, product_id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except RuntimeError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
