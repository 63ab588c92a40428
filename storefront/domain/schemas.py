# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List
from decimal import Decimal
from datetime import datetime


class UserCreate(BaseModel):
    """Schema dla tworzenia użytkownika."""

    id: int = Field(..., gt=0, description="ID użytkownika (musi być > 0)")
    name: str = Field(..., min_length=1, max_length=100, description="Imię użytkownika")
    role: str = Field("user", pattern="^(user|admin)$")


class UserRead(BaseModel):
    id: int
    name: str
    role: str

    model_config = ConfigDict(from_attributes=True)


class ProductIn(BaseModel):
    """Schema dla dodawania produktu (admin)."""

    name: str = Field(..., min_length=1, max_length=200)
    category: str | None = None
    image: str | None = None
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    quantity: int = Field(0, ge=0, description="Stan magazynu")


class ProductUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    category: str | None = None
    image: str | None = None
    price: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    quantity: int | None = Field(None, ge=0)


class ProductOut(BaseModel):
    id: int
    name: str
    category: str | None = None
    image: str | None = None
    price: Decimal
    quantity: int

    model_config = ConfigDict(from_attributes=True)


class CartItemIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    product_id: int = Field(..., gt=0, description="ID produktu (musi być > 0)")
    quantity: int = Field(1, gt=0, description="Ilość produktu (musi być > 0)")


class CartItemUpdate(BaseModel):
    # <= 0 usuwa pozycję z koszyka
    quantity: int


class CartLineOut(BaseModel):
    product_id: int
    quantity: int
    unit_price: Decimal
    line_total: Decimal


class CartOut(BaseModel):
    user_id: int
    items: List[CartLineOut]
    total: Decimal
    message: str | None = None


class CheckoutIn(BaseModel):
    user_id: int = Field(..., gt=0, description="ID użytkownika (musi być > 0)")


class CheckoutOut(BaseModel):
    order_id: int
    total_amount: Decimal
    warnings: List[str] = []


class OrderOut(BaseModel):
    id: int
    user_id: int
    status: str
    total_amount: Decimal
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OrderLineOut(BaseModel):
    product_id: int
    product_name: str | None = None
    image: str | None = None
    quantity: int
    price_at_time: Decimal
    line_total: Decimal


class OrderDetailOut(OrderOut):
    """Nagłówek + pozycje (faktura)."""

    lines: List[OrderLineOut]
