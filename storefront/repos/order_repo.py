# storefront/repos/order_repo.py
from decimal import Decimal
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.data.models.product import ProductModel
from storefront.domain.cart import CartLine


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    # write - tylko flush, transakcja należy do wywołującego
    def insert_order(self, user_id: int, total_amount: Decimal, status: str) -> OrderModel:
        order = OrderModel(user_id=user_id, total_amount=total_amount, status=status)
        self.db.add(order)
        self.db.flush()
        return order

    def insert_order_lines(self, order_id: int, lines: Iterable[CartLine]) -> list[OrderItemModel]:
        items = [
            OrderItemModel(
                order_id=order_id,
                product_id=line.product_id,
                quantity=line.quantity,
                price_at_time=line.unit_price,
            )
            for line in lines
        ]
        self.db.add_all(items)
        self.db.flush()
        return items

    # read
    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def list_for_user(self, user_id: int) -> list[OrderModel]:
        stmt = (
            select(OrderModel)
            .where(OrderModel.user_id == user_id)
            .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def list_all(self) -> list[OrderModel]:
        stmt = select(OrderModel).order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    def get_order_lines(self, order_id: int) -> list[tuple[OrderItemModel, str | None, str | None]]:
        # pozycje + nazwa i obrazek produktu do faktury
        stmt = (
            select(OrderItemModel, ProductModel.name, ProductModel.image)
            .outerjoin(ProductModel, ProductModel.id == OrderItemModel.product_id)
            .where(OrderItemModel.order_id == order_id)
            .order_by(OrderItemModel.id)
        )
        return [tuple(row) for row in self.db.execute(stmt).all()]
