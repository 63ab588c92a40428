# storefront/repos/cart_repo.py
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.product import ProductModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_items_with_price(self, user_id: int) -> list[tuple[CartItemModel, ProductModel]]:
        stmt = (
            select(CartItemModel, ProductModel)
            .join(ProductModel, ProductModel.id == CartItemModel.product_id)
            .where(CartItemModel.user_id == user_id)
            .order_by(CartItemModel.id)
        )
        return [tuple(row) for row in self.db.execute(stmt).all()]

    def get_item(self, user_id: int, product_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.user_id == user_id,
                CartItemModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def set_item_quantity(self, user_id: int, product_id: int, quantity: int) -> None:
        item = self.get_item(user_id, product_id)
        if item:
            item.quantity = quantity
        else:
            self.db.add(CartItemModel(user_id=user_id, product_id=product_id, quantity=quantity))

    def delete_item(self, user_id: int, product_id: int) -> None:
        self.db.execute(
            delete(CartItemModel).where(
                CartItemModel.user_id == user_id,
                CartItemModel.product_id == product_id,
            )
        )

    def clear(self, user_id: int) -> None:
        self.db.execute(delete(CartItemModel).where(CartItemModel.user_id == user_id))

    def commit(self):
        self.db.commit()
