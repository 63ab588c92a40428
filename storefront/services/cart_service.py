# storefront/services/cart_service.py
from typing import Dict, Any
from sqlalchemy.orm import Session

from storefront.domain.cart import cart_total, to_money
from storefront.repos.product_repo import ProductRepo
from storefront.services.cart_store import CartStore
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Use case'y koszyka.
    commands (add, update, remove, clear) modyfikują koszyk w CartStore
    query (get) tylko odczyt
    Stan magazynu czytany bez blokad - ostateczna kontrola jest w checkout.
    """

    def __init__(self, db: Session, cart_store: CartStore):
        self.products = ProductRepo(db)
        self.store = cart_store

    # query - odczyt
    def get_cart(self, user_id: int, message: str | None = None) -> Dict[str, Any]:
        lines = self.store.get_cart_lines(user_id)

        # dict przekształcany w jsona
        return {
            "user_id": user_id,
            "items": [
                {
                    "product_id": line.product_id,
                    "quantity": line.quantity,
                    "unit_price": line.unit_price,
                    "line_total": to_money(line.line_total),
                }
                for line in lines
            ],
            "total": cart_total(lines),
            "message": message,
        }

    # commands
    def add_product(self, user_id: int, product_id: int, quantity: int) -> Dict[str, Any]:
        if quantity <= 0:
            raise ValueError("Quantity must be greater than 0")

        product = self.products.get_product(product_id)
        if not product:
            raise LookupError("Product not found")

        available = product.quantity
        if available <= 0:
            raise ValueError(f'Sorry, "{product.name}" is out of stock')

        current = self.store.get_quantity(user_id, product_id)
        new_qty = current + quantity
        message = None

        # przycinamy do stanu magazynu zamiast odrzucać
        if new_qty > available:
            new_qty = available
            message = f"Only {available} units available"
            logger.info(f"User {user_id} asked for {current + quantity} of product {product_id}, clamped to {available}")

        self.store.set_item(user_id, product_id, new_qty, product.price)

        logger.info(f"Product {product_id} set to {new_qty} in cart of user {user_id}")

        return self.get_cart(user_id, message)

    def update_quantity(self, user_id: int, product_id: int, quantity: int) -> Dict[str, Any]:
        # ilość <= 0 usuwa pozycję
        if quantity <= 0:
            return self.remove_product(user_id, product_id)

        product = self.products.get_product(product_id)
        if not product:
            raise LookupError("Product not found")

        message = None
        if quantity > product.quantity:
            quantity = product.quantity
            message = f"Only {product.quantity} units available"

        if quantity <= 0:
            self.store.remove_item(user_id, product_id)
        else:
            self.store.set_item(user_id, product_id, quantity, product.price)

        return self.get_cart(user_id, message)

    def remove_product(self, user_id: int, product_id: int) -> Dict[str, Any]:
        logger.info(f"Removing product {product_id} from cart of user {user_id}")
        self.store.remove_item(user_id, product_id)
        return self.get_cart(user_id)

    def clear_cart(self, user_id: int) -> Dict[str, Any]:
        self.store.clear(user_id)
        return self.get_cart(user_id)
