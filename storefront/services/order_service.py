# storefront/services/order_service.py
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.domain.cart import to_money
from storefront.repos.order_repo import OrderRepo
from storefront.repos.user_repo import UserRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Odczyt zamówień: historia, faktura, lista dla admina.
    Zapis zamówień robi tylko CheckoutService.
    """

    def __init__(self, db: Session):
        self.repo = OrderRepo(db)
        self.users = UserRepo(db)

    @staticmethod
    def _header(order: OrderModel) -> dict:
        return {
            "id": order.id,
            "user_id": order.user_id,
            "status": order.status,
            "total_amount": order.total_amount,
            "created_at": order.created_at,
        }

    def list_user_orders(self, user_id: int) -> list[dict]:
        return [self._header(o) for o in self.repo.list_for_user(user_id)]

    def get_order(self, order_id: int, user_id: int) -> dict:
        """
        Use Case: faktura - nagłówek + pozycje.
        Właściciel albo admin.
        """
        order = self.repo.get_order(order_id)

        if not order:
            raise ValueError("Order not found")

        if order.user_id != user_id and not self.users.is_admin(user_id):
            raise PermissionError("Access to order denied")

        lines = [
            {
                "product_id": item.product_id,
                "product_name": name,
                "image": image,
                "quantity": item.quantity,
                "price_at_time": item.price_at_time,
                "line_total": to_money(item.price_at_time * item.quantity),
            }
            for item, name, image in self.repo.get_order_lines(order.id)
        ]

        return {**self._header(order), "lines": lines}

    def list_all_orders(self, user_id: int) -> list[dict]:
        if not self.users.is_admin(user_id):
            raise PermissionError("Admin access required")

        return [self._header(o) for o in self.repo.list_all()]
