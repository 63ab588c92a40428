# storefront/services/cart_store.py
import json
from decimal import Decimal
from typing import Protocol

import redis
from sqlalchemy.orm import Session

from storefront.domain.cart import CartLine, to_money
from storefront.repos.cart_repo import CartRepo
from storefront.utils.retry import redis_retry
from storefront.utils.settings import CART_TTL_SECONDS, REDIS_URL
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartStore(Protocol):
    """
    Jedno źródło koszyka dla checkoutu, niezależnie od tego
    czy koszyk siedzi w bazie (user_cart) czy w sesji (redis).
    """

    def get_cart_lines(self, user_id: int) -> list[CartLine]: ...

    def get_quantity(self, user_id: int, product_id: int) -> int: ...

    def set_item(self, user_id: int, product_id: int, quantity: int, unit_price: Decimal) -> None: ...

    def remove_item(self, user_id: int, product_id: int) -> None: ...

    def clear(self, user_id: int) -> None: ...


class DbCartStore:
    """Koszyk w tabeli user_cart, cena zawsze aktualna z products."""

    def __init__(self, db: Session):
        self.repo = CartRepo(db)

    def get_cart_lines(self, user_id: int) -> list[CartLine]:
        lines = [
            CartLine(
                product_id=item.product_id,
                quantity=item.quantity,
                unit_price=to_money(product.price),
            )
            for item, product in self.repo.get_items_with_price(user_id)
        ]
        # zamknij transakcję odczytu, checkout otwiera własną
        self.repo.commit()
        return lines

    def get_quantity(self, user_id: int, product_id: int) -> int:
        item = self.repo.get_item(user_id, product_id)
        return item.quantity if item else 0

    def set_item(self, user_id: int, product_id: int, quantity: int, unit_price: Decimal) -> None:
        # unit_price ignorowane - cena brana z produktu przy odczycie
        self.repo.set_item_quantity(user_id, product_id, quantity)
        self.repo.commit()

    def remove_item(self, user_id: int, product_id: int) -> None:
        self.repo.delete_item(user_id, product_id)
        self.repo.commit()

    def clear(self, user_id: int) -> None:
        self.repo.clear(user_id)
        self.repo.commit()
        logger.info(f"Cart of user {user_id} cleared (db)")


class RedisCartStore:
    """
    Koszyk sesyjny: hash cart:{user_id}, pole = product_id,
    wartość = {"quantity", "price"} z ceną z chwili dodania.
    Każdy zapis przedłuża TTL.
    """

    def __init__(self, client: redis.Redis | None = None, ttl: int = CART_TTL_SECONDS):
        self.redis = client or redis.Redis.from_url(REDIS_URL, decode_responses=True)
        self.ttl = ttl

    @staticmethod
    def _key(user_id: int) -> str:
        return f"cart:{user_id}"

    @redis_retry()
    def get_cart_lines(self, user_id: int) -> list[CartLine]:
        raw = self.redis.hgetall(self._key(user_id))
        lines = []
        for field, value in raw.items():
            data = json.loads(value)
            lines.append(
                CartLine(
                    product_id=int(field),
                    quantity=int(data["quantity"]),
                    unit_price=to_money(data["price"]),
                )
            )
        return sorted(lines, key=lambda line: line.product_id)

    @redis_retry()
    def get_quantity(self, user_id: int, product_id: int) -> int:
        value = self.redis.hget(self._key(user_id), str(product_id))
        if value is None:
            return 0
        return int(json.loads(value)["quantity"])

    @redis_retry()
    def set_item(self, user_id: int, product_id: int, quantity: int, unit_price: Decimal) -> None:
        key = self._key(user_id)
        payload = json.dumps({"quantity": quantity, "price": str(to_money(unit_price))})
        self.redis.hset(key, str(product_id), payload)
        self.redis.expire(key, self.ttl)

    @redis_retry()
    def remove_item(self, user_id: int, product_id: int) -> None:
        self.redis.hdel(self._key(user_id), str(product_id))

    @redis_retry()
    def clear(self, user_id: int) -> None:
        self.redis.delete(self._key(user_id))
        logger.info(f"Cart of user {user_id} cleared (session)")
