# storefront/services/checkout_service.py
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Callable, Sequence

from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.database import BEGIN_IMMEDIATE
from storefront.data.models.order import ORDER_STATUS_PLACED
from storefront.domain.cart import CartLine, cart_total, to_money
from storefront.domain.errors import (
    CheckoutError,
    EmptyCart,
    InsufficientStock,
    InvalidCartLine,
    PersistenceFailure,
    TransientFailure,
)
from storefront.repos.order_repo import OrderRepo
from storefront.repos.product_repo import StockLedger
from storefront.services.cart_store import CartStore
from storefront.services.notification_service import NotificationService
from storefront.utils.retry import checkout_retry, is_transient_db_error
from storefront.utils.settings import CHECKOUT_BACKOFF_SECONDS, CHECKOUT_MAX_ATTEMPTS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class CheckoutResult:
    order_id: int
    total_amount: Decimal
    # niekrytyczne problemy po commit (np. koszyk nie wyczyszczony)
    warnings: list[str] = field(default_factory=list)


class CheckoutService:
    """
    Zamiana koszyka na zamówienie w jednej transakcji.

    1. walidacja koszyka (pusty koszyk -> EmptyCart, bez otwierania transakcji)
    2. total w Decimal
    3. FOR UPDATE na produktach, rosnąco po id (brak cykli deadlocków)
    4. sprawdzenie WSZYSTKICH pozycji zanim cokolwiek zmienimy
    5. nagłówek zamówienia, pozycje, zmniejszenie stanów
    6. commit, potem (best-effort) czyszczenie koszyka i powiadomienie

    Błędy przejściowe bazy (deadlock, lock timeout) -> rollback i ponowienie
    całej transakcji, max_attempts razy, potem TransientFailure.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        cart_store: CartStore | None = None,
        notification_service: NotificationService | None = None,
        max_attempts: int = CHECKOUT_MAX_ATTEMPTS,
        backoff: float = CHECKOUT_BACKOFF_SECONDS,
    ):
        self.session_factory = session_factory
        self.cart_store = cart_store
        self.notification_service = notification_service
        self.max_attempts = max_attempts
        self.backoff = backoff

    def checkout_cart(self, user_id: int) -> CheckoutResult:
        if self.cart_store is None:
            raise RuntimeError("CheckoutService has no cart store configured")

        lines = self.cart_store.get_cart_lines(user_id)
        return self.checkout(user_id, lines)

    def checkout(self, user_id: int, cart_lines: Sequence[CartLine]) -> CheckoutResult:
        lines = self._validate(cart_lines)
        total = cart_total(lines)

        logger.info(f"Checkout for user {user_id}: {len(lines)} lines, total {total}")

        order_id = checkout_retry(self.max_attempts, self.backoff)(
            self._place_order, user_id, lines, total
        )

        logger.info(f"Order {order_id} placed for user {user_id}, total {total}")

        result = CheckoutResult(order_id=order_id, total_amount=total)
        self._after_commit(user_id, result)
        return result

    def _validate(self, cart_lines: Sequence[CartLine]) -> list[CartLine]:
        lines = list(cart_lines or [])
        if not lines:
            raise EmptyCart()

        seen = set()
        valid = []
        for line in lines:
            if line.product_id in seen:
                raise InvalidCartLine("Duplicate product in cart", line.product_id)
            seen.add(line.product_id)

            # bool to też int
            if not isinstance(line.quantity, int) or isinstance(line.quantity, bool):
                raise InvalidCartLine("Quantity must be an integer", line.product_id)

            if line.quantity <= 0:
                raise InvalidCartLine("Quantity must be greater than 0", line.product_id)

            try:
                unit_price = to_money(line.unit_price)
            except (InvalidOperation, TypeError, ValueError):
                raise InvalidCartLine("Unit price must be a number", line.product_id)

            if not unit_price.is_finite():
                raise InvalidCartLine("Unit price must be a number", line.product_id)

            if unit_price < 0:
                raise InvalidCartLine("Unit price cannot be negative", line.product_id)

            valid.append(CartLine(product_id=line.product_id, quantity=line.quantity, unit_price=unit_price))

        return valid

    def _place_order(self, user_id: int, lines: list[CartLine], total: Decimal) -> int:
        """Jedna próba transakcji. Każdy wyjątek w bloku begin() = rollback."""
        try:
            with self.session_factory() as session:
                with session.begin():
                    # SQLite: BEGIN IMMEDIATE, inne bazy ignorują opcję
                    session.connection(execution_options={BEGIN_IMMEDIATE: True})
                    ledger = StockLedger(session)
                    orders = OrderRepo(session)

                    # blokady w stałej kolejności
                    available = {}
                    for product_id in sorted(line.product_id for line in lines):
                        available[product_id] = ledger.lock_for_update(product_id)

                    for line in lines:
                        if line.quantity > available[line.product_id]:
                            raise InsufficientStock(
                                product_id=line.product_id,
                                available=available[line.product_id],
                                requested=line.quantity,
                            )

                    order = orders.insert_order(user_id, total, ORDER_STATUS_PLACED)
                    orders.insert_order_lines(order.id, lines)

                    for line in lines:
                        ledger.decrement(line.product_id, line.quantity)

                    order_id = order.id

            return order_id

        except CheckoutError as e:
            logger.info(f"Checkout for user {user_id} rejected: {e}")
            raise
        except DBAPIError as e:
            if is_transient_db_error(e):
                logger.warning(f"Transient database error during checkout for user {user_id}: {e.orig}")
                raise TransientFailure() from e
            logger.error(f"Database error during checkout for user {user_id}: {e}")
            raise PersistenceFailure() from e
        except SQLAlchemyError as e:
            logger.error(f"Database error during checkout for user {user_id}: {e}")
            raise PersistenceFailure() from e

    def _after_commit(self, user_id: int, result: CheckoutResult) -> None:
        # zamówienie już stoi - tutaj nic nie może go wycofać
        if self.cart_store is not None:
            try:
                self.cart_store.clear(user_id)
            except Exception as e:
                logger.warning(f"Order {result.order_id} placed but cart of user {user_id} not cleared: {e}")
                result.warnings.append("Order placed, but the cart could not be cleared")

        if self.notification_service is not None:
            try:
                self.notification_service.send_order_notification(user_id, result.order_id)
            except Exception as e:
                logger.warning(f"Order {result.order_id} notification not sent: {e}")
                result.warnings.append("Order placed, but the confirmation could not be sent")
