# storefront/domain/errors.py
"""
Błędy checkoutu. Każdy oznacza, że transakcja została wycofana
i żaden stan (zamówienie, pozycje, stan magazynu) się nie zmienił.
"""


class CheckoutError(Exception):
    """
    Baza dla wszystkich błędów zwracanych przez CheckoutService.
    retryable = True -> checkout_retry ponawia całą transakcję.
    """

    retryable = False


class EmptyCart(CheckoutError):
    def __init__(self):
        super().__init__("Cart is empty")


class InvalidCartLine(CheckoutError):
    def __init__(self, reason: str, product_id: int | None = None):
        self.product_id = product_id
        self.reason = reason
        super().__init__(reason)


class ProductNotFound(CheckoutError):
    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Product {product_id} not found")


class InsufficientStock(CheckoutError):
    def __init__(self, product_id: int, available: int, requested: int):
        self.product_id = product_id
        self.available = available
        self.requested = requested
        super().__init__(
            f"Only {available} left in stock for product {product_id} (requested {requested})"
        )


class TransientFailure(CheckoutError):
    """Deadlock / lock timeout / serialization failure - można ponowić."""

    retryable = True

    def __init__(self, message: str = "Checkout temporarily unavailable, try again"):
        super().__init__(message)


class PersistenceFailure(CheckoutError):
    def __init__(self, message: str = "Could not persist order"):
        super().__init__(message)
