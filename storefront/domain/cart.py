# storefront/domain/cart.py
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class CartLine:
    product_id: int
    quantity: int
    unit_price: Decimal

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


def to_money(value) -> Decimal:
    # float -> str -> Decimal, bez dryfu binarnego
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def cart_total(lines: Iterable[CartLine]) -> Decimal:
    return to_money(sum((line.line_total for line in lines), Decimal("0.00")))
