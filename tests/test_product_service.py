"""Admin inventory edits against existing orders."""
from decimal import Decimal

import pytest
from sqlalchemy import event

from storefront.data.models import ProductModel
from storefront.domain.cart import CartLine
from storefront.domain.schemas import ProductUpdate
from storefront.repos.product_repo import ProductRepo
from storefront.services.checkout_service import CheckoutService
from storefront.services.product_service import ProductService
from tests.helpers import get_stock


@pytest.fixture
def foreign_keys_on(engine):
    # SQLite domyślnie nie sprawdza kluczy obcych, Postgres zawsze
    def _enable(dbapi_connection, connection_record):
        dbapi_connection.execute("PRAGMA foreign_keys=ON")

    event.listen(engine, "connect", _enable)
    engine.dispose()
    yield engine
    event.remove(engine, "connect", _enable)


def _order_apples(seeded):
    return CheckoutService(session_factory=seeded, backoff=0).checkout(
        1, [CartLine(product_id=1, quantity=1, unit_price=Decimal("10.00"))]
    )


def test_delete_of_ordered_product_is_refused(seeded, db):
    _order_apples(seeded)

    with pytest.raises(RuntimeError, match="has orders"):
        ProductService(db).delete_product(99, 1)

    assert get_stock(seeded, 1) == 9


def test_foreign_key_violation_on_delete_is_refused(foreign_keys_on, seeded, db, monkeypatch):
    _order_apples(seeded)
    # zamówienie pojawia się już po sprawdzeniu
    monkeypatch.setattr(ProductRepo, "has_orders", lambda self, product_id: False)

    with pytest.raises(RuntimeError, match="has orders"):
        ProductService(db).delete_product(99, 1)

    # sesja po rollbacku dalej nadaje się do użycia
    assert db.get(ProductModel, 1).name == "Apples"
    assert get_stock(seeded, 1) == 9


def test_delete_without_orders(seeded, db):
    ProductService(db).delete_product(99, 2)

    with pytest.raises(ValueError, match="Product not found"):
        ProductService(db).get_product(2)


def test_inventory_changes_require_admin(seeded, db):
    service = ProductService(db)

    with pytest.raises(PermissionError):
        service.delete_product(1, 2)
    with pytest.raises(PermissionError):
        service.update_product(1, 2, ProductUpdate(quantity=0))

    assert get_stock(seeded, 2) == 10
