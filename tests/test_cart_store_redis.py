"""Session cart kept in a redis hash."""
from decimal import Decimal

import pytest

from storefront.domain.cart import CartLine
from storefront.services.cart_store import RedisCartStore


class FakeRedisClient:
    """Minimalny klient z komendami używanymi przez RedisCartStore."""

    def __init__(self):
        self.hashes = {}
        self.ttls = {}

    def hset(self, key, field, value):
        self.hashes.setdefault(key, {})[field] = value

    def hget(self, key, field):
        return self.hashes.get(key, {}).get(field)

    def hgetall(self, key):
        return dict(self.hashes.get(key, {}))

    def hdel(self, key, field):
        self.hashes.get(key, {}).pop(field, None)

    def delete(self, key):
        self.hashes.pop(key, None)
        self.ttls.pop(key, None)

    def expire(self, key, seconds):
        self.ttls[key] = seconds


@pytest.fixture
def client():
    return FakeRedisClient()


@pytest.fixture
def store(client):
    return RedisCartStore(client=client, ttl=900)


def test_price_is_frozen_at_add_time(store):
    store.set_item(7, 2, 1, Decimal("5"))
    store.set_item(7, 1, 3, Decimal("1.999"))

    assert store.get_cart_lines(7) == [
        CartLine(product_id=1, quantity=3, unit_price=Decimal("2.00")),
        CartLine(product_id=2, quantity=1, unit_price=Decimal("5.00")),
    ]


def test_every_write_refreshes_ttl(store, client):
    store.set_item(7, 1, 1, Decimal("1.00"))

    assert client.ttls["cart:7"] == 900


def test_quantity_lookup_and_remove(store):
    store.set_item(7, 1, 4, Decimal("1.00"))
    assert store.get_quantity(7, 1) == 4

    store.remove_item(7, 1)
    assert store.get_quantity(7, 1) == 0
    assert store.get_cart_lines(7) == []


def test_clear_drops_whole_cart(store, client):
    store.set_item(7, 1, 1, Decimal("1.00"))
    store.set_item(8, 1, 1, Decimal("1.00"))

    store.clear(7)

    assert store.get_cart_lines(7) == []
    assert len(store.get_cart_lines(8)) == 1
