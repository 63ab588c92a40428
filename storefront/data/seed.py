# storefront/data/seed.py
from decimal import Decimal

from storefront.data.database import SessionLocal, init_db
from storefront.data.models import ProductModel, UserModel
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

PRODUCTS = [
    {"name": "Apples", "category": "Fruits", "price": Decimal("1.50"), "quantity": 100},
    {"name": "Bananas", "category": "Fruits", "price": Decimal("0.80"), "quantity": 120},
    {"name": "Milk", "category": "Dairy", "price": Decimal("3.20"), "quantity": 40},
    {"name": "Bread", "category": "Bakery", "price": Decimal("2.75"), "quantity": 30},
]

USERS = [
    {"id": 1, "name": "admin", "role": "admin"},
    {"id": 2, "name": "shopper", "role": "user"},
]


def seed(session_factory=SessionLocal):
    db = session_factory()
    try:
        # not forcing: only seed if empty
        if db.query(ProductModel).first():
            return
        db.add_all(UserModel(**u) for u in USERS)
        db.add_all(ProductModel(**p) for p in PRODUCTS)
        db.commit()
        logger.info(f"Seeded {len(USERS)} users and {len(PRODUCTS)} products")
    finally:
        db.close()


if __name__ == "__main__":
    init_db()
    seed()
