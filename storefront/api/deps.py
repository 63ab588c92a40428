# storefront/api/deps.py
from fastapi import Depends
from sqlalchemy.orm import Session

from storefront.data.database import SessionLocal, get_db
from storefront.services.cart_store import CartStore, DbCartStore, RedisCartStore
from storefront.services.checkout_service import CheckoutService
from storefront.services.notification_service import NotificationService
from storefront.utils.settings import CART_BACKEND


def get_session_factory():
    """Fabryka sesji dla transakcji checkoutu (osobna od sesji requestu)."""
    return SessionLocal


def get_cart_store(db: Session = Depends(get_db)) -> CartStore:
    if CART_BACKEND == "session":
        return RedisCartStore()
    return DbCartStore(db)


def get_checkout_service(
    session_factory=Depends(get_session_factory),
    cart_store: CartStore = Depends(get_cart_store),
) -> CheckoutService:
    return CheckoutService(
        session_factory=session_factory,
        cart_store=cart_store,
        notification_service=NotificationService(),
    )
