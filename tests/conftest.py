import os
import tempfile
from decimal import Decimal

# ustawione, zanim cokolwiek ze storefront zostanie zaimportowane
_TMP = tempfile.mkdtemp(prefix="storefront-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP, 'app.db')}"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "1"
os.environ["CART_BACKEND"] = "db"
os.environ["CHECKOUT_BACKOFF_SECONDS"] = "0"
os.environ["DB_LOCK_TIMEOUT_MS"] = "5000"

import pytest
from sqlalchemy.orm import sessionmaker

from storefront.data.database import build_engine, init_db
from storefront.data.models import ProductModel, UserModel


@pytest.fixture
def engine(tmp_path):
    eng = build_engine(f"sqlite:///{tmp_path / 'test.db'}", lock_timeout_ms=5000)
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def seeded(session_factory):
    """user 1 i 2 (zwykli), user 99 (admin), produkty 1 i 2 po 10 sztuk."""
    with session_factory() as s:
        s.add_all([
            UserModel(id=1, name="alice", role="user"),
            UserModel(id=2, name="bob", role="user"),
            UserModel(id=99, name="root", role="admin"),
            ProductModel(id=1, name="Apples", category="Fruits", price=Decimal("10.00"), quantity=10),
            ProductModel(id=2, name="Milk", category="Dairy", price=Decimal("5.00"), quantity=10),
        ])
        s.commit()
    return session_factory

