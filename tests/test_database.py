"""SQLite transaction modes: plain reads vs. checkout writers."""
from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from storefront.data.database import BEGIN_IMMEDIATE, build_engine, init_db
from storefront.data.models import ProductModel
from storefront.utils.retry import is_transient_db_error


@pytest.fixture
def factory(tmp_path):
    # krótki busy timeout, żeby zablokowany BEGIN szybko zwrócił błąd
    eng = build_engine(f"sqlite:///{tmp_path / 'locks.db'}", lock_timeout_ms=200)
    init_db(eng)
    session_factory = sessionmaker(bind=eng, autoflush=False, expire_on_commit=False)
    with session_factory() as s:
        s.add(ProductModel(id=1, name="Apples", price=Decimal("10.00"), quantity=10))
        s.commit()
    yield session_factory
    eng.dispose()


def _begin_immediate(session):
    session.begin()
    return session.connection(execution_options={BEGIN_IMMEDIATE: True})


def test_open_read_does_not_block_checkout_writer(factory):
    with factory() as reader, factory() as writer:
        assert reader.get(ProductModel, 1).quantity == 10
        assert reader.in_transaction()

        conn = _begin_immediate(writer)
        assert conn.in_transaction()
        writer.rollback()


def test_checkout_writers_exclude_each_other(factory):
    with factory() as first, factory() as second:
        _begin_immediate(first)

        with pytest.raises(OperationalError) as exc_info:
            _begin_immediate(second)

        assert is_transient_db_error(exc_info.value)
        first.rollback()
