import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from storefront.domain.errors import InsufficientStock, TransientFailure
from storefront.utils.retry import checkout_retry, is_transient_db_error


class PgError(Exception):
    def __init__(self, pgcode, message="error"):
        super().__init__(message)
        self.pgcode = pgcode


@pytest.mark.parametrize("pgcode", ["40001", "40P01", "55P03"])
def test_postgres_lock_and_serialization_codes_are_transient(pgcode):
    assert is_transient_db_error(OperationalError("SELECT 1", {}, PgError(pgcode)))


def test_mysql_lock_wait_timeout_is_transient():
    orig = Exception(1205, "Lock wait timeout exceeded; try restarting transaction")
    assert is_transient_db_error(OperationalError("UPDATE products", {}, orig))


def test_sqlite_busy_is_transient():
    assert is_transient_db_error(OperationalError("BEGIN IMMEDIATE", {}, Exception("database is locked")))


def test_constraint_violation_is_not_transient():
    assert not is_transient_db_error(IntegrityError("INSERT", {}, PgError("23505", "duplicate key")))


def test_non_database_errors_are_not_transient():
    assert not is_transient_db_error(RuntimeError("deadlock detected"))


def _failing(calls, exc):
    def run():
        calls.append(exc)
        raise exc

    return run


def test_checkout_retry_repeats_retryable_errors():
    calls = []

    with pytest.raises(TransientFailure):
        checkout_retry(3, 0)(_failing(calls, TransientFailure()))

    assert len(calls) == 3


def test_checkout_retry_gives_up_on_business_errors():
    calls = []

    with pytest.raises(InsufficientStock):
        checkout_retry(3, 0)(_failing(calls, InsufficientStock(product_id=1, available=0, requested=1)))

    assert len(calls) == 1
