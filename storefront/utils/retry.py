# storefront/utils/retry.py
import logging

import redis
from sqlalchemy.exc import DBAPIError
from tenacity import (
    Retrying,
    before_sleep_log,
    retry,
    retry_if_exception,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# postgres: serialization_failure, deadlock_detected, lock_not_available
PG_TRANSIENT_CODES = {"40001", "40P01", "55P03"}
# mysql: lock wait timeout, deadlock
MYSQL_TRANSIENT_CODES = {1205, 1213}
TRANSIENT_MESSAGES = (
    "deadlock detected",
    "could not serialize access",
    "lock timeout",
    "database is locked",
)


def is_transient_db_error(exc: Exception) -> bool:
    if not isinstance(exc, DBAPIError):
        return False

    orig = exc.orig
    pgcode = getattr(orig, "pgcode", None)
    if pgcode in PG_TRANSIENT_CODES:
        return True

    args = getattr(orig, "args", ())
    if args and args[0] in MYSQL_TRANSIENT_CODES:
        return True

    msg = str(orig).lower()
    return any(k in msg for k in TRANSIENT_MESSAGES)


def is_retryable(exc: BaseException) -> bool:
    return getattr(exc, "retryable", False)


def checkout_retry(max_attempts: int, backoff: float) -> Retrying:
    """
    Ponawia całą transakcję checkoutu tylko dla błędów z retryable = True
    (TransientFailure). Po wyczerpaniu prób leci ostatni błąd (reraise).
    """
    return Retrying(
        reraise=True,
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=backoff, min=backoff, max=max(backoff * 10, backoff)),
        retry=retry_if_exception(is_retryable),
        before_sleep=before_sleep_log(logger, logging.WARNING),
    )


def redis_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(redis.RedisError),
    )
