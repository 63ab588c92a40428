from fastapi import APIRouter, HTTPException
from sqlalchemy.exc import SQLAlchemyError

from storefront.data import database
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    try:
        database.ping(database.engine)
    except SQLAlchemyError as e:
        logger.error(f"Health check failed: {e}")
        raise HTTPException(status_code=503, detail="database unavailable")
    return {"status": "ok"}
