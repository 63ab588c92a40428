# storefront/main.py
from fastapi import FastAPI
import uvicorn

from storefront.data.database import init_db
from storefront.api.routers import health, users, products, carts, orders
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def create_app() -> FastAPI:
    logger.info("Initializing database tables")
    try:
        init_db()
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise

    app = FastAPI(
        title="Storefront Service",
        version="1.0.0",
    )

    # Include routers
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(products.router)
    app.include_router(products.admin_router)
    app.include_router(carts.router)
    app.include_router(orders.router)
    app.include_router(orders.admin_router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
