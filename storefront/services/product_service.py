# storefront/services/product_service.py
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.domain.schemas import ProductIn, ProductUpdate
from storefront.repos.product_repo import ProductRepo
from storefront.repos.user_repo import UserRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class ProductService:
    """Katalog (odczyt bez blokad) i inwentarz admina."""

    def __init__(self, db: Session):
        self.repo = ProductRepo(db)
        self.users = UserRepo(db)

    def list_products(self, search: str | None = None, category: str | None = None) -> list[ProductModel]:
        return self.repo.list_products(search=search, category=category)

    def get_product(self, product_id: int) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise ValueError("Product not found")
        return product

    # admin
    def create_product(self, admin_id: int, payload: ProductIn) -> ProductModel:
        self._require_admin(admin_id)
        created = self.repo.create_product(ProductModel(**payload.model_dump()))
        logger.info(f"Admin {admin_id} created product {created.id} ({created.name}, qty {created.quantity})")
        return created

    def update_product(self, admin_id: int, product_id: int, payload: ProductUpdate) -> ProductModel:
        self._require_admin(admin_id)
        product = self.get_product(product_id)
        updated = self.repo.update_product(product, payload.model_dump(exclude_unset=True))
        logger.info(f"Admin {admin_id} updated product {product_id}")
        return updated

    def delete_product(self, admin_id: int, product_id: int) -> None:
        self._require_admin(admin_id)
        product = self.get_product(product_id)
        try:
            self.repo.delete_product(product)
        except RuntimeError as e:
            logger.warning(f"Admin {admin_id} could not delete product {product_id}: {e}")
            raise
        logger.info(f"Admin {admin_id} deleted product {product_id}")

    def _require_admin(self, user_id: int) -> None:
        if not self.users.is_admin(user_id):
            raise PermissionError("Admin access required")
