# storefront/repos/product_repo.py
from sqlalchemy import select, update, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.order_item import OrderItemModel
from storefront.data.models.product import ProductModel
from storefront.domain.errors import ProductNotFound, PersistenceFailure


class ProductRepo:
    """Odczyt bez blokad (sklep, koszyk) + CRUD dla admina."""

    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def list_products(self, search: str | None = None, category: str | None = None) -> list[ProductModel]:
        stmt = select(ProductModel)

        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(or_(ProductModel.name.ilike(pattern), ProductModel.category.ilike(pattern)))

        # "All" = brak filtra, jak w starym sklepie
        if category and category != "All":
            stmt = stmt.where(ProductModel.category == category)

        return list(self.db.execute(stmt.order_by(ProductModel.id)).scalars().all())

    def has_orders(self, product_id: int) -> bool:
        stmt = select(OrderItemModel.id).where(OrderItemModel.product_id == product_id).limit(1)
        return self.db.execute(stmt).first() is not None

    def create_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def update_product(self, product: ProductModel, data: dict) -> ProductModel:
        for key, value in data.items():
            setattr(product, key, value)
        self.db.commit()
        self.db.refresh(product)
        return product

    def delete_product(self, product: ProductModel) -> None:
        # pozycje zamówień trzymają klucz obcy do produktu (historia i faktury)
        if self.has_orders(product.id):
            raise RuntimeError("Product has orders and cannot be deleted")

        try:
            self.db.delete(product)
            self.db.commit()
        except IntegrityError as e:
            # zamówienie złożone między sprawdzeniem a commitem
            self.db.rollback()
            raise RuntimeError("Product has orders and cannot be deleted") from e


class StockLedger:
    """
    Stan magazynu w transakcji wywołującego.
    Nie robi commit/rollback - tym zarządza CheckoutService.
    """

    def __init__(self, db: Session):
        self.db = db

    def lock_for_update(self, product_id: int) -> int:
        # SELECT ... FOR UPDATE, czeka aż inna transakcja zwolni wiersz
        quantity = self.db.execute(
            select(ProductModel.quantity)
            .where(ProductModel.id == product_id)
            .with_for_update()
        ).scalar_one_or_none()

        if quantity is None:
            raise ProductNotFound(product_id)

        return quantity

    def decrement(self, product_id: int, amount: int) -> None:
        # warunek quantity >= amount jako druga linia obrony przed ujemnym stanem
        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id, ProductModel.quantity >= amount)
            .values(quantity=ProductModel.quantity - amount)
        )

        if result.rowcount != 1:
            raise PersistenceFailure(f"Stock update for product {product_id} affected {result.rowcount} rows")
