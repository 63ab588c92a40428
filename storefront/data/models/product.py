from sqlalchemy import CheckConstraint, Column, Integer, Numeric, String

from storefront.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    category = Column(String, nullable=True, index=True)
    image = Column(String, nullable=True)

    price = Column(Numeric(10, 2), nullable=False)
    # stan magazynu, jedyny współdzielony zasób przy checkout
    quantity = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_products_quantity_non_negative"),
    )
