from sqlalchemy import func, select

from storefront.data.models import OrderItemModel, OrderModel, ProductModel


# każdy helper otwiera i zamyka własną sesję, żeby nie trzymać blokady SQLite

def set_stock(session_factory, product_id, quantity):
    with session_factory() as s:
        s.get(ProductModel, product_id).quantity = quantity
        s.commit()


def get_stock(session_factory, product_id):
    with session_factory() as s:
        return s.get(ProductModel, product_id).quantity


def count_orders(session_factory):
    with session_factory() as s:
        return s.execute(select(func.count()).select_from(OrderModel)).scalar_one()


def count_order_lines(session_factory):
    with session_factory() as s:
        return s.execute(select(func.count()).select_from(OrderItemModel)).scalar_one()
