# storefront/services/notification_service.py
from storefront.celery_worker import celery_app
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Powiadomienia po złożeniu zamówienia.
    Używa Celery, checkout nie czeka na wysyłkę.
    """

    @staticmethod
    def send_order_notification(user_id: int, order_id: int):
        send_order_placed_task.delay(user_id, order_id)


@celery_app.task(name="storefront.services.notification_service.send_order_placed_task")
def send_order_placed_task(user_id: int, order_id: int):
    """
    Celery task - tu byłby email z fakturą.
    Na razie tylko loguje.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: order {order_id} placed")

    return {"user_id": user_id, "order_id": order_id, "status": "sent"}
