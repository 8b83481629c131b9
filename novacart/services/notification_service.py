# novacart/services/notification_service.py
from kombu.exceptions import OperationalError

from novacart.celery_worker import celery_app
from novacart.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Order notifications, processed asynchronously by Celery.
    The order is already committed when this runs, so a broker outage
    is logged and does not fail the request.
    """

    @staticmethod
    def send_order_notification(user_id: int, order_id: int, total: float):
        try:
            send_order_notification_task.delay(user_id, order_id, total)
        except OperationalError as e:
            logger.warning(f"Could not queue notification for order {order_id}: {e}")


@celery_app.task(name="novacart.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: int, order_id: int, total: float):
    """Only logs for now, a real system would send an email here."""
    logger.info(f"[NOTIFICATION] User {user_id}: Order {order_id} placed, total {total:.2f}")
    return {"user_id": user_id, "order_id": order_id, "status": "sent"}
