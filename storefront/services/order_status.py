"""
Kitchen-driven order status transitions.

The status change is committed before the customer is notified, and each
notification kind has its own sent-at marker. The marker is stamped after the
first attempt whatever its outcome, so a customer gets at most one "cooking"
and one "ready" text per order.
"""

from datetime import datetime
from typing import Callable, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from storefront.config import settings
from storefront.errors import InvalidPhoneError, NotificationError, StoreUnavailableError, ValidationError
from storefront.models.order import Order, OrderStatus
from storefront.notifications.base import BaseNotificationGateway
from storefront.schemas.order import OrderResponse, StatusUpdateResponse
from storefront.services.order_views import OrderViews, to_response
from storefront.services.phone import mask_phone, normalize_phone_se

logger = structlog.get_logger()

ETA_OPTIONS = (5, 10, 15, 20, 25, 30, 40, 45, 50, 60)
TARGET_STATUSES = (OrderStatus.NEW, OrderStatus.COOKING, OrderStatus.DONE)

def cooking_label(eta_minutes: int) -> str:
    return f"{OrderStatus.COOKING} • {eta_minutes} min"


def build_message(text: str, order_number: Optional[int]) -> str:
    if order_number is None:
        return text
    return f"Order #{order_number}: {text}"


class OrderStatusMachine:
    """Moves paid orders through New, Cooking and Done"""

    def __init__(
        self,
        db: AsyncSession,
        gateway: BaseNotificationGateway,
        views: Optional[OrderViews] = None,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.db = db
        self.gateway = gateway
        self.views = views or OrderViews(db)
        self.clock = clock

    async def _commit(self, action: str, order_id: UUID):
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Order update failed", action=action, order_id=str(order_id), error=str(e))
            raise StoreUnavailableError("Could not update order", detail=str(e)) from e

    async def _notify(self, order: Order, message: str) -> bool:
        """Send one text; False when the gateway failed"""
        try:
            await self.gateway.send(order.customer_phone, message)
        except NotificationError as e:
            logger.warning(
                "Customer notification failed",
                order_id=str(order.id),
                phone=mask_phone(order.customer_phone),
                error=str(e),
            )
            return False
        return True

    async def advance(
        self,
        order_id: UUID,
        target: str,
        eta_minutes: Optional[int] = None,
    ) -> StatusUpdateResponse:
        if target not in TARGET_STATUSES:
            raise ValidationError(f"Invalid status: {target}")

        if target == OrderStatus.COOKING and eta_minutes not in ETA_OPTIONS:
            raise ValidationError("Choose a preparation time before marking the order as cooking.")

        order, order_number = await self.views.get_paid(order_id)

        phone = normalize_phone_se(order.customer_phone)
        if not phone:
            raise InvalidPhoneError(order.customer_phone, "The order has an invalid phone number.")

        if target == OrderStatus.COOKING:
            order.status = cooking_label(eta_minutes)
            order.eta_minutes = eta_minutes
        else:
            order.status = target
            order.eta_minutes = None
        order.customer_phone = phone

        await self._commit("status", order_id)

        logger.info("Order status updated", order_id=str(order_id), status=order.status)

        message = None
        marker = None
        if target == OrderStatus.COOKING and order.sms_cooking_sent_at is None:
            message = build_message(settings.sms_cooking_message.format(eta=eta_minutes), order_number)
            marker = "sms_cooking_sent_at"
        elif target == OrderStatus.DONE and order.sms_ready_sent_at is None:
            message = build_message(settings.sms_ready_message, order_number)
            marker = "sms_ready_sent_at"

        sent = False
        failed = False
        if message:
            sent = await self._notify(order, message)
            failed = not sent
            setattr(order, marker, self.clock())
            await self._commit("notification_marker", order_id)
            if sent:
                logger.info("Customer notified", order_id=str(order_id), kind=marker)

        return StatusUpdateResponse(
            status=order.status,
            order_number=order_number,
            notification_sent=sent,
            notification_failed=failed,
        )

    async def archive(self, order_id: UUID) -> OrderResponse:
        order, order_number = await self.views.get_paid(order_id)

        if order.archived_at is None:
            order.archived_at = self.clock()
            await self._commit("archive", order_id)
            logger.info("Order archived", order_id=str(order_id))

        return to_response(order, order_number)
