"""Payment confirmation webhook handling"""

from datetime import datetime
from typing import Callable, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from storefront.errors import WebhookPayloadError, WebhookProcessingError, WebhookSignatureError
from storefront.models.order import Order, OrderStatus
from storefront.payments.base import BasePaymentProcessor
from storefront.schemas.order import ConfirmationResult

logger = structlog.get_logger()

COMPLETED_EVENT = "checkout.session.completed"


def _parse_order_id(value) -> Optional[UUID]:
    if not value:
        return None
    try:
        return UUID(str(value))
    except ValueError:
        return None


class PaymentConfirmationHandler:
    """
    Turns a PENDING order into an ACTIVE one when the processor reports payment.

    Safe to call any number of times for the same event: only the first
    delivery changes the order, later ones are acknowledged untouched.
    """

    def __init__(
        self,
        db: AsyncSession,
        payments: BasePaymentProcessor,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.db = db
        self.payments = payments
        self.clock = clock

    async def handle(self, payload: bytes, signature: Optional[str]) -> ConfirmationResult:
        try:
            event = self.payments.verify_event(payload, signature)
        except (WebhookSignatureError, WebhookPayloadError) as e:
            logger.warning("Webhook rejected", error=str(e))
            raise

        event_type = event.get("type")
        if event_type != COMPLETED_EVENT:
            logger.info("Webhook event ignored", event_type=event_type)
            return ConfirmationResult(ignored=True, reason="unhandled_event")

        data = event.get("data")
        session = data.get("object") if isinstance(data, dict) else None
        if not isinstance(session, dict):
            logger.warning("Webhook without a session object", event_id=event.get("id"))
            raise WebhookPayloadError("Malformed checkout session event")

        if session.get("payment_status") != "paid":
            logger.info("Checkout session not paid", session_id=session.get("id"))
            return ConfirmationResult(ignored=True, reason="not_paid")

        metadata = session.get("metadata") or {}
        if not isinstance(metadata, dict):
            raise WebhookPayloadError("Malformed checkout session metadata")

        order_id = _parse_order_id(metadata.get("order_id"))
        if order_id is None:
            logger.warning("Paid session without order id", session_id=session.get("id"))
            return ConfirmationResult(ignored=True, reason="missing_order_id")

        try:
            result = await self.db.execute(select(Order).where(Order.id == order_id))
            order = result.scalar_one_or_none()

            if not order:
                logger.warning("Paid session for unknown order", order_id=str(order_id))
                return ConfirmationResult(ignored=True, reason="unknown_order", order_id=order_id)

            if order.is_paid:
                logger.info("Duplicate payment confirmation", order_id=str(order_id))
                return ConfirmationResult(order_id=order_id)

            order.status = OrderStatus.NEW
            order.paid_at = self.clock()
            order.payment_session_id = session.get("id") or order.payment_session_id
            order.payment_intent_id = session.get("payment_intent")
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Could not confirm order", order_id=str(order_id), error=str(e))
            raise WebhookProcessingError("Could not record payment", detail=str(e)) from e

        logger.info("Order paid", order_id=str(order_id), session_id=order.payment_session_id)

        return ConfirmationResult(order_id=order_id)
