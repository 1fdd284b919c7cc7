"""Shared API dependencies: admin gate and service wiring"""

from datetime import datetime
from typing import Callable, Optional
import secrets

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.config import settings
from storefront.database import get_db
from storefront.notifications import BaseNotificationGateway, get_notification_gateway
from storefront.payments import BasePaymentProcessor, StripePaymentProcessor
from storefront.services.availability import AvailabilityRegistry
from storefront.services.checkout import CheckoutOrchestrator
from storefront.services.confirmation import PaymentConfirmationHandler
from storefront.services.opening_hours import OpeningHours
from storefront.services.order_status import OrderStatusMachine
from storefront.services.order_views import OrderViews
from storefront.services.pricing import CartEngine


async def require_admin(x_admin_pin: Optional[str] = Header(default=None)) -> None:
    """Gate for the kitchen console; the PIN travels in ``X-Admin-Pin``"""
    if not x_admin_pin or not secrets.compare_digest(x_admin_pin, settings.admin_pin):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin PIN",
        )


def get_clock() -> Callable[[], datetime]:
    return datetime.utcnow


def get_payment_processor() -> BasePaymentProcessor:
    return StripePaymentProcessor()


def get_gateway() -> BaseNotificationGateway:
    return get_notification_gateway(settings.sms_provider)


def get_opening_hours() -> OpeningHours:
    return OpeningHours()


def get_availability(db: AsyncSession = Depends(get_db)) -> AvailabilityRegistry:
    return AvailabilityRegistry(db)


def get_cart_engine(
    availability: AvailabilityRegistry = Depends(get_availability),
) -> CartEngine:
    return CartEngine(availability)


def get_order_views(db: AsyncSession = Depends(get_db)) -> OrderViews:
    return OrderViews(db)


def get_checkout(
    db: AsyncSession = Depends(get_db),
    payments: BasePaymentProcessor = Depends(get_payment_processor),
    cart_engine: CartEngine = Depends(get_cart_engine),
    opening_hours: OpeningHours = Depends(get_opening_hours),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> CheckoutOrchestrator:
    return CheckoutOrchestrator(db, payments, cart_engine, opening_hours, clock)


def get_confirmation_handler(
    db: AsyncSession = Depends(get_db),
    payments: BasePaymentProcessor = Depends(get_payment_processor),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> PaymentConfirmationHandler:
    return PaymentConfirmationHandler(db, payments, clock)


def get_status_machine(
    db: AsyncSession = Depends(get_db),
    gateway: BaseNotificationGateway = Depends(get_gateway),
    views: OrderViews = Depends(get_order_views),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> OrderStatusMachine:
    return OrderStatusMachine(db, gateway, views, clock)
