"""
Checkout orchestration.

The order of record is written before the payment session is requested, and
the session only carries the order id. A processor failure therefore leaves a
PENDING order behind, which staff never see and nobody is billed for.
"""

from datetime import datetime
from typing import Callable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from storefront.config import settings
from storefront.errors import StoreUnavailableError, ValidationError
from storefront.models.order import Order, OrderStatus
from storefront.payments.base import BasePaymentProcessor, CheckoutLineItem
from storefront.schemas.cart import Cart, CartLine
from storefront.schemas.order import CheckoutItem, CheckoutRequest, CheckoutResponse
from storefront.services.opening_hours import OpeningHours
from storefront.services.phone import mask_phone, require_phone_se
from storefront.services.pricing import BONUS_COMMENT, CartEngine

logger = structlog.get_logger()

DEFAULT_CUSTOMER_NAME = "Guest"


def normalize_items(items: List[CheckoutItem]) -> List[CheckoutItem]:
    """Trim names, clamp quantities, drop nameless lines"""
    normalized = []
    for item in items:
        name = (item.name or "").strip()
        if not name:
            continue
        normalized.append(
            CheckoutItem(
                name=name,
                price=item.price,
                qty=max(1, int(item.qty or 1)),
                comment=(item.comment or "").strip(),
            )
        )
    return normalized


def compute_items_total(items: List[CheckoutItem]) -> int:
    return sum(item.price * item.qty for item in items)


class CheckoutOrchestrator:
    """Validates a cart, records a PENDING order and opens a payment session"""

    def __init__(
        self,
        db: AsyncSession,
        payments: BasePaymentProcessor,
        cart_engine: CartEngine,
        opening_hours: Optional[OpeningHours] = None,
        clock: Callable[[], datetime] = datetime.utcnow,
        enforce_opening_hours: Optional[bool] = None,
    ):
        self.db = db
        self.payments = payments
        self.cart_engine = cart_engine
        self.opening_hours = opening_hours or OpeningHours()
        self.clock = clock
        self.enforce_opening_hours = (
            settings.enforce_opening_hours if enforce_opening_hours is None else enforce_opening_hours
        )

    def _cart_from_items(self, items: List[CheckoutItem]) -> Cart:
        """Map named items onto catalog lines, one line per unit"""
        lines: List[CartLine] = []
        unknown: List[str] = []

        for index, item in enumerate(normalize_items(items)):
            if item.comment == BONUS_COMMENT:
                # Regenerated from the lunch rules when pricing
                continue
            menu_item = self.cart_engine.catalog.find_by_name(item.name)
            if menu_item is None:
                unknown.append(item.name)
                continue
            lines.extend(
                CartLine(line_id=f"item-{index}-{unit}", item_id=menu_item.id, comment=item.comment)
                for unit in range(item.qty)
            )

        if unknown:
            raise ValidationError(
                "Your order contains items that are not on the menu.",
                detail=", ".join(unknown),
            )
        return Cart(lines=lines)

    async def _resolve_items(self, request: CheckoutRequest, now: datetime) -> List[CheckoutItem]:
        """Price the order from the catalog; client prices are never used"""
        if request.lines is None:
            cart = self._cart_from_items(request.items)
        else:
            cart = Cart(lines=request.lines)

        await self.cart_engine.validate_for_checkout(cart)
        priced = self.cart_engine.price(cart, now)

        items: List[CheckoutItem] = []
        for line in priced.lines:
            comment = line.comment.strip()
            last = items[-1] if items else None
            if last and (last.name, last.price, last.comment) == (line.name, line.unit_price, comment):
                last.qty += 1
            else:
                items.append(CheckoutItem(name=line.name, price=line.unit_price, qty=1, comment=comment))
        return items

    async def checkout(
        self,
        request: CheckoutRequest,
        success_url: str,
        cancel_url: str,
    ) -> CheckoutResponse:
        now = self.clock()

        if self.enforce_opening_hours:
            self.opening_hours.ensure_open(now)

        items = await self._resolve_items(request, now)

        if not items:
            raise ValidationError("Your order is empty.")

        if any(item.price < 0 for item in items):
            raise ValidationError("Your order contains an invalid price.")

        total = compute_items_total(items)
        if total <= 0:
            raise ValidationError("Order total is missing.")

        if request.total is not None and request.total != total:
            logger.warning(
                "Client total does not match server total",
                client_total=request.total,
                server_total=total,
            )

        phone = require_phone_se(request.customer_phone)
        name = (request.customer_name or "").strip() or DEFAULT_CUSTOMER_NAME

        order = Order(
            customer_name=name,
            customer_phone=phone,
            items=[item.model_dump() for item in items],
            total=total,
            status=OrderStatus.PENDING,
            paid_at=None,
        )

        try:
            self.db.add(order)
            await self.db.commit()
            await self.db.refresh(order)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Could not create order", error=str(e))
            raise StoreUnavailableError("Could not create order. Please try again.", detail=str(e)) from e

        logger.info(
            "Pending order created",
            order_id=str(order.id),
            total=total,
            item_count=len(items),
            phone=mask_phone(phone),
        )

        # May raise PaymentProcessorError; the pending order stays behind
        session = await self.payments.create_checkout_session(
            line_items=[
                CheckoutLineItem(name=item.name, unit_amount=item.price, quantity=item.qty)
                for item in items
            ],
            metadata={"order_id": str(order.id)},
            success_url=success_url,
            cancel_url=cancel_url,
        )

        try:
            order.payment_session_id = session.id
            await self.db.commit()
        except SQLAlchemyError as e:
            # The webhook finds the order through metadata, not the session id
            await self.db.rollback()
            logger.warning("Could not store payment session id", order_id=str(order.id), error=str(e))

        logger.info("Payment session created", order_id=str(order.id), session_id=session.id)

        return CheckoutResponse(url=session.url, order_id=order.id)
