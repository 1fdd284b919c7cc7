"""Staff-facing order queries"""

from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.config import settings
from storefront.errors import NotFoundError, StoreUnavailableError
from storefront.models.order import Order
from storefront.schemas.order import OrderResponse


def numbered_orders(offset: int = 0):
    """
    Paid orders with their display number.

    The number is the order's position by payment time, so it is only
    assigned once ``paid_at`` is set and never changes afterwards.
    """
    number = func.row_number().over(order_by=(Order.paid_at, Order.id)) + offset
    return (
        select(Order.id.label("id"), number.label("order_number"))
        .where(Order.paid_at.isnot(None))
        .subquery()
    )


def to_response(order: Order, order_number: Optional[int]) -> OrderResponse:
    response = OrderResponse.model_validate(order)
    return response.model_copy(update={"order_number": order_number})


class OrderViews:
    """Read side of the kitchen console"""

    def __init__(self, db: AsyncSession, number_offset: Optional[int] = None):
        self.db = db
        self.number_offset = settings.order_number_offset if number_offset is None else number_offset

    async def _fetch(self, query) -> List[Tuple[Order, int]]:
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise StoreUnavailableError("Could not load orders", detail=str(e)) from e
        return [(row[0], row[1]) for row in result.all()]

    async def order_number(self, order_id: UUID) -> Optional[int]:
        try:
            _, number = await self.get_paid(order_id)
        except NotFoundError:
            return None
        return number

    async def get_paid(self, order_id: UUID) -> Tuple[Order, int]:
        """A paid order and its number; unpaid orders do not exist for staff"""
        numbered = numbered_orders(self.number_offset)
        rows = await self._fetch(
            select(Order, numbered.c.order_number)
            .join(numbered, numbered.c.id == Order.id)
            .where(Order.id == order_id)
        )
        if not rows:
            raise NotFoundError("Order not found")
        return rows[0]

    async def list_active(self) -> List[OrderResponse]:
        """Paid, not archived; finished orders sink to the bottom"""
        numbered = numbered_orders(self.number_offset)
        rows = await self._fetch(
            select(Order, numbered.c.order_number)
            .join(numbered, numbered.c.id == Order.id)
            .where(Order.archived_at.is_(None))
            .order_by(Order.created_at.desc())
        )
        # stable sort keeps newest-first inside each group
        rows.sort(key=lambda row: row[0].is_done)
        return [to_response(order, number) for order, number in rows]

    async def list_archived(self) -> List[OrderResponse]:
        numbered = numbered_orders(self.number_offset)
        rows = await self._fetch(
            select(Order, numbered.c.order_number)
            .join(numbered, numbered.c.id == Order.id)
            .where(Order.archived_at.isnot(None))
            .order_by(Order.archived_at.desc())
        )
        return [to_response(order, number) for order, number in rows]
