"""Background job tasks"""

from datetime import datetime, timedelta
import asyncio

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from storefront.jobs.celery_app import celery_app
from storefront.config import settings
from storefront.models.order import Order

logger = structlog.get_logger()


def run_async(coro):
    """Helper to run async functions in sync context"""
    return asyncio.run(coro)


async def purge_pending_orders(db: AsyncSession, now: datetime, retention_hours: int) -> int:
    """
    Delete unpaid orders older than the retention window.

    Paid orders are never touched, so order numbers derived from payment
    order stay stable.
    """
    cutoff = now - timedelta(hours=retention_hours)
    result = await db.execute(
        delete(Order).where(
            Order.paid_at.is_(None),
            Order.created_at < cutoff,
        )
    )
    await db.commit()
    return result.rowcount or 0


@celery_app.task(name="expire_pending_orders")
def expire_pending_orders():
    """Drop checkouts that were abandoned before payment"""
    logger.info("Expiring pending orders", retention_hours=settings.pending_order_retention_hours)

    async def _expire():
        from storefront.database import SessionLocal

        async with SessionLocal() as db:
            return await purge_pending_orders(
                db,
                datetime.utcnow(),
                settings.pending_order_retention_hours,
            )

    deleted = run_async(_expire())

    logger.info("Pending orders expired", count=deleted)
    return {"deleted": deleted}
