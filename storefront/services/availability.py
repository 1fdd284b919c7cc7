"""Menu availability registry"""

from datetime import datetime
from typing import Dict

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from storefront.errors import NotFoundError, StoreUnavailableError
from storefront.menu import MenuCatalog, catalog as default_catalog
from storefront.models.menu import MenuAvailability

logger = structlog.get_logger()


class AvailabilityRegistry:
    """
    Stock flags for catalog items.

    A missing row means the item is available, so only items staff have
    touched ever get a row.
    """

    def __init__(self, db: AsyncSession, catalog: MenuCatalog = default_catalog):
        self.db = db
        self.catalog = catalog

    async def is_available(self, item_id: str) -> bool:
        try:
            result = await self.db.execute(
                select(MenuAvailability.available).where(MenuAvailability.item_id == item_id)
            )
        except SQLAlchemyError as e:
            raise StoreUnavailableError("Could not read availability", detail=str(e)) from e

        available = result.scalar_one_or_none()
        return available is None or bool(available)

    async def unavailable_ids(self) -> set:
        """Ids of items currently marked out of stock"""
        try:
            result = await self.db.execute(
                select(MenuAvailability.item_id).where(MenuAvailability.available == False)
            )
        except SQLAlchemyError as e:
            raise StoreUnavailableError("Could not read availability", detail=str(e)) from e
        return set(result.scalars().all())

    async def availability_map(self) -> Dict[str, bool]:
        """Flag for every catalog item, keyed by item id"""
        try:
            result = await self.db.execute(select(MenuAvailability))
        except SQLAlchemyError as e:
            raise StoreUnavailableError("Could not read availability", detail=str(e)) from e
        flags = {row.item_id: bool(row.available) for row in result.scalars().all()}
        return {item.id: flags.get(item.id, True) for item in self.catalog.all()}

    async def set_availability(self, item_id: str, available: bool) -> MenuAvailability:
        """Upsert the flag for one item"""
        if item_id not in self.catalog:
            raise NotFoundError(f"Unknown menu item: {item_id}")

        try:
            row = await self.db.get(MenuAvailability, item_id)
            if row is None:
                row = MenuAvailability(item_id=item_id, available=available)
                self.db.add(row)
            else:
                row.available = available
                row.updated_at = datetime.utcnow()
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreUnavailableError("Could not update availability", detail=str(e)) from e

        logger.info("Availability updated", item_id=item_id, available=available)
        return row
