"""Menu, stock and opening hours endpoints"""

from datetime import datetime
from typing import Callable, Dict

from fastapi import APIRouter, Depends, Response

from storefront.api.deps import (
    get_availability,
    get_cart_engine,
    get_clock,
    get_opening_hours,
    require_admin,
)
from storefront.config import settings
from storefront.menu import catalog
from storefront.schemas.menu import (
    AvailabilityUpdate,
    AvailabilityUpdateResponse,
    MenuItemResponse,
    MenuResponse,
    OpeningHoursResponse,
)
from storefront.services.availability import AvailabilityRegistry
from storefront.services.opening_hours import OpeningHours
from storefront.services.pricing import CartEngine

router = APIRouter()

NO_STORE = "no-store"


@router.get("/menu", response_model=MenuResponse)
async def get_menu(
    availability: AvailabilityRegistry = Depends(get_availability),
    cart_engine: CartEngine = Depends(get_cart_engine),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """Catalog with stock flags, in display order"""
    unavailable = await availability.unavailable_ids()

    items = [
        MenuItemResponse(
            id=item.id,
            category=item.category,
            name=item.name,
            price=item.price,
            description=item.description,
            number=item.number,
            tags=sorted(item.tags),
            available=item.id not in unavailable,
        )
        for item in catalog.all()
    ]

    return MenuResponse(
        items=items,
        lunch_active=cart_engine.lunch.is_active(clock()),
        poll_seconds=settings.availability_poll_seconds,
    )


@router.get("/menu/availability", response_model=Dict[str, bool])
async def get_availability_map(
    response: Response,
    availability: AvailabilityRegistry = Depends(get_availability),
):
    """Stock flag for every catalog item; polled by the storefront"""
    response.headers["Cache-Control"] = NO_STORE
    return await availability.availability_map()


@router.post(
    "/menu/availability",
    response_model=AvailabilityUpdateResponse,
    dependencies=[Depends(require_admin)],
)
async def set_availability(
    data: AvailabilityUpdate,
    response: Response,
    availability: AvailabilityRegistry = Depends(get_availability),
):
    """Toggle an item's stock flag"""
    response.headers["Cache-Control"] = NO_STORE
    row = await availability.set_availability(data.item_id, data.available)
    return AvailabilityUpdateResponse(item_id=row.item_id, available=row.available)


@router.get("/opening-hours", response_model=OpeningHoursResponse)
async def get_opening_hours_status(
    opening_hours: OpeningHours = Depends(get_opening_hours),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    now = clock()
    return OpeningHoursResponse(
        open=opening_hours.is_order_open(now),
        message=opening_hours.ordering_message(now),
    )
