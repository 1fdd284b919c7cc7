"""Kitchen console endpoints"""

from uuid import UUID

from fastapi import APIRouter, Depends

from storefront.api.deps import get_order_views, get_status_machine, require_admin
from storefront.config import settings
from storefront.schemas.order import (
    OrderBoardResponse,
    OrderResponse,
    StatusUpdateRequest,
    StatusUpdateResponse,
)
from storefront.services.order_status import OrderStatusMachine
from storefront.services.order_views import OrderViews

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=OrderBoardResponse)
async def list_orders(views: OrderViews = Depends(get_order_views)):
    """
    Full board: active and archived paid orders.

    Both the refresh timer and the change feed land here, so every call is a
    complete re-fetch.
    """
    return OrderBoardResponse(
        active=await views.list_active(),
        archived=await views.list_archived(),
        refresh_seconds=settings.admin_refresh_seconds,
    )


@router.post("/update-status", response_model=StatusUpdateResponse)
async def update_status(
    data: StatusUpdateRequest,
    machine: OrderStatusMachine = Depends(get_status_machine),
):
    return await machine.advance(data.order_id, data.status, data.eta_minutes)


@router.post("/{order_id}/archive", response_model=OrderResponse)
async def archive_order(
    order_id: UUID,
    machine: OrderStatusMachine = Depends(get_status_machine),
):
    """Move a finished order off the active board"""
    return await machine.archive(order_id)
