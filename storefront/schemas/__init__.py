"""Pydantic schemas for request/response validation"""

from storefront.schemas.cart import (
    Cart,
    CartLine,
    PricedCart,
    PricedLine,
    AddLineRequest,
    CartRequest,
    SetCommentRequest,
    CartResponse,
)
from storefront.schemas.menu import (
    MenuItemResponse,
    MenuResponse,
    AvailabilityUpdate,
    AvailabilityUpdateResponse,
    OpeningHoursResponse,
)
from storefront.schemas.order import (
    CheckoutItem,
    CheckoutRequest,
    CheckoutResponse,
    OrderItem,
    OrderResponse,
    OrderBoardResponse,
    StatusUpdateRequest,
    StatusUpdateResponse,
    ConfirmationResult,
)

__all__ = [
    "Cart",
    "CartLine",
    "PricedCart",
    "PricedLine",
    "AddLineRequest",
    "CartRequest",
    "SetCommentRequest",
    "CartResponse",
    "MenuItemResponse",
    "MenuResponse",
    "AvailabilityUpdate",
    "AvailabilityUpdateResponse",
    "OpeningHoursResponse",
    "CheckoutItem",
    "CheckoutRequest",
    "CheckoutResponse",
    "OrderItem",
    "OrderResponse",
    "OrderBoardResponse",
    "StatusUpdateRequest",
    "StatusUpdateResponse",
    "ConfirmationResult",
]
