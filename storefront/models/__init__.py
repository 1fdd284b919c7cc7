"""Database models"""

from storefront.models.menu import MenuAvailability
from storefront.models.order import Order, OrderStatus

__all__ = [
    "MenuAvailability",
    "Order",
    "OrderStatus",
]
