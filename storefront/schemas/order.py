"""Order schemas"""

from datetime import datetime
from typing import Optional, List, Literal
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field

from storefront.schemas.cart import CartLine


class CheckoutItem(BaseModel):
    """Line of the cart snapshot posted at checkout"""
    name: str
    price: int
    qty: int = 1
    comment: str = ""


class CheckoutRequest(BaseModel):
    """Checkout request from the storefront"""
    model_config = ConfigDict(populate_by_name=True)

    items: List[CheckoutItem] = []
    total: Optional[int] = None
    customer_name: Optional[str] = Field(default=None, alias="customerName")
    customer_phone: str = Field(default="", alias="customerPhone")
    # Catalog cart lines; used instead of items when present
    lines: Optional[List[CartLine]] = None


class CheckoutResponse(BaseModel):
    url: str
    order_id: UUID


class OrderItem(BaseModel):
    """Frozen order line"""
    name: str
    qty: int = 1
    price: int = 0
    comment: str = ""


class OrderResponse(BaseModel):
    """Order as shown to staff"""
    id: UUID
    order_number: Optional[int] = None
    status: str
    customer_name: str
    customer_phone: str
    items: List[OrderItem]
    total: int
    eta_minutes: Optional[int] = None
    paid_at: Optional[datetime] = None
    archived_at: Optional[datetime] = None
    sms_cooking_sent_at: Optional[datetime] = None
    sms_ready_sent_at: Optional[datetime] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OrderBoardResponse(BaseModel):
    """Full kitchen view; every refresh replaces the previous one"""
    active: List[OrderResponse]
    archived: List[OrderResponse]
    refresh_seconds: int


class StatusUpdateRequest(BaseModel):
    """Admin status change"""
    model_config = ConfigDict(populate_by_name=True)

    order_id: UUID = Field(alias="orderId")
    status: Literal["New", "Cooking", "Done"]
    eta_minutes: Optional[int] = Field(default=None, alias="etaMinutes")


class StatusUpdateResponse(BaseModel):
    ok: bool = True
    status: str
    order_number: Optional[int] = None
    notification_sent: bool = False
    notification_failed: bool = False


class ConfirmationResult(BaseModel):
    """Acknowledgment returned to the payment processor"""
    received: bool = True
    ignored: bool = False
    reason: Optional[str] = None
    order_id: Optional[UUID] = None
