"""Cart schemas"""

from typing import List
from pydantic import BaseModel, Field


class CartLine(BaseModel):
    """A line the customer added; bonus lines are never sent back in"""
    line_id: str
    item_id: str
    comment: str = ""


class Cart(BaseModel):
    """Client-held cart"""
    lines: List[CartLine] = []


class PricedLine(BaseModel):
    """Cart line with its effective price"""
    line_id: str
    item_id: str
    name: str
    comment: str = ""
    base_price: int
    unit_price: int
    is_bonus: bool = False
    lunch_deal: bool = False


class PricedCart(BaseModel):
    """Derived view of a cart at one instant"""
    lines: List[PricedLine]
    total: int
    lunch_active: bool


class AddLineRequest(BaseModel):
    cart: Cart = Field(default_factory=Cart)
    item_id: str
    comment: str = ""


class CartRequest(BaseModel):
    cart: Cart = Field(default_factory=Cart)


class SetCommentRequest(BaseModel):
    cart: Cart = Field(default_factory=Cart)
    comment: str = ""


class CartResponse(BaseModel):
    """Updated cart plus its priced projection"""
    cart: Cart
    priced: PricedCart
    line_id: str = ""
