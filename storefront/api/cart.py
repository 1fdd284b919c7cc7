"""
Cart endpoints.

The cart lives with the client; every call takes the current cart, applies one
edit and returns the updated cart together with its priced projection.
"""

from datetime import datetime
from typing import Callable

from fastapi import APIRouter, Depends

from storefront.api.deps import get_cart_engine, get_clock
from storefront.schemas.cart import (
    Cart,
    AddLineRequest,
    CartRequest,
    CartResponse,
    SetCommentRequest,
)
from storefront.services.pricing import CartEngine

router = APIRouter()


def _respond(engine: CartEngine, cart: Cart, now: datetime, line_id: str = "") -> CartResponse:
    cart = Cart(lines=engine.real_lines(cart))
    return CartResponse(cart=cart, priced=engine.price(cart, now), line_id=line_id)


@router.post("/lines", response_model=CartResponse)
async def add_line(
    data: AddLineRequest,
    engine: CartEngine = Depends(get_cart_engine),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """Add one menu item to the cart"""
    line_id = await engine.add_line(data.cart, data.item_id, data.comment)
    return _respond(engine, data.cart, clock(), line_id)


@router.delete("/lines/{line_id}", response_model=CartResponse)
async def remove_line(
    line_id: str,
    data: CartRequest,
    engine: CartEngine = Depends(get_cart_engine),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """Remove a line; bonus lines cannot be removed"""
    engine.remove_line(data.cart, line_id)
    return _respond(engine, data.cart, clock())


@router.put("/lines/{line_id}/comment", response_model=CartResponse)
async def set_comment(
    line_id: str,
    data: SetCommentRequest,
    engine: CartEngine = Depends(get_cart_engine),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    engine.set_comment(data.cart, line_id, data.comment)
    return _respond(engine, data.cart, clock())


@router.post("/price", response_model=CartResponse)
async def price_cart(
    data: CartRequest,
    engine: CartEngine = Depends(get_cart_engine),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """Reprice the cart, e.g. when the lunch window opens or closes"""
    return _respond(engine, data.cart, clock())
