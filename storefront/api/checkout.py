"""Checkout endpoint"""

from fastapi import APIRouter, Depends, Request

from storefront.api.deps import get_checkout
from storefront.config import settings
from storefront.schemas.order import CheckoutRequest, CheckoutResponse
from storefront.services.checkout import CheckoutOrchestrator

router = APIRouter()


@router.post("", response_model=CheckoutResponse)
async def checkout(
    data: CheckoutRequest,
    request: Request,
    orchestrator: CheckoutOrchestrator = Depends(get_checkout),
):
    """Create a pending order and return the hosted payment page URL"""
    base_url = (request.headers.get("origin") or settings.public_base_url).rstrip("/")
    return await orchestrator.checkout(
        data,
        success_url=f"{base_url}/checkout?success=true",
        cancel_url=f"{base_url}/checkout?canceled=true",
    )
