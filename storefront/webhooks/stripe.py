"""Stripe webhook handlers"""

from typing import Optional

from fastapi import APIRouter, Depends, Header, Request
import structlog

from storefront.api.deps import get_confirmation_handler
from storefront.schemas.order import ConfirmationResult
from storefront.services.confirmation import PaymentConfirmationHandler

router = APIRouter()
logger = structlog.get_logger()


@router.post("", response_model=ConfirmationResult)
async def handle_stripe_webhook(
    request: Request,
    stripe_signature: Optional[str] = Header(default=None),
    handler: PaymentConfirmationHandler = Depends(get_confirmation_handler),
):
    """
    Handle Stripe events.

    The raw body is read unparsed because the signature covers the exact bytes.
    """
    payload = await request.body()
    logger.info("Stripe webhook received", size=len(payload))
    return await handler.handle(payload, stripe_signature)
