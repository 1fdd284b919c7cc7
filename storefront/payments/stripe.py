"""Stripe payment processor"""

import asyncio
import json
from typing import Dict, List, Optional

import stripe
import structlog

from storefront.config import settings
from storefront.errors import PaymentProcessorError, WebhookPayloadError, WebhookSignatureError
from storefront.payments.base import BasePaymentProcessor, CheckoutLineItem, CheckoutSession

logger = structlog.get_logger()


class StripePaymentProcessor(BasePaymentProcessor):
    """Stripe Checkout implementation"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        webhook_secret: Optional[str] = None,
        currency: Optional[str] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.stripe_secret_key
        self.webhook_secret = webhook_secret if webhook_secret is not None else settings.stripe_webhook_secret
        self.currency = currency or settings.stripe_currency

    async def create_checkout_session(
        self,
        line_items: List[CheckoutLineItem],
        metadata: Dict[str, str],
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        """Create a Checkout Session in payment mode"""
        stripe_items = [
            {
                "price_data": {
                    "currency": self.currency,
                    "product_data": {"name": item.name},
                    # Stripe amounts are in the minor unit (öre)
                    "unit_amount": item.unit_amount * 100,
                },
                "quantity": item.quantity,
            }
            for item in line_items
            if item.unit_amount > 0
        ]

        logger.debug(
            "Stripe checkout request",
            line_count=len(stripe_items),
            metadata=metadata,
        )

        try:
            session = await asyncio.to_thread(
                stripe.checkout.Session.create,
                api_key=self.api_key,
                mode="payment",
                payment_method_types=["card"],
                line_items=stripe_items,
                metadata=metadata,
                success_url=success_url,
                cancel_url=cancel_url,
            )
        except stripe.StripeError as e:
            logger.error("Stripe checkout session failed", error=str(e))
            raise PaymentProcessorError("Could not start payment.", detail=str(e)) from e

        return CheckoutSession(id=session.id, url=session.url)

    def verify_event(self, payload: bytes, signature: str) -> dict:
        """Check the Stripe-Signature header, then decode the body"""
        if not signature:
            raise WebhookSignatureError("Missing Stripe-Signature header")

        try:
            body = payload.decode("utf-8")
        except UnicodeDecodeError as e:
            raise WebhookPayloadError("Webhook body is not UTF-8") from e

        try:
            stripe.WebhookSignature.verify_header(
                body,
                signature,
                self.webhook_secret,
                tolerance=stripe.Webhook.DEFAULT_TOLERANCE,
            )
        except stripe.SignatureVerificationError as e:
            raise WebhookSignatureError("Invalid signature", detail=str(e)) from e

        try:
            event = json.loads(body)
        except ValueError as e:
            raise WebhookPayloadError("Invalid payload", detail=str(e)) from e

        if not isinstance(event, dict) or "type" not in event:
            raise WebhookPayloadError("Invalid payload", detail="missing event type")

        return event
