"""Base payment processor interface"""

from abc import ABC, abstractmethod
from typing import Dict, List

from pydantic import BaseModel


class CheckoutLineItem(BaseModel):
    """One priced line sent to the hosted checkout page"""
    name: str
    unit_amount: int  # whole currency units
    quantity: int = 1


class CheckoutSession(BaseModel):
    """Reference to a processor-owned checkout session"""
    id: str
    url: str


class BasePaymentProcessor(ABC):
    """Abstract base class for payment processors"""

    @abstractmethod
    async def create_checkout_session(
        self,
        line_items: List[CheckoutLineItem],
        metadata: Dict[str, str],
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        """Start a hosted checkout; ``metadata`` is echoed back in webhooks"""
        pass

    @abstractmethod
    def verify_event(self, payload: bytes, signature: str) -> dict:
        """
        Authenticate a webhook body and return the decoded event.

        Raises ``WebhookSignatureError`` or ``WebhookPayloadError``.
        """
        pass
