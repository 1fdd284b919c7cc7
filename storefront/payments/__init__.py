"""Payment processor implementations"""

from storefront.payments.base import BasePaymentProcessor, CheckoutLineItem, CheckoutSession
from storefront.payments.stripe import StripePaymentProcessor

__all__ = [
    "BasePaymentProcessor",
    "CheckoutLineItem",
    "CheckoutSession",
    "StripePaymentProcessor",
]
