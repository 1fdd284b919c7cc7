"""SMS gateway implementations"""

from storefront.notifications.base import BaseNotificationGateway
from storefront.notifications.twilio import TwilioGateway
from storefront.notifications.elks import ElksGateway

__all__ = [
    "BaseNotificationGateway",
    "TwilioGateway",
    "ElksGateway",
    "get_notification_gateway",
]


def get_notification_gateway(provider: str) -> BaseNotificationGateway:
    """Factory function to create the configured SMS gateway"""
    gateways = {
        "twilio": TwilioGateway,
        "46elks": ElksGateway,
    }

    gateway_class = gateways.get(provider)
    if not gateway_class:
        raise ValueError(f"Unknown SMS provider: {provider}")

    return gateway_class()
