"""Twilio SMS gateway"""

import asyncio
from typing import Optional

from twilio.rest import Client as TwilioClient
import structlog

from storefront.config import settings
from storefront.errors import NotificationError
from storefront.notifications.base import BaseNotificationGateway
from storefront.services.phone import mask_phone

logger = structlog.get_logger()


class TwilioGateway(BaseNotificationGateway):
    """Sends SMS through the Twilio Messages API"""

    def __init__(
        self,
        account_sid: Optional[str] = None,
        auth_token: Optional[str] = None,
        from_number: Optional[str] = None,
    ):
        self.account_sid = account_sid or settings.twilio_account_sid
        self.auth_token = auth_token or settings.twilio_auth_token
        self.from_number = from_number or settings.twilio_phone_number

    async def send(self, to: str, message: str) -> Optional[str]:
        if not (self.account_sid and self.auth_token and self.from_number):
            raise NotificationError("Twilio is not configured")

        client = TwilioClient(self.account_sid, self.auth_token)

        try:
            # The Twilio client is blocking
            sent = await asyncio.to_thread(
                client.messages.create,
                body=message,
                from_=self.from_number,
                to=to,
            )
        except Exception as e:
            # Transport errors from the HTTP client surface unwrapped
            logger.error("Twilio send failed", to=mask_phone(to), error=str(e))
            raise NotificationError("SMS could not be sent", detail=str(e)) from e

        logger.info("SMS sent", provider="twilio", to=mask_phone(to), message_sid=sent.sid)
        return sent.sid
