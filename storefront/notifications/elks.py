"""46elks SMS gateway"""

from typing import Optional
import httpx
import structlog

from storefront.config import settings
from storefront.errors import NotificationError
from storefront.notifications.base import BaseNotificationGateway
from storefront.services.phone import mask_phone

logger = structlog.get_logger()


class ElksGateway(BaseNotificationGateway):
    """Sends SMS through the 46elks HTTP API (form-encoded, basic auth)"""

    def __init__(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None,
        sender: Optional[str] = None,
        api_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.username = username or settings.elks_username
        self.password = password or settings.elks_password
        self.sender = sender or settings.elks_sender
        self.api_url = api_url or settings.elks_api_url
        self.transport = transport

    async def send(self, to: str, message: str) -> Optional[str]:
        if not (self.username and self.password and self.sender):
            raise NotificationError("46elks is not configured")

        try:
            async with httpx.AsyncClient(timeout=15.0, transport=self.transport) as client:
                response = await client.post(
                    self.api_url,
                    auth=(self.username, self.password),
                    data={"to": to, "from": self.sender, "message": message},
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "46elks send failed",
                to=mask_phone(to),
                status_code=e.response.status_code,
                body=e.response.text[:200],
            )
            raise NotificationError(
                "SMS could not be sent",
                detail=f"46elks error {e.response.status_code}",
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error("46elks send failed", to=mask_phone(to), error=str(e))
            raise NotificationError("SMS could not be sent", detail=str(e)) from e

        message_id = data.get("id")
        logger.info("SMS sent", provider="46elks", to=mask_phone(to), message_id=message_id)
        return message_id
