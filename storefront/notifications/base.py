"""Base notification gateway interface"""

from abc import ABC, abstractmethod
from typing import Optional


class BaseNotificationGateway(ABC):
    """Abstract base class for SMS gateways"""

    @abstractmethod
    async def send(self, to: str, message: str) -> Optional[str]:
        """
        Send ``message`` to the E.164 number ``to``.

        Returns the provider's message id. Raises ``NotificationError`` when
        the provider rejects the message or cannot be reached.
        """
        pass
