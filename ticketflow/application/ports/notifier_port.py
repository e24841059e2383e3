"""Port interface for the support team notification channel."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Notification:
    subject: str
    body: str


class NotifierPort(ABC):
    @abstractmethod
    async def publish(self, notification: Notification) -> None:
        """Publish once. Raises NotificationError on failure."""
        ...

    async def aclose(self) -> None:
        """Release network resources. No-op by default."""
        return None
