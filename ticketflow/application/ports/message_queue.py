"""Port interface for the support ticket work queue."""

from abc import ABC, abstractmethod

from ticketflow.domain.entities.message import QueuedMessage, SupportTicketMessage


class MessageQueue(ABC):
    @abstractmethod
    async def enqueue(self, message: SupportTicketMessage) -> str:
        """Enqueue a message and return its id."""
        ...

    @abstractmethod
    async def receive(self, max_messages: int) -> list[QueuedMessage]:
        """Claim up to *max_messages* visible messages for this worker."""
        ...

    @abstractmethod
    async def delete(self, message_id: str) -> None:
        """Acknowledge a processed message."""
        ...

    @abstractmethod
    async def release(self, message_id: str, error: str) -> None:
        """Return a failed message for redelivery (or dead-letter it)."""
        ...
