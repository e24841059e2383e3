"""Port interface for committing the work done for one queued message."""

from abc import ABC, abstractmethod


class UnitOfWork(ABC):
    @abstractmethod
    async def commit(self) -> None:
        """Make every write since the last commit durable."""
        ...

    @abstractmethod
    async def rollback(self) -> None:
        """Discard uncommitted writes; the unit of work stays usable."""
        ...
