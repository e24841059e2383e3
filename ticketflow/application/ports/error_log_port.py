"""Port interface for the structured error-log sink."""

from abc import ABC, abstractmethod


class ErrorLogSink(ABC):
    @abstractmethod
    async def write(self, entry: dict) -> None:
        """Persist one structured error entry. May raise; callers swallow."""
        ...
