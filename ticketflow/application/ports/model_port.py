"""Port interface for the generative-language model."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ModelRequest:
    prompt: str
    max_tokens: int = 512
    temperature: float = 0.1
    top_p: float = 0.9


class ModelPort(ABC):
    @property
    @abstractmethod
    def model_id(self) -> str:
        ...

    @abstractmethod
    async def complete(self, request: ModelRequest) -> str:
        """Send the request and return the reply text.

        Raises ModelInvocationError when the call fails or yields no text.
        """
        ...
