"""Completion gateway interface and shared types."""

from abc import ABC, abstractmethod
from typing import AsyncIterator

LLMMessage = dict[str, str]


class CompletionStream(ABC):
    """An accepted upstream completion whose body is relayed as-is."""

    media_type: str = "text/event-stream"

    @abstractmethod
    def iter_bytes(self) -> AsyncIterator[bytes]:
        """Yield the upstream body chunk by chunk, releasing it when done."""
        ...

    @abstractmethod
    async def aclose(self) -> None:
        ...


class CompletionGateway(ABC):
    """Base class for streaming chat-completion gateways.

    ``open_stream`` must raise an ``UpstreamError`` subclass before returning
    when the gateway rejects the request, so callers can answer with a JSON
    error instead of a half-started stream.
    """

    def __init__(self) -> None:
        self.model_id: str = "unknown"

    @abstractmethod
    async def open_stream(
        self,
        system_prompt: str,
        messages: list[LLMMessage],
    ) -> CompletionStream:
        ...
