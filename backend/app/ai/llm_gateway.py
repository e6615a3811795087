"""OpenAI-compatible AI gateway client with verbatim SSE relay."""

import logging
from typing import AsyncIterator

import httpx

from app.ai.llm_base import CompletionGateway, CompletionStream, LLMMessage
from app.errors import QuotaExhausted, RateLimited, UpstreamError, UpstreamUnavailable

logger = logging.getLogger(__name__)


class HttpCompletionStream(CompletionStream):
    def __init__(self, client: httpx.AsyncClient, response: httpx.Response) -> None:
        self._client = client
        self._response = response

    async def iter_bytes(self) -> AsyncIterator[bytes]:
        try:
            async for chunk in self._response.aiter_bytes():
                if chunk:
                    yield chunk
        except httpx.HTTPError as exc:
            # Headers are already sent; the client sees a truncated stream.
            logger.warning("AI gateway stream interrupted: %s", exc)
        finally:
            await self.aclose()

    async def aclose(self) -> None:
        await self._response.aclose()
        await self._client.aclose()


class HttpCompletionGateway(CompletionGateway):
    def __init__(
        self,
        api_key: str,
        model_id: str,
        url: str,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__()
        self.api_key = api_key
        self.model_id = model_id
        self.url = url
        self.timeout = timeout
        self._transport = transport

    def _build_payload(self, system_prompt: str, messages: list[LLMMessage]) -> dict:
        api_messages: list[dict] = [{"role": "system", "content": system_prompt}]
        for msg in messages:
            api_messages.append({"role": msg["role"], "content": msg["content"]})
        return {
            "model": self.model_id,
            "messages": api_messages,
            "stream": True,
        }

    async def open_stream(
        self,
        system_prompt: str,
        messages: list[LLMMessage],
    ) -> HttpCompletionStream:
        """Send the completion request and return the stream once accepted.

        429 maps to RateLimited, 402 to QuotaExhausted, anything else that is
        not 200 (or a transport failure) to UpstreamUnavailable.
        """
        if not self.api_key:
            raise UpstreamError("AI gateway API key is not configured")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        client = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        request = client.build_request(
            "POST",
            self.url,
            json=self._build_payload(system_prompt, messages),
            headers=headers,
        )

        try:
            response = await client.send(request, stream=True)
        except httpx.HTTPError as exc:
            await client.aclose()
            logger.error("AI gateway request failed: %s", exc)
            raise UpstreamUnavailable() from exc

        if response.status_code == 200:
            return HttpCompletionStream(client, response)

        body = await response.aread()
        await response.aclose()
        await client.aclose()

        if response.status_code == 429:
            raise RateLimited()
        if response.status_code == 402:
            raise QuotaExhausted()
        logger.error(
            "AI gateway error %d: %s",
            response.status_code,
            body.decode("utf-8", errors="replace")[:500],
        )
        raise UpstreamUnavailable()


def get_completion_gateway(settings) -> CompletionGateway:
    """Build the gateway configured in settings."""
    return HttpCompletionGateway(
        api_key=str(getattr(settings, "ai_gateway_api_key", "") or ""),
        model_id=str(getattr(settings, "ai_gateway_model", "") or ""),
        url=str(getattr(settings, "ai_gateway_url", "") or ""),
        timeout=float(getattr(settings, "ai_gateway_timeout_seconds", 60.0)),
    )
