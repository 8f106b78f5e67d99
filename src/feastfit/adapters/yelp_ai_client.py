"""Yelp AI chat API client."""

import logging
from dataclasses import dataclass

import httpx

from feastfit.errors import ConfigurationError, UpstreamError
from feastfit.services.recommendations import ChatClient

_logger = logging.getLogger(__name__)


@dataclass
class HttpxYelpAIClient(ChatClient):
    """HTTPX-backed client for the Yelp AI chat endpoint."""

    api_key: str | None
    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 15

    @classmethod
    def create(
        cls, api_key: str | None, base_url: str, timeout_seconds: float = 15
    ) -> "HttpxYelpAIClient":
        """Create a Yelp AI client with a managed httpx session."""
        return cls(
            api_key=api_key,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def chat(
        self, query: str, user_context: dict[str, object]
    ) -> dict[str, object]:
        """Send a prompt to the chat endpoint and return its JSON body."""
        if not self.api_key:
            raise ConfigurationError("Missing YELP_API_KEY")
        url = f"{self.base_url.rstrip('/')}/ai/chat/v2"
        try:
            response = await self.http_client.post(
                url,
                headers={"Authorization": f"Bearer {self.api_key}"},
                json={"query": query, "user_context": user_context},
                timeout=self.timeout_seconds,
            )
        except httpx.HTTPError as exc:
            _logger.warning("Yelp AI request failed: %s", exc)
            raise UpstreamError from exc
        if not response.is_success:
            _logger.error(
                "Yelp AI error: status=%s body=%s",
                response.status_code,
                response.text,
            )
            raise UpstreamError
        try:
            payload = response.json()
        except ValueError as exc:
            _logger.error("Yelp AI returned a non-JSON body")
            raise UpstreamError from exc
        return payload if isinstance(payload, dict) else {}

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
