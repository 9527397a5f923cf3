"""HTTPX client for the OpenAI chat completions endpoint."""

import logging
from dataclasses import dataclass

import httpx

from calorie_tracker.domain.errors import (
    ApiError,
    InvalidResponseError,
    InvalidURLError,
)
from calorie_tracker.services.completions import ChatCompletionsClient

_logger = logging.getLogger(__name__)


@dataclass
class HttpxChatCompletionsClient(ChatCompletionsClient):
    """Chat completions client using httpx with bearer-token auth."""

    api_key: str
    endpoint: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 30.0

    @classmethod
    def create(
        cls, api_key: str, base_url: str, timeout_seconds: float = 30.0
    ) -> "HttpxChatCompletionsClient":
        """Create a client with a managed httpx session.

        A malformed base URL raises ``InvalidURLError`` here rather than on the
        first request.
        """
        return cls(
            api_key=api_key,
            endpoint=build_endpoint(base_url),
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def complete(self, payload: dict[str, object]) -> dict[str, object]:
        """POST the payload; non-200 responses raise ``ApiError``."""
        try:
            response = await self.http_client.post(
                self.endpoint,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                json=payload,
                timeout=self.timeout_seconds,
            )
        except httpx.TimeoutException as exc:
            raise ApiError("The request timed out") from exc
        except httpx.HTTPError as exc:
            raise ApiError(str(exc) or exc.__class__.__name__) from exc

        if response.status_code != httpx.codes.OK:
            message = _error_message(response)
            _logger.warning(
                "Chat completion failed: status=%s message=%s",
                response.status_code,
                message,
            )
            raise ApiError(message)

        try:
            body = response.json()
        except ValueError as exc:
            raise InvalidResponseError() from exc
        if not isinstance(body, dict):
            raise InvalidResponseError()
        return body

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def build_endpoint(base_url: str) -> str:
    """Return the chat completions URL for an API base URL."""
    try:
        url = httpx.URL(base_url.strip())
    except (httpx.InvalidURL, TypeError) as exc:
        raise InvalidURLError() from exc
    if url.scheme not in {"http", "https"} or not url.host:
        raise InvalidURLError()
    return str(url).rstrip("/") + "/chat/completions"


def _error_message(response: httpx.Response) -> str:
    """Prefer the vendor error envelope message over a generic status text."""
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"]
    return f"Server returned status {response.status_code}"
