"""Completion service backed by the mentor server's ``/api/ask`` endpoint."""

import logging
from typing import Any

import httpx

from ..errors import CompletionError
from .base import CompletionService

logger = logging.getLogger(__name__)


class HTTPCompletionService(CompletionService):
    """Posts prompts to a mentor server.

    Hidden design decisions:
    - HTTP client lifecycle and timeouts
    - Bearer token attachment when the user is logged in
    - Mapping of transport and server errors to CompletionError
    """

    def __init__(
        self,
        base_url: str = "http://localhost:5000",
        token: str | None = None,
        timeout: float = 60.0,
        **client_kwargs: Any
    ):
        """Initialize the HTTP completion service.

        Args:
            base_url: Mentor server root URL
            token: Optional login token sent as a bearer credential
            timeout: Request timeout in seconds
            **client_kwargs: Additional kwargs for httpx.AsyncClient
        """
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._client = httpx.AsyncClient(
            base_url=self._base_url, timeout=timeout, **client_kwargs
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    def set_token(self, token: str | None) -> None:
        """Attach (or drop) the login token used for later requests."""
        self._token = token

    async def complete(self, prompt: str) -> str:
        headers = {}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        try:
            response = await self._client.post(
                "/api/ask", json={"prompt": prompt}, headers=headers
            )
        except httpx.HTTPError as e:
            logger.error("Request to %s failed: %s", self._base_url, e)
            raise CompletionError(f"Could not reach the mentor server: {e}") from e

        if response.status_code >= 400:
            raise CompletionError(_error_message(response))

        try:
            data = response.json()
        except ValueError as e:
            raise CompletionError("Mentor server returned a non-JSON reply") from e
        if not isinstance(data, dict):
            raise CompletionError("Mentor server returned an unexpected reply")
        return data.get("response") or ""

    async def close(self) -> None:
        await self._client.aclose()


def _error_message(response: httpx.Response) -> str:
    """Extract the server's ``error`` field, falling back to the status line."""
    try:
        data = response.json()
    except ValueError:
        data = None
    error = data.get("error") if isinstance(data, dict) else None
    return error or f"Mentor server error (HTTP {response.status_code})"
