"""HTTP client for the mentor server's account endpoints."""

from typing import Any

import httpx

from ..errors import AccountExists, AccountNotFound, AuthError, InvalidCredentials

_ERRORS: dict[str, type[AuthError]] = {
    "User already exists": AccountExists,
    "User not found": AccountNotFound,
    "Invalid credentials": InvalidCredentials,
}


class AccountClient:
    """Calls ``/api/signup`` and ``/api/login`` on a mentor server."""

    def __init__(self, base_url: str = "http://localhost:5000", timeout: float = 30.0, **client_kwargs: Any):
        self._client = httpx.AsyncClient(base_url=base_url.rstrip("/"), timeout=timeout, **client_kwargs)

    async def _post(self, path: str, payload: dict[str, str]) -> dict[str, Any]:
        try:
            response = await self._client.post(path, json=payload)
        except httpx.HTTPError as e:
            raise AuthError(f"Could not reach the mentor server: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = {}
        if response.status_code >= 400:
            error = data.get("error") or f"HTTP {response.status_code}"
            raise _ERRORS.get(error, AuthError)(error)
        return data

    async def signup(self, name: str, email: str, password: str) -> str:
        """Register an account. Returns the server's confirmation message."""
        data = await self._post("/api/signup", {"name": name, "email": email, "password": password})
        return data.get("message", "")

    async def login(self, email: str, password: str) -> str:
        """Log in and return the session token."""
        data = await self._post("/api/login", {"email": email, "password": password})
        token = data.get("token")
        if not token:
            raise AuthError("Login response carried no token")
        return token

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "AccountClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
