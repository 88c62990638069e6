"""Menu API client.

Fetches the per-user menu forest over HTTP with ``httpx``. The guard
only depends on the :class:`MenuAPI` protocol, so tests and alternative
transports can stand in for :class:`MenuClient`.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

import httpx

from perch.errors import MenuFetchError
from perch.menus.types import MenuResponse

logger = logging.getLogger("perch.menus")


@runtime_checkable
class MenuAPI(Protocol):
    """Anything that can produce the current user's menu envelope."""

    async def fetch_user_menus(self) -> MenuResponse: ...


@runtime_checkable
class TokenSource(Protocol):
    """Supplies the bearer token for outgoing calls (``None`` when logged out)."""

    @property
    def token(self) -> str | None: ...


class MenuClient:
    """HTTP client for the console's menu and session endpoints.

    Usage::

        tokens = TokenStore()
        async with MenuClient("https://console.example/api", tokens) as client:
            response = await client.fetch_user_menus()
            if response.ok:
                ...

    Passing *transport* lets tests plug in ``httpx.MockTransport``.
    """

    __slots__ = ("_client", "_tokens")

    def __init__(
        self,
        base_url: str,
        tokens: TokenSource | None = None,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._tokens = tokens
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> MenuClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        token = self._tokens.token if self._tokens is not None else None
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    async def _request(self, method: str, url: str) -> Any:
        try:
            response = await self._client.request(method, url, headers=self._headers())
        except httpx.HTTPError as exc:
            msg = f"{method} {url} failed: {exc}"
            raise MenuFetchError(msg) from exc

        if response.status_code >= 500:
            msg = f"{method} {url} returned HTTP {response.status_code}"
            raise MenuFetchError(msg, status=response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            msg = f"{method} {url} returned a non-JSON body"
            raise MenuFetchError(msg, status=response.status_code) from exc

    async def fetch_user_menus(self) -> MenuResponse:
        """``GET /menus/user`` — the menu forest of the current user."""
        payload = await self._request("GET", "/menus/user")
        response = MenuResponse.from_payload(payload)
        logger.debug("Fetched user menus: code=%s", response.code)
        return response

    async def fetch_all_menus(self) -> MenuResponse:
        """``GET /menus/all`` — every menu (administrators only)."""
        return MenuResponse.from_payload(await self._request("GET", "/menus/all"))

    async def logout(self) -> Any:
        """``POST /user/logout`` — end the server-side session.

        Raises ``MenuFetchError`` when the server rejects the call.
        """
        payload = await self._request("POST", "/user/logout")
        if isinstance(payload, dict) and payload.get("code", 200) != 200:
            msg = f"Logout rejected: {payload.get('message') or payload.get('code')}"
            raise MenuFetchError(msg)
        return payload
