"""Tests for perch.menus.api — the httpx-backed menu client."""

import httpx
import pytest

from perch.auth import TokenStore
from perch.errors import MenuFetchError
from perch.menus.api import MenuAPI, MenuClient

BASE_URL = "http://console.test/api"


def _client(handler, token: str | None = "tok") -> MenuClient:
    return MenuClient(BASE_URL, TokenStore(token), transport=httpx.MockTransport(handler))


class TestFetchUserMenus:
    @pytest.mark.asyncio
    async def test_parses_envelope_and_sends_token(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={
                    "code": 200,
                    "message": "ok",
                    "data": [
                        {
                            "id": 1,
                            "name": "Tools",
                            "path": "tools",
                            "children": [
                                {"id": 2, "name": "Paste", "path": "paste", "component": "Tools/Paste"}
                            ],
                        }
                    ],
                },
            )

        async with _client(handler) as client:
            response = await client.fetch_user_menus()

        assert response.ok
        assert response.data is not None
        assert response.data[0].children[0].component == "Tools/Paste"
        assert seen[0].method == "GET"
        assert seen[0].url.path == "/api/menus/user"
        assert seen[0].headers["Authorization"] == "Bearer tok"

    @pytest.mark.asyncio
    async def test_no_token_no_header(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(401, json={"code": 401, "message": "login required", "data": None})

        async with _client(handler, token=None) as client:
            response = await client.fetch_user_menus()

        assert not response.ok
        assert response.code == 401
        assert "authorization" not in seen[0].headers

    @pytest.mark.asyncio
    async def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with _client(handler) as client:
            with pytest.raises(MenuFetchError, match="connection refused"):
                await client.fetch_user_menus()

    @pytest.mark.asyncio
    async def test_server_error(self) -> None:
        async with _client(lambda request: httpx.Response(502, text="bad gateway")) as client:
            with pytest.raises(MenuFetchError) as exc_info:
                await client.fetch_user_menus()
        assert exc_info.value.status == 502

    @pytest.mark.asyncio
    async def test_non_json_body(self) -> None:
        async with _client(lambda request: httpx.Response(200, text="<html>")) as client:
            with pytest.raises(MenuFetchError, match="non-JSON"):
                await client.fetch_user_menus()


class TestOtherEndpoints:
    @pytest.mark.asyncio
    async def test_fetch_all_menus(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/menus/all"
            return httpx.Response(200, json={"code": 200, "message": "ok", "data": []})

        async with _client(handler) as client:
            response = await client.fetch_all_menus()
        assert response.ok
        assert response.data == []

    @pytest.mark.asyncio
    async def test_logout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "POST"
            assert request.url.path == "/api/user/logout"
            return httpx.Response(200, json={"code": 200, "message": "bye", "data": None})

        async with _client(handler) as client:
            result = await client.logout()
        assert result["message"] == "bye"

    @pytest.mark.asyncio
    async def test_logout_rejected(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"code": 403, "message": "no session", "data": None})

        async with _client(handler) as client:
            with pytest.raises(MenuFetchError, match="no session"):
                await client.logout()


@pytest.mark.asyncio
async def test_client_satisfies_protocol() -> None:
    async with MenuClient(BASE_URL) as client:
        assert isinstance(client, MenuAPI)
