"""Tests for perch.auth — token state and the logout flow."""

import pytest

from perch.audit import AuditEvent, set_audit_event_sink
from perch.auth import AuthState, TokenStore, logout


class _API:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls: list[str] = []

    async def logout(self) -> str:
        self.calls.append("logout")
        if self.error is not None:
            raise self.error
        return "bye"


class TestTokenStore:
    def test_empty(self) -> None:
        tokens = TokenStore()
        assert tokens.token is None
        assert not tokens.is_logged_in()

    def test_set_and_clear(self) -> None:
        tokens = TokenStore()
        tokens.set("abc")
        assert tokens.is_logged_in()
        assert tokens.token == "abc"
        tokens.clear()
        assert not tokens.is_logged_in()

    def test_empty_string_is_logged_out(self) -> None:
        assert not TokenStore("").is_logged_in()
        tokens = TokenStore("x")
        tokens.set("")
        assert not tokens.is_logged_in()

    def test_satisfies_auth_state(self) -> None:
        assert isinstance(TokenStore(), AuthState)


class TestLogout:
    @pytest.mark.asyncio
    async def test_success_order(self) -> None:
        api = _API()
        order: list[str] = []

        async def reset() -> None:
            order.append("reset")

        tokens = TokenStore("t")
        result = await logout(api, reset, tokens)
        assert result == "bye"
        assert api.calls == ["logout"]
        assert order == ["reset"]
        assert not tokens.is_logged_in()

    @pytest.mark.asyncio
    async def test_failure_resets_then_reraises(self) -> None:
        api = _API(RuntimeError("500"))
        resets: list[bool] = []
        tokens = TokenStore("t")

        async def reset() -> None:
            resets.append(tokens.is_logged_in())

        with pytest.raises(RuntimeError, match="500"):
            await logout(api, reset, tokens)
        assert resets == [False]
        assert not tokens.is_logged_in()

    @pytest.mark.asyncio
    async def test_without_token_store(self) -> None:
        called: list[bool] = []

        async def reset() -> None:
            called.append(True)

        await logout(_API(), reset)
        assert called == [True]

    @pytest.mark.asyncio
    async def test_audit_events(self) -> None:
        events: list[AuditEvent] = []
        set_audit_event_sink(events.append)

        async def reset() -> None:
            return None

        try:
            await logout(_API(), reset)
            with pytest.raises(ValueError):
                await logout(_API(ValueError("nope")), reset)
        finally:
            set_audit_event_sink(None)

        assert [e.name for e in events] == ["auth.logout.success", "auth.logout.failed"]
        assert events[1].error == "nope"
        assert events[1].failed
        assert not events[0].failed
