"""Unit tests for SessionManager using a mock auth service and in-memory storage."""

import json
from datetime import datetime
from typing import Any
from unittest.mock import AsyncMock

import pytest

from src.sk_api.schemas import AuthPayload
from src.sk_common.enums import Role
from src.sk_common.errors import PersistenceError, RemoteRejectionError, TransportError
from src.sk_common.storage import InMemoryKeyValueStore
from src.sk_session.application.manager import SessionManager
from src.sk_session.domain.models import Session
from src.sk_session.infrastructure.persistence import SessionStore


def _auth(user: dict[str, Any] | None = None, token: str = "abc") -> AsyncMock:
    auth = AsyncMock()
    payload = AuthPayload(token=token, user=user or {"username": "sam"})
    auth.login.return_value = payload
    auth.register.return_value = payload
    return auth


def _manager(
    kv: InMemoryKeyValueStore | None = None, auth: AsyncMock | None = None
) -> tuple[SessionManager, InMemoryKeyValueStore]:
    kv = kv if kv is not None else InMemoryKeyValueStore()
    return SessionManager(auth or _auth(), SessionStore(kv)), kv


class TestRestore:
    async def test_starts_loading(self) -> None:
        mgr, _ = _manager()
        assert mgr.session.is_loading is True

    async def test_nothing_persisted(self) -> None:
        mgr, _ = _manager()
        s = await mgr.restore()
        assert s.is_loading is False
        assert s.is_authenticated is False
        assert mgr.get_auth_token() is None

    async def test_token_and_user_without_role(self) -> None:
        kv = InMemoryKeyValueStore({"token": "abc", "user": '{"username":"sam"}'})
        mgr, _ = _manager(kv)

        s = await mgr.restore()

        assert s.user == {"username": "sam"}
        assert s.token == "abc"
        assert s.role == Role.USER
        assert s.is_authenticated is True
        assert mgr.is_admin() is False

    async def test_stored_role_wins(self) -> None:
        kv = InMemoryKeyValueStore(
            {"token": "abc", "user": '{"username":"sam","role":"user"}', "userRole": "admin"}
        )
        mgr, _ = _manager(kv)
        await mgr.restore()
        assert mgr.is_admin() is True

    @pytest.mark.parametrize("user", [
        {"username": "sam"},
        {"username": "ana", "role": "admin", "tournament": {"wins": 2}},
        {"username": "rémy", "email": "remy@skwin.com"},
    ])
    async def test_login_then_restore_round_trip(self, user: dict[str, Any]) -> None:
        first, kv = _manager(auth=_auth(user, token="tok-1"))
        await first.restore()
        await first.login("someone@skwin.com", "secret1")

        second, _ = _manager(kv)
        restored = await second.restore()

        assert restored.user == first.session.user
        assert restored.token == first.session.token
        assert restored.role == first.session.role

    @pytest.mark.parametrize("user_json", ["{not json", "[]", "{}", "null", '"sam"'])
    async def test_malformed_user_is_signed_out(self, user_json: str) -> None:
        kv = InMemoryKeyValueStore({"token": "abc", "user": user_json})
        mgr, _ = _manager(kv)

        s = await mgr.restore()

        assert s == Session.signed_out()

    async def test_token_without_user_is_signed_out(self) -> None:
        mgr, _ = _manager(InMemoryKeyValueStore({"token": "abc"}))
        assert (await mgr.restore()).is_authenticated is False

    async def test_store_failure_is_signed_out(self) -> None:
        store = AsyncMock()
        store.load.side_effect = PersistenceError("get token: down")
        mgr = SessionManager(_auth(), store)

        s = await mgr.restore()

        assert s.is_loading is False
        assert s.is_authenticated is False

    async def test_runs_once(self) -> None:
        store = AsyncMock()
        store.load.side_effect = PersistenceError("down")
        mgr = SessionManager(_auth(), store)

        await mgr.restore()
        await mgr.restore()

        assert store.load.await_count == 1


class TestLogin:
    async def test_success_publishes_and_persists(self) -> None:
        mgr, kv = _manager(auth=_auth({"username": "sam", "role": "admin"}))
        await mgr.restore()

        result = await mgr.login("sam@skwin.com", "secret1")

        assert result.success is True
        assert result.message == "Login successful"
        assert result.data["is_admin"] is True
        assert mgr.session.token == "abc"
        assert mgr.is_admin() is True
        snap = kv.snapshot()
        assert snap["token"] == "abc"
        assert json.loads(snap["user"]) == {"username": "sam", "role": "admin"}
        assert snap["userRole"] == "admin"

    async def test_missing_fields_skip_remote(self) -> None:
        auth = _auth()
        mgr, _ = _manager(auth=auth)

        result = await mgr.login("", "secret1")

        assert result.success is False
        assert result.message == "Please enter email and password"
        auth.login.assert_not_awaited()

    async def test_rejection_leaves_session_unchanged(self) -> None:
        auth = _auth()
        auth.login.side_effect = RemoteRejectionError("Invalid credentials", 401)
        mgr, kv = _manager(auth=auth)
        await mgr.restore()
        before = mgr.session

        result = await mgr.login("sam@skwin.com", "wrong-pass")

        assert result.success is False
        assert result.code == 9002
        assert result.message == "Invalid credentials"
        assert mgr.session is before
        assert kv.snapshot() == {}

    async def test_transport_failure_is_generic(self) -> None:
        auth = _auth()
        auth.login.side_effect = TransportError("ConnectError: refused")
        mgr, _ = _manager(auth=auth)

        result = await mgr.login("sam@skwin.com", "secret1")

        assert result.code == 9001
        assert "Unable to connect" in result.message

    async def test_persist_failure_leaves_session_unchanged(self) -> None:
        store = AsyncMock()
        store.save.side_effect = PersistenceError("mset: down")
        mgr = SessionManager(_auth(), store)
        before = mgr.session

        result = await mgr.login("sam@skwin.com", "secret1")

        assert result.success is False
        assert result.code == 9003
        assert mgr.session is before
        assert mgr.get_auth_token() is None


class TestRegister:
    @pytest.mark.parametrize("args, message", [
        (("", "a@b.c", "secret1", "secret1"), "Please fill in all fields"),
        (("sam", "", "secret1", "secret1"), "Please fill in all fields"),
        (("sam", "a@b.c", "secret1", "secret2"), "Passwords do not match"),
        (("sam", "a@b.c", "abc", "abc"), "Password must be at least 6 characters"),
    ])
    async def test_local_checks_skip_remote(self, args: tuple, message: str) -> None:
        auth = _auth()
        mgr, _ = _manager(auth=auth)

        result = await mgr.register(*args)

        assert result.success is False
        assert result.code == 1002
        assert result.message == message
        auth.register.assert_not_awaited()

    async def test_success_leaves_role_unset(self) -> None:
        auth = _auth({"username": "sam", "role": "admin"}, token="new")
        mgr, kv = _manager(auth=auth)
        await mgr.restore()

        result = await mgr.register("sam", "sam@skwin.com", "secret1", "secret1")

        assert result.success is True
        assert mgr.session.token == "new"
        assert mgr.session.role is None
        assert mgr.is_admin() is False
        assert kv.snapshot()["userRole"] == ""
        auth.register.assert_awaited_once_with("sam", "sam@skwin.com", "secret1", "secret1")

    async def test_restore_after_register_resolves_role_from_user(self) -> None:
        first, kv = _manager(auth=_auth({"username": "sam", "role": "admin"}))
        await first.register("sam", "sam@skwin.com", "secret1", "secret1")

        second, _ = _manager(kv)
        restored = await second.restore()

        assert restored.role == Role.ADMIN


class TestUpdateUser:
    async def test_merges_and_persists(self) -> None:
        kv = InMemoryKeyValueStore({"token": "abc", "user": '{"username":"sam","phone":"1"}'})
        mgr, _ = _manager(kv)
        await mgr.restore()

        result = await mgr.update_user({"phone": "2", "city": "Pune"})

        assert result.success is True
        assert mgr.session.user == {"username": "sam", "phone": "2", "city": "Pune"}
        assert mgr.session.token == "abc"
        assert json.loads(kv.snapshot()["user"]) == mgr.session.user

    async def test_no_user(self) -> None:
        mgr, _ = _manager()
        await mgr.restore()

        result = await mgr.update_user({"phone": "2"})

        assert result.success is False
        assert result.code == 1001

    async def test_persist_failure_keeps_old_user(self) -> None:
        store = AsyncMock()
        store.save_user.side_effect = PersistenceError("set user: down")
        mgr = SessionManager(_auth(), store)
        await mgr.login("sam@skwin.com", "secret1")

        result = await mgr.update_user({"phone": "2"})

        assert result.success is False
        assert result.code == 9003
        assert mgr.session.user == {"username": "sam"}

    async def test_logout_during_write_is_not_resurrected(self) -> None:
        mgr, kv = _manager()
        await mgr.restore()
        await mgr.login("sam@skwin.com", "secret1")
        store = SessionStore(kv)
        original = store.save_user

        async def slow_save_user(user: dict[str, Any]) -> None:
            await mgr.logout()
            await original(user)

        store.save_user = slow_save_user  # type: ignore[method-assign]
        mgr._store = store

        result = await mgr.update_user({"phone": "2"})

        assert result.success is False
        assert mgr.session.is_authenticated is False


    async def test_unserializable_value_is_failure(self) -> None:
        kv = InMemoryKeyValueStore({"token": "abc", "user": '{"username":"sam"}'})
        mgr, _ = _manager(kv)
        await mgr.restore()

        result = await mgr.update_user({"joined": datetime(2024, 1, 1)})

        assert result.success is False
        assert result.code == 9003
        assert mgr.session.user == {"username": "sam"}
        assert kv.snapshot()["user"] == '{"username":"sam"}'


class TestLogout:
    async def test_clears_memory_and_storage(self) -> None:
        mgr, kv = _manager()
        await mgr.login("sam@skwin.com", "secret1")

        await mgr.logout()

        assert mgr.session == Session.signed_out()
        assert kv.snapshot() == {}

    async def test_storage_failure_still_signs_out(self) -> None:
        store = AsyncMock()
        store.clear.side_effect = PersistenceError("delete: down")
        mgr = SessionManager(_auth(), store)
        await mgr.login("sam@skwin.com", "secret1")

        await mgr.logout()

        assert mgr.session.is_authenticated is False
        assert mgr.get_auth_token() is None


class TestSubscribe:
    async def test_listener_sees_each_transition(self) -> None:
        mgr, _ = _manager()
        seen: list[Session] = []
        mgr.subscribe(seen.append)

        await mgr.restore()
        await mgr.login("sam@skwin.com", "secret1")
        await mgr.logout()

        assert [s.is_authenticated for s in seen] == [False, True, False]
        assert all(s.is_loading is False for s in seen)
