"""Tests for SessionContext and the auth service (identity calls are stubbed)."""
import asyncio

import pytest

from inspection_api.core.errors import AuthenticationError
from inspection_api.core.session import SessionContext
from inspection_api.services import auth_service


class TestSessionContext:

    def test_anonymous(self):
        session = SessionContext.anonymous()
        assert session.ready
        assert not session.is_authenticated
        assert session.role == "viewer"
        assert session.name == "User"
        assert session.user_id is None

    def test_name_falls_back_to_email(self):
        session = SessionContext.for_user("u1", "sam@example.com")
        assert session.name == "sam@example.com"
        assert session.role == "viewer"

    def test_profile_values(self, admin):
        assert admin.is_authenticated
        assert admin.user_id == "admin-1"
        assert admin.role == "admin"
        assert admin.name == "Ada Admin"
        assert not admin.disabled

    def test_initialize_only_once(self):
        session = SessionContext.anonymous()
        with pytest.raises(RuntimeError):
            session.initialize(None, None)

    @pytest.mark.asyncio
    async def test_wait_ready_resolves_on_initialize(self):
        session = SessionContext("token")
        waiter = asyncio.create_task(session.wait_ready())
        await asyncio.sleep(0)
        assert not waiter.done()

        session.initialize({"localId": "u1", "email": "u1@example.com"}, None)
        assert await asyncio.wait_for(waiter, timeout=1) is session


class TestResolveSession:

    @pytest.mark.asyncio
    async def test_without_token(self, memory_db):
        session = await auth_service.resolve_session(SessionContext())
        assert session.ready
        assert not session.is_authenticated

    @pytest.mark.asyncio
    async def test_valid_token_loads_profile(self, memory_db, monkeypatch):
        await memory_db["users"].set("u1", {"name": "Pat", "role": "manager"})

        async def lookup(token):
            assert token == "good"
            return {"localId": "u1", "email": "pat@example.com"}

        monkeypatch.setattr(auth_service, "lookup_account", lookup)
        session = await auth_service.resolve_session(SessionContext("good"))
        assert session.is_authenticated
        assert session.role == "manager"
        assert session.name == "Pat"

    @pytest.mark.asyncio
    async def test_rejected_token(self, memory_db, monkeypatch):
        async def lookup(token):
            raise AuthenticationError("INVALID_ID_TOKEN")

        monkeypatch.setattr(auth_service, "lookup_account", lookup)
        session = await auth_service.resolve_session(SessionContext("bad"))
        assert session.ready
        assert not session.is_authenticated


class TestLogin:

    @pytest.fixture
    def signed_in(self, monkeypatch):
        async def sign_in(email, password):
            return {"localId": "u42", "email": email, "idToken": "id-token"}

        monkeypatch.setattr(auth_service, "sign_in", sign_in)

    @pytest.mark.asyncio
    async def test_login_uses_profile(self, memory_db, signed_in):
        await memory_db["users"].set("u42", {"name": "Morgan", "role": "admin"})
        response = await auth_service.login("morgan@example.com", "secret")

        assert response.token == "id-token"
        assert response.user_id == "u42"
        assert response.role == "admin"
        assert response.name == "Morgan"

    @pytest.mark.asyncio
    async def test_login_creates_missing_profile(self, memory_db, signed_in):
        response = await auth_service.login("new@example.com", "secret")

        assert response.role == "technician"
        assert response.name == "new@example.com"
        profile = await memory_db["users"].get("u42")
        assert profile["role"] == "technician"
        assert profile["disabled"] is False
        assert profile["email"] == "new@example.com"

    @pytest.mark.asyncio
    async def test_bad_credentials_propagate(self, memory_db, monkeypatch):
        async def sign_in(email, password):
            raise AuthenticationError("INVALID_PASSWORD")

        monkeypatch.setattr(auth_service, "sign_in", sign_in)
        with pytest.raises(AuthenticationError):
            await auth_service.login("x@example.com", "nope")


@pytest.mark.asyncio
async def test_register_creates_admin_profile(memory_db, monkeypatch):
    async def sign_up(email, password):
        return {"localId": "u7", "email": email, "idToken": "t"}

    monkeypatch.setattr(auth_service, "sign_up", sign_up)
    response = await auth_service.register("boss@example.com", "secret1", "Boss", "1234")

    assert response.role == "admin"
    profile = await memory_db["users"].get("u7")
    assert profile["pin"] == "1234"
    assert profile["role"] == "admin"
    assert profile["disabled"] is False
