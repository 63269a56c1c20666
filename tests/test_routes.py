"""HTTP-level tests with FastAPI's TestClient and overridden session dependencies."""
import asyncio

import pytest

from inspection_api.core.session import SessionContext
from inspection_api.main import app
from inspection_api.models.vin import DecodedVehicleDetails
from inspection_api.routes import live_router, vin_router
from inspection_api.routes.dependencies import get_session
from inspection_api.services.live_updates import QUICK_CHECK_EVENT, live_updates


class TestVinRoutes:

    def test_decode_success_uses_camel_case(self, api, monkeypatch):
        async def fake_decode(vin):
            return DecodedVehicleDetails(make="FORD", engine_l="3.5", engine_cylinders="6", trim="")

        monkeypatch.setattr(vin_router, "decode_vin", fake_decode)
        response = api.post("/vin/decode", json={"vin": "1FTFW1ET4CKA5R2K0"})

        assert response.status_code == 200
        body = response.json()
        assert body["make"] == "FORD"
        assert body["engineL"] == "3.5"
        assert body["engineCylinders"] == "6"
        assert body["trim"] == ""
        assert "error" not in body

    def test_decode_error_is_error_only(self, api):
        response = api.post("/vin/decode", json={"vin": "SHORT"})
        assert response.status_code == 200
        assert response.json() == {"error": "Invalid VIN length. VIN must be 17 characters."}

    def test_decode_missing_vin(self, api):
        response = api.post("/vin/decode", json={})
        assert response.json() == {"error": "Invalid VIN length. VIN must be 17 characters."}

    def test_validate(self, api):
        assert api.get("/vin/1ftfw1et4cka5r2k0/validate").json() == {"vin": "1FTFW1ET4CKA5R2K0", "valid": True}
        assert api.get("/vin/1FTFW1ET4CKA5R2KO/validate").json()["valid"] is False


class TestAuthGuards:

    def test_anonymous_is_rejected(self, api):
        app.dependency_overrides[get_session] = SessionContext.anonymous
        assert api.get("/quick-checks").status_code == 401

    def test_disabled_user_is_rejected(self, api):
        app.dependency_overrides[get_session] = lambda: SessionContext.for_user(
            "u9", "gone@example.com", {"disabled": True}
        )
        assert api.get("/quick-checks").status_code == 403

    def test_admin_routes_need_admin(self, api, login_as, technician):
        login_as(technician)
        assert api.get("/users").status_code == 403

    def test_me(self, api, login_as, technician):
        login_as(technician)
        body = api.get("/auth/me").json()
        assert body == {
            "authenticated": True,
            "userId": "tech-1",
            "email": "tess@example.com",
            "name": "Tess Tech",
            "role": "technician",
        }


class TestQuickCheckRoutes:

    def test_submit_and_list(self, api, login_as, technician):
        login_as(technician)
        created = api.post("/quick-checks", json={"title": "Wipers", "vin": "1FTFW1ET4CKA5R2K0", "mileage": "42000"})
        assert created.status_code == 201
        record = created.json()
        assert record["user"] == "tech-1"
        assert record["user_name"] == "Tess Tech"
        assert record["mileage"] == "42000"

        history = api.get("/quick-checks").json()
        assert [r["id"] for r in history] == [record["id"]]

    def test_delete_missing(self, api, login_as, technician):
        login_as(technician)
        assert api.delete("/quick-checks/nope").status_code == 404

    def test_drafts_roundtrip(self, api, login_as, technician):
        login_as(technician)
        draft_id = api.post("/quick-checks/drafts", json={"title": "Draft", "data": {"vin": "X"}}).json()["id"]
        assert api.put(f"/quick-checks/drafts/{draft_id}", json={"title": "Draft 2", "data": {}}).status_code == 200

        drafts = api.get("/quick-checks/drafts", params={"user": "tech-1"}).json()
        assert [d["title"] for d in drafts] == ["Draft 2"]
        assert api.delete("/quick-checks/drafts").json() == {"message": "Deleted 1 drafts"}


class TestOtherRoutes:

    def test_missing_label_maps_to_404(self, api, login_as, technician):
        login_as(technician)
        response = api.get("/labels/missing")
        assert response.status_code == 404
        assert response.json() == {"detail": "Label template not found"}

    def test_update_missing_user_maps_to_404(self, api, login_as, admin):
        login_as(admin)
        assert api.post("/users/ghost/disable").status_code == 404

    def test_state_inspection_stats(self, api, login_as, technician):
        login_as(technician)
        api.post("/state-inspections", json={"vin": "1FTFW1ET4CKA5R2K0", "status": "passed"})
        assert api.get("/state-inspections/stats").json() == {"total": 1, "passed": 1, "failed": 0}

    def test_cash_total(self, api):
        response = api.post("/cash/total", json={"counts": [{"value": 20, "count": 2}, {"value": 1, "count": 5}]})
        assert response.json() == {"amount": 45}

    def test_chat_cannot_impersonate(self, api, login_as, technician):
        login_as(technician)
        conversation_id = api.post("/chat/conversations", json={"participantIds": ["u2"]}).json()["id"]
        response = api.post(
            f"/chat/conversations/{conversation_id}/messages",
            json={"senderId": "u2", "content": "hi"},
        )
        assert response.status_code == 403

    def test_database_browser_rejects_unknown_table(self, api, login_as, admin):
        login_as(admin)
        assert api.get("/database/tables/secrets/data").status_code == 404
        assert {"name": "users"} in api.get("/database/tables").json()


class IdleClient:
    """Websocket stand-in that hangs up before any update arrives."""

    def __init__(self):
        self.query_params = {"token": "tech-token"}
        self.sent = []

    async def accept(self):
        pass

    async def close(self, code=1000):
        self.close_code = code

    async def send_json(self, message):
        self.sent.append(message)

    async def receive(self):
        return {"type": "websocket.disconnect", "code": 1000}


class TestLiveUpdatesSocket:

    @pytest.mark.asyncio
    async def test_idle_disconnect_releases_subscriptions(self, memory_db, monkeypatch, technician):
        async def resolve(session):
            return technician

        monkeypatch.setattr(live_router, "resolve_session", resolve)
        updates_before = len(live_updates._callbacks.get(QUICK_CHECK_EVENT, []))
        status_before = len(live_updates._status_callbacks)

        await asyncio.wait_for(live_router.quick_check_updates(IdleClient()), timeout=1)

        assert len(live_updates._callbacks.get(QUICK_CHECK_EVENT, [])) == updates_before
        assert len(live_updates._status_callbacks) == status_before

    @pytest.mark.asyncio
    async def test_anonymous_socket_is_closed(self, memory_db, monkeypatch):
        async def resolve(session):
            return SessionContext.anonymous()

        monkeypatch.setattr(live_router, "resolve_session", resolve)
        client = IdleClient()
        await live_router.quick_check_updates(client)
        assert client.close_code == 4401


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
