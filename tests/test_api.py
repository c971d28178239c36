"""Tests for the /api/timer session store endpoints."""

from datetime import datetime

import pytest

NEW_SESSION = {
    "totalSeconds": 14400,
    "workSecondsRemaining": 7200,
    "playSecondsRemaining": 7200,
    "currentMode": "work",
    "isRunning": True,
}


async def create(client, body=None, headers=None):
    response = await client.post("/api/timer", json=body or NEW_SESSION, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestGet:

    async def test_no_session_is_404(self, client):
        response = await client.get("/api/timer")
        assert response.status_code == 404
        assert response.json()["detail"] == "No active timer session found"

    async def test_returns_active_session(self, client):
        created = await create(client)
        response = await client.get("/api/timer")
        assert response.status_code == 200
        assert response.json() == created


class TestCreate:

    async def test_returns_created_session_with_store_fields(self, client):
        data = await create(client)
        for key, value in NEW_SESSION.items():
            assert data[key] == value
        assert isinstance(data["id"], int)
        assert data["userId"] == 1
        assert "createdAt" in data
        assert "updatedAt" in data

    async def test_replaces_previous_session(self, client):
        first = await create(client)
        second = await create(client, {**NEW_SESSION, "totalSeconds": 600,
                                       "workSecondsRemaining": 300, "playSecondsRemaining": 300})
        assert second["id"] != first["id"]

        current = (await client.get("/api/timer")).json()
        assert current["id"] == second["id"]
        assert current["totalSeconds"] == 600

    async def test_sessions_are_owned_per_user(self, client):
        mine = await create(client)
        theirs = await create(client, headers={"X-User-Id": "2"})

        assert theirs["userId"] == 2
        assert (await client.get("/api/timer")).json()["id"] == mine["id"]
        assert (await client.get("/api/timer", headers={"X-User-Id": "2"})).json()["id"] == theirs["id"]

    async def test_invalid_user_header_is_400(self, client):
        response = await client.get("/api/timer", headers={"X-User-Id": "abc"})
        assert response.status_code == 400

    @pytest.mark.parametrize(
        "field, value",
        [
            ("totalSeconds", 0),
            ("totalSeconds", -10),
            ("workSecondsRemaining", -1),
            ("playSecondsRemaining", "100"),
            ("workSecondsRemaining", 1.5),
            ("currentMode", "nap"),
            ("isRunning", "yes"),
        ],
    )
    async def test_invalid_field_is_400_with_field_errors(self, client, field, value):
        response = await client.post("/api/timer", json={**NEW_SESSION, field: value})
        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Invalid timer data"
        assert field in [error["field"] for error in body["errors"]]

    @pytest.mark.parametrize("field", list(NEW_SESSION))
    async def test_missing_field_is_400(self, client, field):
        body = dict(NEW_SESSION)
        del body[field]
        response = await client.post("/api/timer", json=body)
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == field

    async def test_counter_over_half_budget_is_400(self, client):
        response = await client.post("/api/timer", json={**NEW_SESSION, "workSecondsRemaining": 7201})
        assert response.status_code == 400
        assert "workSecondsRemaining" in response.json()["errors"][0]["message"]

    async def test_failed_create_keeps_previous_session(self, client):
        first = await create(client)
        await client.post("/api/timer", json={**NEW_SESSION, "currentMode": "nap"})
        assert (await client.get("/api/timer")).json()["id"] == first["id"]


class TestUpdate:

    async def test_no_session_is_404(self, client):
        response = await client.put("/api/timer", json={"isRunning": False})
        assert response.status_code == 404

    async def test_merges_partial_update(self, client):
        created = await create(client)
        response = await client.put("/api/timer", json={"isRunning": False, "workSecondsRemaining": 7000})
        assert response.status_code == 200
        data = response.json()
        assert data["isRunning"] is False
        assert data["workSecondsRemaining"] == 7000
        assert data["playSecondsRemaining"] == 7200
        assert data["currentMode"] == "work"
        assert data["id"] == created["id"]
        assert data["createdAt"] == created["createdAt"]

    async def test_bumps_updated_at(self, client):
        created = await create(client)
        data = (await client.put("/api/timer", json={"currentMode": "play"})).json()
        assert data["currentMode"] == "play"
        assert datetime.fromisoformat(data["updatedAt"]) >= datetime.fromisoformat(created["updatedAt"])

    async def test_total_seconds_is_not_updatable(self, client):
        await create(client)
        response = await client.put("/api/timer", json={"totalSeconds": 10})
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "totalSeconds"

    async def test_null_field_is_400(self, client):
        await create(client)
        response = await client.put("/api/timer", json={"currentMode": None})
        assert response.status_code == 400

    async def test_negative_counter_is_400(self, client):
        await create(client)
        response = await client.put("/api/timer", json={"playSecondsRemaining": -5})
        assert response.status_code == 400

    async def test_counter_over_half_budget_is_400(self, client):
        await create(client)
        response = await client.put("/api/timer", json={"playSecondsRemaining": 9000})
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid timer data"

        unchanged = (await client.get("/api/timer")).json()
        assert unchanged["playSecondsRemaining"] == 7200


class TestDelete:

    async def test_delete_then_get_is_404(self, client):
        await create(client)
        response = await client.delete("/api/timer")
        assert response.status_code == 204
        assert (await client.get("/api/timer")).status_code == 404

    async def test_delete_is_idempotent(self, client):
        assert (await client.delete("/api/timer")).status_code == 204
        assert (await client.delete("/api/timer")).status_code == 204

    async def test_start_after_reset_is_fresh(self, client):
        first = await create(client)
        await client.put("/api/timer", json={"workSecondsRemaining": 10, "currentMode": "play"})
        await client.delete("/api/timer")

        fresh = await create(client)
        assert fresh["id"] != first["id"]
        assert fresh["workSecondsRemaining"] == 7200
        assert fresh["currentMode"] == "work"


async def test_health(client):
    response = await client.get("/api/health/")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
