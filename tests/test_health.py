from unittest.mock import AsyncMock

import httpx


def test_health_ok(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["commands"] == 6


def test_health_telegram_down(client):
    client.app.state.telegram_client._http.get = AsyncMock(
        side_effect=httpx.ConnectError("refused")
    )

    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "degraded"
