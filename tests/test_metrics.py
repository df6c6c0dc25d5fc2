import pytest


@pytest.mark.asyncio
async def test_root(client):
    res = await client.get("/")
    assert res.status_code == 200
    assert res.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_metrics(client):
    res = await client.get("/api/metrics")
    assert res.status_code == 200
    data = res.json()
    assert data["status"] == "Online"
    assert data["database"] == "Connected"
    for key in ("cpu", "ram", "disk", "uptime", "db_latency"):
        assert key in data
