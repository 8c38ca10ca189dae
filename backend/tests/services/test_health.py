"""Health Probes: liveness and readiness without credentials."""

from bookshelf.main import app


async def test_liveness_needs_no_api_key(client):
    res = await client.get("/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_reports_database(client):
    res = await client.get("/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"


async def test_readiness_without_database_is_503(client):
    app.state.db_manager = None

    res = await client.get("/health/ready")

    assert res.status_code == 503
    assert res.json()["reason"] == "database_unavailable"
