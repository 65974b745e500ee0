"""Health & Readiness — probe endpoints."""

from sqlalchemy.ext.asyncio import AsyncSession

from todo_api.infrastructure.database import DatabaseSessionManager
from todo_api.main import app


async def test_liveness(client):
    """GET /api/v1/health/ returns 200 while the process is up."""
    response = await client.get("/api/v1/health/")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["service"] == "todo-api"


async def test_readiness_with_database(client):
    """Readiness reports healthy when the database answers."""
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json()["checks"]["database"] == "healthy"


async def test_readiness_without_database(client):
    """Readiness returns 503 when no database manager exists."""
    app.state.db_manager = None
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 503
    assert response.json()["reason"] == "database_unavailable"


async def test_health_check_false_when_query_fails(monkeypatch):
    """health_check reports False instead of raising on a failed query."""
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")

    async def broken_execute(self, *args, **kwargs):
        raise RuntimeError("connection refused")

    monkeypatch.setattr(AsyncSession, "execute", broken_execute)
    assert await manager.health_check() is False
    await manager.dispose()
