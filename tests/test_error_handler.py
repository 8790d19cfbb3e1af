import pytest
from httpx import ASGITransport, AsyncClient

from habitpal.main import app
from habitpal.services import stats_service


@pytest.mark.asyncio
async def test_unexpected_error_returns_generic_500(client, monkeypatch):
    async def broken_leaderboard(db, user_id):
        raise RuntimeError("database exploded")

    monkeypatch.setattr(stats_service, "get_leaderboard", broken_leaderboard)

    # The `client` fixture sets up overrides; this client lets the handler's response through
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.get("/api/leaderboard")

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}


@pytest.mark.asyncio
async def test_value_error_returns_400(client, monkeypatch):
    async def bad_leaderboard(db, user_id):
        raise ValueError("Bad leaderboard request")

    monkeypatch.setattr(stats_service, "get_leaderboard", bad_leaderboard)

    response = await client.get("/api/leaderboard")
    assert response.status_code == 400
    assert response.json() == {"detail": "Bad leaderboard request"}
