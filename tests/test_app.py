from httpx import ASGITransport, AsyncClient
from loguru import logger

from devfolio.main import create_app


async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "OK"
    assert body["timestamp"].endswith("Z")
    assert body["uptime"] >= 0


async def test_unknown_route(client):
    response = await client.get("/api/nowhere")
    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "message": "Route not found",
        "error": "ROUTE_NOT_FOUND",
    }


async def test_request_id_is_echoed(client):
    response = await client.get("/health", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"
    assert "X-Process-Time" in response.headers


async def test_unhandled_error_is_access_logged():
    app = create_app()

    @app.get("/boom")
    async def boom():
        raise RuntimeError("boom")

    lines = []
    sink_id = logger.add(lambda message: lines.append(message.record["message"]), level="ERROR")
    try:
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            response = await ac.get("/boom")
    finally:
        logger.remove(sink_id)

    assert response.status_code == 500
    assert response.json()["error"] == "SYSTEM_ERROR"
    assert any(line.startswith("GET /boom -> 500 in") for line in lines)
