import logging

from assethub.api.app import create_app
from assethub.logs import configure_logging
from assethub.config import config


async def test_health(client):
    r = await client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


async def test_ready(client):
    r = await client.get("/ready")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


async def test_not_found_envelope(client):
    r = await client.get("/api/nothing-here")
    assert r.status_code == 404
    body = r.json()
    assert body["success"] is False
    assert body["error"]["code"] == "HTTP_ERROR"


async def test_method_not_allowed(client):
    r = await client.delete("/api/assets/search")
    assert r.status_code == 405
    assert r.json()["success"] is False


async def test_body_too_large(client, monkeypatch):
    monkeypatch.setattr(config.limits, "max_request_body", 100)
    r = await client.post("/api/assets/search", json={"query": "x" * 200})
    assert r.status_code == 413
    body = r.json()
    assert body["error"]["code"] == "PAYLOAD_TOO_LARGE"


async def test_openapi_lists_routes(client):
    r = await client.get("/openapi.json")
    paths = r.json()["paths"]
    for path in (
        "/api/assets/search",
        "/api/assets/download",
        "/api/assets/icon/{prefix}/{name}",
        "/api/auth/sync",
        "/api/auth/login",
        "/api/auth/register",
        "/api/user/profile",
    ):
        assert path in paths


def test_create_app_uses_env_database_url(monkeypatch):
    monkeypatch.setenv("ASSETHUB_DATABASE_URL", "sqlite+aiosqlite://")
    app = create_app()
    assert app.title == "AssetHub"


def test_configure_logging_json(capsys):
    root = logging.getLogger()
    saved, level = root.handlers[:], root.level
    try:
        configure_logging("json", "debug")
        logging.getLogger("assethub.test").debug("hello")
        err = capsys.readouterr().err
        assert '"message": "hello"' in err
        assert '"logger": "assethub.test"' in err
    finally:
        root.handlers[:] = saved
        root.setLevel(level)
