import pytest

from assethub.config import check_mime, config, reload_config


def test_defaults():
    assert config.assets.lorem_picsum_enabled is False
    assert config.assets.unsplash_access_key is None
    assert config.limits.query_max == 200
    assert config.auth.provider_url == "https://auth.example.test"


def test_env_override(monkeypatch):
    monkeypatch.setenv("ASSETHUB_ASSETS_PEXELS_API_KEY", "pk")
    monkeypatch.setenv("ASSETHUB_ASSETS_LOREM_PICSUM_ENABLED", "true")
    monkeypatch.setenv("ASSETHUB_LIMIT_QUERY_MAX", "20")
    reload_config()
    assert config.assets.pexels_api_key == "pk"
    assert config.assets.lorem_picsum_enabled is True
    assert config.limits.query_max == 20


async def test_query_limit_follows_config(client, monkeypatch):
    monkeypatch.setenv("ASSETHUB_LIMIT_QUERY_MAX", "5")
    reload_config()
    r = await client.get("/api/assets/search", params={"query": "sunset"})
    assert r.status_code == 400


@pytest.mark.parametrize(
    "mime, allowlist, expected",
    [
        ("image/png", "image/*", True),
        ("IMAGE/PNG; charset=binary", "image/*", True),
        ("text/plain", "image/*", False),
        ("text/plain", "image/*, text/plain", True),
        ("application/pdf", "*/*", True),
        ("image/png", "", False),
    ],
)
def test_check_mime(mime, allowlist, expected):
    assert check_mime(mime, allowlist) is expected
