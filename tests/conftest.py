import os
from unittest.mock import AsyncMock, patch

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

# Tests talk to a fake provider and never to real photo APIs.
os.environ["ASSETHUB_AUTH_PROVIDER_URL"] = "https://auth.example.test"
os.environ["ASSETHUB_AUTH_SERVICE_KEY"] = "service-key"
os.environ.pop("ASSETHUB_ASSETS_UNSPLASH_ACCESS_KEY", None)
os.environ.pop("ASSETHUB_ASSETS_PEXELS_API_KEY", None)
os.environ.pop("ASSETHUB_ASSETS_LOREM_PICSUM_ENABLED", None)

from assethub.api.app import create_app  # noqa: E402
from assethub.auth.service import reset as reset_token_cache  # noqa: E402
from assethub.config import reload_config  # noqa: E402
from assethub.db.engine import get_engine  # noqa: E402
from assethub.db.models import Base  # noqa: E402
from assethub.ratelimit import reset as reset_ratelimit  # noqa: E402


@pytest.fixture()
def app():
    return create_app("sqlite+aiosqlite://")


@pytest.fixture()
async def db(app):
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture(autouse=True)
def _clear_state():
    reload_config()
    reset_ratelimit()
    reset_token_cache()
    yield
    reload_config()
    reset_ratelimit()
    reset_token_cache()


@pytest.fixture()
async def client(app, db):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as c:
        yield c


def mock_async_client(get):
    """An ``httpx.AsyncClient`` stand-in whose ``get`` is *get*."""
    mock_client = AsyncMock()
    mock_client.get = get
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    return mock_client


class FakeProvider:
    """Stands in for the auth provider's ``/auth/v1/user`` endpoint."""

    def __init__(self):
        self.identities: dict[str, dict] = {}
        self.get = AsyncMock(side_effect=self._get)

    async def _get(self, url, headers=None, **kwargs):
        request = httpx.Request("GET", url)
        token = (headers or {}).get("Authorization", "")[len("Bearer "):]
        if token in self.identities:
            return httpx.Response(200, json=self.identities[token], request=request)
        return httpx.Response(401, json={"msg": "invalid JWT"}, request=request)

    def add(self, token="tok-alice", user_id="11111111-1111-1111-1111-111111111111",
            email="alice@example.com", **metadata) -> dict[str, str]:
        self.identities[token] = {"id": user_id, "email": email, "user_metadata": metadata}
        return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def provider():
    fake = FakeProvider()
    with patch("assethub.auth.service.httpx.AsyncClient") as mock_cls:
        mock_cls.return_value = mock_async_client(fake.get)
        yield fake
