"""Tests for the keyed Unsplash and Pexels providers with a mocked HTTP client."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from assethub.assets.errors import ProviderError
from assethub.assets.providers import PexelsProvider, UnsplashProvider
from assethub.config import config
from assethub.models.assets import AssetSearchParams
from conftest import mock_async_client

UNSPLASH_PHOTO = {
    "id": "abc123",
    "width": 4000,
    "height": 3000,
    "color": "#0c2626",
    "description": "A quiet lake",
    "alt_description": "lake between mountains",
    "urls": {
        "raw": "https://images.unsplash.com/raw",
        "full": "https://images.unsplash.com/full",
        "regular": "https://images.unsplash.com/regular",
        "small": "https://images.unsplash.com/small",
        "thumb": "https://images.unsplash.com/thumb",
    },
    "links": {"download": "https://unsplash.com/photos/abc123/download"},
    "user": {"name": "Ada Lens", "links": {"html": "https://unsplash.com/@ada"}},
    "tags": [{"title": "lake"}, {"title": "mountain"}],
}

PEXELS_PHOTO = {
    "id": 42,
    "width": 1920,
    "height": 1080,
    "photographer": "Sam Shutter",
    "photographer_url": "https://www.pexels.com/@sam",
    "avg_color": "#7E7E7E",
    "alt": "city at night",
    "src": {
        "original": "https://images.pexels.com/original.jpg",
        "large": "https://images.pexels.com/large.jpg",
        "medium": "https://images.pexels.com/medium.jpg",
        "small": "https://images.pexels.com/small.jpg",
    },
}


def _response(url, status=200, **kwargs):
    return httpx.Response(status, request=httpx.Request("GET", url), **kwargs)


@pytest.fixture()
def keys(monkeypatch):
    monkeypatch.setattr(config.assets, "unsplash_access_key", "unsplash-key")
    monkeypatch.setattr(config.assets, "pexels_api_key", "pexels-key")


def test_unavailable_without_keys():
    assert UnsplashProvider().is_available is False
    assert PexelsProvider().is_available is False


def test_available_with_keys(keys):
    assert UnsplashProvider().is_available is True
    assert PexelsProvider().is_available is True


async def test_unsplash_search(keys):
    body = {"total": 120, "total_pages": 6, "results": [UNSPLASH_PHOTO]}
    get = AsyncMock(return_value=_response("https://api.unsplash.com/search/photos", json=body))
    with patch("assethub.assets.providers.httpx.AsyncClient") as mock_cls:
        mock_cls.return_value = mock_async_client(get)
        result = await UnsplashProvider().search(
            AssetSearchParams(query="lake", orientation="square", color="blue", page=2)
        )

    params = get.call_args.kwargs["params"]
    assert params["query"] == "lake"
    assert params["orientation"] == "squarish"
    assert params["color"] == "blue"
    assert params["content_filter"] == "high"
    assert get.call_args.kwargs["headers"] == {"Authorization": "Client-ID unsplash-key"}

    assert result.total == 120
    assert result.total_pages == 6
    assert result.has_more is True
    photo = result.assets[0]
    assert photo.id == "abc123"
    assert photo.url == "https://images.unsplash.com/regular"
    assert photo.thumbnail_url == "https://images.unsplash.com/thumb"
    assert photo.download_url == "https://unsplash.com/photos/abc123/download"
    assert photo.sizes.original == "https://images.unsplash.com/raw"
    assert photo.aspect_ratio == pytest.approx(4 / 3)
    assert photo.photographer == "Ada Lens"
    assert photo.photographer_url == "https://unsplash.com/@ada"
    assert photo.tags == ["lake", "mountain"]
    assert photo.colors == ["#0c2626"]
    assert photo.attribution == "Photo by Ada Lens on Unsplash"


async def test_unsplash_safe_search_off(keys):
    get = AsyncMock(return_value=_response("https://api.unsplash.com/search/photos", json={"results": []}))
    with patch("assethub.assets.providers.httpx.AsyncClient") as mock_cls:
        mock_cls.return_value = mock_async_client(get)
        result = await UnsplashProvider().search(AssetSearchParams(query="x", safe_search=False))
    assert get.call_args.kwargs["params"]["content_filter"] == "low"
    assert result.assets == []
    assert result.has_more is False


async def test_pexels_search(keys):
    body = {"total_results": 45, "photos": [PEXELS_PHOTO], "next_page": "https://api.pexels.com/v1/search?page=2"}
    get = AsyncMock(return_value=_response("https://api.pexels.com/v1/search", json=body))
    with patch("assethub.assets.providers.httpx.AsyncClient") as mock_cls:
        mock_cls.return_value = mock_async_client(get)
        result = await PexelsProvider().search(
            AssetSearchParams(query="city", per_page=10, size="large", orientation="landscape")
        )

    params = get.call_args.kwargs["params"]
    assert params == {"query": "city", "per_page": 10, "page": 1, "orientation": "landscape", "size": "large"}
    assert get.call_args.kwargs["headers"] == {"Authorization": "pexels-key"}

    assert result.total == 45
    assert result.total_pages == 5
    assert result.has_more is True
    photo = result.assets[0]
    assert photo.id == "42"
    assert photo.source == "pexels"
    assert photo.url == "https://images.pexels.com/large.jpg"
    assert photo.download_url == "https://images.pexels.com/original.jpg"
    assert photo.colors == ["#7E7E7E"]
    assert photo.attribution == "Photo by Sam Shutter on Pexels"


async def test_pexels_no_next_page(keys):
    body = {"total_results": 1, "photos": [PEXELS_PHOTO]}
    get = AsyncMock(return_value=_response("https://api.pexels.com/v1/search", json=body))
    with patch("assethub.assets.providers.httpx.AsyncClient") as mock_cls:
        mock_cls.return_value = mock_async_client(get)
        result = await PexelsProvider().search(AssetSearchParams(query="city"))
    assert result.has_more is False


async def test_upstream_error_status(keys):
    get = AsyncMock(return_value=_response("https://api.unsplash.com/search/photos", status=403, text="nope"))
    with patch("assethub.assets.providers.httpx.AsyncClient") as mock_cls:
        mock_cls.return_value = mock_async_client(get)
        with pytest.raises(ProviderError) as exc_info:
            await UnsplashProvider().search(AssetSearchParams(query="x"))
    assert exc_info.value.provider == "unsplash"
    assert "403" in exc_info.value.message


async def test_upstream_network_error(keys):
    get = AsyncMock(side_effect=httpx.ConnectError("boom"))
    with patch("assethub.assets.providers.httpx.AsyncClient") as mock_cls:
        mock_cls.return_value = mock_async_client(get)
        with pytest.raises(ProviderError):
            await PexelsProvider().search(AssetSearchParams(query="x"))


async def test_upstream_invalid_json(keys):
    get = AsyncMock(return_value=_response("https://api.pexels.com/v1/search", text="<html>"))
    with patch("assethub.assets.providers.httpx.AsyncClient") as mock_cls:
        mock_cls.return_value = mock_async_client(get)
        with pytest.raises(ProviderError):
            await PexelsProvider().search(AssetSearchParams(query="x"))
