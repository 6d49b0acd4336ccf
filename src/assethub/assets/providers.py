"""Unsplash and Pexels search clients; API keys never leave the server.

Each provider is only queried when its key is configured; otherwise the
aggregator skips it without error.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from assethub.assets.base import BaseSource, total_pages
from assethub.assets.errors import ProviderError
from assethub.config import config
from assethub.models.assets import AssetSearchParams, AssetSearchResponse, ImageSizes, StockImage

log = logging.getLogger(__name__)


async def _fetch_json(provider: str, url: str, *, params: dict[str, Any], headers: dict[str, str]) -> dict[str, Any]:
    try:
        async with httpx.AsyncClient() as client:
            resp = await client.get(url, params=params, headers=headers, timeout=config.assets.timeout)
    except httpx.HTTPError as exc:
        raise ProviderError(f"{provider} request failed: {exc}", provider=provider) from exc
    if not resp.is_success:
        raise ProviderError(f"{provider} API error: HTTP {resp.status_code}", provider=provider)
    try:
        return resp.json()
    except ValueError as exc:
        raise ProviderError(f"{provider} returned invalid JSON", provider=provider) from exc


def _aspect(width: int, height: int) -> float:
    return width / height if height else 0.0


# ---------------------------------------------------------------------------
# Unsplash
# ---------------------------------------------------------------------------
UNSPLASH_API_URL = "https://api.unsplash.com"

# Unsplash calls square crops "squarish"
_UNSPLASH_ORIENTATION = {"landscape": "landscape", "portrait": "portrait", "square": "squarish"}


def _normalize_unsplash(photo: dict[str, Any]) -> StockImage:
    """Convert one Unsplash photo object into a ``StockImage``."""
    urls = photo.get("urls", {})
    user = photo.get("user", {})
    width, height = photo.get("width", 0), photo.get("height", 0)
    name = user.get("name", "")
    return StockImage(
        id=str(photo.get("id", "")),
        url=urls.get("regular", ""),
        thumbnail_url=urls.get("thumb"),
        preview_url=urls.get("small"),
        alt=photo.get("alt_description") or "",
        tags=[t["title"] for t in photo.get("tags") or [] if t.get("title")],
        source="unsplash",
        width=width,
        height=height,
        aspect_ratio=_aspect(width, height),
        photographer=name or None,
        photographer_url=user.get("links", {}).get("html"),
        download_url=photo.get("links", {}).get("download") or urls.get("full", ""),
        sizes=ImageSizes(
            small=urls.get("small", ""),
            medium=urls.get("regular", ""),
            large=urls.get("full", ""),
            original=urls.get("raw", ""),
        ),
        colors=[photo["color"]] if photo.get("color") else [],
        description=photo.get("description") or None,
        attribution=f"Photo by {name} on Unsplash",
        license="Unsplash License",
    )


class UnsplashProvider(BaseSource):
    name = "unsplash"
    kind = "image"

    @property
    def is_available(self) -> bool:
        return bool(config.assets.unsplash_access_key)

    async def search(self, params: AssetSearchParams) -> AssetSearchResponse:
        query: dict[str, Any] = {
            "query": params.query,
            "per_page": params.per_page,
            "page": params.page,
            "content_filter": "high" if params.safe_search else "low",
        }
        if params.orientation:
            query["orientation"] = _UNSPLASH_ORIENTATION[params.orientation]
        if params.color:
            query["color"] = params.color

        data = await _fetch_json(
            self.name,
            f"{UNSPLASH_API_URL}/search/photos",
            params=query,
            headers={"Authorization": f"Client-ID {config.assets.unsplash_access_key}"},
        )
        pages = data.get("total_pages", 0)
        return AssetSearchResponse(
            assets=[_normalize_unsplash(p) for p in data.get("results", [])],
            total=data.get("total", 0),
            total_pages=pages,
            current_page=params.page,
            has_more=params.page < pages,
        )


# ---------------------------------------------------------------------------
# Pexels
# ---------------------------------------------------------------------------
PEXELS_API_URL = "https://api.pexels.com/v1"


def _normalize_pexels(photo: dict[str, Any]) -> StockImage:
    """Convert one Pexels photo object into a ``StockImage``."""
    src = photo.get("src", {})
    width, height = photo.get("width", 0), photo.get("height", 0)
    photographer = photo.get("photographer", "")
    return StockImage(
        id=str(photo.get("id", "")),
        url=src.get("large", ""),
        thumbnail_url=src.get("small"),
        preview_url=src.get("medium"),
        alt=photo.get("alt") or "",
        tags=[],
        source="pexels",
        width=width,
        height=height,
        aspect_ratio=_aspect(width, height),
        photographer=photographer or None,
        photographer_url=photo.get("photographer_url"),
        download_url=src.get("original", ""),
        sizes=ImageSizes(
            small=src.get("small", ""),
            medium=src.get("medium", ""),
            large=src.get("large", ""),
            original=src.get("original", ""),
        ),
        colors=[photo["avg_color"]] if photo.get("avg_color") else [],
        attribution=f"Photo by {photographer} on Pexels",
        license="Pexels License",
    )


class PexelsProvider(BaseSource):
    name = "pexels"
    kind = "image"

    @property
    def is_available(self) -> bool:
        return bool(config.assets.pexels_api_key)

    async def search(self, params: AssetSearchParams) -> AssetSearchResponse:
        query: dict[str, Any] = {
            "query": params.query,
            "per_page": params.per_page,
            "page": params.page,
        }
        if params.orientation:
            query["orientation"] = params.orientation
        if params.size:
            query["size"] = params.size
        if params.color:
            query["color"] = params.color

        data = await _fetch_json(
            self.name,
            f"{PEXELS_API_URL}/search",
            params=query,
            headers={"Authorization": config.assets.pexels_api_key or ""},
        )
        total = data.get("total_results", 0)
        return AssetSearchResponse(
            assets=[_normalize_pexels(p) for p in data.get("photos", [])],
            total=total,
            total_pages=total_pages(total, params.per_page),
            current_page=params.page,
            has_more="next_page" in data,
        )
