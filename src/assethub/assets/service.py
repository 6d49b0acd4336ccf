"""Asset aggregation service.

Queries every applicable source one after another and concatenates their
pages. Each source is isolated: a failure is logged and the search carries on
with whatever the remaining sources return.

Totals are summed and ``has_more`` is OR-ed across sources; there is no
re-pagination of the merged list.
"""

from __future__ import annotations

import logging
import re
import time

from assethub.assets.base import BaseSource, total_pages
from assethub.assets.curated import CuratedSource
from assethub.assets.download import DownloadedAsset, download_asset
from assethub.assets.icons import SimpleIconSource, get_icon_svg
from assethub.assets.placeholders import LoremPicsumSource, ThemedSource, UnsplashSourceSource
from assethub.assets.providers import PexelsProvider, UnsplashProvider
from assethub.models.assets import AssetSearchParams, AssetSearchResponse, Icon, StockImage

log = logging.getLogger(__name__)


def default_sources() -> list[BaseSource]:
    """All sources in query order."""
    return [
        CuratedSource(),
        ThemedSource(),
        UnsplashSourceSource(),
        LoremPicsumSource(),
        UnsplashProvider(),
        PexelsProvider(),
        SimpleIconSource(),
    ]


class AssetService:
    """Sequential fan-out over image and icon sources.

    Usage:
        service = get_asset_service()
        page = await service.search(AssetSearchParams(query="cat", type="image"))
    """

    def __init__(self, sources: list[BaseSource] | None = None):
        self.sources = sources if sources is not None else default_sources()

    async def search(self, params: AssetSearchParams) -> AssetSearchResponse:
        assets = []
        total = 0
        has_more = False

        for source in self.sources:
            if not source.wants(params):
                continue
            if not source.is_available:
                log.debug("Skipping %s: not configured", source.name)
                continue
            try:
                page = await source.search(params)
            except Exception:
                log.warning("Asset source %s failed for query %r", source.name, params.query, exc_info=True)
                continue
            log.debug("Got %d assets from %s", len(page.assets), source.name)
            assets.extend(page.assets)
            total += page.total
            has_more = has_more or page.has_more

        return AssetSearchResponse(
            assets=assets,
            total=total,
            total_pages=total_pages(total, params.per_page),
            current_page=params.page,
            has_more=has_more,
        )

    def get_icon_svg(self, prefix: str, name: str) -> str:
        return get_icon_svg(prefix, name)

    async def download(self, url: str, filename: str | None = None) -> DownloadedAsset:
        return await download_asset(url, filename)


def generate_asset_filename(asset: StockImage | Icon, extension: str | None = None) -> str:
    """``{sanitized-alt}-{id}-{epoch_ms}.{ext}``; icons default to svg, images to jpg."""
    stem = re.sub(r"[^a-zA-Z0-9]", "-", asset.alt or "").lower() or "asset"
    ext = extension or ("svg" if asset.type == "icon" else "jpg")
    return f"{stem}-{asset.id}-{int(time.time() * 1000)}.{ext}"


def get_optimal_image_size(image: StockImage, max_width: int, max_height: int) -> str:
    """URL of the size variant best suited to a ``max_width`` x ``max_height`` box."""
    if image.width <= max_width and image.height <= max_height:
        return image.sizes.original
    if image.width <= max_width * 1.5 and image.height <= max_height * 1.5:
        return image.sizes.large
    if image.width <= max_width * 2 and image.height <= max_height * 2:
        return image.sizes.medium
    return image.sizes.small


_service: AssetService | None = None


def get_asset_service() -> AssetService:
    global _service
    if _service is None:
        _service = AssetService()
    return _service
