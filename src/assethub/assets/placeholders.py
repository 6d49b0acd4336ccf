"""Free placeholder sources that synthesize results without any API key."""

from __future__ import annotations

import re
from urllib.parse import quote

from assethub.assets.base import BaseSource, image_dimensions, picsum_image
from assethub.config import config
from assethub.models.assets import AssetSearchParams, AssetSearchResponse, ImageSizes, StockImage

UNSPLASH_SOURCE_URL = "https://source.unsplash.com"

_FREE_LICENSE = "Free for commercial and personal use"


class ThemedSource(BaseSource):
    """Picsum images seeded by the query, so each query gets a stable themed set."""

    name = "themed-source"
    kind = "image"

    MAX_PER_PAGE = 10
    ID_OFFSET = 100
    TOTAL = 800
    PAGES = 80

    async def search(self, params: AssetSearchParams) -> AssetSearchResponse:
        per_page = min(params.per_page, self.MAX_PER_PAGE)
        compact_query = re.sub(r"\s+", "", params.query)
        assets = []
        for i in range(per_page):
            image_id = (params.page - 1) * per_page + i + self.ID_OFFSET
            assets.append(picsum_image(
                asset_id=f"themed-{image_id}",
                seed=f"{compact_query}-{image_id}",
                params=params,
                alt=f"{params.query} themed photo {image_id}",
                tags=[params.query, "stock", "free", "themed"],
                source=self.name,
                color="#777777",
                attribution="Free themed stock photo",
                license=_FREE_LICENSE,
            ))
        return AssetSearchResponse(
            assets=assets,
            total=self.TOTAL,
            total_pages=self.PAGES,
            current_page=params.page,
            has_more=params.page < self.PAGES,
        )


class LoremPicsumSource(BaseSource):
    """Unthemed picsum images; off unless ``assets.lorem_picsum_enabled`` is set."""

    name = "lorem-picsum"
    kind = "image"

    MAX_PER_PAGE = 10
    TOTAL = 1000
    PAGES = 100

    @property
    def is_available(self) -> bool:
        return config.assets.lorem_picsum_enabled

    async def search(self, params: AssetSearchParams) -> AssetSearchResponse:
        per_page = min(params.per_page, self.MAX_PER_PAGE)
        assets = []
        for i in range(per_page):
            image_id = (params.page - 1) * per_page + i + 1
            assets.append(picsum_image(
                asset_id=f"lorem-{image_id}",
                seed=image_id,
                params=params,
                alt=f"{params.query} stock photo {image_id}",
                tags=[params.query, "stock", "free", "lorem-picsum"],
                source=self.name,
                color="#888888",
                attribution="Provided by Lorem Picsum",
                license=_FREE_LICENSE,
            ))
        return AssetSearchResponse(
            assets=assets,
            total=self.TOTAL,
            total_pages=self.PAGES,
            current_page=params.page,
            has_more=params.page < self.PAGES,
        )


class UnsplashSourceSource(BaseSource):
    """Keyless source.unsplash.com URLs that redirect to a random match for the query."""

    name = "unsplash-source"
    kind = "image"

    MAX_PER_PAGE = 8
    TOTAL = 500
    PAGES = 50

    async def search(self, params: AssetSearchParams) -> AssetSearchResponse:
        per_page = min(params.per_page, self.MAX_PER_PAGE)
        width, height = image_dimensions(params.orientation)
        q = quote(params.query)

        def url(w: float, h: float) -> str:
            return f"{UNSPLASH_SOURCE_URL}/{int(w)}x{int(h)}/?{q}"

        main = url(width, height)
        assets = [
            StockImage(
                id=f"unsplash-source-{params.page * 1000 + i}",
                url=main,
                thumbnail_url=url(200, 150),
                preview_url=url(400, 300),
                alt=f"{params.query} from Unsplash",
                tags=[params.query, "unsplash", "free", "stock"],
                source=self.name,
                width=width,
                height=height,
                aspect_ratio=width / height,
                download_url=main,
                sizes=ImageSizes(
                    small=url(400, 300),
                    medium=main,
                    large=url(width * 1.5, height * 1.5),
                    original=url(width * 2, height * 2),
                ),
                colors=["#999999"],
                attribution="Photo from Unsplash Source",
                license="Unsplash License",
            )
            for i in range(per_page)
        ]
        return AssetSearchResponse(
            assets=assets,
            total=self.TOTAL,
            total_pages=self.PAGES,
            current_page=params.page,
            has_more=params.page < self.PAGES,
        )
