"""Base class and shared helpers for asset sources."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import ClassVar, Literal
from urllib.parse import quote

from assethub.models.assets import AssetSearchParams, AssetSearchResponse, ImageSizes, StockImage

PICSUM_URL = "https://picsum.photos"

IMAGE_WIDTH = 800
_HEIGHT_BY_ORIENTATION = {"portrait": 1200, "square": 800}
_DEFAULT_HEIGHT = 600


class BaseSource(ABC):
    """One upstream provider queried by the aggregator."""

    name: ClassVar[str]
    kind: ClassVar[Literal["image", "icon"]]

    @property
    def is_available(self) -> bool:
        """Whether the source is configured; unavailable sources are skipped."""
        return True

    def wants(self, params: AssetSearchParams) -> bool:
        return params.type == "all" or params.type == self.kind

    @abstractmethod
    async def search(self, params: AssetSearchParams) -> AssetSearchResponse:
        """Return one page of results for *params*."""


def page_slice(page: int, per_page: int) -> tuple[int, int]:
    """Offset bounds ``[start, end)`` for a 1-based page."""
    start = (page - 1) * per_page
    return start, start + per_page


def total_pages(total: int, per_page: int) -> int:
    return math.ceil(total / per_page) if per_page else 0


def image_dimensions(orientation: str | None) -> tuple[int, int]:
    return IMAGE_WIDTH, _HEIGHT_BY_ORIENTATION.get(orientation or "", _DEFAULT_HEIGHT)


def picsum_image(
    *,
    asset_id: str,
    seed: str | int,
    params: AssetSearchParams,
    alt: str,
    tags: list[str],
    source: str,
    color: str,
    attribution: str,
    license: str,
) -> StockImage:
    """Build a ``StockImage`` backed by picsum.photos URLs for *seed*."""
    width, height = image_dimensions(params.orientation)
    seed = quote(str(seed), safe="")

    def url(w: float, h: float) -> str:
        return f"{PICSUM_URL}/{int(w)}/{int(h)}?random={seed}"

    main = url(width, height)
    return StockImage(
        id=asset_id,
        url=main,
        thumbnail_url=url(200, 150),
        preview_url=url(400, 300),
        alt=alt,
        tags=tags,
        source=source,
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
        colors=[color],
        attribution=attribution,
        license=license,
    )
