"""Wire models for asset search and download."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import AfterValidator, BaseModel, Field

from assethub.config import str_limit
from assethub.models.base import AppModel

AssetType = Literal["image", "icon", "all"]
Orientation = Literal["landscape", "portrait", "square"]
SizeName = Literal["small", "medium", "large", "original"]


class ImageSizes(AppModel):
    small: str
    medium: str
    large: str
    original: str


class IconDownloadUrls(AppModel):
    svg: str | None = None
    png: dict[int, str] | None = None


class BaseAsset(AppModel):
    id: str
    url: str
    thumbnail_url: str | None = None
    preview_url: str | None = None
    alt: str | None = None
    tags: list[str] = Field(default_factory=list)
    source: str
    attribution: str | None = None
    license: str | None = None


class StockImage(BaseAsset):
    type: Literal["image"] = "image"
    width: int
    height: int
    aspect_ratio: float
    photographer: str | None = None
    photographer_url: str | None = None
    download_url: str
    sizes: ImageSizes
    colors: list[str] = Field(default_factory=list)
    description: str | None = None


class Icon(BaseAsset):
    type: Literal["icon"] = "icon"
    category: str
    style: Literal["solid", "outline", "filled", "two-tone", "brand"]
    format: Literal["svg", "png", "ico"]
    sizes: list[int]
    vector_url: str | None = None
    download_urls: IconDownloadUrls


Asset = Annotated[Union[StockImage, Icon], Field(discriminator="type")]


class AssetSearchParams(BaseModel):
    query: Annotated[str, Field(min_length=1), AfterValidator(str_limit(max_attr="query_max"))]
    type: AssetType = "all"
    category: str | None = None
    color: str | None = None
    orientation: Orientation | None = None
    size: Literal["small", "medium", "large"] | None = None
    per_page: int = Field(20, ge=1, le=50)
    page: int = Field(1, ge=1)
    safe_search: bool = True
    min_width: int | None = Field(None, ge=1)
    min_height: int | None = Field(None, ge=1)
    style: str | None = None


class AssetSearchResponse(AppModel):
    assets: list[Asset] = Field(default_factory=list)
    total: int = 0
    total_pages: int = 0
    current_page: int = 1
    has_more: bool = False


class SearchEnvelope(AppModel):
    success: bool = True
    data: AssetSearchResponse


class DownloadParams(BaseModel):
    url: Annotated[str, Field(min_length=1)]
    filename: Annotated[str, AfterValidator(str_limit(max_attr="filename_max"))] | None = None
    size: SizeName | None = None
