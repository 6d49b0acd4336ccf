"""Asset search, download and icon endpoints."""

import logging
import urllib.parse
from typing import Annotated

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import Response

from assethub.assets.errors import DownloadError
from assethub.assets.service import get_asset_service
from assethub.models.assets import AssetSearchParams, DownloadParams, SearchEnvelope

router = APIRouter(prefix="/api/assets", tags=["assets"])
log = logging.getLogger(__name__)

_ICON_CACHE_CONTROL = "public, max-age=86400"


def _content_disposition(filename: str) -> str:
    """Build a safe Content-Disposition header value."""
    encoded = urllib.parse.quote(filename, safe=" ()-._~")
    return f"attachment; filename*=UTF-8''{encoded}"


async def _search(params: AssetSearchParams) -> SearchEnvelope:
    try:
        results = await get_asset_service().search(params)
    except Exception:
        log.exception("Asset search failed for query %r", params.query)
        raise HTTPException(
            status_code=500,
            detail={"error": {"code": "SEARCH_FAILED", "message": "Asset search failed."}},
        )
    return SearchEnvelope(data=results)


async def _download(params: DownloadParams) -> Response:
    try:
        asset = await get_asset_service().download(params.url, params.filename)
    except DownloadError as exc:
        raise HTTPException(
            status_code=exc.status_code,
            detail={"error": {"code": exc.code, "message": exc.message}},
        )
    return Response(
        content=asset.content,
        media_type=asset.content_type,
        headers={"Content-Disposition": _content_disposition(asset.filename)},
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("/search")
async def search_assets_get(params: Annotated[AssetSearchParams, Query()]) -> SearchEnvelope:
    return await _search(params)


@router.post("/search")
async def search_assets_post(params: AssetSearchParams) -> SearchEnvelope:
    return await _search(params)


@router.get("/download", response_class=Response)
async def download_asset_get(params: Annotated[DownloadParams, Query()]) -> Response:
    return await _download(params)


@router.post("/download", response_class=Response)
async def download_asset_post(params: DownloadParams) -> Response:
    return await _download(params)


@router.get("/icon/{prefix}/{name}", response_class=Response)
async def get_icon(prefix: str, name: str) -> Response:
    if name.endswith(".svg"):
        name = name[: -len(".svg")]
    svg = get_asset_service().get_icon_svg(prefix, name)
    return Response(content=svg, media_type="image/svg+xml", headers={"Cache-Control": _ICON_CACHE_CONTROL})
