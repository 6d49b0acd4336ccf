"""Stock image and icon aggregation."""

from assethub.assets.errors import AssetError, DownloadError, ProviderError
from assethub.assets.service import (
    AssetService,
    generate_asset_filename,
    get_asset_service,
    get_optimal_image_size,
)
from assethub.assets.similarity import levenshtein_distance, similarity

__all__ = [
    "AssetError",
    "AssetService",
    "DownloadError",
    "ProviderError",
    "generate_asset_filename",
    "get_asset_service",
    "get_optimal_image_size",
    "levenshtein_distance",
    "similarity",
]
