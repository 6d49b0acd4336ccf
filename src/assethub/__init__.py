"""AssetHub: stock image and icon search API with provider-backed profiles."""

__version__ = "1.0.0"
