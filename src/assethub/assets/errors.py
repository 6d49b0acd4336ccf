"""Exception classes for the asset layer."""


class AssetError(Exception):
    """Base asset exception; carries an error code and the HTTP status it maps to."""

    code = "ASSET_SERVICE_ERROR"
    status_code = 500

    def __init__(self, message: str, *, code: str | None = None, status_code: int | None = None):
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ProviderError(AssetError):
    """An upstream image source failed or returned an unusable response."""

    code = "PROVIDER_ERROR"
    status_code = 502

    def __init__(self, message: str, provider: str | None = None, **kwargs):
        self.provider = provider
        super().__init__(message, **kwargs)


class DownloadError(AssetError):
    """Asset could not be fetched for download."""

    code = "DOWNLOAD_FAILED"
    status_code = 502
