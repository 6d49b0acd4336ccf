from typing import Any

from assethub.models.base import AppModel


class ErrorResponse(AppModel):
    code: str
    message: str
    details: list[Any] | None = None
    retry_after_ms: int | None = None


class ErrorEnvelope(AppModel):
    success: bool = False
    error: ErrorResponse
