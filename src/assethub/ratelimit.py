"""In-memory token buckets, one per (client, route category), applied as middleware.

Clients are identified by the verified user id when their token is already in
the auth cache, by a digest of the bearer token otherwise, and by IP for
anonymous requests.
"""

from __future__ import annotations

import hashlib
import math
import time
from dataclasses import dataclass
from typing import NamedTuple

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import JSONResponse

from assethub.api.deps import bearer_token
from assethub.auth.service import cached_user


class Rate(NamedTuple):
    capacity: int
    refill_per_second: float


class Decision(NamedTuple):
    allowed: bool
    limit: int
    remaining: int
    reset_ts: int
    retry_after_ms: int


@dataclass
class Bucket:
    tokens: float
    last_refill: float


CATEGORIES: dict[str, Rate] = {
    "auth": Rate(10, 0.2),
    "search": Rate(30, 1.0),
    "downloads": Rate(20, 0.5),
    "icons": Rate(120, 4.0),
    "users": Rate(30, 0.5),
    "default": Rate(60, 1.0),
}

_ROUTE_CATEGORIES: tuple[tuple[str, str], ...] = (
    ("/api/auth", "auth"),
    ("/api/assets/search", "search"),
    ("/api/assets/download", "downloads"),
    ("/api/assets/icon", "icons"),
    ("/api/user", "users"),
)

# A bucket idle this long has refilled completely and can be forgotten.
_IDLE_EVICT_AFTER = 3600.0

_UNLIMITED_PREFIXES = ("/health", "/ready", "/docs", "/openapi.json")

_buckets: dict[tuple[str, str], Bucket] = {}


def classify(path: str) -> str:
    return next((cat for prefix, cat in _ROUTE_CATEGORIES if path.startswith(prefix)), "default")


def check(key: str, category: str) -> Decision:
    """Take one token from *key*'s bucket for *category*.

    ``retry_after_ms`` is zero whenever the request is allowed.
    """
    rate = CATEGORIES.get(category, CATEGORIES["default"])
    now = time.time()
    bucket = _buckets.get((key, category))
    if bucket is None:
        bucket = _buckets[(key, category)] = Bucket(tokens=float(rate.capacity), last_refill=now)
    else:
        elapsed = now - bucket.last_refill
        bucket.tokens = min(rate.capacity, bucket.tokens + elapsed * rate.refill_per_second)
        bucket.last_refill = now

    if bucket.tokens < 1.0:
        wait = (1.0 - bucket.tokens) / rate.refill_per_second
        return Decision(False, rate.capacity, 0, int(now + wait), math.ceil(wait * 1000))

    bucket.tokens -= 1.0
    full_at = now + (rate.capacity - bucket.tokens) / rate.refill_per_second
    return Decision(True, rate.capacity, int(bucket.tokens), int(full_at), 0)


def evict_stale() -> None:
    cutoff = time.time() - _IDLE_EVICT_AFTER
    for key in [k for k, b in _buckets.items() if b.last_refill < cutoff]:
        del _buckets[key]


def reset() -> None:
    """Forget every bucket (tests)."""
    _buckets.clear()


def client_key(request: Request) -> str:
    token = bearer_token(request.headers.get("authorization"))
    if token is None:
        return f"ip:{request.client.host if request.client else 'unknown'}"
    user = cached_user(token)
    if user is not None:
        return f"user:{user.id}"
    return "token:" + hashlib.sha256(token.encode()).hexdigest()[:16]


def _limit_headers(decision: Decision) -> dict[str, str]:
    return {
        "X-RateLimit-Limit": str(decision.limit),
        "X-RateLimit-Remaining": str(decision.remaining),
        "X-RateLimit-Reset": str(decision.reset_ts),
    }


class RateLimitMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        if path.startswith(_UNLIMITED_PREFIXES):
            return await call_next(request)

        decision = check(client_key(request), classify(path))
        if not decision.allowed:
            return JSONResponse(
                status_code=429,
                content={
                    "success": False,
                    "error": {
                        "code": "RATE_LIMITED",
                        "message": "You are being rate limited.",
                        "retryAfterMs": decision.retry_after_ms,
                    },
                },
                headers={"Retry-After": str(math.ceil(decision.retry_after_ms / 1000)), **_limit_headers(decision)},
            )

        response = await call_next(request)
        response.headers.update(_limit_headers(decision))
        return response
