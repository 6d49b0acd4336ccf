"""Bearer-token verification against the auth provider, and local user sync.

The provider is a Supabase (GoTrue) project: ``GET {provider_url}/auth/v1/user``
with the service key as ``apikey`` returns the identity behind a user token.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import httpx
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from assethub.config import config
from assethub.db.models import User

log = logging.getLogger(__name__)

# Short-lived cache: token -> (ProviderUser, expiry_monotonic).
# Avoids a provider round-trip on every request from the same client.
_TOKEN_CACHE: dict[str, tuple["ProviderUser", float]] = {}


class AuthProviderUnavailable(Exception):
    """The auth provider URL or service key is not configured."""


@dataclass
class ProviderUser:
    id: str
    email: str | None = None
    user_metadata: dict[str, Any] = field(default_factory=dict)


def provider_configured() -> bool:
    return bool(config.auth.provider_url and config.auth.service_key)


def cached_user(token: str) -> ProviderUser | None:
    """Return the cached identity for *token* without contacting the provider."""
    cached = _TOKEN_CACHE.get(token)
    if cached is None:
        return None
    user, expires = cached
    if time.monotonic() >= expires:
        del _TOKEN_CACHE[token]
        return None
    return user


async def verify_token(token: str) -> ProviderUser | None:
    """Resolve *token* to a provider identity, or ``None`` if it does not verify.

    Raises ``AuthProviderUnavailable`` when the provider is not configured.
    """
    user = cached_user(token)
    if user is not None:
        return user
    if not provider_configured():
        raise AuthProviderUnavailable("Auth provider is not configured.")

    url = f"{config.auth.provider_url.rstrip('/')}/auth/v1/user"
    headers = {"apikey": config.auth.service_key, "Authorization": f"Bearer {token}"}
    try:
        async with httpx.AsyncClient() as client:
            resp = await client.get(url, headers=headers, timeout=config.auth.timeout)
    except httpx.HTTPError:
        log.error("Auth provider request failed", exc_info=True)
        return None

    if resp.status_code != 200:
        log.info("Token rejected by auth provider (HTTP %d)", resp.status_code)
        return None
    try:
        data = resp.json()
    except ValueError:
        log.error("Auth provider returned invalid JSON")
        return None
    if not isinstance(data, dict) or not data.get("id"):
        return None

    user = ProviderUser(
        id=str(data["id"]),
        email=data.get("email"),
        user_metadata=data.get("user_metadata") or {},
    )
    _TOKEN_CACHE[token] = (user, time.monotonic() + config.auth.token_cache_ttl)
    return user


def evict_token_cache() -> None:
    """Drop expired cache entries."""
    now = time.monotonic()
    for token in [t for t, (_, expires) in _TOKEN_CACHE.items() if expires <= now]:
        del _TOKEN_CACHE[token]


def reset() -> None:
    """Clear the token cache (useful for tests)."""
    _TOKEN_CACHE.clear()


# ---------------------------------------------------------------------------
# Local user rows
# ---------------------------------------------------------------------------


async def get_user(db: AsyncSession, user_id: str) -> User | None:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def create_user_from_provider(
    db: AsyncSession,
    identity: ProviderUser,
    first_name: str | None = None,
    last_name: str | None = None,
) -> User:
    """Insert the local row for *identity*.

    Explicit names win over the provider's ``user_metadata``. The caller is
    responsible for calling ``await db.commit()``.
    """
    meta = identity.user_metadata
    now = datetime.now(timezone.utc)
    user = User(
        id=identity.id,
        email=identity.email,
        first_name=first_name or meta.get("firstName") or None,
        last_name=last_name or meta.get("lastName") or None,
        avatar_url=meta.get("avatar_url") or None,
        is_active=True,
        created_at=now,
        updated_at=now,
    )
    db.add(user)
    await db.flush()
    return user
