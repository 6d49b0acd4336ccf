from collections.abc import AsyncGenerator

from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from assethub.auth.service import AuthProviderUnavailable, ProviderUser, get_user, verify_token
from assethub.db.engine import get_session_factory
from assethub.db.models import User


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    factory = get_session_factory()
    async with factory() as session:
        yield session


def bearer_token(authorization: str | None) -> str | None:
    if authorization and authorization.startswith("Bearer "):
        return authorization[7:].strip() or None
    return None


async def get_provider_user(
    authorization: str | None = Header(default=None),
) -> ProviderUser:
    """Verify the bearer token with the auth provider."""
    if not authorization:
        raise HTTPException(status_code=401, detail={"error": {"code": "AUTH_REQUIRED", "message": "Missing authorization header."}})
    token = bearer_token(authorization)
    if token is None:
        raise HTTPException(status_code=401, detail={"error": {"code": "AUTH_FAILED", "message": "Invalid authorization header."}})

    try:
        identity = await verify_token(token)
    except AuthProviderUnavailable:
        raise HTTPException(
            status_code=503,
            detail={"error": {"code": "AUTH_PROVIDER_UNAVAILABLE", "message": "Auth provider is not configured."}},
        )
    if identity is None:
        raise HTTPException(status_code=401, detail={"error": {"code": "AUTH_FAILED", "message": "Token is expired or invalid."}})
    return identity


async def get_current_user(
    db: AsyncSession = Depends(get_db),
    identity: ProviderUser = Depends(get_provider_user),
) -> User:
    """The synced local row for the verified identity."""
    user = await get_user(db, identity.id)
    if user is None:
        raise HTTPException(
            status_code=404,
            detail={"error": {"code": "USER_NOT_FOUND", "message": "User not found. Call /api/auth/sync first."}},
        )
    if not user.is_active:
        raise HTTPException(status_code=403, detail={"error": {"code": "ACCOUNT_DISABLED", "message": "Account is deactivated."}})
    return user
