"""Profile sync against the external auth provider.

Registration and login happen on the provider; clients then call
``/api/auth/sync`` with the provider-issued token to get a local profile row.
"""

import logging

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from assethub.api.deps import get_db, get_provider_user
from assethub.auth.service import ProviderUser, create_user_from_provider, get_user
from assethub.models.users import SyncUserRequest, UserEnvelope, UserResponse

router = APIRouter(prefix="/api/auth", tags=["auth"])
log = logging.getLogger(__name__)


@router.post("/sync", responses={201: {"model": UserEnvelope}})
@router.post("/login", responses={201: {"model": UserEnvelope}})
async def sync_user(
    body: SyncUserRequest | None = Body(default=None),
    db: AsyncSession = Depends(get_db),
    identity: ProviderUser = Depends(get_provider_user),
):
    existing = await get_user(db, identity.id)
    if existing is not None:
        return UserEnvelope(user=UserResponse.model_validate(existing, from_attributes=True))

    if not identity.email:
        raise HTTPException(
            status_code=400,
            detail={"error": {"code": "EMAIL_REQUIRED", "message": "Provider account has no email address."}},
        )

    body = body or SyncUserRequest()
    try:
        user = await create_user_from_provider(db, identity, first_name=body.first_name, last_name=body.last_name)
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(
            status_code=409,
            detail={"error": {"code": "EMAIL_TAKEN", "message": "Email is already linked to another account."}},
        )
    log.info("Synced new user %s", user.id)
    envelope = UserEnvelope(user=UserResponse.model_validate(user, from_attributes=True))
    return JSONResponse(status_code=201, content=envelope.model_dump(mode="json", by_alias=True))


@router.post("/register", status_code=400)
async def register():
    raise HTTPException(
        status_code=400,
        detail={"error": {
            "code": "USE_AUTH_PROVIDER",
            "message": "Register through the auth provider, then call /api/auth/sync with its token.",
        }},
    )
