from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from assethub.api.deps import get_current_user, get_db
from assethub.db.models import User
from assethub.models.users import UpdateProfileRequest, UserEnvelope, UserResponse

router = APIRouter(prefix="/api/user", tags=["users"])


def _envelope(user: User) -> UserEnvelope:
    return UserEnvelope(user=UserResponse.model_validate(user, from_attributes=True))


@router.get("/profile")
async def get_profile(user: User = Depends(get_current_user)) -> UserEnvelope:
    return _envelope(user)


@router.put("/profile")
async def update_profile(
    body: UpdateProfileRequest,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
) -> UserEnvelope:
    if body.first_name is not None:
        user.first_name = body.first_name
    if body.last_name is not None:
        user.last_name = body.last_name
    if body.avatar_url is not None:
        user.avatar_url = body.avatar_url
    user.updated_at = datetime.now(timezone.utc)
    await db.commit()
    return _envelope(user)
