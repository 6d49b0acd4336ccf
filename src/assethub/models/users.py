from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, Field

from assethub.config import str_limit
from assethub.models.base import AppModel


class UserResponse(AppModel):
    id: str
    email: str
    first_name: str | None
    last_name: str | None
    avatar_url: str | None
    is_active: bool = True
    created_at: datetime
    updated_at: datetime


class UserEnvelope(AppModel):
    user: UserResponse


class SyncUserRequest(AppModel):
    first_name: str | None = None
    last_name: str | None = None


class UpdateProfileRequest(AppModel):
    first_name: Annotated[str, Field(min_length=1), AfterValidator(str_limit(max_attr="name_max"))] | None = None
    last_name: Annotated[str, Field(min_length=1), AfterValidator(str_limit(max_attr="name_max"))] | None = None
    avatar_url: Annotated[str, AfterValidator(str_limit(max_attr="avatar_max"))] | None = None
