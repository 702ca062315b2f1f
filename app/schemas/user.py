from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import EmailStr, Field

from app.schemas.base import CamelModel


class UserRole(str, Enum):
    admin = "admin"
    user = "user"


class UserStatus(str, Enum):
    regular = "regular"
    premium = "premium"


class SignupRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    name: str = Field(..., min_length=2)
    role: UserRole = UserRole.user
    phone: str | None = Field(None, max_length=20)
    address: str | None = None


class SigninRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserUpdateRequest(CamelModel):
    name: str | None = None
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=20)
    address: str | None = None
    role: UserRole | None = None
    status: UserStatus | None = None


class RoleUpdateRequest(CamelModel):
    # Checked by hand so the route can answer with its own messages
    user_id: int | None = None
    role: str | None = None


class ProfileUpdateRequest(CamelModel):
    user_id: int
    name: str = Field(None, min_length=2)
    phone: str | None = Field(None, max_length=20)
    address: str | None = None


class ActivityUpdateRequest(CamelModel):
    user_id: int
    type: Literal["watched", "read"]


class UserResponse(CamelModel):
    id: int
    email: str
    name: str
    role: UserRole
    status: UserStatus
    phone: str | None = None
    address: str | None = None
    last_watched: datetime | None = None
    last_read: datetime | None = None
    created_at: datetime
    updated_at: datetime
