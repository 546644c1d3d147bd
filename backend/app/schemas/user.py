from datetime import datetime

from pydantic import EmailStr, Field

from app.models.user import UserRole
from app.schemas.base import CamelModel, NonEmptyStr, OptionalStr


class UserCreate(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    full_name: NonEmptyStr
    phone: OptionalStr = None
    role: UserRole = UserRole.OPERATOR


class UserUpdate(CamelModel):
    email: EmailStr | None = None
    full_name: NonEmptyStr | None = None
    phone: OptionalStr = None
    role: UserRole | None = None
    is_active: bool | None = None


class PasswordUpdate(CamelModel):
    password: str = Field(..., min_length=6)


class UserOut(CamelModel):
    id: int
    email: str
    full_name: str
    phone: str | None = None
    role: UserRole
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(CamelModel):
    token: str
    user: UserOut
