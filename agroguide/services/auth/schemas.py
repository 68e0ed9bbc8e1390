from datetime import datetime

from pydantic import BaseModel, EmailStr

from agroguide.db.models.enums import AppRoleEnum


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class ProfileResponse(BaseModel):
    id: str
    user_id: str
    display_name: str | None = None
    role: AppRoleEnum = AppRoleEnum.USER
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str | None = None
    expires_at: int | None = None
    token_type: str = "bearer"
    user_id: str
    role: str  # "user" or "admin"; decides which dashboard the frontend opens


class MeResponse(BaseModel):
    id: str
    email: str | None = None
    profile: ProfileResponse | None = None
    is_admin: bool
    is_authenticated: bool = True
