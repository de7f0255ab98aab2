# schemas/user.py
from pydantic import BaseModel, EmailStr, Field, ConfigDict, field_validator
from typing import Optional, Literal
from datetime import datetime
from uuid import UUID

from dayflow.core.clock import is_valid_timezone


Theme = Literal["theme-forest", "theme-sunset", "theme-azure"]


def _check_password_strength(v: str) -> str:
    if not any(c.isupper() for c in v):
        raise ValueError('Password must contain at least one uppercase letter')
    if not any(c.islower() for c in v):
        raise ValueError('Password must contain at least one lowercase letter')
    if not any(c.isdigit() for c in v):
        raise ValueError('Password must contain at least one digit')
    return v


def _check_timezone(v: Optional[str]) -> Optional[str]:
    if v is not None and not is_valid_timezone(v):
        raise ValueError('Unknown timezone, expected an IANA name such as "Europe/Berlin"')
    return v


# =====================================================================
# 1. CREATE SCHEMAS
# =====================================================================

class SignupRequest(BaseModel):
    """Public sign-up with e-mail and password."""
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    display_name: Optional[str] = Field(None, max_length=100)
    timezone: Optional[str] = Field(None, description="IANA timezone, defaults to the server zone")

    @field_validator('password')
    @classmethod
    def validate_password_strength(cls, v: str) -> str:
        return _check_password_strength(v)

    @field_validator('timezone')
    @classmethod
    def validate_timezone(cls, v: Optional[str]) -> Optional[str]:
        return _check_timezone(v)


# =====================================================================
# 2. UPDATE SCHEMAS
# =====================================================================

class UserUpdate(BaseModel):
    """Profile update - all optional, only provided fields change."""
    display_name: Optional[str] = Field(None, max_length=100)
    photo_url: Optional[str] = Field(None, max_length=500)
    goals: Optional[str] = Field(None, max_length=2000)
    timezone: Optional[str] = None
    theme: Optional[Theme] = None

    @field_validator('timezone')
    @classmethod
    def validate_timezone(cls, v: Optional[str]) -> Optional[str]:
        return _check_timezone(v)


class PasswordChange(BaseModel):
    """Password change for a signed-in user."""
    old_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, max_length=128)

    @field_validator('new_password')
    @classmethod
    def validate_password_strength(cls, v: str) -> str:
        return _check_password_strength(v)


# =====================================================================
# 3. READ SCHEMAS
# =====================================================================

class UserOut(BaseModel):
    """Public profile."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: EmailStr
    display_name: Optional[str] = None
    photo_url: Optional[str] = None
    goals: Optional[str] = None
    timezone: str
    theme: str
    created_at: datetime


class UserOutDetailed(UserOut):
    """Profile plus login metadata."""
    last_login_at: Optional[datetime] = None
    password_changed_at: Optional[datetime] = None


# =====================================================================
# 4. AUTH SCHEMAS
# =====================================================================

class LoginRequest(BaseModel):
    """User login request."""
    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Authentication token response."""
    access_token: str
    token_type: str = "bearer"
    refresh_token: str
    user: UserOut


class RefreshTokenRequest(BaseModel):
    """Refresh token request."""
    refresh_token: str


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    token: str
    new_password: str = Field(..., min_length=8, max_length=128)

    @field_validator('new_password')
    @classmethod
    def validate_password_strength(cls, v: str) -> str:
        return _check_password_strength(v)


# =====================================================================
# RESPONSE WRAPPERS
# =====================================================================

class SuccessResponse(BaseModel):
    """Generic success response."""
    success: bool = True
    message: str
