"""
Pydantic schemas for registration, login and account management.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime
import re

from app.models.user import UserRole

SELF_REGISTRABLE_ROLES = (UserRole.USER, UserRole.EMPLOYER)


def validate_password_strength(v: str) -> str:
    """Validate password contains required character types."""
    if len(v) < 8:
        raise ValueError('Password must be at least 8 characters long')
    if len(v) > 72:
        raise ValueError('Password cannot exceed 72 characters (bcrypt limitation)')
    if not re.search(r'[a-z]', v):
        raise ValueError('Password must contain at least one lowercase letter')
    if not re.search(r'[A-Z]', v):
        raise ValueError('Password must contain at least one uppercase letter')
    if not re.search(r'\d', v):
        raise ValueError('Password must contain at least one number')
    if not re.search(r'[!@#$%^&*(),.?":{}|<>]', v):
        raise ValueError('Password must contain at least one special character (!@#$%^&*(),.?":{}|<>)')
    return v


class UserRegisterRequest(BaseModel):
    """Request schema for user registration."""
    username: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(
        ...,
        min_length=8,
        max_length=72,  # bcrypt limit
        description="Password must be 8-72 characters with uppercase, lowercase, number, and special character"
    )
    role: UserRole = UserRole.USER

    @field_validator('password')
    @classmethod
    def check_password(cls, v: str) -> str:
        return validate_password_strength(v)

    @field_validator('role')
    @classmethod
    def check_role(cls, v: UserRole) -> UserRole:
        if v not in SELF_REGISTRABLE_ROLES:
            raise ValueError('Only USER and EMPLOYER accounts can be self-registered')
        return v


class UserLoginRequest(BaseModel):
    email: EmailStr
    password: str


class UserResponse(BaseModel):
    """User profile response (no sensitive data)."""
    id: int
    username: str
    email: str
    role: UserRole
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    """JWT bearer token response."""
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class UserUpdateRequest(BaseModel):
    """Partial profile update; omitted fields are left unchanged."""
    username: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=8, max_length=72)

    @field_validator('password')
    @classmethod
    def check_password(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return validate_password_strength(v)


class AdminUserUpdateRequest(UserUpdateRequest):
    """Admin update; may also change the account role."""
    role: Optional[UserRole] = None
