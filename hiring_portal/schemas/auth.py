"""Authentication schemas."""

from pydantic import BaseModel, Field, field_validator

from hiring_portal.core.security import MAX_PASSWORD_BYTES, Role
from hiring_portal.schemas.user import UserView
from hiring_portal.utils.validators import validate_email


class RegisterRequest(BaseModel):
    """Register request schema."""

    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=8, description="Password must be at least 8 characters")
    role: Role

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        if not validate_email(v):
            raise ValueError("invalid email address")
        return v

    @field_validator("password")
    @classmethod
    def check_password_bytes(cls, v: str) -> str:
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class RegisterResponse(BaseModel):
    message: str
    user: UserView


class LoginRequest(BaseModel):
    """Login request schema."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    """Login response schema."""

    token: str
    token_type: str = "bearer"
    user: UserView
