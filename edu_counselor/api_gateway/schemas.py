import uuid
from typing import Any

from pydantic import BaseModel, EmailStr, Field, field_validator

# Authentication Schemas
MAX_BCRYPT_BYTES = 72


class RegisterIn(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    full_name: str = Field(default="", description="Copied onto the new profile")

    @field_validator("password")
    @classmethod
    def bcrypt_max_bytes(cls, v: str) -> str:
        if len(v.encode("utf-8")) > MAX_BCRYPT_BYTES:
            raise ValueError("Password too long (max 72 bytes for bcrypt).")
        return v


class LoginIn(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)


class VerifyIn(BaseModel):
    token: str


class PrincipalOut(BaseModel):
    sub: uuid.UUID
    email: str


# Hooks called by the auth service itself
class UserCreatedHookIn(BaseModel):
    id: uuid.UUID
    email: str | None = None
    raw_user_meta_data: dict[str, Any] = Field(default_factory=dict)


class UserDeletedHookIn(BaseModel):
    id: uuid.UUID
