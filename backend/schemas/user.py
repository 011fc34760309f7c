# user.py
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _validate_email_like(v: str) -> str:
    value = (v or "").strip()
    if "@" not in value:
        raise ValueError("email must contain '@'")
    left, right = value.split("@", 1)
    if not left or not right:
        raise ValueError("email must have text before and after '@'")
    return value


class UserBase(BaseModel):
    model_config = ConfigDict(extra="forbid")

    username: str = Field(min_length=1, max_length=25)
    password: str = Field(min_length=5, max_length=72)
    firstName: str = Field(min_length=1, max_length=30)
    lastName: str = Field(min_length=1, max_length=30)
    email: str = Field(min_length=6, max_length=60)

    @field_validator("email")
    @classmethod
    def _check_email(cls, v: str) -> str:
        return _validate_email_like(v)


class UserCreate(UserBase):
    """Admin-created user; may itself be an admin."""

    isAdmin: bool = False


class UserUpdate(BaseModel):
    """Partial update: only fields sent by the client are applied."""

    model_config = ConfigDict(extra="forbid")

    firstName: str = Field(default=None, min_length=1, max_length=30)
    lastName: str = Field(default=None, min_length=1, max_length=30)
    password: str = Field(default=None, min_length=5, max_length=72)
    email: str = Field(default=None, min_length=6, max_length=60)
    isAdmin: Optional[bool] = None

    @field_validator("email")
    @classmethod
    def _check_email(cls, v: str) -> str:
        return _validate_email_like(v)
