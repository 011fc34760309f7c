# auth.py
from pydantic import BaseModel, Field

from .user import UserBase


class LoginRequest(BaseModel):
    username: str = Field(min_length=1, max_length=25)
    password: str = Field(min_length=1)


class RegisterRequest(UserBase):
    """Self-registration; never creates an admin."""
