# company.py
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CompanyCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    handle: str = Field(min_length=1, max_length=25, pattern=r"^[a-z0-9-]+$")
    name: str = Field(min_length=1)
    description: Optional[str] = None
    numEmployees: Optional[int] = Field(default=None, ge=0)
    logoUrl: Optional[str] = None


class CompanyUpdate(BaseModel):
    """Partial update: only fields sent by the client are applied."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(default=None, min_length=1)
    description: Optional[str] = None
    numEmployees: Optional[int] = Field(default=None, ge=0)
    logoUrl: Optional[str] = None
