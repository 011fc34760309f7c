# job.py
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class JobCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=1)
    salary: Optional[int] = Field(default=None, ge=0)
    equity: Optional[float] = Field(default=None, ge=0, le=1)
    companyHandle: str = Field(min_length=1, max_length=25)


class JobUpdate(BaseModel):
    """Partial update: only fields sent by the client are applied."""

    model_config = ConfigDict(extra="forbid")

    title: str = Field(default=None, min_length=1)
    salary: Optional[int] = Field(default=None, ge=0)
    equity: Optional[float] = Field(default=None, ge=0, le=1)
    companyHandle: str = Field(default=None, min_length=1, max_length=25)
