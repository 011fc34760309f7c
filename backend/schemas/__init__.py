from .auth import LoginRequest, RegisterRequest
from .company import CompanyCreate, CompanyUpdate
from .job import JobCreate, JobUpdate
from .user import UserCreate, UserUpdate

__all__ = [
    "CompanyCreate",
    "CompanyUpdate",
    "JobCreate",
    "JobUpdate",
    "LoginRequest",
    "RegisterRequest",
    "UserCreate",
    "UserUpdate",
]
