"""
Company Services Package

This package contains services for managing companies:
- CompanyService for CRUD operations and filtered search on companies
"""

from .company_service import CompanyService

__all__ = ["CompanyService"]
