"""
Shared infrastructure for services.

This package contains building blocks used by every entity service: the
database abstraction, typed service errors, search filter validation and the
SQL fragment builders.
"""

from .database import Database, DatabaseConfig, PostgreSQLDatabase, to_pyformat
from .errors import (
    BadRequestError,
    DuplicateRecordError,
    EmptyUpdateError,
    FilterValidationError,
    InvalidBooleanError,
    InvalidNumericValueError,
    InvalidRangeError,
    InvalidTypeError,
    NotFoundError,
    NotFoundForFilterError,
    NotFoundForIdentifierError,
    ServiceError,
)
from .filters import (
    COMPANY_FILTERS,
    JOB_FILTERS,
    FilterField,
    FilterKind,
    FilterSpec,
    validate_filters,
)
from .sql import (
    ColumnRule,
    SetClause,
    WhereClause,
    build_set_clause,
    build_where_clause,
    map_column,
)

__all__ = [
    "BadRequestError",
    "COMPANY_FILTERS",
    "ColumnRule",
    "Database",
    "DatabaseConfig",
    "DuplicateRecordError",
    "EmptyUpdateError",
    "FilterField",
    "FilterKind",
    "FilterSpec",
    "FilterValidationError",
    "InvalidBooleanError",
    "InvalidNumericValueError",
    "InvalidRangeError",
    "InvalidTypeError",
    "JOB_FILTERS",
    "NotFoundError",
    "NotFoundForFilterError",
    "NotFoundForIdentifierError",
    "PostgreSQLDatabase",
    "ServiceError",
    "SetClause",
    "WhereClause",
    "build_set_clause",
    "build_where_clause",
    "map_column",
    "to_pyformat",
    "validate_filters",
]
