"""Company Service.

Service for creating, reading, updating, deleting and searching companies.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from shared.database import Database, to_pyformat
from shared.errors import DuplicateRecordError, NotFoundForFilterError, NotFoundForIdentifierError
from shared.filters import COMPANY_FILTERS, validate_filters
from shared.records import job_record
from shared.sql import build_set_clause, build_where_clause
from shared.structured_logging import get_structured_logger, log_with_context

from .queries import (
    CHECK_COMPANY_EXISTS,
    COMPANY_COLUMN_ALIASES,
    COMPANY_FILTER_COLUMNS,
    DELETE_COMPANY,
    GET_ALL_COMPANIES,
    GET_COMPANY_BY_HANDLE,
    GET_JOBS_FOR_COMPANY,
    INSERT_COMPANY,
    SEARCH_COMPANIES,
    UPDATE_COMPANY,
)

logger = logging.getLogger(__name__)


class CompanyService:
    """Service for managing companies."""

    def __init__(self, database: Database):
        """Initialize the company service.

        Args:
            database: Database connection interface (implements Database protocol)
        """
        if not database:
            raise ValueError("Database is required")
        self.db = database

    def create(
        self,
        handle: str,
        name: str,
        description: str | None = None,
        num_employees: int | None = None,
        logo_url: str | None = None,
    ) -> dict[str, Any]:
        """Create a new company.

        Args:
            handle: Unique company handle
            name: Company name
            description: Company description (optional)
            num_employees: Number of employees (optional)
            logo_url: Logo URL (optional)

        Returns:
            Created company dictionary: {handle, name, description, numEmployees, logoUrl}

        Raises:
            DuplicateRecordError: If a company with this handle already exists
        """
        with self.db.get_cursor() as cur:
            cur.execute(*to_pyformat(CHECK_COMPANY_EXISTS, [handle]))
            if cur.fetchone():
                raise DuplicateRecordError(f"Duplicate company: {handle}")

            cur.execute(
                *to_pyformat(INSERT_COMPANY, [handle, name, description, num_employees, logo_url])
            )
            columns = [desc[0] for desc in cur.description]
            company = dict(zip(columns, cur.fetchone()))

        logger.info(f"Created company {handle}: {name}")
        return company

    def find_all(self) -> list[dict[str, Any]]:
        """Get all companies ordered by name.

        Returns:
            List of company dictionaries, empty if there are no companies
        """
        with self.db.get_cursor() as cur:
            cur.execute(GET_ALL_COMPANIES)
            columns = [desc[0] for desc in cur.description]
            companies = [dict(zip(columns, row)) for row in cur.fetchall()]

        logger.debug(f"Retrieved {len(companies)} company(ies)")
        return companies

    def search(self, raw_query: Mapping[str, Any] | None) -> list[dict[str, Any]]:
        """Find companies matching optional search filters.

        Recognized filters: name (case-insensitive substring), minEmployees,
        maxEmployees. Filters are validated before any query runs.

        Args:
            raw_query: Query-string parameters; unrecognized keys are ignored

        Returns:
            List of matching company dictionaries ordered by name. Without any
            recognized filter this is the full (possibly empty) listing.

        Raises:
            FilterValidationError: If the filters are malformed
            NotFoundForFilterError: If filters were given and nothing matched
        """
        filters = validate_filters(raw_query, COMPANY_FILTERS)
        where = build_where_clause(filters, COMPANY_FILTER_COLUMNS)
        if not where.where_clause:
            return self.find_all()

        query = SEARCH_COMPANIES.format(where_clause=where.where_clause)
        with self.db.get_cursor() as cur:
            cur.execute(*to_pyformat(query, where.values))
            columns = [desc[0] for desc in cur.description]
            companies = [dict(zip(columns, row)) for row in cur.fetchall()]

        log_with_context(
            logger,
            logging.DEBUG,
            f"Search matched {len(companies)} company(ies)",
            entity="company",
            where=where.where_clause,
        )
        if not companies:
            raise NotFoundForFilterError("No companies found matching the search criteria")
        return companies

    def get(self, handle: str) -> dict[str, Any]:
        """Get a company and its jobs.

        Args:
            handle: Company handle

        Returns:
            Company dictionary with a "jobs" list of {id, title, salary, equity}

        Raises:
            NotFoundForIdentifierError: If the company does not exist
        """
        with self.db.get_cursor() as cur:
            cur.execute(*to_pyformat(GET_COMPANY_BY_HANDLE, [handle]))
            columns = [desc[0] for desc in cur.description]
            row = cur.fetchone()
            if not row:
                raise NotFoundForIdentifierError(f"No company: {handle}")
            company = dict(zip(columns, row))

            cur.execute(*to_pyformat(GET_JOBS_FOR_COMPANY, [handle]))
            job_columns = [desc[0] for desc in cur.description]
            jobs = [job_record(dict(zip(job_columns, job))) for job in cur.fetchall()]

        return {**company, "jobs": jobs}

    def update(self, handle: str, data: Mapping[str, Any]) -> dict[str, Any]:
        """Partially update a company.

        Only the fields present in data change. Fields can include:
        name, description, numEmployees, logoUrl.

        Args:
            handle: Company handle
            data: Field name -> new value

        Returns:
            Updated company dictionary

        Raises:
            EmptyUpdateError: If data is empty
            NotFoundForIdentifierError: If the company does not exist
        """
        update = build_set_clause(data, COMPANY_COLUMN_ALIASES)
        query = UPDATE_COMPANY.format(
            set_clause=update.set_clause, handle_idx=f"${len(update.values) + 1}"
        )

        with self.db.get_cursor() as cur:
            cur.execute(*to_pyformat(query, [*update.values, handle]))
            columns = [desc[0] for desc in cur.description]
            row = cur.fetchone()

        if not row:
            raise NotFoundForIdentifierError(f"No company: {handle}")

        get_structured_logger(__name__, entity="company", handle=handle).info(
            f"Updated fields: {', '.join(data)}"
        )
        return dict(zip(columns, row))

    def remove(self, handle: str) -> None:
        """Delete a company (its jobs are removed by the foreign key cascade).

        Args:
            handle: Company handle

        Raises:
            NotFoundForIdentifierError: If the company does not exist
        """
        with self.db.get_cursor() as cur:
            cur.execute(*to_pyformat(DELETE_COMPANY, [handle]))
            if not cur.fetchone():
                raise NotFoundForIdentifierError(f"No company: {handle}")

        logger.info(f"Deleted company {handle}")
