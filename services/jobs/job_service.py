"""Service for creating, reading, updating, deleting and searching jobs."""

import logging
from collections.abc import Mapping
from typing import Any

from shared.database import Database, to_pyformat
from shared.errors import NotFoundForFilterError, NotFoundForIdentifierError
from shared.filters import JOB_FILTERS, validate_filters
from shared.records import job_record
from shared.sql import build_set_clause, build_where_clause
from shared.structured_logging import get_structured_logger, log_with_context

from .queries import (
    CHECK_COMPANY_EXISTS,
    DELETE_JOB,
    GET_ALL_JOBS,
    GET_JOB_BY_ID,
    INSERT_JOB,
    JOB_COLUMN_ALIASES,
    JOB_FILTER_COLUMNS,
    SEARCH_JOBS,
    UPDATE_JOB,
)

logger = logging.getLogger(__name__)


class JobService:
    """Service for managing job postings."""

    def __init__(self, database: Database):
        """Initialize the job service.

        Args:
            database: Database connection interface
        """
        if not database:
            raise ValueError("Database is required")
        self.db = database

    def create(
        self,
        title: str,
        company_handle: str,
        salary: int | None = None,
        equity: float | None = None,
    ) -> dict[str, Any]:
        """Create a job posting.

        Args:
            title: Job title
            company_handle: Handle of the company offering the job
            salary: Yearly salary (optional)
            equity: Equity fraction between 0 and 1 (optional)

        Returns:
            Created job dictionary: {id, title, salary, equity, companyHandle}

        Raises:
            NotFoundForIdentifierError: If the company does not exist
        """
        with self.db.get_cursor() as cur:
            self._ensure_company_exists(cur, company_handle)
            cur.execute(*to_pyformat(INSERT_JOB, [title, salary, equity, company_handle]))
            columns = [desc[0] for desc in cur.description]
            job = job_record(dict(zip(columns, cur.fetchone())))

        logger.info(f"Created job {job['id']}: {title} at {company_handle}")
        return job

    def find_all(self) -> list[dict[str, Any]]:
        """Get all jobs ordered by title.

        Returns:
            List of job dictionaries, empty if there are no jobs
        """
        with self.db.get_cursor() as cur:
            cur.execute(GET_ALL_JOBS)
            columns = [desc[0] for desc in cur.description]
            jobs = [job_record(dict(zip(columns, row))) for row in cur.fetchall()]

        logger.debug(f"Retrieved {len(jobs)} job(s)")
        return jobs

    def search(self, raw_query: Mapping[str, Any] | None) -> list[dict[str, Any]]:
        """Find jobs matching optional search filters.

        Recognized filters: title (case-insensitive substring), minSalary,
        maxSalary and hasEquity (only jobs with non-zero equity when true).

        Args:
            raw_query: Query-string parameters; unrecognized keys are ignored

        Returns:
            List of matching job dictionaries ordered by title. When no filter
            produces a predicate this is the full (possibly empty) listing.

        Raises:
            FilterValidationError: If the filters are malformed
            NotFoundForFilterError: If filters were applied and nothing matched
        """
        filters = validate_filters(raw_query, JOB_FILTERS)
        where = build_where_clause(filters, JOB_FILTER_COLUMNS)
        if not where.where_clause:
            return self.find_all()

        query = SEARCH_JOBS.format(where_clause=where.where_clause)
        with self.db.get_cursor() as cur:
            cur.execute(*to_pyformat(query, where.values))
            columns = [desc[0] for desc in cur.description]
            jobs = [job_record(dict(zip(columns, row))) for row in cur.fetchall()]

        log_with_context(
            logger,
            logging.DEBUG,
            f"Search matched {len(jobs)} job(s)",
            entity="job",
            where=where.where_clause,
        )
        if not jobs:
            raise NotFoundForFilterError("No jobs found matching the search criteria")
        return jobs

    def get(self, job_id: int) -> dict[str, Any]:
        """Get a job by ID.

        Args:
            job_id: Job ID

        Returns:
            Job dictionary

        Raises:
            NotFoundForIdentifierError: If the job does not exist
        """
        with self.db.get_cursor() as cur:
            cur.execute(*to_pyformat(GET_JOB_BY_ID, [job_id]))
            columns = [desc[0] for desc in cur.description]
            row = cur.fetchone()

        if not row:
            raise NotFoundForIdentifierError(f"No job: {job_id}")
        return job_record(dict(zip(columns, row)))

    def update(self, job_id: int, data: Mapping[str, Any]) -> dict[str, Any]:
        """Partially update a job.

        Fields can include: title, salary, equity, companyHandle.

        Args:
            job_id: Job ID
            data: Field name -> new value

        Returns:
            Updated job dictionary

        Raises:
            EmptyUpdateError: If data is empty
            NotFoundForIdentifierError: If the job or the new company does not exist
        """
        update = build_set_clause(data, JOB_COLUMN_ALIASES)
        query = UPDATE_JOB.format(
            set_clause=update.set_clause, id_idx=f"${len(update.values) + 1}"
        )

        with self.db.get_cursor() as cur:
            if "companyHandle" in data:
                self._ensure_company_exists(cur, data["companyHandle"])
            cur.execute(*to_pyformat(query, [*update.values, job_id]))
            columns = [desc[0] for desc in cur.description]
            row = cur.fetchone()

        if not row:
            raise NotFoundForIdentifierError(f"No job: {job_id}")

        get_structured_logger(__name__, entity="job", job_id=job_id).info(
            f"Updated fields: {', '.join(data)}"
        )
        return job_record(dict(zip(columns, row)))

    def remove(self, job_id: int) -> None:
        """Delete a job.

        Args:
            job_id: Job ID

        Raises:
            NotFoundForIdentifierError: If the job does not exist
        """
        with self.db.get_cursor() as cur:
            cur.execute(*to_pyformat(DELETE_JOB, [job_id]))
            if not cur.fetchone():
                raise NotFoundForIdentifierError(f"No job: {job_id}")

        logger.info(f"Deleted job {job_id}")

    def _ensure_company_exists(self, cur, company_handle: str) -> None:
        cur.execute(*to_pyformat(CHECK_COMPANY_EXISTS, [company_handle]))
        if not cur.fetchone():
            raise NotFoundForIdentifierError(f"No company: {company_handle}")
