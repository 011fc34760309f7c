"""Unit tests for JobService."""

from decimal import Decimal

import pytest
from db_helpers import JOB_COLUMNS, executed, set_descriptions
from jobs.job_service import JobService
from shared.errors import (
    EmptyUpdateError,
    InvalidBooleanError,
    InvalidRangeError,
    NotFoundForFilterError,
    NotFoundForIdentifierError,
)

ENGINEER = (7, "Engineer", 120000, Decimal("0.015"), "acme")


@pytest.fixture
def job_service(mock_database):
    """Create a JobService instance with mocked database."""
    return JobService(database=mock_database)


class TestJobService:
    """Test cases for JobService."""

    def test_init_requires_database(self):
        with pytest.raises(ValueError, match="Database is required"):
            JobService(database=None)

    def test_create(self, job_service, mock_cursor):
        set_descriptions(mock_cursor, JOB_COLUMNS)
        mock_cursor.fetchone.side_effect = [("acme",), ENGINEER]

        job = job_service.create(
            title="Engineer", company_handle="acme", salary=120000, equity=0.015
        )

        assert job == {
            "id": 7,
            "title": "Engineer",
            "salary": 120000,
            "equity": 0.015,
            "companyHandle": "acme",
        }
        insert_sql, params = executed(mock_cursor)[1]
        assert "INSERT INTO jobs" in insert_sql
        assert params == {"p1": "Engineer", "p2": 120000, "p3": 0.015, "p4": "acme"}

    def test_create_unknown_company(self, job_service, mock_cursor):
        mock_cursor.fetchone.return_value = None

        with pytest.raises(NotFoundForIdentifierError, match="No company: nope"):
            job_service.create(title="Engineer", company_handle="nope")

        assert mock_cursor.execute.call_count == 1

    def test_find_all_converts_equity(self, job_service, mock_cursor):
        set_descriptions(mock_cursor, JOB_COLUMNS)
        mock_cursor.fetchall.return_value = [ENGINEER, (8, "Intern", None, None, "acme")]

        jobs = job_service.find_all()

        assert [j["equity"] for j in jobs] == [0.015, None]
        assert isinstance(jobs[0]["equity"], float)

    def test_search_title(self, job_service, mock_cursor):
        set_descriptions(mock_cursor, JOB_COLUMNS)
        mock_cursor.fetchall.return_value = [ENGINEER]

        jobs = job_service.search({"title": "eng"})

        assert jobs[0]["id"] == 7
        sql, params = executed(mock_cursor)[0]
        assert "WHERE title ILIKE %(p1)s" in sql
        assert params == {"p1": "%eng%"}

    def test_search_all_filters(self, job_service, mock_cursor):
        set_descriptions(mock_cursor, JOB_COLUMNS)
        mock_cursor.fetchall.return_value = [ENGINEER]

        job_service.search(
            {"hasEquity": "true", "maxSalary": "200000", "minSalary": "100000", "title": "e"}
        )

        sql, params = executed(mock_cursor)[0]
        assert (
            "WHERE title ILIKE %(p1)s AND salary >= %(p2)s AND salary <= %(p3)s AND equity > 0"
            in sql
        )
        assert params == {"p1": "%e%", "p2": 100000, "p3": 200000}

    def test_search_has_equity_false_lists_all(self, job_service, mock_cursor):
        set_descriptions(mock_cursor, JOB_COLUMNS)
        mock_cursor.fetchall.return_value = []

        assert job_service.search({"hasEquity": "false"}) == []
        assert "WHERE" not in executed(mock_cursor)[0][0]

    def test_search_invalid_range(self, job_service, mock_database):
        with pytest.raises(InvalidRangeError):
            job_service.search({"minSalary": "100", "maxSalary": "50"})

        mock_database.get_cursor.assert_not_called()

    def test_search_invalid_boolean(self, job_service, mock_database):
        with pytest.raises(InvalidBooleanError):
            job_service.search({"hasEquity": "maybe"})

        mock_database.get_cursor.assert_not_called()

    def test_search_no_match(self, job_service, mock_cursor):
        set_descriptions(mock_cursor, JOB_COLUMNS)
        mock_cursor.fetchall.return_value = []

        with pytest.raises(NotFoundForFilterError, match="No jobs found"):
            job_service.search({"minSalary": "999999"})

    def test_get(self, job_service, mock_cursor):
        set_descriptions(mock_cursor, JOB_COLUMNS)
        mock_cursor.fetchone.return_value = ENGINEER

        job = job_service.get(7)

        assert job["title"] == "Engineer"
        assert executed(mock_cursor)[0][1] == {"p1": 7}

    def test_get_not_found(self, job_service, mock_cursor):
        set_descriptions(mock_cursor, JOB_COLUMNS)
        mock_cursor.fetchone.return_value = None

        with pytest.raises(NotFoundForIdentifierError, match="No job: 99"):
            job_service.get(99)

    def test_update(self, job_service, mock_cursor):
        set_descriptions(mock_cursor, JOB_COLUMNS)
        mock_cursor.fetchone.return_value = (7, "Senior Engineer", 150000, Decimal("0"), "acme")

        job = job_service.update(7, {"title": "Senior Engineer", "salary": 150000})

        assert job["equity"] == 0.0
        sql, params = executed(mock_cursor)[0]
        assert '"title"=%(p1)s, "salary"=%(p2)s' in sql
        assert "WHERE id = %(p3)s" in sql
        assert params == {"p1": "Senior Engineer", "p2": 150000, "p3": 7}

    def test_update_company_handle_checks_company(self, job_service, mock_cursor):
        set_descriptions(mock_cursor, JOB_COLUMNS)
        mock_cursor.fetchone.side_effect = [("other",), (7, "Engineer", None, None, "other")]

        job = job_service.update(7, {"companyHandle": "other"})

        assert job["companyHandle"] == "other"
        statements = executed(mock_cursor)
        assert statements[0][1] == {"p1": "other"}
        assert '"company_handle"=%(p1)s' in statements[1][0]

    def test_update_unknown_company(self, job_service, mock_cursor):
        mock_cursor.fetchone.return_value = None

        with pytest.raises(NotFoundForIdentifierError, match="No company: ghost"):
            job_service.update(7, {"companyHandle": "ghost"})

        assert mock_cursor.execute.call_count == 1

    def test_update_empty(self, job_service, mock_database):
        with pytest.raises(EmptyUpdateError):
            job_service.update(7, {})

        mock_database.get_cursor.assert_not_called()

    def test_update_not_found(self, job_service, mock_cursor):
        set_descriptions(mock_cursor, JOB_COLUMNS)
        mock_cursor.fetchone.return_value = None

        with pytest.raises(NotFoundForIdentifierError, match="No job: 7"):
            job_service.update(7, {"salary": 1})

    def test_remove(self, job_service, mock_cursor):
        mock_cursor.fetchone.return_value = (7,)

        job_service.remove(7)

        assert "DELETE FROM jobs" in executed(mock_cursor)[0][0]

    def test_remove_not_found(self, job_service, mock_cursor):
        mock_cursor.fetchone.return_value = None

        with pytest.raises(NotFoundForIdentifierError):
            job_service.remove(7)
