"""Unit tests for the HTTP API, with services mocked out."""

from unittest.mock import Mock, patch

import pytest
from app import create_app
from config import Config
from flask_jwt_extended import create_access_token
from shared.errors import (
    DuplicateRecordError,
    EmptyUpdateError,
    InvalidRangeError,
    NotFoundForFilterError,
    NotFoundForIdentifierError,
)

COMPANY = {
    "handle": "acme",
    "name": "Acme Corp",
    "description": "Anvils",
    "numEmployees": 50,
    "logoUrl": None,
}
JOB = {"id": 7, "title": "Engineer", "salary": 120000, "equity": 0.015, "companyHandle": "acme"}
USER = {
    "username": "aliya",
    "firstName": "Aliya",
    "lastName": "Smith",
    "email": "aliya@example.com",
    "isAdmin": False,
}


class ApiTestConfig(Config):
    TESTING = True
    JWT_SECRET_KEY = "unit-test-secret-key-that-is-long-enough-for-hs256"
    BCRYPT_ROUNDS = 4


@pytest.fixture
def app():
    """Create an app backed by a mock database."""
    return create_app(config_object=ApiTestConfig, database=Mock())


@pytest.fixture
def client(app):
    return app.test_client()


def _auth_header(app, username, is_admin=False):
    with app.app_context():
        token = create_access_token(identity=username, additional_claims={"is_admin": is_admin})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(app):
    return _auth_header(app, "admin", is_admin=True)


@pytest.fixture
def user_headers(app):
    return _auth_header(app, "aliya")


@pytest.fixture
def other_user_headers(app):
    return _auth_header(app, "mallory")


@pytest.fixture
def company_service():
    with patch("blueprints.companies.get_company_service") as getter:
        yield getter.return_value


@pytest.fixture
def job_service():
    with patch("blueprints.jobs.get_job_service") as getter:
        yield getter.return_value


@pytest.fixture
def user_service():
    with patch("blueprints.users.get_user_service") as getter:
        yield getter.return_value


@pytest.fixture
def auth_service():
    with patch("blueprints.auth.get_auth_service") as getter:
        yield getter.return_value


class TestAppFactory:
    """Test cases for create_app."""

    def test_database_registered_on_app(self):
        database = Mock()

        app = create_app(config_object=ApiTestConfig, database=database)

        assert app.extensions["database"] is database

    def test_user_service_uses_configured_rounds(self, app):
        from utils.services import get_user_service

        with app.app_context():
            service = get_user_service()

        assert service.bcrypt_rounds == 4
        assert service.db is app.extensions["database"]


class TestAuthRoutes:
    """Test cases for /api/auth."""

    def test_token(self, client, auth_service):
        auth_service.authenticate_user.return_value = {"username": "aliya", "isAdmin": True}

        response = client.post("/api/auth/token", json={"username": "aliya", "password": "pw"})

        assert response.status_code == 200
        assert response.get_json()["token"]

    def test_token_invalid_credentials(self, client, auth_service):
        auth_service.authenticate_user.return_value = None

        response = client.post("/api/auth/token", json={"username": "aliya", "password": "bad"})

        assert response.status_code == 401
        assert response.get_json() == {"error": "Invalid username/password"}

    def test_token_missing_body(self, client):
        response = client.post("/api/auth/token")

        assert response.status_code == 400

    def test_token_missing_password(self, client):
        response = client.post("/api/auth/token", json={"username": "aliya"})

        assert response.status_code == 400
        assert response.get_json()["error"] == "Invalid request data"

    def test_register(self, client, auth_service):
        auth_service.register_user.return_value = USER

        response = client.post(
            "/api/auth/register",
            json={
                "username": "aliya",
                "password": "secret123",
                "firstName": "Aliya",
                "lastName": "Smith",
                "email": "aliya@example.com",
            },
        )

        assert response.status_code == 201
        assert response.get_json()["token"]
        assert auth_service.register_user.call_args.kwargs["first_name"] == "Aliya"

    def test_register_cannot_request_admin(self, client, auth_service):
        response = client.post(
            "/api/auth/register",
            json={
                "username": "aliya",
                "password": "secret123",
                "firstName": "Aliya",
                "lastName": "Smith",
                "email": "aliya@example.com",
                "isAdmin": True,
            },
        )

        assert response.status_code == 400
        auth_service.register_user.assert_not_called()

    def test_register_duplicate(self, client, auth_service):
        auth_service.register_user.side_effect = DuplicateRecordError("Duplicate username: aliya")

        response = client.post(
            "/api/auth/register",
            json={
                "username": "aliya",
                "password": "secret123",
                "firstName": "Aliya",
                "lastName": "Smith",
                "email": "aliya@example.com",
            },
        )

        assert response.status_code == 400
        assert response.get_json() == {"error": "Duplicate username: aliya"}


class TestCompanyRoutes:
    """Test cases for /api/companies."""

    def test_list(self, client, company_service):
        company_service.find_all.return_value = [COMPANY]

        response = client.get("/api/companies")

        assert response.status_code == 200
        assert response.get_json() == {"companies": [COMPANY]}

    def test_search_passes_query_args(self, client, company_service):
        company_service.search.return_value = [COMPANY]

        response = client.get("/api/companies/search?name=ac&minEmployees=10")

        assert response.status_code == 200
        company_service.search.assert_called_once_with({"name": "ac", "minEmployees": "10"})

    def test_search_repeated_parameter_kept_as_list(self, client, company_service):
        company_service.search.return_value = [COMPANY]

        client.get("/api/companies/search?name=a&name=b")

        company_service.search.assert_called_once_with({"name": ["a", "b"]})

    def test_search_invalid_range(self, client, company_service):
        company_service.search.side_effect = InvalidRangeError(
            "Invalid min/max values: minEmployees (5) is greater than maxEmployees (2)"
        )

        response = client.get("/api/companies/search?minEmployees=5&maxEmployees=2")

        assert response.status_code == 400
        assert "minEmployees (5)" in response.get_json()["error"]

    def test_search_no_match(self, client, company_service):
        company_service.search.side_effect = NotFoundForFilterError(
            "No companies found matching the search criteria"
        )

        response = client.get("/api/companies/search?name=zzz")

        assert response.status_code == 404

    def test_get(self, client, company_service):
        company_service.get.return_value = {**COMPANY, "jobs": []}

        response = client.get("/api/companies/acme")

        assert response.status_code == 200
        assert response.get_json()["company"]["jobs"] == []

    def test_get_not_found(self, client, company_service):
        company_service.get.side_effect = NotFoundForIdentifierError("No company: nope")

        response = client.get("/api/companies/nope")

        assert response.status_code == 404
        assert response.get_json() == {"error": "No company: nope"}

    def test_create_requires_token(self, client, company_service):
        response = client.post("/api/companies", json={"handle": "acme", "name": "Acme"})

        assert response.status_code == 401
        company_service.create.assert_not_called()

    def test_create_requires_admin(self, client, company_service, user_headers):
        response = client.post(
            "/api/companies", json={"handle": "acme", "name": "Acme"}, headers=user_headers
        )

        assert response.status_code == 403
        company_service.create.assert_not_called()

    def test_create(self, client, company_service, admin_headers):
        company_service.create.return_value = COMPANY

        response = client.post(
            "/api/companies",
            json={"handle": "acme", "name": "Acme Corp", "numEmployees": 50},
            headers=admin_headers,
        )

        assert response.status_code == 201
        company_service.create.assert_called_once_with(
            handle="acme", name="Acme Corp", description=None, num_employees=50, logo_url=None
        )

    def test_create_rejects_unknown_field(self, client, company_service, admin_headers):
        response = client.post(
            "/api/companies",
            json={"handle": "acme", "name": "Acme", "ceo": "Wile"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.get_json()["details"]

    def test_update_sends_only_given_fields(self, client, company_service, admin_headers):
        company_service.update.return_value = COMPANY

        response = client.patch(
            "/api/companies/acme", json={"logoUrl": None, "name": "Acme"}, headers=admin_headers
        )

        assert response.status_code == 200
        company_service.update.assert_called_once_with("acme", {"logoUrl": None, "name": "Acme"})

    def test_update_cannot_change_handle(self, client, company_service, admin_headers):
        response = client.patch(
            "/api/companies/acme", json={"handle": "other"}, headers=admin_headers
        )

        assert response.status_code == 400
        company_service.update.assert_not_called()

    def test_update_empty(self, client, company_service, admin_headers):
        company_service.update.side_effect = EmptyUpdateError()

        response = client.patch("/api/companies/acme", json={}, headers=admin_headers)

        assert response.status_code == 400
        assert response.get_json() == {"error": "No data"}

    def test_delete(self, client, company_service, admin_headers):
        response = client.delete("/api/companies/acme", headers=admin_headers)

        assert response.status_code == 200
        assert response.get_json() == {"deleted": "acme"}

    def test_storage_error_is_sanitized(self, client, company_service):
        company_service.find_all.side_effect = RuntimeError("connection to database lost")

        response = client.get("/api/companies")

        assert response.status_code == 500
        assert response.get_json() == {"error": "Database operation failed. Please try again."}


class TestJobRoutes:
    """Test cases for /api/jobs."""

    def test_list(self, client, job_service):
        job_service.find_all.return_value = [JOB]

        response = client.get("/api/jobs")

        assert response.get_json() == {"jobs": [JOB]}

    def test_search(self, client, job_service):
        job_service.search.return_value = [JOB]

        response = client.get("/api/jobs/search?title=eng&hasEquity=true")

        assert response.status_code == 200
        job_service.search.assert_called_once_with({"title": "eng", "hasEquity": "true"})

    def test_get(self, client, job_service):
        job_service.get.return_value = JOB

        response = client.get("/api/jobs/7")

        assert response.get_json() == {"job": JOB}
        job_service.get.assert_called_once_with(7)

    def test_get_non_integer_id(self, client, job_service):
        response = client.get("/api/jobs/abc")

        assert response.status_code == 404
        job_service.get.assert_not_called()

    def test_create(self, client, job_service, admin_headers):
        job_service.create.return_value = JOB

        response = client.post(
            "/api/jobs",
            json={"title": "Engineer", "salary": 120000, "equity": 0.015, "companyHandle": "acme"},
            headers=admin_headers,
        )

        assert response.status_code == 201
        job_service.create.assert_called_once_with(
            title="Engineer", company_handle="acme", salary=120000, equity=0.015
        )

    def test_create_rejects_equity_above_one(self, client, job_service, admin_headers):
        response = client.post(
            "/api/jobs",
            json={"title": "Engineer", "equity": 1.5, "companyHandle": "acme"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        job_service.create.assert_not_called()

    def test_update(self, client, job_service, admin_headers):
        job_service.update.return_value = JOB

        response = client.patch("/api/jobs/7", json={"salary": 1}, headers=admin_headers)

        assert response.status_code == 200
        job_service.update.assert_called_once_with(7, {"salary": 1})

    def test_update_requires_admin(self, client, job_service, user_headers):
        response = client.patch("/api/jobs/7", json={"salary": 1}, headers=user_headers)

        assert response.status_code == 403

    def test_delete_not_found(self, client, job_service, admin_headers):
        job_service.remove.side_effect = NotFoundForIdentifierError("No job: 7")

        response = client.delete("/api/jobs/7", headers=admin_headers)

        assert response.status_code == 404


class TestUserRoutes:
    """Test cases for /api/users."""

    def test_list_requires_login(self, client, user_service):
        assert client.get("/api/users").status_code == 401

    def test_list(self, client, user_service, user_headers):
        user_service.find_all.return_value = [USER]

        response = client.get("/api/users", headers=user_headers)

        assert response.get_json() == {"users": [USER]}

    def test_get(self, client, user_service, user_headers):
        user_service.get.return_value = {**USER, "jobs": [7]}

        response = client.get("/api/users/aliya", headers=user_headers)

        assert response.get_json()["user"]["jobs"] == [7]

    def test_admin_creates_admin(self, client, user_service, admin_headers):
        user_service.register.return_value = {**USER, "username": "boss", "isAdmin": True}

        response = client.post(
            "/api/users",
            json={
                "username": "boss",
                "password": "secret123",
                "firstName": "Big",
                "lastName": "Boss",
                "email": "boss@example.com",
                "isAdmin": True,
            },
            headers=admin_headers,
        )

        assert response.status_code == 201
        assert response.get_json()["token"]
        assert user_service.register.call_args.kwargs["is_admin"] is True

    def test_create_rejects_bad_email(self, client, user_service, admin_headers):
        response = client.post(
            "/api/users",
            json={
                "username": "boss",
                "password": "secret123",
                "firstName": "Big",
                "lastName": "Boss",
                "email": "not-an-email",
            },
            headers=admin_headers,
        )

        assert response.status_code == 400
        user_service.register.assert_not_called()

    def test_update_self(self, client, user_service, user_headers):
        user_service.update.return_value = {**USER, "firstName": "Ali"}

        response = client.patch("/api/users/aliya", json={"firstName": "Ali"}, headers=user_headers)

        assert response.status_code == 200
        user_service.update.assert_called_once_with("aliya", {"firstName": "Ali"})

    def test_update_other_user_forbidden(self, client, user_service, other_user_headers):
        response = client.patch(
            "/api/users/aliya", json={"firstName": "Ali"}, headers=other_user_headers
        )

        assert response.status_code == 403
        user_service.update.assert_not_called()

    def test_non_admin_cannot_grant_admin(self, client, user_service, user_headers):
        response = client.patch("/api/users/aliya", json={"isAdmin": True}, headers=user_headers)

        assert response.status_code == 403
        user_service.update.assert_not_called()

    def test_admin_updates_other_user(self, client, user_service, admin_headers):
        user_service.update.return_value = {**USER, "isAdmin": True}

        response = client.patch("/api/users/aliya", json={"isAdmin": True}, headers=admin_headers)

        assert response.status_code == 200

    def test_delete_self(self, client, user_service, user_headers):
        response = client.delete("/api/users/aliya", headers=user_headers)

        assert response.get_json() == {"deleted": "aliya"}
        user_service.remove.assert_called_once_with("aliya")

    def test_apply(self, client, user_service, user_headers):
        user_service.apply_to_job.return_value = 7

        response = client.post("/api/users/aliya/jobs/7", headers=user_headers)

        assert response.status_code == 201
        assert response.get_json() == {"applied": 7}
        user_service.apply_to_job.assert_called_once_with("aliya", 7)

    def test_apply_for_other_user_forbidden(self, client, user_service, other_user_headers):
        response = client.post("/api/users/aliya/jobs/7", headers=other_user_headers)

        assert response.status_code == 403

    def test_apply_twice(self, client, user_service, user_headers):
        user_service.apply_to_job.side_effect = DuplicateRecordError(
            "User aliya already applied to job 7"
        )

        response = client.post("/api/users/aliya/jobs/7", headers=user_headers)

        assert response.status_code == 400
