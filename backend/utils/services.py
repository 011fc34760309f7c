import os

from flask import current_app

from auth import AuthService, UserService
from companies import CompanyService
from jobs import JobService
from shared import DatabaseConfig, PostgreSQLDatabase

DATABASE_EXTENSION = "database"


def build_db_connection_string() -> str:
    """
    Build PostgreSQL connection string from environment variables.

    Checks DATABASE_URL first, then falls back to individual POSTGRES_* variables.

    Returns:
        PostgreSQL connection string
    """
    # Check for DATABASE_URL first (useful for tests and deployments)
    database_url = os.getenv("DATABASE_URL")
    if database_url:
        return database_url

    # Fall back to individual environment variables
    host = os.getenv("POSTGRES_HOST", "localhost")
    port = os.getenv("POSTGRES_PORT", "5432")
    user = os.getenv("POSTGRES_USER", "postgres")
    password = os.getenv("POSTGRES_PASSWORD", "postgres")
    db = os.getenv("POSTGRES_DB", "job_board")
    ssl_mode = os.getenv("POSTGRES_SSL_MODE", "")

    conn_str = f"postgresql://{user}:{password}@{host}:{port}/{db}"
    if ssl_mode:
        conn_str += f"?sslmode={ssl_mode}"
    return conn_str


def build_database_config() -> DatabaseConfig:
    """
    Build the database configuration from environment variables.

    Recognized variables (besides the connection string ones):
        DB_POOL_MIN, DB_POOL_MAX: connection pool bounds
        DB_CONNECT_TIMEOUT: seconds to wait when opening a connection
        DB_ACQUIRE_TIMEOUT: seconds to wait for a free pooled connection
        DB_STATEMENT_TIMEOUT_MS: server-side statement timeout

    Returns:
        DatabaseConfig instance
    """
    return DatabaseConfig(
        connection_string=build_db_connection_string(),
        min_connections=int(os.getenv("DB_POOL_MIN", "1")),
        max_connections=int(os.getenv("DB_POOL_MAX", "5")),
        connect_timeout=int(os.getenv("DB_CONNECT_TIMEOUT", "10")),
        acquire_timeout=float(os.getenv("DB_ACQUIRE_TIMEOUT", "10")),
        statement_timeout_ms=int(os.getenv("DB_STATEMENT_TIMEOUT_MS", "30000")),
    )


def get_database() -> PostgreSQLDatabase:
    """
    Get the database registered on the current Flask app.

    Returns:
        PostgreSQLDatabase instance shared by all requests of the app
    """
    return current_app.extensions[DATABASE_EXTENSION]


def get_company_service() -> CompanyService:
    """
    Get CompanyService instance with database connection.

    Returns:
        CompanyService instance
    """
    return CompanyService(database=get_database())


def get_job_service() -> JobService:
    """
    Get JobService instance with database connection.

    Returns:
        JobService instance
    """
    return JobService(database=get_database())


def get_user_service() -> UserService:
    """
    Get UserService instance with database connection.

    Returns:
        UserService instance
    """
    return UserService(
        database=get_database(), bcrypt_rounds=current_app.config["BCRYPT_ROUNDS"]
    )


def get_auth_service() -> AuthService:
    """
    Get AuthService instance with database connection.

    Returns:
        AuthService instance
    """
    return AuthService(user_service=get_user_service())
