"""User management service for accounts and job applications."""

import logging
from collections.abc import Mapping
from typing import Any

import bcrypt
from shared.database import Database, to_pyformat
from shared.errors import DuplicateRecordError, NotFoundForIdentifierError
from shared.sql import build_set_clause
from shared.structured_logging import get_structured_logger

from .queries import (
    CHECK_JOB_EXISTS,
    CHECK_USER_EXISTS,
    DELETE_USER,
    GET_ALL_USERS,
    GET_APPLICATIONS_FOR_USER,
    GET_USER_BY_USERNAME,
    GET_USER_FOR_LOGIN,
    INSERT_APPLICATION,
    INSERT_USER,
    UPDATE_USER,
    USER_COLUMN_ALIASES,
)

logger = logging.getLogger(__name__)

DEFAULT_BCRYPT_ROUNDS = 12


class UserService:
    """Service for user management and authentication."""

    def __init__(self, database: Database, bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS):
        """Initialize the user service.

        Args:
            database: Database connection interface
            bcrypt_rounds: bcrypt work factor used when hashing passwords
        """
        if not database:
            raise ValueError("Database is required")
        self.db = database
        self.bcrypt_rounds = bcrypt_rounds

    def register(
        self,
        username: str,
        password: str,
        first_name: str,
        last_name: str,
        email: str,
        is_admin: bool = False,
    ) -> dict[str, Any]:
        """Create a new user account.

        Args:
            username: Unique username
            password: Plain text password (will be hashed)
            first_name: First name
            last_name: Last name
            email: Email address
            is_admin: Whether the user is an administrator

        Returns:
            Created user dictionary: {username, firstName, lastName, email, isAdmin}

        Raises:
            DuplicateRecordError: If the username already exists
        """
        with self.db.get_cursor() as cur:
            cur.execute(*to_pyformat(CHECK_USER_EXISTS, [username]))
            if cur.fetchone():
                raise DuplicateRecordError(f"Duplicate username: {username}")

            cur.execute(
                *to_pyformat(
                    INSERT_USER,
                    [
                        username,
                        self._hash_password(password),
                        first_name,
                        last_name,
                        email.strip().lower(),
                        is_admin,
                    ],
                )
            )
            columns = [desc[0] for desc in cur.description]
            user = dict(zip(columns, cur.fetchone()))

        logger.info(f"Created user: {username} (admin: {is_admin})")
        return user

    def get_user_for_login(self, username: str) -> dict[str, Any] | None:
        """Get user by username, including the password hash.

        Args:
            username: Username to lookup

        Returns:
            User dictionary with a "password" key, or None if not found
        """
        with self.db.get_cursor() as cur:
            cur.execute(*to_pyformat(GET_USER_FOR_LOGIN, [username]))
            columns = [desc[0] for desc in cur.description]
            row = cur.fetchone()

        if not row:
            return None
        return dict(zip(columns, row))

    def find_all(self) -> list[dict[str, Any]]:
        """Get all users ordered by username."""
        with self.db.get_cursor() as cur:
            cur.execute(GET_ALL_USERS)
            columns = [desc[0] for desc in cur.description]
            return [dict(zip(columns, row)) for row in cur.fetchall()]

    def get(self, username: str) -> dict[str, Any]:
        """Get a user and the IDs of the jobs they applied to.

        Args:
            username: Username to lookup

        Returns:
            User dictionary with a "jobs" list of job IDs

        Raises:
            NotFoundForIdentifierError: If the user does not exist
        """
        with self.db.get_cursor() as cur:
            cur.execute(*to_pyformat(GET_USER_BY_USERNAME, [username]))
            columns = [desc[0] for desc in cur.description]
            row = cur.fetchone()
            if not row:
                raise NotFoundForIdentifierError(f"No user: {username}")
            user = dict(zip(columns, row))

            cur.execute(*to_pyformat(GET_APPLICATIONS_FOR_USER, [username]))
            job_ids = [job_row[0] for job_row in cur.fetchall()]

        return {**user, "jobs": job_ids}

    def update(self, username: str, data: Mapping[str, Any]) -> dict[str, Any]:
        """Partially update a user.

        Fields can include: firstName, lastName, password, email, isAdmin.
        A new password is hashed before it is stored.

        Args:
            username: Username to update
            data: Field name -> new value

        Returns:
            Updated user dictionary

        Raises:
            EmptyUpdateError: If data is empty
            NotFoundForIdentifierError: If the user does not exist
        """
        fields = dict(data)
        if fields.get("password"):
            fields["password"] = self._hash_password(fields["password"])
        if fields.get("email"):
            fields["email"] = fields["email"].strip().lower()

        update = build_set_clause(fields, USER_COLUMN_ALIASES)
        query = UPDATE_USER.format(
            set_clause=update.set_clause, username_idx=f"${len(update.values) + 1}"
        )

        with self.db.get_cursor() as cur:
            cur.execute(*to_pyformat(query, [*update.values, username]))
            columns = [desc[0] for desc in cur.description]
            row = cur.fetchone()

        if not row:
            raise NotFoundForIdentifierError(f"No user: {username}")

        get_structured_logger(__name__, entity="user", username=username).info(
            f"Updated fields: {', '.join(fields)}"
        )
        return dict(zip(columns, row))

    def remove(self, username: str) -> None:
        """Delete a user.

        Raises:
            NotFoundForIdentifierError: If the user does not exist
        """
        with self.db.get_cursor() as cur:
            cur.execute(*to_pyformat(DELETE_USER, [username]))
            if not cur.fetchone():
                raise NotFoundForIdentifierError(f"No user: {username}")

        logger.info(f"Deleted user {username}")

    def apply_to_job(self, username: str, job_id: int) -> int:
        """Record that a user applied to a job.

        Args:
            username: Applying user
            job_id: Job applied to

        Returns:
            The job ID

        Raises:
            NotFoundForIdentifierError: If the user or the job does not exist
            DuplicateRecordError: If the user already applied to this job
        """
        with self.db.get_cursor() as cur:
            cur.execute(*to_pyformat(CHECK_JOB_EXISTS, [job_id]))
            if not cur.fetchone():
                raise NotFoundForIdentifierError(f"No job: {job_id}")

            cur.execute(*to_pyformat(CHECK_USER_EXISTS, [username]))
            if not cur.fetchone():
                raise NotFoundForIdentifierError(f"No user: {username}")

            cur.execute(*to_pyformat(INSERT_APPLICATION, [username, job_id]))
            if not cur.fetchone():
                raise DuplicateRecordError(f"User {username} already applied to job {job_id}")

        logger.info(f"User {username} applied to job {job_id}")
        return job_id

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a password against a hash.

        Args:
            password: Plain text password
            password_hash: Bcrypt password hash

        Returns:
            True if password matches, False otherwise
        """
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError as e:
            logger.error(f"Error verifying password: {e}", exc_info=True)
            return False

    def _hash_password(self, password: str) -> str:
        """Hash a password using bcrypt.

        Args:
            password: Plain text password

        Returns:
            Bcrypt password hash
        """
        salt = bcrypt.gensalt(rounds=self.bcrypt_rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")
