"""Authentication service for login and registration."""

import logging
from typing import Any

from .user_service import UserService

logger = logging.getLogger(__name__)


class AuthService:
    """Service for authentication operations."""

    def __init__(self, user_service: UserService):
        """Initialize the auth service.

        Args:
            user_service: UserService instance for user operations
        """
        if not user_service:
            raise ValueError("UserService is required")
        self.user_service = user_service

    def authenticate_user(self, username: str, password: str) -> dict[str, Any] | None:
        """Authenticate a user by username and password.

        Args:
            username: Username
            password: Plain text password

        Returns:
            User dictionary (without the password hash) if authentication
            succeeds, None otherwise
        """
        if not username or not password:
            return None

        user = self.user_service.get_user_for_login(username.strip())
        if not user:
            logger.warning(f"Authentication failed: user not found: {username}")
            return None

        if not self.user_service.verify_password(password, user["password"]):
            logger.warning(f"Authentication failed: invalid password for user: {username}")
            return None

        user_clean = {k: v for k, v in user.items() if k != "password"}
        logger.info(f"User authenticated: {user['username']}")
        return user_clean

    def register_user(
        self, username: str, password: str, first_name: str, last_name: str, email: str
    ) -> dict[str, Any]:
        """Register a new, non-admin user.

        Returns:
            Created user dictionary

        Raises:
            DuplicateRecordError: If the username already exists
        """
        return self.user_service.register(
            username=username,
            password=password,
            first_name=first_name,
            last_name=last_name,
            email=email,
            is_admin=False,
        )

    def is_admin(self, user: dict[str, Any]) -> bool:
        """Check if user is an admin."""
        return bool(user.get("isAdmin"))
