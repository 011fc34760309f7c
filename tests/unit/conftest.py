"""
Pytest configuration and fixtures for unit tests.

Unit tests are fast, isolated tests that don't require external dependencies.
"""

from unittest.mock import Mock

import pytest


@pytest.fixture
def mock_cursor():
    """Mock cursor shared by every get_cursor() context."""
    return Mock()


@pytest.fixture
def mock_database(mock_cursor):
    """Create a mock database whose get_cursor() yields mock_cursor."""
    db = Mock()
    db.get_cursor.return_value.__enter__ = Mock(return_value=mock_cursor)
    db.get_cursor.return_value.__exit__ = Mock(return_value=False)
    return db
