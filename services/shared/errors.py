"""Typed errors raised by the service layer.

Every error carries a human-readable ``message`` and the HTTP ``status_code``
the API boundary should answer with. Storage-driver exceptions are never
wrapped in these classes; they propagate unchanged.
"""


class ServiceError(Exception):
    """Base class for errors raised by services."""

    status_code = 500
    default_message = "Service error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(ServiceError):
    """Raised when client input cannot be processed."""

    status_code = 400
    default_message = "Bad request"


class EmptyUpdateError(BadRequestError):
    """Raised when a partial update carries no fields."""

    default_message = "No data"


class FilterValidationError(BadRequestError):
    """Raised when search filters are malformed."""

    default_message = "Invalid search filters"


class InvalidRangeError(FilterValidationError):
    """Raised when a min filter is greater than its max counterpart."""

    default_message = "Invalid min/max values"


class InvalidNumericValueError(FilterValidationError):
    """Raised when a numeric filter does not parse to a finite number."""

    default_message = "Invalid numeric value"


class InvalidTypeError(FilterValidationError):
    """Raised when a string filter is not a scalar string."""

    default_message = "Invalid string value"


class InvalidBooleanError(FilterValidationError):
    """Raised when a boolean flag is not 'true' or 'false'."""

    default_message = "Invalid boolean value"


class DuplicateRecordError(BadRequestError):
    """Raised when creating a record whose key already exists."""

    default_message = "Duplicate record"


class NotFoundError(ServiceError):
    """Base class for missing records."""

    status_code = 404
    default_message = "Not found"


class NotFoundForIdentifierError(NotFoundError):
    """Raised when no row matches a primary key or handle."""


class NotFoundForFilterError(NotFoundError):
    """Raised when valid search filters match no rows."""

    default_message = "No records found matching the search criteria"
