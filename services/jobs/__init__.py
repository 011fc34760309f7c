"""Job posting services."""

from .job_service import JobService

__all__ = ["JobService"]
