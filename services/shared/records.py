"""Pure post-processing of rows returned by the database."""

from __future__ import annotations

from typing import Any


def job_record(row: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of a job row with equity as a float (or None).

    PostgreSQL NUMERIC columns arrive as Decimal; every code path returning
    jobs goes through here so equity has one representation.
    """
    equity = row.get("equity")
    return {**row, "equity": float(equity) if equity is not None else None}
