"""Search filter declarations and validation.

Each searchable entity declares a :class:`FilterSpec`: the query parameters it
recognizes, in a fixed order, and how each one is validated. Validation turns a
raw query-string mapping into a normalized filter set with typed values, or
raises the first violation found.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .errors import (
    InvalidBooleanError,
    InvalidNumericValueError,
    InvalidRangeError,
    InvalidTypeError,
)

logger = logging.getLogger(__name__)

TRUE_LITERAL = "true"
FALSE_LITERAL = "false"
_DECIMAL = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$", re.ASCII)


class FilterKind(str, Enum):
    SUBSTRING = "string-substring"
    NUMERIC_MIN = "numeric-min"
    NUMERIC_MAX = "numeric-max"
    BOOLEAN_FLAG = "boolean-flag"


@dataclass(frozen=True)
class FilterField:
    """A recognized search parameter.

    Attributes:
        key: Query parameter name (e.g. "minSalary")
        kind: Validation kind
        pair: For NUMERIC_MIN fields, the key of the matching NUMERIC_MAX field
    """

    key: str
    kind: FilterKind
    pair: str | None = None


@dataclass(frozen=True)
class FilterSpec:
    """Ordered set of filters an entity accepts."""

    entity: str
    fields: tuple[FilterField, ...]

    @property
    def keys(self) -> list[str]:
        return [f.key for f in self.fields]

    def of_kind(self, *kinds: FilterKind) -> list[FilterField]:
        return [f for f in self.fields if f.kind in kinds]


COMPANY_FILTERS = FilterSpec(
    entity="company",
    fields=(
        FilterField("name", FilterKind.SUBSTRING),
        FilterField("minEmployees", FilterKind.NUMERIC_MIN, pair="maxEmployees"),
        FilterField("maxEmployees", FilterKind.NUMERIC_MAX),
    ),
)

JOB_FILTERS = FilterSpec(
    entity="job",
    fields=(
        FilterField("title", FilterKind.SUBSTRING),
        FilterField("minSalary", FilterKind.NUMERIC_MIN, pair="maxSalary"),
        FilterField("maxSalary", FilterKind.NUMERIC_MAX),
        FilterField("hasEquity", FilterKind.BOOLEAN_FLAG),
    ),
)


def validate_filters(
    raw_query: Mapping[str, Any] | None, filter_spec: FilterSpec
) -> dict[str, Any]:
    """Validate and normalize search filters for one entity.

    Checks run in a fixed order and the first violation is raised:
    range consistency, then numeric parsing, then string type, then boolean
    literals. Keys filter_spec does not declare are ignored.

    Args:
        raw_query: Query parameters as received (values are strings, or lists
            for repeated parameters)
        filter_spec: Filters recognized by the target entity

    Returns:
        Dictionary holding only the recognized keys present in raw_query, with
        numbers parsed, booleans converted and strings left as-is

    Raises:
        InvalidRangeError: If a min filter is greater than its max filter
        InvalidNumericValueError: If a numeric filter is not a finite number
        InvalidTypeError: If a string filter is not a scalar string
        InvalidBooleanError: If a boolean flag is not 'true' or 'false'
    """
    present = {
        key: raw_query[key] for key in filter_spec.keys if raw_query and key in raw_query
    }

    for field in filter_spec.of_kind(FilterKind.NUMERIC_MIN):
        if field.key in present and field.pair in present:
            low = _parse_number(present[field.key])
            high = _parse_number(present[field.pair])
            if low is not None and high is not None and low > high:
                raise InvalidRangeError(
                    f"Invalid min/max values: {field.key} ({present[field.key]}) "
                    f"is greater than {field.pair} ({present[field.pair]})"
                )

    normalized: dict[str, Any] = {}
    for field in filter_spec.of_kind(FilterKind.NUMERIC_MIN, FilterKind.NUMERIC_MAX):
        if field.key in present:
            number = _parse_number(present[field.key])
            if number is None:
                raise InvalidNumericValueError(
                    f"Invalid numeric value for {field.key}: {present[field.key]!r}"
                )
            normalized[field.key] = number

    for field in filter_spec.of_kind(FilterKind.SUBSTRING):
        if field.key in present:
            value = present[field.key]
            if not isinstance(value, str):
                raise InvalidTypeError(f"Invalid string value for {field.key}")
            normalized[field.key] = value

    for field in filter_spec.of_kind(FilterKind.BOOLEAN_FLAG):
        if field.key in present:
            flag = _parse_boolean(present[field.key])
            if flag is None:
                raise InvalidBooleanError(
                    f"Invalid boolean value for {field.key}: {present[field.key]!r} "
                    f"(expected '{TRUE_LITERAL}' or '{FALSE_LITERAL}')"
                )
            normalized[field.key] = flag

    logger.debug(f"Validated {filter_spec.entity} filters: {normalized}")
    return normalized


def _parse_number(value: Any) -> int | float | None:
    """Parse a query value into an int or float, or None if it is not a finite number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else None
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not _DECIMAL.match(text):
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _parse_boolean(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if not isinstance(value, str):
        return None
    token = value.strip().lower()
    if token == TRUE_LITERAL:
        return True
    if token == FALSE_LITERAL:
        return False
    return None
