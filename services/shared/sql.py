"""SQL fragment builders for partial updates and filtered searches.

Both builders emit PostgreSQL-style positional placeholders (``$1``, ``$2``...)
and return the bound values separately, so no value is ever interpolated into
the clause text. Repositories embed the fragments into full statements and
hand them to :func:`shared.database.to_pyformat` before execution.

Example:
    >>> build_set_clause({"firstName": "Aliya", "age": 32}, {"firstName": "first_name"})
    SetClause(set_clause='"first_name"=$1, "age"=$2', values=['Aliya', 32])
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, NamedTuple

from .errors import EmptyUpdateError

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_SUBSTRING_OPERATORS = {"LIKE", "ILIKE"}


class SetClause(NamedTuple):
    set_clause: str
    values: list[Any]


class WhereClause(NamedTuple):
    where_clause: str
    values: list[Any]


class ColumnRule(NamedTuple):
    """How one search filter turns into a predicate.

    Attributes:
        column: Storage column the predicate applies to
        operator: Comparison operator (e.g. ``ILIKE``, ``>=``)
        literal: Fixed comparand emitted as SQL text instead of a bound
            parameter. Only used for boolean flags, where the predicate
            applies when the flag is true.
    """

    column: str
    operator: str
    literal: str | None = None

    @property
    def is_substring(self) -> bool:
        return self.operator.upper() in _SUBSTRING_OPERATORS


def map_column(domain_field: str, alias_table: Mapping[str, str] | None) -> str:
    """Return the storage column for a domain field name."""
    if not alias_table:
        return domain_field
    return alias_table.get(domain_field, domain_field)


def build_set_clause(
    field_map: Mapping[str, Any], alias_table: Mapping[str, str] | None = None
) -> SetClause:
    """Build the SET clause of a partial UPDATE.

    Args:
        field_map: Domain field name -> new value. Only the fields to change.
        alias_table: Domain field name -> storage column, for fields whose
            column name differs.

    Returns:
        SetClause with the comma-joined ``"column"=$n`` fragments and the
        values in placeholder order. The caller binds any trailing parameter
        (e.g. the row identifier) at ``len(values) + 1``.

    Raises:
        EmptyUpdateError: If field_map has no keys
        ValueError: If a mapped column is not a plain SQL identifier
    """
    if not field_map:
        raise EmptyUpdateError()

    fragments = []
    values = []
    for position, (field, value) in enumerate(field_map.items(), start=1):
        column = _checked_identifier(map_column(field, alias_table))
        fragments.append(f'"{column}"=${position}')
        values.append(value)

    return SetClause(set_clause=", ".join(fragments), values=values)


def build_where_clause(
    filters: Mapping[str, Any], column_rules: Mapping[str, ColumnRule], start: int = 1
) -> WhereClause:
    """Build the predicate list of a filtered SELECT.

    Rules are applied in the order column_rules declares them, whatever order
    the filters arrived in, so identical filter sets always give identical SQL.
    The filters are expected to be validated already; nothing is re-checked here.
    Substring values have LIKE wildcards (%, _) escaped so they match literally.

    Args:
        filters: Normalized filter set (see :func:`shared.filters.validate_filters`)
        column_rules: Filter key -> ColumnRule, in declared order
        start: Index of the first placeholder, for statements that already
            bind parameters before the WHERE clause

    Returns:
        WhereClause with the AND-joined predicates (empty string when no
        filter applies) and the bound values in placeholder order.
    """
    predicates = []
    values: list[Any] = []
    for key, rule in column_rules.items():
        if key not in filters:
            continue
        value = filters[key]
        column = _checked_identifier(rule.column)

        if rule.literal is not None:
            if value:
                predicates.append(f"{column} {rule.operator} {rule.literal}")
            continue

        placeholder = f"${start + len(values)}"
        predicates.append(f"{column} {rule.operator} {placeholder}")
        values.append(f"%{_escape_like(value)}%" if rule.is_substring else value)

    return WhereClause(where_clause=" AND ".join(predicates), values=values)


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _checked_identifier(column: str) -> str:
    if not _IDENTIFIER.match(column):
        raise ValueError(f"Invalid column identifier: {column!r}")
    return column
