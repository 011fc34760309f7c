"""SQL queries and search rules for Company Service.

Statements use PostgreSQL positional placeholders ($1, $2...). Dynamic SET and
WHERE fragments are substituted into the templates containing {set_clause},
{where_clause} or {handle_idx}.
"""

from shared.sql import ColumnRule

COMPANY_COLUMN_ALIASES = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

# Declared in the same order as shared.filters.COMPANY_FILTERS
COMPANY_FILTER_COLUMNS = {
    "name": ColumnRule("name", "ILIKE"),
    "minEmployees": ColumnRule("num_employees", ">="),
    "maxEmployees": ColumnRule("num_employees", "<="),
}

COMPANY_COLUMNS = """
        handle,
        name,
        description,
        num_employees AS "numEmployees",
        logo_url AS "logoUrl"
"""

CHECK_COMPANY_EXISTS = """
    SELECT handle
    FROM companies
    WHERE handle = $1
"""

INSERT_COMPANY = f"""
    INSERT INTO companies (handle, name, description, num_employees, logo_url)
    VALUES ($1, $2, $3, $4, $5)
    RETURNING {COMPANY_COLUMNS}
"""

GET_ALL_COMPANIES = f"""
    SELECT {COMPANY_COLUMNS}
    FROM companies
    ORDER BY name
"""

SEARCH_COMPANIES = f"""
    SELECT {COMPANY_COLUMNS}
    FROM companies
    WHERE {{where_clause}}
    ORDER BY name
"""

GET_COMPANY_BY_HANDLE = f"""
    SELECT {COMPANY_COLUMNS}
    FROM companies
    WHERE handle = $1
"""

GET_JOBS_FOR_COMPANY = """
    SELECT
        id,
        title,
        salary,
        equity
    FROM jobs
    WHERE company_handle = $1
    ORDER BY id
"""

UPDATE_COMPANY = f"""
    UPDATE companies
    SET {{set_clause}}
    WHERE handle = {{handle_idx}}
    RETURNING {COMPANY_COLUMNS}
"""

DELETE_COMPANY = """
    DELETE FROM companies
    WHERE handle = $1
    RETURNING handle
"""
