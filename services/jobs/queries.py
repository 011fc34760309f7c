"""SQL queries and search rules for Job Service.

Statements use PostgreSQL positional placeholders ($1, $2...). Dynamic SET and
WHERE fragments are substituted into the templates containing {set_clause},
{where_clause} or {id_idx}.
"""

from shared.sql import ColumnRule

JOB_COLUMN_ALIASES = {
    "companyHandle": "company_handle",
}

# Declared in the same order as shared.filters.JOB_FILTERS
JOB_FILTER_COLUMNS = {
    "title": ColumnRule("title", "ILIKE"),
    "minSalary": ColumnRule("salary", ">="),
    "maxSalary": ColumnRule("salary", "<="),
    "hasEquity": ColumnRule("equity", ">", literal="0"),
}

JOB_COLUMNS = """
        id,
        title,
        salary,
        equity,
        company_handle AS "companyHandle"
"""

CHECK_COMPANY_EXISTS = """
    SELECT handle
    FROM companies
    WHERE handle = $1
"""

INSERT_JOB = f"""
    INSERT INTO jobs (title, salary, equity, company_handle)
    VALUES ($1, $2, $3, $4)
    RETURNING {JOB_COLUMNS}
"""

GET_ALL_JOBS = f"""
    SELECT {JOB_COLUMNS}
    FROM jobs
    ORDER BY title, id
"""

SEARCH_JOBS = f"""
    SELECT {JOB_COLUMNS}
    FROM jobs
    WHERE {{where_clause}}
    ORDER BY title, id
"""

GET_JOB_BY_ID = f"""
    SELECT {JOB_COLUMNS}
    FROM jobs
    WHERE id = $1
"""

UPDATE_JOB = f"""
    UPDATE jobs
    SET {{set_clause}}
    WHERE id = {{id_idx}}
    RETURNING {JOB_COLUMNS}
"""

DELETE_JOB = """
    DELETE FROM jobs
    WHERE id = $1
    RETURNING id
"""
