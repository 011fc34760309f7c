"""SQL queries for user management and job applications."""

USER_COLUMN_ALIASES = {
    "firstName": "first_name",
    "lastName": "last_name",
    "isAdmin": "is_admin",
}

USER_COLUMNS = """
        username,
        first_name AS "firstName",
        last_name AS "lastName",
        email,
        is_admin AS "isAdmin"
"""

# Query to get user with password hash, for authentication only
GET_USER_FOR_LOGIN = f"""
    SELECT {USER_COLUMNS},
        password
    FROM users
    WHERE username = $1
"""

CHECK_USER_EXISTS = """
    SELECT username
    FROM users
    WHERE username = $1
"""

INSERT_USER = f"""
    INSERT INTO users (username, password, first_name, last_name, email, is_admin)
    VALUES ($1, $2, $3, $4, $5, $6)
    RETURNING {USER_COLUMNS}
"""

GET_ALL_USERS = f"""
    SELECT {USER_COLUMNS}
    FROM users
    ORDER BY username
"""

GET_USER_BY_USERNAME = f"""
    SELECT {USER_COLUMNS}
    FROM users
    WHERE username = $1
"""

GET_APPLICATIONS_FOR_USER = """
    SELECT job_id
    FROM applications
    WHERE username = $1
    ORDER BY job_id
"""

UPDATE_USER = f"""
    UPDATE users
    SET {{set_clause}}
    WHERE username = {{username_idx}}
    RETURNING {USER_COLUMNS}
"""

DELETE_USER = """
    DELETE FROM users
    WHERE username = $1
    RETURNING username
"""

CHECK_JOB_EXISTS = """
    SELECT id
    FROM jobs
    WHERE id = $1
"""

INSERT_APPLICATION = """
    INSERT INTO applications (username, job_id)
    VALUES ($1, $2)
    ON CONFLICT (username, job_id) DO NOTHING
    RETURNING job_id
"""
