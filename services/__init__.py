"""
Job Board Services

This package contains the core Python services:
- shared: Database access, service errors, search filters and SQL clause builders
- companies: Company CRUD and filtered search
- jobs: Job CRUD and filtered search
- auth: User accounts, authentication and job applications
"""
