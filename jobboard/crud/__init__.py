"""
CRUD operations (Create, Read, Update, Delete) for database tables.

This layer provides a clean separation between API routes and database operations,
following the Repository pattern.
"""

from jobboard.crud.company import CompanyRepository
from jobboard.crud.job import JobRepository

__all__ = ["CompanyRepository", "JobRepository"]
