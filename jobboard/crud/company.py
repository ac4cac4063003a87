"""
CRUD operations for companies.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.orm import Session

from jobboard.core.database import run_query
from jobboard.core.errors import NotFoundError, ValidationError
from jobboard.crud.job import to_job
from jobboard.crud.sql import sql_for_company_filters, sql_for_partial_update

logger = logging.getLogger(__name__)

COMPANY_COLUMNS = 'handle, name, description, num_employees AS "numEmployees", logo_url AS "logoUrl"'

JS_TO_SQL = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}


class CompanyRepository:
    """Repository for the companies table."""

    def __init__(self, db: Session):
        self.db = db

    def create(
        self,
        handle: str,
        name: str,
        description: str,
        num_employees: Optional[int] = None,
        logo_url: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Create a company and return it.

        Raises:
            ValidationError: If a company with this handle already exists
        """
        duplicate = run_query(
            self.db,
            "SELECT handle FROM companies WHERE handle = $1",
            [handle],
        ).first()
        if duplicate is not None:
            raise ValidationError(f"Duplicate company: {handle}")

        result = run_query(
            self.db,
            f"""
            INSERT INTO companies (handle, name, description, num_employees, logo_url)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING {COMPANY_COLUMNS}""",
            [handle, name, description, num_employees, logo_url],
        )
        company = dict(result.mappings().one())
        self.db.commit()

        return company

    def find_all(self, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        """Find all companies, optionally filtered by nameLike, minEmployees and maxEmployees."""
        query = sql_for_company_filters(filters)
        result = run_query(
            self.db,
            f"""
            SELECT {COMPANY_COLUMNS}
            FROM companies
            {query.where}
            {query.order_by}""",
            query.values,
        )
        return [dict(row) for row in result.mappings().all()]

    def get(self, handle: str) -> Dict[str, Any]:
        """
        Get a company by handle, with its jobs.

        Raises:
            NotFoundError: If no company has this handle
        """
        row = run_query(
            self.db,
            f"""
            SELECT {COMPANY_COLUMNS}
            FROM companies
            WHERE handle = $1""",
            [handle],
        ).mappings().first()
        if row is None:
            raise NotFoundError(f"No company: {handle}")

        company = dict(row)
        jobs = run_query(
            self.db,
            """
            SELECT id, title, salary, equity
            FROM jobs
            WHERE company_handle = $1
            ORDER BY id""",
            [handle],
        ).mappings().all()
        company["jobs"] = [to_job(job) for job in jobs]

        return company

    def update(self, handle: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Partially update a company.

        Data can include: {name, description, numEmployees, logoUrl}

        Raises:
            ValidationError: If data is empty
            NotFoundError: If no company has this handle
        """
        set_cols, values = sql_for_partial_update(data, JS_TO_SQL)
        handle_idx = len(values) + 1

        row = run_query(
            self.db,
            f"""
            UPDATE companies
            SET {set_cols}
            WHERE handle = ${handle_idx}
            RETURNING {COMPANY_COLUMNS}""",
            [*values, handle],
        ).mappings().first()
        if row is None:
            self.db.rollback()
            raise NotFoundError(f"No company: {handle}")

        company = dict(row)
        self.db.commit()

        return company

    def remove(self, handle: str) -> None:
        """
        Delete a company; its jobs are deleted with it.

        Raises:
            NotFoundError: If no company has this handle
        """
        row = run_query(
            self.db,
            """
            DELETE
            FROM companies
            WHERE handle = $1
            RETURNING handle""",
            [handle],
        ).first()
        if row is None:
            self.db.rollback()
            raise NotFoundError(f"No company: {handle}")

        self.db.commit()
        logger.debug(f"Removed company {handle}")
