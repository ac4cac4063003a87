"""
CRUD operations for jobs.

Implements the Repository pattern over raw parameterized SQL. Every method
issues exactly one statement; rows are returned in the API's field naming
(companyHandle) with equity as a string.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.orm import Session

from jobboard.core.database import run_query
from jobboard.core.errors import NotFoundError
from jobboard.crud.sql import sql_for_job_filters, sql_for_partial_update

logger = logging.getLogger(__name__)

JOB_COLUMNS = 'id, title, salary, equity, company_handle AS "companyHandle"'

JS_TO_SQL = {
    "title": "title",
    "salary": "salary",
    "equity": "equity",
    "companyHandle": "company_handle",
}


def to_job(row: Mapping[str, Any]) -> Dict[str, Any]:
    """Convert a result row to a job dict, rendering equity as a string."""
    job = dict(row)
    if job.get("equity") is not None:
        job["equity"] = str(job["equity"])
    return job


class JobRepository:
    """
    Repository for the jobs table.

    Attributes:
        db: Database session every statement runs on
    """

    def __init__(self, db: Session):
        self.db = db

    def create(
        self,
        title: str,
        company_handle: str,
        salary: Optional[int] = None,
        equity: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Create a job and return it with its new id.

        Duplicate titles are allowed.
        """
        result = run_query(
            self.db,
            f"""
            INSERT INTO jobs (title, salary, equity, company_handle)
            VALUES ($1, $2, $3, $4)
            RETURNING {JOB_COLUMNS}""",
            [title, salary, equity, company_handle],
        )
        job = to_job(result.mappings().one())
        self.db.commit()

        return job

    def find_all(self, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        """
        Find all jobs, optionally filtered by title, minSalary and hasEquity.

        Returns:
            Jobs ordered by title
        """
        query = sql_for_job_filters(filters)
        result = run_query(
            self.db,
            f"""
            SELECT {JOB_COLUMNS}
            FROM jobs
            {query.where}
            {query.order_by}""",
            query.values,
        )
        return [to_job(row) for row in result.mappings().all()]

    def get(self, job_id: int) -> Dict[str, Any]:
        """
        Get a job by id.

        Raises:
            NotFoundError: If no job has this id
        """
        result = run_query(
            self.db,
            f"""
            SELECT {JOB_COLUMNS}
            FROM jobs
            WHERE id = $1""",
            [job_id],
        )
        row = result.mappings().first()
        if row is None:
            raise NotFoundError(f"No job: {job_id}")

        return to_job(row)

    def update(self, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Partially update a job; only the fields in data change.

        Data can include: {title, salary, equity, companyHandle}

        Raises:
            ValidationError: If data is empty (raised before touching the store)
            NotFoundError: If no job has this id
        """
        set_cols, values = sql_for_partial_update(data, JS_TO_SQL)
        job_id_idx = len(values) + 1

        result = run_query(
            self.db,
            f"""
            UPDATE jobs
            SET {set_cols}
            WHERE id = ${job_id_idx}
            RETURNING {JOB_COLUMNS}""",
            [*values, job_id],
        )
        row = result.mappings().first()
        if row is None:
            self.db.rollback()
            raise NotFoundError(f"No job: {job_id}")

        job = to_job(row)
        self.db.commit()

        return job

    def remove(self, job_id: int) -> None:
        """
        Delete a job.

        Raises:
            NotFoundError: If no job has this id
        """
        result = run_query(
            self.db,
            """
            DELETE
            FROM jobs
            WHERE id = $1
            RETURNING id""",
            [job_id],
        )
        row = result.first()
        if row is None:
            self.db.rollback()
            raise NotFoundError(f"No job: {job_id}")

        self.db.commit()
        logger.debug(f"Removed job {job_id}")
