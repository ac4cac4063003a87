import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request

from jobboard.core.deps import get_admin_user, get_job_repository
from jobboard.core.errors import ValidationError
from jobboard.core.security import TokenUser
from jobboard.crud.job import JobRepository
from jobboard.schemas.job import (
    JobCreateRequest,
    JobDeleteResponse,
    JobEnvelope,
    JobListResponse,
    JobUpdateRequest,
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)

ALLOWED_FILTERS = ("title", "minSalary", "hasEquity")


@router.post("", status_code=201, response_model=JobEnvelope)
def create_job(
    request: JobCreateRequest,
    jobs: JobRepository = Depends(get_job_repository),
    admin_user: TokenUser = Depends(get_admin_user),
):
    """
    Create a new job.

    Authorization required: admin
    """
    job = jobs.create(**request.model_dump(mode="json"))
    logger.info(f"{admin_user.username} created job {job['id']}: {job['title']}")
    return {"job": job}


@router.get("", response_model=JobListResponse)
def list_jobs(
    request: Request,
    title: Optional[str] = None,
    min_salary: Optional[int] = Query(None, alias="minSalary", ge=0),
    has_equity: Optional[bool] = Query(None, alias="hasEquity"),
    jobs: JobRepository = Depends(get_job_repository),
):
    """
    List jobs ordered by title, optionally filtered.

    Filters:
    - title: case-insensitive, partial match
    - minSalary: salary at least this much
    - hasEquity: if true, only jobs with non-zero equity

    Authorization required: none
    """
    unknown = [key for key in request.query_params.keys() if key not in ALLOWED_FILTERS]
    if unknown:
        raise ValidationError(f"Allowed search fields: {', '.join(ALLOWED_FILTERS)}")

    filters = {"title": title, "minSalary": min_salary, "hasEquity": has_equity}
    return {"jobs": jobs.find_all(filters)}


@router.get("/{job_id}", response_model=JobEnvelope)
def get_job(job_id: int, jobs: JobRepository = Depends(get_job_repository)):
    """
    Retrieve a job by ID.

    Authorization required: none
    """
    return {"job": jobs.get(job_id)}


@router.patch("/{job_id}", response_model=JobEnvelope)
def update_job(
    job_id: int,
    request: JobUpdateRequest,
    jobs: JobRepository = Depends(get_job_repository),
    admin_user: TokenUser = Depends(get_admin_user),
):
    """
    Partially update a job. Fields can be: {title, salary, equity, companyHandle}

    Authorization required: admin
    """
    data = request.model_dump(mode="json", by_alias=True, exclude_unset=True)
    job = jobs.update(job_id, data)
    logger.info(f"{admin_user.username} updated job {job_id}: {sorted(data)}")
    return {"job": job}


@router.delete("/{job_id}", response_model=JobDeleteResponse)
def delete_job(
    job_id: int,
    jobs: JobRepository = Depends(get_job_repository),
    admin_user: TokenUser = Depends(get_admin_user),
):
    """
    Delete a job by ID.

    Authorization required: admin
    """
    jobs.remove(job_id)
    logger.info(f"{admin_user.username} deleted job {job_id}")
    return {"deleted": job_id}
