import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request

from jobboard.core.deps import get_admin_user, get_company_repository
from jobboard.core.errors import ValidationError
from jobboard.core.security import TokenUser
from jobboard.crud.company import CompanyRepository
from jobboard.schemas.company import (
    CompanyCreateRequest,
    CompanyDeleteResponse,
    CompanyDetailEnvelope,
    CompanyEnvelope,
    CompanyListResponse,
    CompanyUpdateRequest,
)

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)

ALLOWED_FILTERS = ("nameLike", "minEmployees", "maxEmployees")


@router.post("", status_code=201, response_model=CompanyEnvelope)
def create_company(
    request: CompanyCreateRequest,
    companies: CompanyRepository = Depends(get_company_repository),
    admin_user: TokenUser = Depends(get_admin_user),
):
    """
    Create a new company.

    Authorization required: admin
    """
    company = companies.create(**request.model_dump())
    logger.info(f"{admin_user.username} created company {company['handle']}")
    return {"company": company}


@router.get("", response_model=CompanyListResponse)
def list_companies(
    request: Request,
    name_like: Optional[str] = Query(None, alias="nameLike"),
    min_employees: Optional[int] = Query(None, alias="minEmployees", ge=0),
    max_employees: Optional[int] = Query(None, alias="maxEmployees", ge=0),
    companies: CompanyRepository = Depends(get_company_repository),
):
    """
    List companies ordered by name, optionally filtered by
    nameLike, minEmployees and maxEmployees.

    Authorization required: none
    """
    unknown = [key for key in request.query_params.keys() if key not in ALLOWED_FILTERS]
    if unknown:
        raise ValidationError(f"Allowed search fields: {', '.join(ALLOWED_FILTERS)}")

    filters = {
        "nameLike": name_like,
        "minEmployees": min_employees,
        "maxEmployees": max_employees,
    }
    return {"companies": companies.find_all(filters)}


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
def get_company(handle: str, companies: CompanyRepository = Depends(get_company_repository)):
    """Retrieve a company and its jobs."""
    return {"company": companies.get(handle)}


@router.patch("/{handle}", response_model=CompanyEnvelope)
def update_company(
    handle: str,
    request: CompanyUpdateRequest,
    companies: CompanyRepository = Depends(get_company_repository),
    admin_user: TokenUser = Depends(get_admin_user),
):
    """
    Partially update a company. Fields can be: {name, description, numEmployees, logoUrl}

    Authorization required: admin
    """
    data = request.model_dump(by_alias=True, exclude_unset=True)
    company = companies.update(handle, data)
    logger.info(f"{admin_user.username} updated company {handle}: {sorted(data)}")
    return {"company": company}


@router.delete("/{handle}", response_model=CompanyDeleteResponse)
def delete_company(
    handle: str,
    companies: CompanyRepository = Depends(get_company_repository),
    admin_user: TokenUser = Depends(get_admin_user),
):
    """
    Delete a company and its jobs.

    Authorization required: admin
    """
    companies.remove(handle)
    logger.info(f"{admin_user.username} deleted company {handle}")
    return {"deleted": handle}
