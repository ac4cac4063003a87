"""
FastAPI dependencies for authentication and authorization.

These dependencies are used to protect endpoints and extract user context.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from jobboard.core.database import get_db
from jobboard.core.errors import UnauthorizedError
from jobboard.core.security import TokenUser, verify_token
from jobboard.crud import CompanyRepository, JobRepository

# Missing or non-bearer Authorization headers yield None instead of a 403
security = HTTPBearer(auto_error=False)


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[TokenUser]:
    """
    Extract the user from the bearer token if one was provided.

    Returns None if no token was sent or the token is invalid.
    """
    if not credentials:
        return None
    return verify_token(credentials.credentials)


async def get_current_user(
    user: Optional[TokenUser] = Depends(get_optional_user),
) -> TokenUser:
    """
    Require a logged-in user.

    Raises:
        UnauthorizedError: If no valid token was provided
    """
    if user is None:
        raise UnauthorizedError()
    return user


async def get_admin_user(
    user: Optional[TokenUser] = Depends(get_optional_user),
) -> TokenUser:
    """
    Require a logged-in admin.

    Raises:
        UnauthorizedError: If not logged in, or logged in without admin rights
    """
    if user is None or not user.is_admin:
        raise UnauthorizedError()
    return user


async def get_admin_or_self_user(
    username: str,
    user: Optional[TokenUser] = Depends(get_optional_user),
) -> TokenUser:
    """
    Require an admin, or the user named by the `username` path parameter.

    Raises:
        UnauthorizedError: If neither condition holds
    """
    if user is None or not (user.is_admin or user.username == username):
        raise UnauthorizedError()
    return user


def get_job_repository(db: Session = Depends(get_db)) -> JobRepository:
    return JobRepository(db)


def get_company_repository(db: Session = Depends(get_db)) -> CompanyRepository:
    return CompanyRepository(db)
