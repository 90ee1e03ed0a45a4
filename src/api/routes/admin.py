"""
Admin API Routes - System Administration Endpoints

These endpoints are for internal service integrations (provisioning, billing).
Authentication is via Admin API Key, not user sessions.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import ClientError, ServerError
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.admin import (
    CreateTenantUseCase,
    RestoreTenantUseCase,
    SuspendTenantUseCase,
)
from src.app.use_cases.tenants import CreateTenantResponse, TenantStatusResponse
from src.depends import get_unit_of_work

router = APIRouter(prefix="/admin", tags=["Admin"])


class CreateTenantRequest(BaseModel):
    """Tenant provisioning HTTP request payload"""

    name: str = Field(..., min_length=1, max_length=255, description="Organization name")
    slug: Optional[str] = Field(None, max_length=63, description="URL-safe slug; derived from name if omitted")
    domain: Optional[str] = Field(None, max_length=255, description="Custom domain")
    plan: str = Field("FREE", description="FREE, STARTER, PROFESSIONAL or ENTERPRISE")
    admin_email: EmailStr = Field(..., description="Email of the first ADMIN")
    admin_first_name: Optional[str] = Field(None, max_length=100)
    admin_last_name: Optional[str] = Field(None, max_length=100)


@router.post(
    "/tenants",
    status_code=status.HTTP_201_CREATED,
    response_model=CreateTenantResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def create_tenant(
    request: CreateTenantRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Tenant

    Provisions a tenant, its default team and first ADMIN.

    Requires: X-Admin-API-Key header

    Raises:
        - 400 Bad Request: INVALID_SLUG, INVALID_PLAN
        - 401 Unauthorized: Missing or invalid admin API key
        - 409 Conflict: TENANT_ALREADY_EXISTS
    """
    use_case = CreateTenantUseCase(uow)
    result = await use_case.execute(
        name=request.name,
        admin_email=request.admin_email,
        slug=request.slug,
        domain=request.domain,
        plan=request.plan,
        admin_first_name=request.admin_first_name,
        admin_last_name=request.admin_last_name,
    )

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_SLUG", "INVALID_PLAN"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "TENANT_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.post(
    "/tenants/{tenant_id}/suspend",
    status_code=status.HTTP_200_OK,
    response_model=TenantStatusResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def suspend_tenant(
    tenant_id: UUID,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Suspend Tenant

    Revokes all live sessions and blocks tenant operations.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: TENANT_NOT_FOUND
        - 500 Internal Server Error: Server error
    """
    use_case = SuspendTenantUseCase(uow)
    result = await use_case.execute(tenant_id)

    if result.is_err():
        error = result.error
        if error.code == "TENANT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.post(
    "/tenants/{tenant_id}/restore",
    status_code=status.HTTP_200_OK,
    response_model=TenantStatusResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def restore_tenant(
    tenant_id: UUID,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Restore Tenant

    Allows users to sign in and access tenant resources again.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: TENANT_NOT_FOUND
        - 500 Internal Server Error: Server error
    """
    use_case = RestoreTenantUseCase(uow)
    result = await use_case.execute(tenant_id)

    if result.is_err():
        error = result.error
        if error.code == "TENANT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
