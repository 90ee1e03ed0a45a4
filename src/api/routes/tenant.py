from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError, access_denial_status
from src.app.services.identity import Identity
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.dtos import TenantSummary
from src.app.use_cases.tenants import (
    ResolveTenantUseCase,
    SwitchTenantResponse,
    SwitchTenantUseCase,
    UpdateTenantSettingsUseCase,
)
from src.depends import get_config, get_current_identity, get_unit_of_work

router = APIRouter(prefix="/tenants", tags=["Tenant"])


class SwitchTenantRequest(BaseModel):
    """Switch tenant HTTP request payload"""

    tenant_id: UUID = Field(..., description="Target tenant ID to switch to")


class UpdateTenantSettingsRequest(BaseModel):
    name: Optional[str] = Field(None, max_length=255, description="Display name")
    primary_color: Optional[str] = Field(None, max_length=16, description="Brand primary color")
    secondary_color: Optional[str] = Field(None, max_length=16, description="Brand secondary color")
    logo_url: Optional[str] = Field(None, max_length=1024, description="Logo URL")


@router.get(
    "/resolve",
    status_code=status.HTTP_200_OK,
    response_model=TenantSummary,
)
async def resolve_tenant(
    identifier: str = Query(..., description="Slug, host or tenant ID"),
    kind: str = Query("slug", pattern="^(slug|domain|id)$", description="slug, domain or id"),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Resolve Tenant

    Public lookup by slug, host (leading label) or ID.

    Raises:
        - 404 Not Found: TENANT_NOT_FOUND
    """
    result = await ResolveTenantUseCase(uow).execute(identifier, kind)

    if result.is_err():
        error = result.error
        if error.code == "TENANT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.post(
    "/switch",
    status_code=status.HTTP_200_OK,
    response_model=SwitchTenantResponse,
)
async def switch_tenant(
    request: SwitchTenantRequest,
    identity: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
    config=Depends(get_config),
):
    """
    Switch Tenant

    Opens a session on the caller's profile in another tenant.

    Raises:
        - 401 Unauthorized: Not authenticated
        - 403 Forbidden: ACCESS_DENIED
        - 500 Internal Server Error: Server error
    """
    use_case = SwitchTenantUseCase(uow, session_ttl_days=config.SESSION_TTL_DAYS)
    result = await use_case.execute(identity, request.tenant_id)

    if result.is_err():
        error = result.error
        if error.code == "ACCESS_DENIED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value


@router.patch(
    "/{tenant_id}/settings",
    status_code=status.HTTP_200_OK,
    response_model=TenantSummary,
)
async def update_tenant_settings(
    tenant_id: UUID,
    request: UpdateTenantSettingsRequest,
    identity: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Tenant Settings

    Requires settings:edit in the tenant.

    Raises:
        - 401 Unauthorized: Not authenticated
        - 403 Forbidden: CROSS_TENANT, TENANT_SUSPENDED, INSUFFICIENT_PERMISSION
        - 404 Not Found: TENANT_NOT_FOUND
    """
    result = await UpdateTenantSettingsUseCase(uow).execute(
        identity,
        tenant_id,
        name=request.name,
        primary_color=request.primary_color,
        secondary_color=request.secondary_color,
        logo_url=request.logo_url,
    )

    if result.is_err():
        error = result.error
        status_code = access_denial_status(error)
        if status_code is not None:
            raise ClientError(error, status_code=status_code)
        raise ServerError(error)

    return result.value
