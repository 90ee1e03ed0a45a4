from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError, access_denial_status
from src.app.services.identity import Identity
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.users import (
    ChangeRoleResponse,
    ChangeRoleUseCase,
    ImpersonationTargetsResponse,
    ListImpersonationTargetsUseCase,
    LoadContextUseCase,
    UserContextResponse,
)
from src.depends import get_current_identity, get_unit_of_work

router = APIRouter(tags=["User"])


class ChangeRoleRequest(BaseModel):
    """Change role HTTP request payload"""

    role: str = Field(..., description="New role (SUPER_ADMIN, ADMIN, EMPLOYEE, SALES_PERSON, CUSTOMER)")


@router.get(
    "/me",
    status_code=status.HTTP_200_OK,
    response_model=UserContextResponse,
)
async def get_me(
    identity: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Current User Context

    Profile, tenant and effective permissions of the caller.

    Raises:
        - 401 Unauthorized: Not authenticated
        - 404 Not Found: USER_NOT_FOUND, TENANT_NOT_FOUND
    """
    result = await LoadContextUseCase(uow).execute(identity)

    if result.is_err():
        error = result.error
        if error.code in ("USER_NOT_FOUND", "TENANT_NOT_FOUND"):
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.put(
    "/users/{user_id}/role",
    status_code=status.HTTP_200_OK,
    response_model=ChangeRoleResponse,
)
async def change_role(
    user_id: UUID,
    request: ChangeRoleRequest,
    identity: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change User Role

    Raises:
        - 400 Bad Request: INVALID_ROLE
        - 401 Unauthorized: Not authenticated
        - 403 Forbidden: INSUFFICIENT_ROLE, CANNOT_CHANGE_OWN_ROLE, CROSS_TENANT,
                         TENANT_SUSPENDED, INSUFFICIENT_PERMISSION
        - 404 Not Found: USER_NOT_FOUND
        - 409 Conflict: LAST_SUPER_ADMIN
    """
    result = await ChangeRoleUseCase(uow).execute(identity, user_id, request.role)

    if result.is_err():
        error = result.error
        denial_status = access_denial_status(error)
        if denial_status is not None:
            raise ClientError(error, status_code=denial_status)
        elif error.code == "INVALID_ROLE":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code in ("INSUFFICIENT_ROLE", "CANNOT_CHANGE_OWN_ROLE"):
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "LAST_SUPER_ADMIN":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.get(
    "/users/impersonation-targets",
    status_code=status.HTTP_200_OK,
    response_model=ImpersonationTargetsResponse,
)
async def list_impersonation_targets(
    identity: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Impersonation Targets

    Users of the caller's tenant, never the caller and never a SUPER_ADMIN.

    Raises:
        - 401 Unauthorized: Not authenticated
        - 403 Forbidden: TENANT_SUSPENDED, INSUFFICIENT_PERMISSION
    """
    result = await ListImpersonationTargetsUseCase(uow).execute(identity)

    if result.is_err():
        error = result.error
        denial_status = access_denial_status(error)
        if denial_status is not None:
            raise ClientError(error, status_code=denial_status)
        raise ServerError(error)

    return result.value
