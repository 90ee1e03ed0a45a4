from typing import Any, Dict, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from libs.result import Error
from src.api.error import ClientError, ServerError, access_denial_status
from src.app.services.identity import Identity
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.permissions import (
    ClearPermissionOverrideUseCase,
    GetUserPermissionsUseCase,
    PermissionOverrideResponse,
    SetPermissionOverrideUseCase,
    UserPermissionsResponse,
)
from src.depends import get_current_identity, get_unit_of_work

router = APIRouter(prefix="/permissions", tags=["Permissions"])


class SetPermissionRequest(BaseModel):
    """Permission override HTTP request payload"""

    team_id: Optional[UUID] = Field(None, description="Team the override applies to")
    module: str = Field(..., description="Permission module, e.g. customers")
    action: str = Field(..., description="Permission action, e.g. view")
    granted: bool = Field(..., description="True grants, False denies")


def _require_team(team_id: Optional[UUID]) -> UUID:
    if team_id is None:
        raise ClientError(
            Error("TEAM_ID_REQUIRED", "Team ID is required"),
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    return team_id


def _raise_for(error: Error):
    denial_status = access_denial_status(error)
    if denial_status is not None:
        raise ClientError(error, status_code=denial_status)
    elif error.code in ("INVALID_PERMISSION", "TEAM_MISMATCH"):
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    elif error.code in ("INSUFFICIENT_ROLE", "CANNOT_CHANGE_OWN_PERMISSIONS"):
        raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
    elif error.code in ("USER_NOT_FOUND", "TEAM_NOT_FOUND"):
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    raise ServerError(error)


@router.get(
    "/user/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=UserPermissionsResponse,
)
async def get_user_permissions(
    user_id: UUID,
    team_id: Optional[UUID] = Query(None, description="Team scope"),
    identity: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get User Permissions

    Role, custom and denied sets plus the flat "module:action" map.

    Raises:
        - 400 Bad Request: TEAM_ID_REQUIRED
        - 401 Unauthorized: Not authenticated
        - 403 Forbidden: CROSS_TENANT, INSUFFICIENT_PERMISSION
        - 404 Not Found: USER_NOT_FOUND, TEAM_NOT_FOUND
    """
    team_id = _require_team(team_id)
    result = await GetUserPermissionsUseCase(uow).execute(identity, user_id, team_id)

    if result.is_err():
        _raise_for(result.error)

    return result.value


@router.put(
    "/user/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=PermissionOverrideResponse,
)
async def set_user_permission(
    user_id: UUID,
    request: SetPermissionRequest,
    identity: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Set Permission Override

    Raises:
        - 400 Bad Request: TEAM_ID_REQUIRED, INVALID_PERMISSION, TEAM_MISMATCH
        - 401 Unauthorized: Not authenticated
        - 403 Forbidden: CROSS_TENANT, INSUFFICIENT_PERMISSION,
          INSUFFICIENT_ROLE, CANNOT_CHANGE_OWN_PERMISSIONS
        - 404 Not Found: USER_NOT_FOUND, TEAM_NOT_FOUND
    """
    team_id = _require_team(request.team_id)
    result = await SetPermissionOverrideUseCase(uow).execute(
        identity, user_id, team_id, request.module, request.action, request.granted
    )

    if result.is_err():
        _raise_for(result.error)

    return result.value


@router.delete(
    "/user/{user_id}",
    status_code=status.HTTP_200_OK,
)
async def clear_user_permission(
    user_id: UUID,
    module: str = Query(..., description="Permission module"),
    action: str = Query(..., description="Permission action"),
    team_id: Optional[UUID] = Query(None, description="Team scope"),
    identity: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> Dict[str, Any]:
    """
    Clear Permission Override

    Raises:
        - 400 Bad Request: TEAM_ID_REQUIRED, INVALID_PERMISSION, TEAM_MISMATCH
        - 401 Unauthorized: Not authenticated
        - 403 Forbidden: CROSS_TENANT, INSUFFICIENT_PERMISSION,
          INSUFFICIENT_ROLE, CANNOT_CHANGE_OWN_PERMISSIONS
        - 404 Not Found: USER_NOT_FOUND, TEAM_NOT_FOUND
    """
    team_id = _require_team(team_id)
    result = await ClearPermissionOverrideUseCase(uow).execute(
        identity, user_id, team_id, module, action
    )

    if result.is_err():
        _raise_for(result.error)

    return result.value
