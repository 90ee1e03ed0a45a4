"""
Get User Permissions Use Case
"""

from typing import Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.services.identity import Identity
from src.app.services.permission_engine import PermissionEngine
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import PermissionAction
from src.domain.permissions import permission_key_str

from .base import load_target
from .dtos import UserPermissionsResponse


def _sorted_keys(keys) -> list:
    return sorted(permission_key_str(key) for key in keys)


class GetUserPermissionsUseCase:
    """
    Use case for reading a user's permissions in a team.

    Business Rules:
    - Anyone may read their own permissions
    - Reading others requires team_management:view in their tenant
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, identity: Optional[Identity], user_id: UUID, team_id: UUID
    ) -> Result[UserPermissionsResponse]:
        async with self.uow:
            target, error = await load_target(
                self.uow, identity, user_id, team_id, PermissionAction.VIEW, allow_self=True
            )
            if error:
                return Return.err(error)

            permissions = await PermissionEngine(self.uow).evaluate(
                target.id, team_id, role=target.role
            )

            return Return.ok(
                UserPermissionsResponse(
                    user_id=str(target.id),
                    team_id=str(team_id),
                    role=target.role.value,
                    role_permissions=_sorted_keys(permissions.role_permissions),
                    custom_permissions=_sorted_keys(permissions.custom_permissions),
                    denied_permissions=_sorted_keys(permissions.denied_permissions),
                    permissions=permissions.as_map(),
                )
            )
