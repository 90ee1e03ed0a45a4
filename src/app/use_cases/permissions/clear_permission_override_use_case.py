"""
Clear Permission Override Use Case

Removes an override so the role default applies again.
"""

from typing import Any, Dict
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.identity import Identity
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, PermissionAction
from src.domain.permissions import permission_key_str

from .base import check_override_write, load_target, parse_permission


class ClearPermissionOverrideUseCase:
    """
    Use case for removing a permission override.

    Business Rules:
    - Requires team_management:manage in the target's tenant
    - Only the target's own team; callers outrank the target unless SUPER_ADMIN
    - Nobody but a SUPER_ADMIN writes their own overrides
    - Clearing a missing override is not an error
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, identity: Identity, user_id: UUID, team_id: UUID, module: str, action: str
    ) -> Result[Dict[str, Any]]:
        key = parse_permission(module, action)
        if key is None:
            return Return.err(Error("INVALID_PERMISSION", f"Unknown permission {module}:{action}"))

        async with self.uow:
            target, error = await load_target(
                self.uow, identity, user_id, team_id, PermissionAction.MANAGE
            )
            if error:
                return Return.err(error)

            error = check_override_write(identity, target, team_id)
            if error:
                return Return.err(error)

            override = await self.uow.permissions.get_one(target.id, team_id, *key)
            if override is None:
                return Return.ok({"status": "unchanged", "permission": permission_key_str(key)})

            await self.uow.permissions.delete(override)

            audit = AuditEvent(
                tenant_id=target.tenant_id,
                user_id=identity.user_id,
                action="permission_cleared",
                event_metadata={
                    "target_user_id": str(target.id),
                    "team_id": str(team_id),
                    "permission": permission_key_str(key),
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok({"status": "cleared", "permission": permission_key_str(key)})
