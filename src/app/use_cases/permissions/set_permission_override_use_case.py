"""
Set Permission Override Use Case

Grants or denies one module:action for a user in a team.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.identity import Identity
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, PermissionAction, PermissionPolarity, UserPermission
from src.domain.permissions import permission_key_str

from .base import check_override_write, load_target, parse_permission
from .dtos import PermissionOverrideResponse


class SetPermissionOverrideUseCase:
    """
    Use case for writing a permission override.

    Business Rules:
    - Requires team_management:manage in the target's tenant
    - Only the target's own team; callers outrank the target unless SUPER_ADMIN
    - Nobody but a SUPER_ADMIN writes their own overrides
    - One record per (user, team, module, action); writing again flips polarity
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        identity: Identity,
        user_id: UUID,
        team_id: UUID,
        module: str,
        action: str,
        granted: bool,
    ) -> Result[PermissionOverrideResponse]:
        key = parse_permission(module, action)
        if key is None:
            return Return.err(Error("INVALID_PERMISSION", f"Unknown permission {module}:{action}"))

        polarity = PermissionPolarity.GRANTED if granted else PermissionPolarity.DENIED

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
                override = UserPermission(
                    user_id=target.id,
                    team_id=team_id,
                    module=key[0],
                    action=key[1],
                    polarity=polarity,
                )
                await self.uow.permissions.create(override)
            else:
                override.polarity = polarity
                await self.uow.permissions.update(override)

            audit = AuditEvent(
                tenant_id=target.tenant_id,
                user_id=identity.user_id,
                action="permission_set",
                event_metadata={
                    "target_user_id": str(target.id),
                    "team_id": str(team_id),
                    "permission": permission_key_str(key),
                    "polarity": polarity.value,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(
                PermissionOverrideResponse(
                    user_id=str(target.id),
                    team_id=str(team_id),
                    permission=permission_key_str(key),
                    polarity=polarity.value,
                )
            )
