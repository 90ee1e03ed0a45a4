"""
Change User Role Use Case

Handles changing a user's role within their tenant.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.access_validator import AccessValidator, denial_error, outranks
from src.app.services.identity import Identity
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, PermissionAction, PermissionModule, UserRole

from .dtos import ChangeRoleResponse

ROLE_MANAGERS = (UserRole.ADMIN, UserRole.SUPER_ADMIN)


class ChangeRoleUseCase:
    """
    Use case for changing a user's role.

    Business Rules:
    - Actor must be ADMIN or SUPER_ADMIN and hold team_management:edit in the
      target's tenant
    - Only SUPER_ADMIN can assign SUPER_ADMIN
    - Actor must outrank the target unless the actor is SUPER_ADMIN
    - Nobody but a SUPER_ADMIN changes their own role
    - The last SUPER_ADMIN of a tenant cannot be demoted
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, identity: Identity, target_user_id: UUID, new_role: str
    ) -> Result[ChangeRoleResponse]:
        """
        Execute change role use case.

        Args:
            identity: Caller
            target_user_id: Profile whose role changes
            new_role: Role to assign

        Returns:
            Result with ChangeRoleResponse, or Error
        """
        try:
            role = UserRole(new_role)
        except ValueError:
            return Return.err(Error("INVALID_ROLE", f"Invalid role: {new_role}"))

        if identity.role not in ROLE_MANAGERS:
            return Return.err(Error("INSUFFICIENT_ROLE", "Only admins can change roles"))

        is_super_admin = identity.is_super_admin

        async with self.uow:
            target = await self.uow.users.get_by_id(target_user_id)
            if target is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            decision = await AccessValidator(self.uow).check(
                identity, target.tenant_id, PermissionModule.TEAM_MANAGEMENT, PermissionAction.EDIT
            )
            if not decision.allowed:
                return Return.err(denial_error(decision))

            if role == UserRole.SUPER_ADMIN and not is_super_admin:
                return Return.err(
                    Error("INSUFFICIENT_ROLE", "Only super admins can assign the super admin role")
                )

            if target.id == identity.user_id and not is_super_admin:
                return Return.err(
                    Error("CANNOT_CHANGE_OWN_ROLE", "You cannot change your own role")
                )

            if not is_super_admin and not outranks(identity.role, target.role):
                return Return.err(
                    Error("INSUFFICIENT_ROLE", "You can only change roles of users below you")
                )

            old_role = target.role
            if old_role == UserRole.SUPER_ADMIN and role != UserRole.SUPER_ADMIN:
                remaining = await self.uow.users.count_by_tenant_and_role(
                    target.tenant_id, UserRole.SUPER_ADMIN
                )
                if remaining <= 1:
                    return Return.err(
                        Error("LAST_SUPER_ADMIN", "The last super admin cannot be demoted")
                    )

            target.role = role
            await self.uow.users.update(target)

            audit = AuditEvent(
                tenant_id=target.tenant_id,
                user_id=identity.user_id,
                action="role_changed",
                event_metadata={
                    "target_user_id": str(target_user_id),
                    "old_role": old_role.value,
                    "new_role": role.value,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(
                ChangeRoleResponse(
                    user_id=str(target_user_id),
                    old_role=old_role.value,
                    new_role=role.value,
                )
            )
