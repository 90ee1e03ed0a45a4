"""
Permission Engine

Effective permissions = (role defaults + custom grants) - denials.
Overrides are scoped to a (user, team) pair and evaluated on every call.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import (
    PermissionAction,
    PermissionModule,
    PermissionPolarity,
    UserRole,
)
from src.domain.permissions import (
    ALL_PERMISSIONS,
    PermissionKey,
    permission_key_str,
    role_default_permissions,
)


@dataclass(frozen=True)
class UserPermissions:
    """The three permission sets of a (user, team)"""

    role_permissions: FrozenSet[PermissionKey] = field(default_factory=frozenset)
    custom_permissions: FrozenSet[PermissionKey] = field(default_factory=frozenset)
    denied_permissions: FrozenSet[PermissionKey] = field(default_factory=frozenset)

    def is_allowed(self, module: PermissionModule, action: PermissionAction) -> bool:
        key = (module, action)
        if key in self.denied_permissions:
            return False
        return key in self.role_permissions or key in self.custom_permissions

    def as_map(self) -> Dict[str, bool]:
        """Flat "module:action" -> allowed map over every known pair"""
        return {
            permission_key_str(key): self.is_allowed(*key)
            for key in sorted(ALL_PERMISSIONS, key=permission_key_str)
        }


class PermissionEngine:
    """Evaluates effective permissions from role defaults and overrides"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def evaluate(
        self, user_id: UUID, team_id: Optional[UUID], role: Optional[UserRole] = None
    ) -> UserPermissions:
        """
        Compute the permission sets for a user in a team.

        Args:
            user_id: Target user
            team_id: Team scope of overrides (None = tenant-wide overrides)
            role: Known role of the user; loaded from the profile when omitted

        Returns:
            UserPermissions (empty when the user does not exist)
        """
        if role is None:
            profile = await self.uow.users.get_by_id(user_id)
            if profile is None:
                return UserPermissions()
            role = profile.role

        granted = set()
        denied = set()
        for override in await self.uow.permissions.get_by_user_and_team(user_id, team_id):
            key = (override.module, override.action)
            if override.polarity == PermissionPolarity.DENIED:
                denied.add(key)
            else:
                granted.add(key)

        return UserPermissions(
            role_permissions=role_default_permissions(role),
            custom_permissions=frozenset(granted),
            denied_permissions=frozenset(denied),
        )

    async def is_allowed(
        self,
        user_id: UUID,
        team_id: Optional[UUID],
        module: PermissionModule,
        action: PermissionAction,
        role: Optional[UserRole] = None,
    ) -> bool:
        permissions = await self.evaluate(user_id, team_id, role)
        return permissions.is_allowed(module, action)
