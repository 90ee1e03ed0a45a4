from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import PermissionAction, PermissionModule, UserPermission


class IPermissionRepository(ABC):
    """UserPermission repository interface - application layer"""

    @abstractmethod
    async def get_by_user_and_team(
        self, user_id: UUID, team_id: Optional[UUID]
    ) -> List[UserPermission]:
        """Get all overrides for a (user, team) pair"""
        pass

    @abstractmethod
    async def get_one(
        self,
        user_id: UUID,
        team_id: Optional[UUID],
        module: PermissionModule,
        action: PermissionAction,
    ) -> Optional[UserPermission]:
        """Get the override for a single (user, team, module, action)"""
        pass

    @abstractmethod
    async def create(self, permission: UserPermission) -> UserPermission:
        """Create a new override"""
        pass

    @abstractmethod
    async def update(self, permission: UserPermission) -> UserPermission:
        """Update existing override"""
        pass

    @abstractmethod
    async def delete(self, permission: UserPermission) -> None:
        """Delete an override"""
        pass
