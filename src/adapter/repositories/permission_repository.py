from typing import List, Optional
from uuid import UUID

from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.permission_repository import IPermissionRepository
from src.domain.entities import PermissionAction, PermissionModule, UserPermission


def _team_clause(team_id: Optional[UUID]):
    if team_id is None:
        return col(UserPermission.team_id).is_(None)
    return UserPermission.team_id == team_id


class PermissionRepository(IPermissionRepository):
    """UserPermission repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user_and_team(
        self, user_id: UUID, team_id: Optional[UUID]
    ) -> List[UserPermission]:
        """Get all overrides for a (user, team) pair"""
        stmt = select(UserPermission).where(
            UserPermission.user_id == user_id, _team_clause(team_id)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_one(
        self,
        user_id: UUID,
        team_id: Optional[UUID],
        module: PermissionModule,
        action: PermissionAction,
    ) -> Optional[UserPermission]:
        """Get the override for a single (user, team, module, action)"""
        stmt = select(UserPermission).where(
            UserPermission.user_id == user_id,
            _team_clause(team_id),
            UserPermission.module == module,
            UserPermission.action == action,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, permission: UserPermission) -> UserPermission:
        """Create a new override"""
        self.session.add(permission)
        await self.session.flush()
        await self.session.refresh(permission)
        return permission

    async def update(self, permission: UserPermission) -> UserPermission:
        """Update existing override"""
        self.session.add(permission)
        await self.session.flush()
        await self.session.refresh(permission)
        return permission

    async def delete(self, permission: UserPermission) -> None:
        """Delete an override"""
        await self.session.delete(permission)
        await self.session.flush()
