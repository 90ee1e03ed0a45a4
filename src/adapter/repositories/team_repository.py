from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.team_repository import ITeamRepository
from src.domain.entities import Team


class TeamRepository(ITeamRepository):
    """Team repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, team_id: UUID) -> Optional[Team]:
        """Get team by ID"""
        stmt = select(Team).where(Team.id == team_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, team: Team) -> Team:
        """Create a new team"""
        self.session.add(team)
        await self.session.flush()
        await self.session.refresh(team)
        return team

    async def get_default_by_tenant_id(self, tenant_id: UUID) -> Optional[Team]:
        """Get the tenant's default team (the oldest one)"""
        stmt = (
            select(Team)
            .where(Team.tenant_id == tenant_id)
            .order_by(Team.created_at, Team.id)
            .limit(1)
        )
        result = await self.session.exec(stmt)
        return result.first()
