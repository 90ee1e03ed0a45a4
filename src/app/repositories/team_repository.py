from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import Team


class ITeamRepository(ABC):
    """Team repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, team_id: UUID) -> Optional[Team]:
        """Get team by ID"""
        pass

    @abstractmethod
    async def create(self, team: Team) -> Team:
        """Create a new team"""
        pass

    @abstractmethod
    async def get_default_by_tenant_id(self, tenant_id: UUID) -> Optional[Team]:
        """Get the tenant's default team (the oldest one)"""
        pass
