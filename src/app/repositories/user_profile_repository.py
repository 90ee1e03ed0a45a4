from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import UserProfile, UserRole


class IUserProfileRepository(ABC):
    """UserProfile repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[UserProfile]:
        """Get profile by ID"""
        pass

    @abstractmethod
    async def get_by_id_and_tenant(
        self, user_id: UUID, tenant_id: UUID
    ) -> Optional[UserProfile]:
        """Get profile by ID, only if it belongs to the tenant"""
        pass

    @abstractmethod
    async def get_by_email_and_tenant(
        self, email: str, tenant_id: UUID
    ) -> Optional[UserProfile]:
        """Get profile by email within a tenant"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> List[UserProfile]:
        """Get every profile with this email, oldest first"""
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[UserProfile]:
        """Get profile by username, case-insensitive"""
        pass

    @abstractmethod
    async def get_by_tenant_id(self, tenant_id: UUID) -> List[UserProfile]:
        """Get all profiles of a tenant"""
        pass

    @abstractmethod
    async def count_by_tenant_and_role(self, tenant_id: UUID, role: UserRole) -> int:
        """Count profiles of a tenant holding a role"""
        pass

    @abstractmethod
    async def create(self, profile: UserProfile) -> UserProfile:
        """Create a new profile"""
        pass

    @abstractmethod
    async def update(self, profile: UserProfile) -> UserProfile:
        """Update existing profile"""
        pass
