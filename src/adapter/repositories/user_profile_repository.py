from typing import List, Optional
from uuid import UUID

from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_profile_repository import IUserProfileRepository
from src.domain.entities import UserProfile, UserRole


class UserProfileRepository(IUserProfileRepository):
    """UserProfile repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: UUID) -> Optional[UserProfile]:
        """Get profile by ID"""
        stmt = select(UserProfile).where(UserProfile.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id_and_tenant(
        self, user_id: UUID, tenant_id: UUID
    ) -> Optional[UserProfile]:
        """Get profile by ID, only if it belongs to the tenant"""
        stmt = select(UserProfile).where(
            UserProfile.id == user_id, UserProfile.tenant_id == tenant_id
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_email_and_tenant(
        self, email: str, tenant_id: UUID
    ) -> Optional[UserProfile]:
        """Get profile by email within a tenant"""
        stmt = select(UserProfile).where(
            UserProfile.email == email.lower(), UserProfile.tenant_id == tenant_id
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_email(self, email: str) -> List[UserProfile]:
        """Get every profile with this email, oldest first"""
        stmt = (
            select(UserProfile)
            .where(UserProfile.email == email.lower())
            .order_by(UserProfile.created_at)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_by_username(self, username: str) -> Optional[UserProfile]:
        """Get profile by username, case-insensitive"""
        stmt = select(UserProfile).where(
            func.lower(UserProfile.username) == username.lower()
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_tenant_id(self, tenant_id: UUID) -> List[UserProfile]:
        """Get all profiles of a tenant"""
        stmt = (
            select(UserProfile)
            .where(UserProfile.tenant_id == tenant_id)
            .order_by(UserProfile.created_at)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_by_tenant_and_role(self, tenant_id: UUID, role: UserRole) -> int:
        """Count profiles of a tenant holding a role"""
        stmt = (
            select(func.count())
            .select_from(UserProfile)
            .where(UserProfile.tenant_id == tenant_id, UserProfile.role == role)
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def create(self, profile: UserProfile) -> UserProfile:
        """Create a new profile"""
        self.session.add(profile)
        await self.session.flush()
        await self.session.refresh(profile)
        return profile

    async def update(self, profile: UserProfile) -> UserProfile:
        """Update existing profile"""
        self.session.add(profile)
        await self.session.flush()
        await self.session.refresh(profile)
        return profile
