from typing import List, Optional
from uuid import UUID

from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.referral_repository import IReferralRepository
from src.domain.entities import ReferralRelationship


class ReferralRepository(IReferralRepository):
    """ReferralRelationship repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_referee_id(self, referee_id: UUID) -> Optional[ReferralRelationship]:
        """Get the relationship in which the user was referred"""
        stmt = select(ReferralRelationship).where(
            ReferralRelationship.referee_id == referee_id
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_referrer_id(self, referrer_id: UUID) -> List[ReferralRelationship]:
        """Get direct referrals made by the user"""
        stmt = (
            select(ReferralRelationship)
            .where(ReferralRelationship.referrer_id == referrer_id)
            .order_by(ReferralRelationship.created_at)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_by_referrer(self, referrer_id: UUID, tenant_id: UUID) -> int:
        """Count direct referrals made by the user in the tenant"""
        stmt = (
            select(func.count())
            .select_from(ReferralRelationship)
            .where(
                ReferralRelationship.referrer_id == referrer_id,
                ReferralRelationship.tenant_id == tenant_id,
            )
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def create(self, relationship: ReferralRelationship) -> ReferralRelationship:
        """Create a new referral relationship"""
        self.session.add(relationship)
        await self.session.flush()
        await self.session.refresh(relationship)
        return relationship
