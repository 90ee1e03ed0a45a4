from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import ReferralRelationship


class IReferralRepository(ABC):
    """ReferralRelationship repository interface - application layer"""

    @abstractmethod
    async def get_by_referee_id(self, referee_id: UUID) -> Optional[ReferralRelationship]:
        """Get the relationship in which the user was referred"""
        pass

    @abstractmethod
    async def get_by_referrer_id(self, referrer_id: UUID) -> List[ReferralRelationship]:
        """Get direct referrals made by the user"""
        pass

    @abstractmethod
    async def count_by_referrer(self, referrer_id: UUID, tenant_id: UUID) -> int:
        """Count direct referrals made by the user in the tenant"""
        pass

    @abstractmethod
    async def create(self, relationship: ReferralRelationship) -> ReferralRelationship:
        """Create a new referral relationship"""
        pass
