from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import InviteToken


class IInviteTokenRepository(ABC):
    """InviteToken repository interface - application layer"""

    @abstractmethod
    async def get_by_token_hash(self, token_hash: str) -> Optional[InviteToken]:
        """Get invite by SHA-256 hash of its token"""
        pass

    @abstractmethod
    async def get_pending_by_tenant_and_email(
        self, tenant_id: UUID, email: str, now: datetime
    ) -> Optional[InviteToken]:
        """Get an unused, unexpired invite for this email in the tenant"""
        pass

    @abstractmethod
    async def create(self, invite: InviteToken) -> InviteToken:
        """Create a new invite"""
        pass

    @abstractmethod
    async def claim(self, token_hash: str, now: datetime) -> bool:
        """
        Atomically flip used false -> true for an unexpired invite.

        Returns True only for the single caller whose update matched.
        """
        pass
