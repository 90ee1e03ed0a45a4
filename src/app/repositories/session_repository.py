from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import Session


class ISessionRepository(ABC):
    """Session repository interface - application layer"""

    @abstractmethod
    async def get_by_token_hash(self, token_hash: str) -> Optional[Session]:
        """Get session by SHA-256 hash of its token"""
        pass

    @abstractmethod
    async def create(self, session: Session) -> Session:
        """Create a new session"""
        pass

    @abstractmethod
    async def update(self, session: Session) -> Session:
        """Update existing session"""
        pass

    @abstractmethod
    async def revoke_all_by_tenant_id(self, tenant_id: UUID) -> int:
        """Revoke all live sessions of a tenant. Returns count of revoked sessions."""
        pass
