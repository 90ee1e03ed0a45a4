from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from src.domain.entities import MagicLinkToken


class IMagicLinkTokenRepository(ABC):
    """MagicLinkToken repository interface - application layer"""

    @abstractmethod
    async def get_by_token_hash(self, token_hash: str) -> Optional[MagicLinkToken]:
        """Get magic link by SHA-256 hash of its token"""
        pass

    @abstractmethod
    async def count_active_by_email(self, email: str, now: datetime) -> int:
        """Count unused, unexpired links for an email"""
        pass

    @abstractmethod
    async def create(self, token: MagicLinkToken) -> MagicLinkToken:
        """Create a new magic link token"""
        pass

    @abstractmethod
    async def claim(self, token_hash: str, email: str, now: datetime) -> bool:
        """Atomically consume an unused, unexpired link issued to this email"""
        pass
