from datetime import datetime
from typing import Optional

from sqlalchemy import update
from sqlmodel import col, func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.magic_link_token_repository import IMagicLinkTokenRepository
from src.domain.entities import MagicLinkToken


class MagicLinkTokenRepository(IMagicLinkTokenRepository):
    """MagicLinkToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_token_hash(self, token_hash: str) -> Optional[MagicLinkToken]:
        """Get magic link by SHA-256 hash of its token"""
        stmt = (
            select(MagicLinkToken)
            .where(MagicLinkToken.token_hash == token_hash)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def count_active_by_email(self, email: str, now: datetime) -> int:
        """Count unused, unexpired links for an email"""
        stmt = (
            select(func.count())
            .select_from(MagicLinkToken)
            .where(
                MagicLinkToken.email == email.lower(),
                col(MagicLinkToken.used).is_(False),
                col(MagicLinkToken.expires_at) > now,
            )
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def create(self, token: MagicLinkToken) -> MagicLinkToken:
        """Create a new magic link token"""
        self.session.add(token)
        await self.session.flush()
        await self.session.refresh(token)
        return token

    async def claim(self, token_hash: str, email: str, now: datetime) -> bool:
        """Atomically consume an unused, unexpired link issued to this email"""
        stmt = (
            update(MagicLinkToken)
            .where(
                MagicLinkToken.token_hash == token_hash,
                MagicLinkToken.email == email.lower(),
                col(MagicLinkToken.used).is_(False),
                col(MagicLinkToken.expires_at) > now,
            )
            .values(used=True, used_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1
