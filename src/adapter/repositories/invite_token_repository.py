from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.invite_token_repository import IInviteTokenRepository
from src.domain.entities import InviteToken


class InviteTokenRepository(IInviteTokenRepository):
    """InviteToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_token_hash(self, token_hash: str) -> Optional[InviteToken]:
        """Get invite by SHA-256 hash of its token"""
        stmt = (
            select(InviteToken)
            .where(InviteToken.token_hash == token_hash)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_pending_by_tenant_and_email(
        self, tenant_id: UUID, email: str, now: datetime
    ) -> Optional[InviteToken]:
        """Get an unused, unexpired invite for this email in the tenant"""
        stmt = select(InviteToken).where(
            InviteToken.tenant_id == tenant_id,
            InviteToken.email == email.lower(),
            col(InviteToken.used).is_(False),
            col(InviteToken.expires_at) > now,
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def create(self, invite: InviteToken) -> InviteToken:
        """Create a new invite"""
        self.session.add(invite)
        await self.session.flush()
        await self.session.refresh(invite)
        return invite

    async def claim(self, token_hash: str, now: datetime) -> bool:
        """Conditional UPDATE; the WHERE clause is the whole validity check"""
        stmt = (
            update(InviteToken)
            .where(
                InviteToken.token_hash == token_hash,
                col(InviteToken.used).is_(False),
                col(InviteToken.expires_at) > now,
            )
            .values(used=True, used_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1
