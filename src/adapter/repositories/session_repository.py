from typing import Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.session_repository import ISessionRepository
from src.domain.base import utcnow
from src.domain.entities import Session


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_token_hash(self, token_hash: str) -> Optional[Session]:
        """Get session by SHA-256 hash of its token"""
        stmt = select(Session).where(Session.token_hash == token_hash)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, session: Session) -> Session:
        """Create a new session"""
        self.session.add(session)
        await self.session.flush()
        await self.session.refresh(session)
        return session

    async def update(self, session: Session) -> Session:
        """Update existing session"""
        self.session.add(session)
        await self.session.flush()
        await self.session.refresh(session)
        return session

    async def revoke_all_by_tenant_id(self, tenant_id: UUID) -> int:
        """Revoke all live sessions of a tenant. Returns count of revoked sessions."""
        stmt = (
            update(Session)
            .where(Session.tenant_id == tenant_id, col(Session.revoked).is_(False))
            .values(revoked=True, revoked_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount
