from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.audit_event_repository import AuditEventRepository
from src.adapter.repositories.invite_token_repository import InviteTokenRepository
from src.adapter.repositories.magic_link_token_repository import MagicLinkTokenRepository
from src.adapter.repositories.permission_repository import PermissionRepository
from src.adapter.repositories.referral_repository import ReferralRepository
from src.adapter.repositories.session_repository import SessionRepository
from src.adapter.repositories.team_repository import TeamRepository
from src.adapter.repositories.tenant_repository import TenantRepository
from src.adapter.repositories.user_profile_repository import UserProfileRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.tenants = TenantRepository(self.session)
        self.teams = TeamRepository(self.session)
        self.users = UserProfileRepository(self.session)
        self.sessions = SessionRepository(self.session)
        self.invite_tokens = InviteTokenRepository(self.session)
        self.magic_links = MagicLinkTokenRepository(self.session)
        self.referrals = ReferralRepository(self.session)
        self.permissions = PermissionRepository(self.session)
        self.audit_events = AuditEventRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
