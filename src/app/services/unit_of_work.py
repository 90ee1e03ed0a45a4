from abc import ABC, abstractmethod

from src.app.repositories.audit_event_repository import IAuditEventRepository
from src.app.repositories.invite_token_repository import IInviteTokenRepository
from src.app.repositories.magic_link_token_repository import IMagicLinkTokenRepository
from src.app.repositories.permission_repository import IPermissionRepository
from src.app.repositories.referral_repository import IReferralRepository
from src.app.repositories.session_repository import ISessionRepository
from src.app.repositories.team_repository import ITeamRepository
from src.app.repositories.tenant_repository import ITenantRepository
from src.app.repositories.user_profile_repository import IUserProfileRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    tenants: ITenantRepository
    teams: ITeamRepository
    users: IUserProfileRepository
    sessions: ISessionRepository
    invite_tokens: IInviteTokenRepository
    magic_links: IMagicLinkTokenRepository
    referrals: IReferralRepository
    permissions: IPermissionRepository
    audit_events: IAuditEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
