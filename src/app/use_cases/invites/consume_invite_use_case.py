"""
Consume Invite Use Case

Redeems an invitation exactly once and signs the new member in.
"""

import logging
from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.sessions import DEFAULT_SESSION_TTL_DAYS, open_session
from src.app.services.tokens import hash_token
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.usernames import generate_unique_username
from src.domain.base import utcnow
from src.domain.entities import AuditEvent, TenantStatus, UserProfile

from ..dtos import TenantSummary, UserProfileInfo
from .dtos import ConsumeInviteResponse

logger = logging.getLogger(__name__)


class ConsumeInviteUseCase:
    """
    Use case for accepting an invitation.

    Business Rules:
    - The token is claimed first with a conditional update; of two concurrent
      consumers exactly one claims it
    - Claim, profile, audit event and session commit together; any later
      failure rolls the claim back
    - Profile lands in the invite's tenant with the invite's role and team;
      invites without a team land in the tenant's default team
    """

    def __init__(self, uow: UnitOfWork, session_ttl_days: int = DEFAULT_SESSION_TTL_DAYS):
        self.uow = uow
        self.session_ttl_days = session_ttl_days

    async def execute(
        self,
        token: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> Result[ConsumeInviteResponse]:
        """
        Execute consume invite use case.

        Args:
            token: Raw invitation token
            first_name: Optional first name for the new profile
            last_name: Optional last name for the new profile

        Returns:
            Result with ConsumeInviteResponse DTO, or Error
        """
        if not token:
            return Return.err(Error("INVALID_TOKEN", "Invalid invitation token"))

        token_hash = hash_token(token)

        async with self.uow:
            now = utcnow()
            claimed = await self.uow.invite_tokens.claim(token_hash, now)
            invite = await self.uow.invite_tokens.get_by_token_hash(token_hash)

            if invite is None:
                return Return.err(Error("INVALID_TOKEN", "Invalid invitation token"))

            if not claimed:
                if invite.used:
                    return Return.err(
                        Error("INVITE_ALREADY_USED", "This invitation has already been used")
                    )
                return Return.err(Error("INVITE_EXPIRED", "This invitation has expired"))

            tenant = await self.uow.tenants.get_by_id(invite.tenant_id)
            if tenant is None or tenant.status == TenantStatus.SUSPENDED:
                return Return.err(
                    Error("TENANT_SUSPENDED", "This organization is currently suspended")
                )

            existing = await self.uow.users.get_by_email_and_tenant(invite.email, tenant.id)
            if existing is not None:
                return Return.err(
                    Error("USER_ALREADY_EXISTS", "A user with this email already exists")
                )

            team_id = invite.team_id
            if team_id is None:
                default_team = await self.uow.teams.get_default_by_tenant_id(tenant.id)
                team_id = default_team.id if default_team else None

            profile = UserProfile(
                email=invite.email,
                username=await generate_unique_username(self.uow, invite.email),
                first_name=first_name,
                last_name=last_name,
                tenant_id=tenant.id,
                team_id=team_id,
                role=invite.role,
                invite_verified=True,
                last_login_at=now,
            )
            profile = await self.uow.users.create(profile)

            session_token = await open_session(self.uow, profile, self.session_ttl_days)

            audit = AuditEvent(
                tenant_id=tenant.id,
                user_id=profile.id,
                action="invite_accepted",
                event_metadata={
                    "invite_id": str(invite.id),
                    "invited_by": str(invite.invited_by),
                    "role": invite.role.value,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            logger.info(f"Invite {invite.id} accepted by profile {profile.id}")

            return Return.ok(
                ConsumeInviteResponse(
                    session_token=session_token,
                    user=UserProfileInfo.from_entity(profile),
                    tenant=TenantSummary.from_entity(tenant),
                )
            )
