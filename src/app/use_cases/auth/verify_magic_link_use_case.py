"""
Verify Magic Link Use Case

Redeems a magic link exactly once.
"""

from libs.result import Error, Result, Return
from src.app.services.sessions import DEFAULT_SESSION_TTL_DAYS, open_session
from src.app.services.tokens import hash_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditEvent, TenantStatus

from ..dtos import TenantSummary, UserProfileInfo
from .dtos import VerifyMagicLinkResponse

INVALID_LINK = Error("INVALID_MAGIC_LINK", "This sign-in link is invalid or has expired")


class VerifyMagicLinkUseCase:
    """
    Use case for verifying a magic link.

    Business Rules:
    - Claimed atomically on (token hash, email, unused, unexpired)
    - Every link failure gives the same non-revealing error
    - Existing profile on an active tenant: new session, last_login_at stamped
    - No profile: the claim commits and the caller continues signup
    - Suspended tenant: nothing commits, the link stays unused
    """

    def __init__(self, uow: UnitOfWork, session_ttl_days: int = DEFAULT_SESSION_TTL_DAYS):
        self.uow = uow
        self.session_ttl_days = session_ttl_days

    async def execute(self, token: str, email: str) -> Result[VerifyMagicLinkResponse]:
        if not token or not email:
            return Return.err(INVALID_LINK)

        email = email.strip().lower()
        token_hash = hash_token(token)

        async with self.uow:
            now = utcnow()
            if not await self.uow.magic_links.claim(token_hash, email, now):
                return Return.err(INVALID_LINK)

            magic_link = await self.uow.magic_links.get_by_token_hash(token_hash)
            if magic_link is None:
                return Return.err(INVALID_LINK)

            if magic_link.tenant_id is not None:
                profile = await self.uow.users.get_by_email_and_tenant(
                    email, magic_link.tenant_id
                )
            else:
                profiles = await self.uow.users.get_by_email(email)
                profile = profiles[0] if profiles else None

            if profile is None:
                await self.uow.commit()
                return Return.ok(
                    VerifyMagicLinkResponse(
                        profile_exists=False,
                        intent=magic_link.intent.value,
                        email=email,
                        callback_url=magic_link.callback_url,
                    )
                )

            tenant = await self.uow.tenants.get_by_id(profile.tenant_id)
            if tenant is None or tenant.status == TenantStatus.SUSPENDED:
                return Return.err(
                    Error("TENANT_SUSPENDED", "This organization is currently suspended")
                )

            session_token = await open_session(self.uow, profile, self.session_ttl_days)

            profile.last_login_at = now
            profile = await self.uow.users.update(profile)

            audit = AuditEvent(
                tenant_id=tenant.id,
                user_id=profile.id,
                action="magic_link_login",
                event_metadata={"intent": magic_link.intent.value},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(
                VerifyMagicLinkResponse(
                    profile_exists=True,
                    intent=magic_link.intent.value,
                    email=email,
                    callback_url=magic_link.callback_url,
                    session_token=session_token,
                    user=UserProfileInfo.from_entity(profile),
                    tenant=TenantSummary.from_entity(tenant),
                )
            )
