"""
Switch Tenant Use Case

Moves a signed-in person to their profile in another tenant.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.identity import Identity
from src.app.services.sessions import DEFAULT_SESSION_TTL_DAYS, open_session
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent

from ..dtos import TenantSummary, UserProfileInfo
from .dtos import SwitchTenantResponse


class SwitchTenantUseCase:
    """
    Use case for switching the active tenant.

    Business Rules:
    - The caller's email must have a profile in the target tenant
    - That profile must pass tenant access validation (tenant not suspended)
    - A new session is opened for the target profile
    """

    def __init__(self, uow: UnitOfWork, session_ttl_days: int = DEFAULT_SESSION_TTL_DAYS):
        self.uow = uow
        self.session_ttl_days = session_ttl_days

    async def execute(self, identity: Identity, target_tenant_id: UUID) -> Result[SwitchTenantResponse]:
        async with self.uow:
            profile = await self.uow.users.get_by_email_and_tenant(
                identity.email, target_tenant_id
            )
            resolver = TenantResolver(self.uow)
            if profile is None or not await resolver.validate_user_tenant_access(
                profile.id, target_tenant_id
            ):
                return Return.err(Error("ACCESS_DENIED", "Access denied to this tenant"))

            tenant = await self.uow.tenants.get_by_id(target_tenant_id)
            session_token = await open_session(self.uow, profile, self.session_ttl_days)

            audit = AuditEvent(
                tenant_id=target_tenant_id,
                user_id=profile.id,
                action="tenant_switch",
                event_metadata={"from_tenant_id": str(identity.tenant_id)},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(
                SwitchTenantResponse(
                    session_token=session_token,
                    user=UserProfileInfo.from_entity(profile),
                    tenant=TenantSummary.from_entity(tenant),
                )
            )
