"""
Use Case: Suspend Tenant

Soft-disables a tenant. Revokes all live sessions and blocks every
tenant-scoped operation from the next request on.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditEvent, TenantStatus

from ..tenants.dtos import TenantStatusResponse


class SuspendTenantUseCase:
    """
    Suspend a tenant.

    Business Logic:
    1. Validate tenant exists
    2. Update tenant status to SUSPENDED
    3. Revoke all live sessions of the tenant
    4. Create audit event

    Idempotent: Suspending an already-suspended tenant succeeds but revokes 0 sessions
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, tenant_id: UUID) -> Result[TenantStatusResponse]:
        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if not tenant:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            tenant.status = TenantStatus.SUSPENDED
            await self.uow.tenants.update(tenant)

            sessions_revoked = await self.uow.sessions.revoke_all_by_tenant_id(tenant_id)

            audit_event = AuditEvent(
                tenant_id=tenant_id,
                user_id=None,  # System action, no specific user
                action="tenant_suspended",
                event_metadata={
                    "sessions_revoked": sessions_revoked,
                    "suspended_at": utcnow().isoformat(),
                },
            )
            await self.uow.audit_events.create(audit_event)

            await self.uow.commit()

            return Return.ok(
                TenantStatusResponse(
                    tenant_id=str(tenant_id),
                    status=TenantStatus.SUSPENDED.value,
                    sessions_revoked=sessions_revoked,
                )
            )
