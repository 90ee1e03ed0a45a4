"""
Use Case: Restore Tenant

Reactivates a suspended tenant. Revoked sessions stay revoked; users sign in
again.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditEvent, TenantStatus

from ..tenants.dtos import TenantStatusResponse


class RestoreTenantUseCase:
    """
    Restore a suspended tenant.

    Idempotent: Restoring an already-active tenant succeeds
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, tenant_id: UUID) -> Result[TenantStatusResponse]:
        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if not tenant:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            tenant.status = TenantStatus.ACTIVE
            await self.uow.tenants.update(tenant)

            audit_event = AuditEvent(
                tenant_id=tenant_id,
                user_id=None,  # System action, no specific user
                action="tenant_restored",
                event_metadata={"restored_at": utcnow().isoformat()},
            )
            await self.uow.audit_events.create(audit_event)

            await self.uow.commit()

            return Return.ok(
                TenantStatusResponse(tenant_id=str(tenant_id), status=TenantStatus.ACTIVE.value)
            )
