"""
Update Tenant Settings Use Case

Name and branding changes.
"""

from typing import Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.services.access_validator import AccessValidator, denial_error
from src.app.services.identity import Identity
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, PermissionAction, PermissionModule

from ..dtos import TenantSummary

EDITABLE_FIELDS = ("name", "primary_color", "secondary_color", "logo_url")


class UpdateTenantSettingsUseCase:
    """
    Use case for updating tenant settings.

    Business Rules:
    - Requires settings:edit in the tenant
    - Only name and branding fields change; None leaves a field untouched
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        identity: Optional[Identity],
        tenant_id: UUID,
        name: Optional[str] = None,
        primary_color: Optional[str] = None,
        secondary_color: Optional[str] = None,
        logo_url: Optional[str] = None,
    ) -> Result[TenantSummary]:
        changes = {
            "name": name,
            "primary_color": primary_color,
            "secondary_color": secondary_color,
            "logo_url": logo_url,
        }

        async with self.uow:
            decision = await AccessValidator(self.uow).check(
                identity, tenant_id, PermissionModule.SETTINGS, PermissionAction.EDIT
            )
            if not decision.allowed:
                return Return.err(denial_error(decision))

            tenant = await self.uow.tenants.get_by_id(tenant_id)

            changed = []
            for field in EDITABLE_FIELDS:
                value = changes[field]
                if value is not None and getattr(tenant, field) != value:
                    setattr(tenant, field, value)
                    changed.append(field)

            if changed:
                tenant = await self.uow.tenants.update(tenant)
                audit = AuditEvent(
                    tenant_id=tenant_id,
                    user_id=identity.user_id,
                    action="tenant_settings_updated",
                    event_metadata={"fields": changed},
                )
                await self.uow.audit_events.create(audit)
                await self.uow.commit()

            return Return.ok(TenantSummary.from_entity(tenant))
