"""
Check Tenant Access Use Case
"""

from uuid import UUID

from libs.result import Result, Return
from src.app.services.tenant_resolver import TenantResolver
from src.app.services.unit_of_work import UnitOfWork

from ..dtos import TenantSummary, UserProfileInfo
from .dtos import CheckTenantAccessResponse


class CheckTenantAccessUseCase:
    """
    Use case for asking whether a user may enter a tenant.

    Business Rules:
    - Answers from a fresh store read; a just-suspended tenant is denied
    - Denials carry a message, never an error
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, tenant_id: UUID) -> Result[CheckTenantAccessResponse]:
        async with self.uow:
            resolver = TenantResolver(self.uow)
            if not await resolver.validate_user_tenant_access(user_id, tenant_id):
                tenant = await self.uow.tenants.get_by_id(tenant_id)
                profile = await self.uow.users.get_by_id_and_tenant(user_id, tenant_id)
                if tenant is not None and profile is not None:
                    message = "This organization is currently suspended"
                else:
                    message = "User not found or no access to this tenant"
                return Return.ok(CheckTenantAccessResponse(has_access=False, message=message))

            tenant = await self.uow.tenants.get_by_id(tenant_id)
            profile = await self.uow.users.get_by_id_and_tenant(user_id, tenant_id)

            return Return.ok(
                CheckTenantAccessResponse(
                    has_access=True,
                    message="Access granted",
                    user=UserProfileInfo.from_entity(profile),
                    tenant=TenantSummary.from_entity(tenant),
                )
            )
