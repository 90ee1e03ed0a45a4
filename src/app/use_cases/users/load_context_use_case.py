"""
Load User Context Use Case

Returns the caller's profile, tenant and effective permissions.
"""

from libs.result import Error, Result, Return
from src.app.services.identity import Identity
from src.app.services.permission_engine import PermissionEngine
from src.app.services.unit_of_work import UnitOfWork

from ..dtos import TenantSummary, UserProfileInfo
from .dtos import UserContextResponse


class LoadContextUseCase:
    """
    Use case for loading the current user's context.

    Business Rules:
    - Everything is read fresh; suspended tenants are reported, not hidden
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identity: Identity) -> Result[UserContextResponse]:
        async with self.uow:
            profile = await self.uow.users.get_by_id(identity.user_id)
            if profile is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            tenant = await self.uow.tenants.get_by_id(profile.tenant_id)
            if tenant is None:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            permissions = await PermissionEngine(self.uow).evaluate(
                profile.id, profile.team_id, role=profile.role
            )

            return Return.ok(
                UserContextResponse(
                    user=UserProfileInfo.from_entity(profile),
                    tenant=TenantSummary.from_entity(tenant),
                    permissions=permissions.as_map(),
                    source=identity.source,
                )
            )
