"""
List Impersonation Targets Use Case
"""

from libs.result import Result, Return
from src.app.services.access_validator import AccessValidator, denial_error
from src.app.services.identity import Identity
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import PermissionAction, PermissionModule, UserRole

from ..dtos import UserProfileInfo
from .dtos import ImpersonationTargetsResponse


class ListImpersonationTargetsUseCase:
    """
    Use case for listing users the caller may impersonate.

    Business Rules:
    - Requires team_management:impersonate in the caller's tenant
    - Excludes the caller and every SUPER_ADMIN
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identity: Identity) -> Result[ImpersonationTargetsResponse]:
        async with self.uow:
            decision = await AccessValidator(self.uow).check(
                identity,
                identity.tenant_id,
                PermissionModule.TEAM_MANAGEMENT,
                PermissionAction.IMPERSONATE,
            )
            if not decision.allowed:
                return Return.err(denial_error(decision))

            profiles = await self.uow.users.get_by_tenant_id(identity.tenant_id)
            targets = [
                UserProfileInfo.from_entity(p)
                for p in profiles
                if p.id != identity.user_id and p.role != UserRole.SUPER_ADMIN
            ]

            return Return.ok(ImpersonationTargetsResponse(users=targets))
