"""
Dev Login Use Case

Looks up a profile to sign into a development session cookie. Routes only
expose this when development mode is on.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork

from .dtos import DevLoginResponse


class DevLoginUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[DevLoginResponse]:
        async with self.uow:
            profile = await self.uow.users.get_by_id(user_id)
            if profile is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            return Return.ok(
                DevLoginResponse(
                    user_id=str(profile.id),
                    email=profile.email,
                    role=profile.role.value,
                    tenant_id=str(profile.tenant_id),
                    team_id=str(profile.team_id) if profile.team_id else None,
                    name=profile.display_name,
                )
            )
