"""
Validate Invite Use Case

Read-only inspection of an invitation token for the join page.
"""

from libs.result import Result, Return
from src.app.services.tokens import hash_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import TenantStatus

from ..dtos import TenantSummary
from .dtos import ValidateInviteResponse


class ValidateInviteUseCase:
    """
    Use case for validating an invitation token.

    Business Rules:
    - Never mutates anything
    - Never fails: every outcome is described by the flags
    - Valid iff not used, not expired and the tenant is not suspended
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str) -> Result[ValidateInviteResponse]:
        async with self.uow:
            invite = None
            if token:
                invite = await self.uow.invite_tokens.get_by_token_hash(hash_token(token))

            if invite is None:
                return Return.ok(
                    ValidateInviteResponse(is_valid=False, message="Invalid invitation token")
                )

            tenant = await self.uow.tenants.get_by_id(invite.tenant_id)
            inviter = await self.uow.users.get_by_id(invite.invited_by)

            is_used = invite.used
            is_expired = invite.expires_at <= utcnow()
            is_suspended = tenant is None or tenant.status == TenantStatus.SUSPENDED

            if is_used:
                message = "This invitation has already been used"
            elif is_expired:
                message = "This invitation has expired"
            elif is_suspended:
                message = "This organization is currently suspended"
            else:
                message = "Invitation is valid"

            return Return.ok(
                ValidateInviteResponse(
                    is_valid=not (is_used or is_expired or is_suspended),
                    is_expired=is_expired,
                    is_used=is_used,
                    email=invite.email,
                    role=invite.role.value,
                    tenant=TenantSummary.from_entity(tenant) if tenant else None,
                    invited_by_name=inviter.display_name if inviter else None,
                    expires_at=invite.expires_at.isoformat(),
                    message=message,
                )
            )
