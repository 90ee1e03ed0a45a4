"""
Create Invite Use Case

Issues a single-use invitation into the inviter's tenant and mails it.
"""

import logging
from datetime import timedelta
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.email_sender import IEmailSender
from src.app.services.email_templates import invitation_email
from src.app.services.tokens import generate_token, hash_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditEvent, InviteToken, TenantStatus, UserRole

from .dtos import CreateInviteResponse

logger = logging.getLogger(__name__)

INVITER_ROLES = (UserRole.ADMIN, UserRole.SUPER_ADMIN)


class CreateInviteUseCase:
    """
    Use case for inviting a person into the inviter's tenant.

    Business Rules:
    - Only ADMIN/SUPER_ADMIN can invite
    - Only SUPER_ADMIN can invite a SUPER_ADMIN
    - Inviter's tenant must be active
    - Team, when given, must belong to the inviter's tenant
    - No existing profile with the email in the tenant
    - No live pending invite for the email in the tenant
    - Expires after INVITE_TTL_DAYS (7); only the token hash is stored
    - Email is sent after commit; a delivery failure leaves the invite valid
    """

    def __init__(
        self,
        uow: UnitOfWork,
        email_sender: IEmailSender,
        app_base_url: str,
        ttl_days: int = 7,
    ):
        self.uow = uow
        self.email_sender = email_sender
        self.app_base_url = app_base_url.rstrip("/")
        self.ttl_days = ttl_days

    async def execute(
        self,
        inviter_id: UUID,
        email: str,
        role: str,
        team_id: Optional[UUID] = None,
    ) -> Result[CreateInviteResponse]:
        """
        Execute create invite use case.

        Args:
            inviter_id: Profile ID of the person sending the invite
            email: Address to invite
            role: Role the invitee will receive
            team_id: Optional team inside the inviter's tenant

        Returns:
            Result with CreateInviteResponse DTO, or Error
        """
        try:
            invite_role = UserRole(role)
        except ValueError:
            return Return.err(
                Error("INVALID_ROLE", f"Invalid role: {role}")
            )

        email = email.strip().lower()

        async with self.uow:
            inviter = await self.uow.users.get_by_id(inviter_id)
            if inviter is None:
                return Return.err(Error("USER_NOT_FOUND", "Inviter profile not found"))

            if inviter.role not in INVITER_ROLES:
                return Return.err(
                    Error("INSUFFICIENT_ROLE", "Only admins can send invitations")
                )

            if invite_role == UserRole.SUPER_ADMIN and inviter.role != UserRole.SUPER_ADMIN:
                return Return.err(
                    Error("INSUFFICIENT_ROLE", "Only super admins can invite super admins")
                )

            tenant = await self.uow.tenants.get_by_id(inviter.tenant_id)
            if tenant is None or tenant.status != TenantStatus.ACTIVE:
                return Return.err(
                    Error("TENANT_SUSPENDED", "This organization is currently suspended")
                )

            if team_id is not None:
                team = await self.uow.teams.get_by_id(team_id)
                if team is None or team.tenant_id != tenant.id:
                    return Return.err(Error("TEAM_NOT_FOUND", "Team not found"))

            existing = await self.uow.users.get_by_email_and_tenant(email, tenant.id)
            if existing is not None:
                return Return.err(
                    Error("USER_ALREADY_EXISTS", "A user with this email already exists")
                )

            now = utcnow()
            pending = await self.uow.invite_tokens.get_pending_by_tenant_and_email(
                tenant.id, email, now
            )
            if pending is not None:
                return Return.err(
                    Error(
                        "INVITE_ALREADY_EXISTS",
                        "A pending invitation already exists for this email",
                    )
                )

            token = generate_token()
            invite = InviteToken(
                token_hash=hash_token(token),
                email=email,
                role=invite_role,
                invited_by=inviter.id,
                tenant_id=tenant.id,
                team_id=team_id,
                expires_at=now + timedelta(days=self.ttl_days),
            )
            invite = await self.uow.invite_tokens.create(invite)

            audit = AuditEvent(
                tenant_id=tenant.id,
                user_id=inviter.id,
                action="invite_sent",
                event_metadata={
                    "invite_id": str(invite.id),
                    "invited_email": email,
                    "role": invite_role.value,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            accept_url = f"{self.app_base_url}/auth/join?token={token}"
            subject, body = invitation_email(
                tenant.name, inviter.display_name, invite_role.value, accept_url
            )
            email_sent = await self.email_sender.send(email, subject, body)
            if not email_sent:
                logger.warning(f"Invitation {invite.id} created but email delivery failed")

            return Return.ok(
                CreateInviteResponse(
                    invite_id=str(invite.id),
                    email=email,
                    role=invite_role.value,
                    token=token,
                    accept_url=accept_url,
                    expires_at=invite.expires_at.isoformat(),
                    email_sent=email_sent,
                )
            )
