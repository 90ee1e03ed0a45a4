"""
Referral Signup Use Case

Creates a CUSTOMER profile under a referrer.
"""

from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.usernames import generate_unique_username
from src.domain.entities import AuditEvent, ReferralRelationship, UserProfile, UserRole

from ..dtos import UserProfileInfo
from .dtos import ReferralSignupResponse
from .eligibility import can_refer, child_lineage


class ReferralSignupUseCase:
    """
    Use case for signing up through a referral link.

    Business Rules:
    - Referrer must be eligible and on an ACTIVE tenant
    - New profile is a CUSTOMER in the referrer's tenant and its default team
    - lineage_path = referrer lineage + [referrer id]
    - Profile and relationship are created in one transaction
    - No session is opened; the new user signs in with a magic link
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        ref: str,
        email: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> Result[ReferralSignupResponse]:
        email = email.strip().lower()

        async with self.uow:
            referrer = await self.uow.users.get_by_username(ref) if ref else None
            tenant = None
            if referrer is not None:
                tenant = await self.uow.tenants.get_by_id(referrer.tenant_id)
            if referrer is None or not can_refer(referrer, tenant):
                return Return.err(Error("INVALID_REFERRAL", "Invalid referral link"))

            existing = await self.uow.users.get_by_email_and_tenant(email, tenant.id)
            if existing is not None:
                return Return.err(
                    Error("USER_ALREADY_EXISTS", "A user with this email already exists")
                )

            default_team = await self.uow.teams.get_default_by_tenant_id(tenant.id)

            profile = UserProfile(
                email=email,
                username=await generate_unique_username(self.uow, email),
                first_name=first_name,
                last_name=last_name,
                tenant_id=tenant.id,
                team_id=default_team.id if default_team else None,
                role=UserRole.CUSTOMER,
                lineage_path=child_lineage(referrer),
            )
            profile = await self.uow.users.create(profile)

            await self.uow.referrals.create(
                ReferralRelationship(
                    referrer_id=referrer.id, referee_id=profile.id, tenant_id=tenant.id
                )
            )

            audit = AuditEvent(
                tenant_id=tenant.id,
                user_id=profile.id,
                action="referral_recorded",
                event_metadata={"referrer_id": str(referrer.id), "via": "signup"},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(
                ReferralSignupResponse(
                    user=UserProfileInfo.from_entity(profile),
                    referrer_username=referrer.username,
                )
            )
