"""
Resolve Referral Visit Use Case

Decides where a visit to /{username} lands.
"""

from typing import Optional
from urllib.parse import urlencode

from libs.result import Result, Return
from src.app.services.identity import Identity
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import UserRole

from .dtos import ReferralVisitResult
from .eligibility import can_refer

INVALID_REFERRAL_URL = "/?error=invalid-referral-link"


class ResolveReferralVisitUseCase:
    """
    Use case for resolving a referral link visit.

    Business Rules:
    - Username lookup is case-insensitive
    - Unknown and ineligible referrers look the same to the visitor
    - Signed-in visitors go to the dashboard with referral context (not persisted)
    - Anonymous visitors go to signup as a prospective CUSTOMER
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, username: str, identity: Optional[Identity] = None
    ) -> Result[ReferralVisitResult]:
        async with self.uow:
            referrer = await self.uow.users.get_by_username(username) if username else None
            tenant = None
            if referrer is not None:
                tenant = await self.uow.tenants.get_by_id(referrer.tenant_id)

            if referrer is None or not can_refer(referrer, tenant):
                return Return.ok(
                    ReferralVisitResult(redirect_url=INVALID_REFERRAL_URL, is_valid=False)
                )

            handle = referrer.username
            if identity is not None:
                query = urlencode({"ref": handle, "referrer": handle, "type": "referral"})
                return Return.ok(
                    ReferralVisitResult(redirect_url=f"/dashboard?{query}", is_valid=True)
                )

            query = urlencode(
                {
                    "ref": handle,
                    "type": "referral",
                    "target_role": UserRole.CUSTOMER.value,
                    "referrer_role": referrer.role.value,
                }
            )
            return Return.ok(ReferralVisitResult(redirect_url=f"/signup?{query}", is_valid=True))
