"""
Get Referral Link Use Case
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import TenantStatus

from .dtos import ReferralLinkResponse, ReferralUserInfo
from .eligibility import REFERRER_ROLES


class GetReferralLinkUseCase:
    """
    Use case for fetching the caller's shareable referral link.

    Business Rules:
    - Only CUSTOMER, SALES_PERSON and SUPER_ADMIN hold referral links
    - The caller's tenant must be ACTIVE
    - Link is {APP_BASE_URL}/{username}
    """

    def __init__(self, uow: UnitOfWork, app_base_url: str):
        self.uow = uow
        self.app_base_url = app_base_url.rstrip("/")

    async def execute(self, user_id: UUID) -> Result[ReferralLinkResponse]:
        async with self.uow:
            profile = await self.uow.users.get_by_id(user_id)
            if profile is None:
                return Return.err(Error("USER_NOT_FOUND", "User profile not found"))

            if profile.role not in REFERRER_ROLES:
                return Return.err(
                    Error(
                        "ROLE_NOT_ELIGIBLE",
                        "Only customers, sales people and super admins can create referral links",
                    )
                )

            tenant = await self.uow.tenants.get_by_id(profile.tenant_id)
            if tenant is None or tenant.status != TenantStatus.ACTIVE:
                return Return.err(Error("TENANT_INACTIVE", "Tenant is not active"))

            total = await self.uow.referrals.count_by_referrer(profile.id, tenant.id)

            return Return.ok(
                ReferralLinkResponse(
                    referral_link=f"{self.app_base_url}/{profile.username}",
                    user=ReferralUserInfo(
                        id=str(profile.id),
                        name=profile.display_name,
                        role=profile.role.value,
                        tenant_name=tenant.name,
                    ),
                    total_referrals=total,
                )
            )
