"""
Referral eligibility rules shared by link, visit and signup flows.
"""

from src.domain.entities import Tenant, TenantStatus, UserProfile, UserRole

REFERRER_ROLES = (UserRole.CUSTOMER, UserRole.SALES_PERSON, UserRole.SUPER_ADMIN)


def can_refer(profile: UserProfile, tenant: Tenant) -> bool:
    return (
        profile.role in REFERRER_ROLES
        and tenant is not None
        and tenant.status == TenantStatus.ACTIVE
    )


def child_lineage(referrer: UserProfile) -> list:
    """Lineage of someone referred by referrer: ancestors root first, then referrer"""
    return list(referrer.lineage_path or []) + [str(referrer.id)]
