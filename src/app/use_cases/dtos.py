"""
Shared DTOs

Read models reused by several use case packages.
"""

from typing import List, Optional

from pydantic import BaseModel

from src.domain.entities import Tenant, UserProfile


class TenantSummary(BaseModel):
    """Public view of a tenant"""

    id: str
    name: str
    slug: str
    domain: Optional[str] = None
    status: str
    plan: str
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    logo_url: Optional[str] = None

    @classmethod
    def from_entity(cls, tenant: Tenant) -> "TenantSummary":
        return cls(
            id=str(tenant.id),
            name=tenant.name,
            slug=tenant.slug,
            domain=tenant.domain,
            status=tenant.status.value,
            plan=tenant.plan.value,
            primary_color=tenant.primary_color,
            secondary_color=tenant.secondary_color,
            logo_url=tenant.logo_url,
        )


class UserProfileInfo(BaseModel):
    """Public view of a user profile"""

    id: str
    email: str
    username: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: str
    tenant_id: str
    team_id: Optional[str] = None
    lineage_path: List[str] = []

    @classmethod
    def from_entity(cls, profile: UserProfile) -> "UserProfileInfo":
        return cls(
            id=str(profile.id),
            email=profile.email,
            username=profile.username,
            first_name=profile.first_name,
            last_name=profile.last_name,
            role=profile.role.value,
            tenant_id=str(profile.tenant_id),
            team_id=str(profile.team_id) if profile.team_id else None,
            lineage_path=list(profile.lineage_path or []),
        )
