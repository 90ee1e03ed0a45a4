"""
Create Tenant Use Case

Provisions a tenant with its default team and first ADMIN.
"""

import re
from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.usernames import generate_unique_username
from src.domain.entities import AuditEvent, Team, Tenant, TenantPlan, UserProfile, UserRole

from ..dtos import TenantSummary, UserProfileInfo
from .dtos import CreateTenantResponse

SLUG_PATTERN = re.compile(r"^[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?$")
DEFAULT_TEAM_NAME = "Main Team"


def slugify(name: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", name.strip().lower())
    return slug.strip("-")[:63].strip("-")


class CreateTenantUseCase:
    """
    Use case for provisioning a new tenant.

    Business Rules:
    - Slug is generated from the name when absent and must be URL-safe
    - Slug and domain are unique across tenants
    - Tenant, default team and ADMIN profile are created atomically
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        name: str,
        admin_email: str,
        slug: Optional[str] = None,
        domain: Optional[str] = None,
        plan: str = TenantPlan.FREE.value,
        admin_first_name: Optional[str] = None,
        admin_last_name: Optional[str] = None,
    ) -> Result[CreateTenantResponse]:
        slug = (slug or slugify(name)).lower()
        if not SLUG_PATTERN.match(slug):
            return Return.err(
                Error("INVALID_SLUG", "Slug may only contain lowercase letters, digits and dashes")
            )

        try:
            tenant_plan = TenantPlan(plan.upper())
        except ValueError:
            return Return.err(Error("INVALID_PLAN", f"Invalid plan: {plan}"))

        domain = domain.strip().lower() if domain else None
        admin_email = admin_email.strip().lower()

        async with self.uow:
            if await self.uow.tenants.get_by_slug(slug) is not None:
                return Return.err(
                    Error("TENANT_ALREADY_EXISTS", f"A tenant with slug '{slug}' already exists")
                )
            if domain and await self.uow.tenants.get_by_domain(domain) is not None:
                return Return.err(
                    Error("TENANT_ALREADY_EXISTS", f"A tenant with domain '{domain}' already exists")
                )

            tenant = await self.uow.tenants.create(
                Tenant(name=name, slug=slug, domain=domain, plan=tenant_plan)
            )
            team = await self.uow.teams.create(Team(tenant_id=tenant.id, name=DEFAULT_TEAM_NAME))

            admin = UserProfile(
                email=admin_email,
                username=await generate_unique_username(self.uow, admin_email),
                first_name=admin_first_name,
                last_name=admin_last_name,
                tenant_id=tenant.id,
                team_id=team.id,
                role=UserRole.ADMIN,
                invite_verified=True,
            )
            admin = await self.uow.users.create(admin)

            audit = AuditEvent(
                tenant_id=tenant.id,
                user_id=None,  # System action
                action="tenant_created",
                event_metadata={"slug": slug, "admin_id": str(admin.id)},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(
                CreateTenantResponse(
                    tenant=TenantSummary.from_entity(tenant),
                    team_id=str(team.id),
                    admin=UserProfileInfo.from_entity(admin),
                )
            )
