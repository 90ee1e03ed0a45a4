"""
Tenant Resolver

Maps request hints (slug, host, id) onto a Tenant and answers whether a user
may act inside a tenant. Every call reads the store; nothing is cached, so a
suspension is visible to the very next request.
"""

from typing import Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Tenant, TenantStatus

SLUG = "slug"
DOMAIN = "domain"
ID = "id"


def slug_from_host(host: str) -> str:
    """
    Reduce a host to its leading label.

    "acme.example.com:8080" -> "acme". Multi-label custom domains are not
    distinguished from subdomains.
    """
    host = host.strip().lower()
    host = host.split(":", 1)[0]
    return host.split(".", 1)[0]


class TenantResolver:
    """Resolves tenants and validates tenant membership"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def resolve(self, identifier: str, kind: str = SLUG) -> Optional[Tenant]:
        """
        Resolve a tenant by slug, domain or id.

        Returns:
            Tenant, or None when nothing matches
        """
        if not identifier:
            return None

        if kind == ID:
            try:
                tenant_id = UUID(str(identifier))
            except ValueError:
                return None
            return await self.uow.tenants.get_by_id(tenant_id)

        if kind == DOMAIN:
            identifier = slug_from_host(identifier)

        return await self.uow.tenants.get_by_slug(identifier.lower())

    async def validate_user_tenant_access(self, user_id: UUID, tenant_id: UUID) -> bool:
        """True iff the user belongs to the tenant and the tenant is not suspended"""
        profile = await self.uow.users.get_by_id_and_tenant(user_id, tenant_id)
        if profile is None:
            return False

        tenant = await self.uow.tenants.get_by_id(tenant_id)
        if tenant is None:
            return False

        return tenant.status != TenantStatus.SUSPENDED
