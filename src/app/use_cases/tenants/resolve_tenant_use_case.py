"""
Resolve Tenant Use Case
"""

from libs.result import Error, Result, Return
from src.app.services.tenant_resolver import SLUG, TenantResolver
from src.app.services.unit_of_work import UnitOfWork

from ..dtos import TenantSummary


class ResolveTenantUseCase:
    """Public lookup of a tenant by slug, domain or id"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identifier: str, kind: str = SLUG) -> Result[TenantSummary]:
        async with self.uow:
            tenant = await TenantResolver(self.uow).resolve(identifier, kind)
            if tenant is None:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))
            return Return.ok(TenantSummary.from_entity(tenant))
