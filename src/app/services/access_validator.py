"""
Access Validator

Single composition point for tenant-scoped authorization:
authentication, tenant isolation, tenant status, then permissions.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from libs.result import Error
from src.app.services.identity import Identity
from src.app.services.permission_engine import PermissionEngine
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import (
    PermissionAction,
    PermissionModule,
    TenantStatus,
    UserRole,
)

UNAUTHENTICATED = "UNAUTHENTICATED"
CROSS_TENANT = "CROSS_TENANT"
TENANT_NOT_FOUND = "TENANT_NOT_FOUND"
TENANT_SUSPENDED = "TENANT_SUSPENDED"
INSUFFICIENT_PERMISSION = "INSUFFICIENT_PERMISSION"

ROLE_RANK = {
    UserRole.SUPER_ADMIN: 2,
    UserRole.ADMIN: 1,
    UserRole.EMPLOYEE: 0,
    UserRole.SALES_PERSON: 0,
    UserRole.CUSTOMER: 0,
}


def role_rank(role: UserRole) -> int:
    return ROLE_RANK.get(role, 0)


def outranks(actor: UserRole, target: UserRole) -> bool:
    """Strictly higher in the role hierarchy"""
    return role_rank(actor) > role_rank(target)


class AccessDecision(BaseModel):
    allowed: bool
    reason: Optional[str] = None


class AccessValidator:
    """Decides whether an identity may perform module:action in a tenant"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.permission_engine = PermissionEngine(uow)

    async def check(
        self,
        identity: Optional[Identity],
        tenant_id: UUID,
        module: PermissionModule,
        action: PermissionAction,
    ) -> AccessDecision:
        if identity is None:
            return AccessDecision(allowed=False, reason=UNAUTHENTICATED)

        if identity.tenant_id != tenant_id and identity.role != UserRole.SUPER_ADMIN:
            return AccessDecision(allowed=False, reason=CROSS_TENANT)

        tenant = await self.uow.tenants.get_by_id(tenant_id)
        if tenant is None:
            return AccessDecision(allowed=False, reason=TENANT_NOT_FOUND)
        if tenant.status != TenantStatus.ACTIVE:
            return AccessDecision(allowed=False, reason=TENANT_SUSPENDED)

        allowed = await self.permission_engine.is_allowed(
            identity.user_id, identity.team_id, module, action, role=identity.role
        )
        if not allowed:
            return AccessDecision(allowed=False, reason=INSUFFICIENT_PERMISSION)

        return AccessDecision(allowed=True)


DENIAL_MESSAGES = {
    UNAUTHENTICATED: "Authentication required",
    CROSS_TENANT: "Access to another tenant is not allowed",
    TENANT_NOT_FOUND: "Tenant not found",
    TENANT_SUSPENDED: "This organization is currently suspended",
    INSUFFICIENT_PERMISSION: "You do not have permission to perform this action",
}


def denial_error(decision: AccessDecision) -> Error:
    """Error carrying the denial reason as its code"""
    reason = decision.reason or INSUFFICIENT_PERMISSION
    return Error(reason, DENIAL_MESSAGES.get(reason, "Access denied"))
