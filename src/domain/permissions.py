"""
Role-default permission matrix.

Each role maps to the explicit set of (module, action) pairs it holds before
any per-user override is applied. SUPER_ADMIN holds every pair.
"""

from typing import Dict, FrozenSet, Tuple

from src.domain.entities.enums import PermissionAction, PermissionModule, UserRole

PermissionKey = Tuple[PermissionModule, PermissionAction]

M = PermissionModule
A = PermissionAction


def _pairs(module: PermissionModule, *actions: PermissionAction) -> FrozenSet[PermissionKey]:
    return frozenset((module, action) for action in actions)


ALL_PERMISSIONS: FrozenSet[PermissionKey] = frozenset(
    (module, action) for module in PermissionModule for action in PermissionAction
)

ROLE_DEFAULT_PERMISSIONS: Dict[UserRole, FrozenSet[PermissionKey]] = {
    UserRole.SUPER_ADMIN: ALL_PERMISSIONS,
    UserRole.ADMIN: (
        _pairs(M.CUSTOMERS, A.VIEW, A.CREATE, A.EDIT, A.DELETE, A.ASSIGN, A.EXPORT)
        | _pairs(M.SALES, A.VIEW, A.CREATE, A.EDIT, A.DELETE, A.EXPORT)
        | _pairs(M.REFERRALS, A.VIEW, A.CREATE, A.EDIT, A.EXPORT)
        | _pairs(M.ANALYTICS, A.VIEW, A.EXPORT)
        | _pairs(M.TEAM_MANAGEMENT, A.VIEW, A.CREATE, A.EDIT, A.IMPERSONATE, A.MANAGE)
        | _pairs(M.SETTINGS, A.VIEW, A.EDIT)
        | _pairs(M.DASHBOARD, A.VIEW)
    ),
    UserRole.EMPLOYEE: (
        _pairs(M.CUSTOMERS, A.VIEW, A.CREATE, A.EDIT, A.ASSIGN)
        | _pairs(M.SALES, A.VIEW, A.CREATE, A.EDIT)
        | _pairs(M.REFERRALS, A.VIEW, A.CREATE)
        | _pairs(M.ANALYTICS, A.VIEW)
        | _pairs(M.TEAM_MANAGEMENT, A.VIEW, A.IMPERSONATE)
        | _pairs(M.DASHBOARD, A.VIEW)
    ),
    UserRole.SALES_PERSON: (
        _pairs(M.CUSTOMERS, A.VIEW, A.CREATE, A.EDIT)
        | _pairs(M.SALES, A.VIEW, A.CREATE, A.EDIT)
        | _pairs(M.REFERRALS, A.VIEW, A.CREATE)
        | _pairs(M.ANALYTICS, A.VIEW)
        | _pairs(M.DASHBOARD, A.VIEW)
    ),
    UserRole.CUSTOMER: (
        _pairs(M.REFERRALS, A.VIEW, A.CREATE)
        | _pairs(M.DASHBOARD, A.VIEW)
    ),
}


def role_default_permissions(role: UserRole) -> FrozenSet[PermissionKey]:
    return ROLE_DEFAULT_PERMISSIONS.get(role, frozenset())


def permission_key_str(key: PermissionKey) -> str:
    module, action = key
    return f"{module.value}:{action.value}"
