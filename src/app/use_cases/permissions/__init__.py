"""
Permission Use Cases

Reading and overriding per-team permissions.
"""

from .clear_permission_override_use_case import ClearPermissionOverrideUseCase
from .dtos import PermissionOverrideResponse, UserPermissionsResponse
from .get_user_permissions_use_case import GetUserPermissionsUseCase
from .set_permission_override_use_case import SetPermissionOverrideUseCase

__all__ = [
    "GetUserPermissionsUseCase",
    "SetPermissionOverrideUseCase",
    "ClearPermissionOverrideUseCase",
    "UserPermissionsResponse",
    "PermissionOverrideResponse",
]
