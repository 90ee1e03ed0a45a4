"""
User Management Use Cases

All user-related business logic.
"""

from .change_role_use_case import ChangeRoleUseCase
from .dtos import ChangeRoleResponse, ImpersonationTargetsResponse, UserContextResponse
from .list_impersonation_targets_use_case import ListImpersonationTargetsUseCase
from .load_context_use_case import LoadContextUseCase

__all__ = [
    "LoadContextUseCase",
    "ChangeRoleUseCase",
    "ListImpersonationTargetsUseCase",
    "UserContextResponse",
    "ChangeRoleResponse",
    "ImpersonationTargetsResponse",
]
