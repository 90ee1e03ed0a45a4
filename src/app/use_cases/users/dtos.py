"""
User Use Case DTOs
"""

from typing import Dict, List

from pydantic import BaseModel

from ..dtos import TenantSummary, UserProfileInfo


class UserContextResponse(BaseModel):
    """Response for GET /me"""

    user: UserProfileInfo
    tenant: TenantSummary
    permissions: Dict[str, bool]
    source: str


class ChangeRoleResponse(BaseModel):
    user_id: str
    old_role: str
    new_role: str


class ImpersonationTargetsResponse(BaseModel):
    users: List[UserProfileInfo]
