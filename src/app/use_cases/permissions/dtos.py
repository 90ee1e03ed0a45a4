"""
Permission Use Case DTOs
"""

from typing import Dict, List

from pydantic import BaseModel


class UserPermissionsResponse(BaseModel):
    """Permission sets of a (user, team) plus the flat effective map"""

    user_id: str
    team_id: str
    role: str
    role_permissions: List[str]
    custom_permissions: List[str]
    denied_permissions: List[str]
    permissions: Dict[str, bool]


class PermissionOverrideResponse(BaseModel):
    user_id: str
    team_id: str
    permission: str
    polarity: str
