"""
Tenant Use Case DTOs
"""

from typing import Optional

from pydantic import BaseModel

from ..dtos import TenantSummary, UserProfileInfo


class CreateTenantResponse(BaseModel):
    """Response for tenant provisioning"""

    tenant: TenantSummary
    team_id: str
    admin: UserProfileInfo


class SwitchTenantResponse(BaseModel):
    """Response for switch tenant use case"""

    session_token: str
    user: UserProfileInfo
    tenant: TenantSummary


class TenantStatusResponse(BaseModel):
    """Response for suspend/restore"""

    tenant_id: str
    status: str
    sessions_revoked: Optional[int] = None
