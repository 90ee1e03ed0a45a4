"""
Invitation Use Case DTOs
"""

from typing import Optional

from pydantic import BaseModel

from ..dtos import TenantSummary, UserProfileInfo


class CreateInviteResponse(BaseModel):
    """Response for create invite use case"""

    invite_id: str
    email: str
    role: str
    token: str
    accept_url: str
    expires_at: str
    email_sent: bool


class ValidateInviteResponse(BaseModel):
    """Response for validate invite use case - always returned, never an error"""

    is_valid: bool
    is_expired: bool = False
    is_used: bool = False
    email: Optional[str] = None
    role: Optional[str] = None
    tenant: Optional[TenantSummary] = None
    invited_by_name: Optional[str] = None
    expires_at: Optional[str] = None
    message: str


class ConsumeInviteResponse(BaseModel):
    """Response for consume invite use case"""

    session_token: str
    user: UserProfileInfo
    tenant: TenantSummary
