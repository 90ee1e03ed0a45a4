"""
Auth Use Case DTOs
"""

from typing import Optional

from pydantic import BaseModel

from ..dtos import TenantSummary, UserProfileInfo


class SendMagicLinkResponse(BaseModel):
    """Identical for every outcome so callers cannot discover accounts"""

    message: str


class VerifyMagicLinkResponse(BaseModel):
    """Response for verify magic link use case"""

    profile_exists: bool
    intent: str
    email: str
    callback_url: Optional[str] = None
    session_token: Optional[str] = None
    user: Optional[UserProfileInfo] = None
    tenant: Optional[TenantSummary] = None


class LogoutResponse(BaseModel):
    status: str


class CheckTenantAccessResponse(BaseModel):
    """Response for check tenant access use case"""

    has_access: bool
    message: str
    user: Optional[UserProfileInfo] = None
    tenant: Optional[TenantSummary] = None


class DevLoginResponse(BaseModel):
    """Claims to be signed into the development session cookie"""

    user_id: str
    email: str
    role: str
    tenant_id: str
    team_id: Optional[str] = None
    name: str
