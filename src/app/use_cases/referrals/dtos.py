"""
Referral Use Case DTOs
"""

from typing import List, Optional

from pydantic import BaseModel

from ..dtos import UserProfileInfo


class ReferralUserInfo(BaseModel):
    id: str
    name: str
    role: str
    tenant_name: str


class ReferralLinkResponse(BaseModel):
    """Response for GET /referrals/my-link"""

    referral_link: str
    user: ReferralUserInfo
    total_referrals: int


class ReferralVisitResult(BaseModel):
    """Where a referral link visit is sent"""

    redirect_url: str
    is_valid: bool


class ReferralSignupResponse(BaseModel):
    user: UserProfileInfo
    referrer_username: str


class AcceptReferralResponse(BaseModel):
    referrer_id: str
    referee_id: str
    lineage_path: List[str]


class TierCount(BaseModel):
    level: int
    count: int


class ReferralTreeNode(BaseModel):
    user: UserProfileInfo
    joined_at: Optional[str] = None
    children: List["ReferralTreeNode"] = []


class ReferralTreeResponse(BaseModel):
    """Direct referees plus downline counts per tier"""

    user_id: str
    total_referrals: int
    total_downline: int
    levels: List[TierCount]
    tree: List[ReferralTreeNode]


ReferralTreeNode.model_rebuild()
