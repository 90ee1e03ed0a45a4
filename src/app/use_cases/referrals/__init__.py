"""
Referral Use Cases

Referral links, link visits, referral signup and downline reads.
"""

from .accept_referral_use_case import AcceptReferralUseCase
from .dtos import (
    AcceptReferralResponse,
    ReferralLinkResponse,
    ReferralSignupResponse,
    ReferralTreeResponse,
    ReferralVisitResult,
)
from .get_referral_link_use_case import GetReferralLinkUseCase
from .get_referral_tree_use_case import GetReferralTreeUseCase
from .referral_signup_use_case import ReferralSignupUseCase
from .resolve_referral_visit_use_case import INVALID_REFERRAL_URL, ResolveReferralVisitUseCase

__all__ = [
    "GetReferralLinkUseCase",
    "ResolveReferralVisitUseCase",
    "ReferralSignupUseCase",
    "AcceptReferralUseCase",
    "GetReferralTreeUseCase",
    "ReferralLinkResponse",
    "ReferralVisitResult",
    "ReferralSignupResponse",
    "AcceptReferralResponse",
    "ReferralTreeResponse",
    "INVALID_REFERRAL_URL",
]
