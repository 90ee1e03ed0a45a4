"""
Referral IAM Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    MagicLinkIntent,
    PermissionAction,
    PermissionModule,
    PermissionPolarity,
    TenantPlan,
    TenantStatus,
    UserRole,
)

# Export all entities
from .tenant import Tenant
from .team import Team
from .user_profile import UserProfile
from .invite_token import InviteToken
from .magic_link_token import MagicLinkToken
from .session import Session
from .referral_relationship import ReferralRelationship
from .user_permission import UserPermission
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "MagicLinkIntent",
    "PermissionAction",
    "PermissionModule",
    "PermissionPolarity",
    "TenantPlan",
    "TenantStatus",
    "UserRole",
    # Entities
    "Tenant",
    "Team",
    "UserProfile",
    "InviteToken",
    "MagicLinkToken",
    "Session",
    "ReferralRelationship",
    "UserPermission",
    "AuditEvent",
]
