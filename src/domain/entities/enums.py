"""
Referral IAM Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """User role within its tenant"""

    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    EMPLOYEE = "EMPLOYEE"
    SALES_PERSON = "SALES_PERSON"
    CUSTOMER = "CUSTOMER"


class TenantStatus(str, Enum):
    """Tenant status"""

    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"


class TenantPlan(str, Enum):
    """Subscription plan of a tenant"""

    FREE = "FREE"
    STARTER = "STARTER"
    PROFESSIONAL = "PROFESSIONAL"
    ENTERPRISE = "ENTERPRISE"


class MagicLinkIntent(str, Enum):
    """Why a magic link was requested"""

    SIGNIN = "SIGNIN"
    SIGNUP = "SIGNUP"
    INVITE = "INVITE"


class PermissionModule(str, Enum):
    """Functional areas guarded by permissions"""

    CUSTOMERS = "customers"
    SALES = "sales"
    REFERRALS = "referrals"
    ANALYTICS = "analytics"
    TEAM_MANAGEMENT = "team_management"
    BILLING = "billing"
    SETTINGS = "settings"
    DASHBOARD = "dashboard"


class PermissionAction(str, Enum):
    """Actions that can be performed on a module"""

    VIEW = "view"
    CREATE = "create"
    EDIT = "edit"
    DELETE = "delete"
    ASSIGN = "assign"
    EXPORT = "export"
    IMPERSONATE = "impersonate"
    MANAGE = "manage"


class PermissionPolarity(str, Enum):
    """Whether an override grants or denies"""

    GRANTED = "GRANTED"
    DENIED = "DENIED"
