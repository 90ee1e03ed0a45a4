"""
Authentication Use Cases

Passwordless sign-in, logout and tenant access checks.
"""

from .check_tenant_access_use_case import CheckTenantAccessUseCase
from .dev_login_use_case import DevLoginUseCase
from .dtos import (
    CheckTenantAccessResponse,
    DevLoginResponse,
    LogoutResponse,
    SendMagicLinkResponse,
    VerifyMagicLinkResponse,
)
from .logout_use_case import LogoutUseCase
from .send_magic_link_use_case import SendMagicLinkUseCase
from .verify_magic_link_use_case import VerifyMagicLinkUseCase

__all__ = [
    "SendMagicLinkUseCase",
    "VerifyMagicLinkUseCase",
    "LogoutUseCase",
    "CheckTenantAccessUseCase",
    "DevLoginUseCase",
    "SendMagicLinkResponse",
    "VerifyMagicLinkResponse",
    "LogoutResponse",
    "CheckTenantAccessResponse",
    "DevLoginResponse",
]
