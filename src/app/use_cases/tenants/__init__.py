"""
Tenant Management Use Cases

All tenant-related business logic.
"""

from .create_tenant_use_case import CreateTenantUseCase
from .dtos import CreateTenantResponse, SwitchTenantResponse, TenantStatusResponse
from .resolve_tenant_use_case import ResolveTenantUseCase
from .switch_tenant_use_case import SwitchTenantUseCase
from .update_tenant_settings_use_case import UpdateTenantSettingsUseCase

__all__ = [
    "CreateTenantUseCase",
    "ResolveTenantUseCase",
    "SwitchTenantUseCase",
    "UpdateTenantSettingsUseCase",
    "CreateTenantResponse",
    "SwitchTenantResponse",
    "TenantStatusResponse",
]
