"""Admin use cases for system administration operations."""

from ..tenants.create_tenant_use_case import CreateTenantUseCase
from .restore_tenant_use_case import RestoreTenantUseCase
from .suspend_tenant_use_case import SuspendTenantUseCase

__all__ = [
    "CreateTenantUseCase",
    "SuspendTenantUseCase",
    "RestoreTenantUseCase",
]
