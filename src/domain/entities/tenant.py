"""
Tenant Entity

Represents an isolated organizational account.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import TenantPlan, TenantStatus


class Tenant(SQLModel, table=True):
    """
    Tenant entity - isolated organizational account.

    Business Rules:
    - Slug is unique and URL-safe, used for subdomain resolution
    - Domain is optional and unique when set
    - Never hard-deleted; suspension blocks all tenant-scoped access
    """

    __tablename__ = "tenants"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    slug: str = Field(unique=True, index=True, max_length=63)
    domain: Optional[str] = Field(default=None, unique=True, max_length=255)

    status: TenantStatus = Field(default=TenantStatus.ACTIVE)
    plan: TenantPlan = Field(default=TenantPlan.FREE)

    # Branding
    primary_color: Optional[str] = Field(default=None, max_length=16)
    secondary_color: Optional[str] = Field(default=None, max_length=16)
    logo_url: Optional[str] = Field(default=None, max_length=1024)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_tenant_status", "status"),)
