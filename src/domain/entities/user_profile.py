"""
UserProfile Entity

A person inside exactly one tenant.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import UserRole


class UserProfile(SQLModel, table=True):
    """
    UserProfile entity - a person belonging to exactly one tenant.

    Business Rules:
    - Email is unique within the tenant (stored lowercase)
    - Username is globally unique, it is the public referral handle
    - SUPER_ADMIN still has a tenant_id (the reserved system tenant)
    - lineage_path lists ancestor referrer ids, root first; it is append-only
    - Role is changed only by ADMIN/SUPER_ADMIN
    - Profiles are never deleted, so referral rows are never orphaned
    """

    __tablename__ = "user_profiles"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    external_id: Optional[str] = Field(default=None, max_length=255, index=True)

    email: str = Field(max_length=255, index=True)
    username: str = Field(unique=True, index=True, max_length=64)
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)

    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)
    team_id: Optional[UUID] = Field(default=None, foreign_key="teams.id")

    role: UserRole = Field(default=UserRole.CUSTOMER)

    referral_code: Optional[str] = Field(default=None, unique=True, max_length=64)
    lineage_path: List[str] = Field(default_factory=list, sa_column=Column(JSON))

    invite_verified: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_user_profile_tenant_email", "tenant_id", "email", unique=True),
        Index("idx_user_profile_role", "role"),
    )

    @property
    def display_name(self) -> str:
        name = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return name or self.username
