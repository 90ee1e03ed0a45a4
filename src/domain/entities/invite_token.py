"""
InviteToken Entity

Single-use invitations to join a tenant.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import UserRole


class InviteToken(SQLModel, table=True):
    """
    InviteToken entity - single-use invitation.

    Business Rules:
    - Created by ADMIN/SUPER_ADMIN, expires after 7 days
    - Only the SHA-256 hash of the token is stored
    - used only ever goes false -> true, through an atomic conditional update
    - Valid iff not used, not expired and the inviter's tenant is not suspended
    """

    __tablename__ = "invite_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    token_hash: str = Field(unique=True, index=True, max_length=64)  # SHA-256 hex
    email: str = Field(max_length=255, index=True)
    role: UserRole = Field(nullable=False)

    invited_by: UUID = Field(foreign_key="user_profiles.id", nullable=False)
    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)
    team_id: Optional[UUID] = Field(default=None, foreign_key="teams.id")

    used: bool = Field(default=False)
    used_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_invite_token_expires_at", "expires_at"),
        Index("idx_invite_token_tenant_email", "tenant_id", "email"),
    )
