"""
Session Entity

Persistent store behind opaque session credentials.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow


class Session(SQLModel, table=True):
    """
    Session entity - backs an opaque session token.

    Business Rules:
    - Token is stored as SHA-256 hash only
    - Revoked or expired sessions resolve to "not authenticated"
    - Expires after 30 days
    """

    __tablename__ = "sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="user_profiles.id", nullable=False, index=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)

    token_hash: str = Field(unique=True, index=True, max_length=64)
    revoked: bool = Field(default=False)
    revoked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_session_expires_at", "expires_at"),
        Index("idx_session_user_tenant", "user_id", "tenant_id"),
    )
