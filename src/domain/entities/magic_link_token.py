"""
MagicLinkToken Entity

Short-lived passwordless sign-in links.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import MagicLinkIntent


class MagicLinkToken(SQLModel, table=True):
    """
    MagicLinkToken entity - passwordless sign-in link.

    Business Rules:
    - Expires at most 15 minutes after issue
    - Token is SHA-256 hash of a secure random string
    - Single-use, consumed with the same atomic discipline as invites
    """

    __tablename__ = "magic_link_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    token_hash: str = Field(unique=True, index=True, max_length=64)
    email: str = Field(max_length=255, index=True)
    intent: MagicLinkIntent = Field(default=MagicLinkIntent.SIGNIN)

    tenant_id: Optional[UUID] = Field(default=None, foreign_key="tenants.id")
    callback_url: Optional[str] = Field(default=None, max_length=2048)

    used: bool = Field(default=False)
    used_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_magic_link_email_expires", "email", "expires_at"),)
