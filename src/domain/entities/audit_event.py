"""
AuditEvent Entity

Immutable log of security-relevant mutations.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from ..base import utcnow


class AuditEvent(SQLModel, table=True):
    """
    AuditEvent entity - append-only.

    Business Rules:
    - Never updated or deleted
    - tenant_id/user_id nullable for system actions
    - Metadata never contains raw tokens
    """

    __tablename__ = "audit_events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    tenant_id: Optional[UUID] = Field(default=None, index=True)
    user_id: Optional[UUID] = Field(default=None, index=True)

    action: str = Field(max_length=100)  # e.g. "invite_sent", "role_changed"
    event_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_audit_created_at", "created_at"),
        Index("idx_audit_tenant_action", "tenant_id", "action"),
    )
