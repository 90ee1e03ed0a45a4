"""
ReferralRelationship Entity

Direct referrer -> referee edge inside a tenant.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow


class ReferralRelationship(SQLModel, table=True):
    """
    ReferralRelationship entity.

    Business Rules:
    - Referrer and referee belong to the same tenant
    - No self-referral
    - A referee has at most one referrer; deeper tiers come from lineage_path
    """

    __tablename__ = "referral_relationships"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    referrer_id: UUID = Field(foreign_key="user_profiles.id", nullable=False, index=True)
    referee_id: UUID = Field(foreign_key="user_profiles.id", nullable=False, unique=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_referral_referrer_referee", "referrer_id", "referee_id", unique=True),
    )
