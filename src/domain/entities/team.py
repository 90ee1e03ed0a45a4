"""
Team Entity

Optional grouping of users inside a tenant.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from ..base import utcnow


class Team(SQLModel, table=True):
    """Team entity - every tenant gets a default team at provisioning"""

    __tablename__ = "teams"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)
    name: str = Field(max_length=255)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
