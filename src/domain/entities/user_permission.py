"""
UserPermission Entity

Per (user, team) grant or denial layered over role defaults.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import PermissionAction, PermissionModule, PermissionPolarity


class UserPermission(SQLModel, table=True):
    """
    UserPermission entity.

    Business Rules:
    - Denials override role defaults and grants
    - Grants override absence
    - One record per (user, team, module, action)
    """

    __tablename__ = "user_permissions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="user_profiles.id", nullable=False, index=True)
    team_id: Optional[UUID] = Field(default=None, foreign_key="teams.id")

    module: PermissionModule = Field(nullable=False)
    action: PermissionAction = Field(nullable=False)
    polarity: PermissionPolarity = Field(nullable=False)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index(
            "idx_user_permission_unique",
            "user_id",
            "team_id",
            "module",
            "action",
            unique=True,
        ),
    )
