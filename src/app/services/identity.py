"""
Identity

The authenticated (user, role, tenant) tuple every authorization check runs on.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import UserRole


class Identity(BaseModel):
    """Resolved caller identity"""

    user_id: UUID
    email: str
    role: UserRole
    tenant_id: UUID
    team_id: Optional[UUID] = None
    source: str = "session"  # "session" or "dev"

    @property
    def is_super_admin(self) -> bool:
        return self.role == UserRole.SUPER_ADMIN
