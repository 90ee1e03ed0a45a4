"""
Logout Use Case

Revokes the session behind the caller's token.
"""

from libs.result import Result, Return
from src.app.services.tokens import hash_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditEvent

from .dtos import LogoutResponse


class LogoutUseCase:
    """
    Use case for logging out.

    Business Rules:
    - Idempotent: unknown or already revoked tokens still succeed
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, session_token: str) -> Result[LogoutResponse]:
        async with self.uow:
            session = None
            if session_token:
                session = await self.uow.sessions.get_by_token_hash(hash_token(session_token))

            if session is None or session.revoked:
                return Return.ok(LogoutResponse(status="logged_out"))

            session.revoked = True
            session.revoked_at = utcnow()
            await self.uow.sessions.update(session)

            audit = AuditEvent(
                tenant_id=session.tenant_id,
                user_id=session.user_id,
                action="logout",
                event_metadata={"session_id": str(session.id)},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(LogoutResponse(status="logged_out"))
