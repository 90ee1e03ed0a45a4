from datetime import timedelta

from src.app.services.tokens import generate_token, hash_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import Session, UserProfile

DEFAULT_SESSION_TTL_DAYS = 30


async def open_session(
    uow: UnitOfWork, profile: UserProfile, ttl_days: int = DEFAULT_SESSION_TTL_DAYS
) -> str:
    """Persist a new session for the profile and return its raw token"""
    token = generate_token()
    session = Session(
        user_id=profile.id,
        tenant_id=profile.tenant_id,
        token_hash=hash_token(token),
        expires_at=utcnow() + timedelta(days=ttl_days),
    )
    await uow.sessions.create(session)
    return token
