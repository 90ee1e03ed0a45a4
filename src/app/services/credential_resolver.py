"""
Credential Resolver

Turns a request credential into an Identity. Two credential kinds exist:
opaque session tokens backed by the Session table, and signed development
session cookies that only resolve when development mode is enabled.
Unauthenticated is a normal outcome (None), never an exception.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional, Union

from pydantic import ValidationError

from src.api.utils.jwt import verify_dev_session_token
from src.app.services.identity import Identity
from src.app.services.tokens import hash_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionCredential:
    """Opaque session token (Bearer header or session cookie)"""

    token: str
    kind: str = "session"


@dataclass(frozen=True)
class DevSessionCredential:
    """Signed development session cookie"""

    token: str
    kind: str = "dev"


Credential = Union[SessionCredential, DevSessionCredential]


class ICredentialSource(ABC):
    """A single way of turning a credential into an identity"""

    @abstractmethod
    async def resolve(self, credential: Credential) -> Optional[Identity]:
        pass


class SessionCredentialSource(ICredentialSource):
    """Resolves opaque session tokens against the persistent session store"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def resolve(self, credential: Credential) -> Optional[Identity]:
        if not credential.token:
            return None

        async with self.uow:
            session = await self.uow.sessions.get_by_token_hash(hash_token(credential.token))
            if session is None or session.revoked or session.expires_at <= utcnow():
                return None

            profile = await self.uow.users.get_by_id(session.user_id)
            if profile is None:
                return None

            return Identity(
                user_id=profile.id,
                email=profile.email,
                role=profile.role,
                tenant_id=profile.tenant_id,
                team_id=profile.team_id,
                source="session",
            )


class DevSessionCredentialSource(ICredentialSource):
    """Resolves signed dev cookies; inert unless explicitly enabled"""

    def __init__(self, enabled: bool, secret: str):
        self.enabled = enabled
        self.secret = secret

    async def resolve(self, credential: Credential) -> Optional[Identity]:
        if not self.enabled or not credential.token:
            return None

        payload = verify_dev_session_token(credential.token, self.secret)
        if payload is None:
            return None

        try:
            return Identity(
                user_id=payload.get("user_id"),
                email=payload.get("email"),
                role=payload.get("role"),
                tenant_id=payload.get("tenant_id"),
                team_id=payload.get("team_id"),
                source="dev",
            )
        except ValidationError:
            logger.warning("Rejected malformed dev session payload")
            return None


class CredentialResolver:
    """Selects the credential source by credential kind"""

    def __init__(self, sources: Dict[str, ICredentialSource]):
        self.sources = sources

    @classmethod
    def from_config(cls, config, uow: UnitOfWork) -> "CredentialResolver":
        return cls(
            {
                "session": SessionCredentialSource(uow),
                "dev": DevSessionCredentialSource(
                    enabled=bool(config.DEV_MODE), secret=config.DEV_SESSION_SECRET
                ),
            }
        )

    async def resolve(self, credential: Optional[Credential]) -> Optional[Identity]:
        if credential is None:
            return None
        source = self.sources.get(credential.kind)
        if source is None:
            return None
        return await source.resolve(credential)

    async def resolve_first(self, *credentials: Optional[Credential]) -> Optional[Identity]:
        """Try credentials in order, returning the first identity found"""
        for credential in credentials:
            identity = await self.resolve(credential)
            if identity is not None:
                return identity
        return None
