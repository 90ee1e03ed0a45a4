from typing import List, Optional

from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from libs.result import Error
from src.adapter.services.email_sender import build_email_sender
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.app.services.credential_resolver import (
    Credential,
    CredentialResolver,
    DevSessionCredential,
    SessionCredential,
)
from src.app.services.email_sender import IEmailSender
from src.app.services.identity import Identity

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_config(request: Request):
    """ApplicationConfig the app was created with"""
    return request.app.state.config


def get_email_sender(config=Depends(get_config)) -> IEmailSender:
    return build_email_sender(config)


def get_session_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    config=Depends(get_config),
) -> Optional[str]:
    """Opaque session token from the Bearer header, else from the session cookie"""
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(config.SESSION_COOKIE_NAME)


def extract_credentials(
    request: Request,
    session_token: Optional[str] = Depends(get_session_token),
    config=Depends(get_config),
) -> List[Credential]:
    """Every credential the request carries, session first"""
    found: List[Credential] = []
    if session_token:
        found.append(SessionCredential(token=session_token))
    dev_token = request.cookies.get(config.DEV_SESSION_COOKIE_NAME)
    if dev_token:
        found.append(DevSessionCredential(token=dev_token))
    return found


async def get_optional_identity(
    credentials: List[Credential] = Depends(extract_credentials),
    config=Depends(get_config),
    uow=Depends(get_unit_of_work),
) -> Optional[Identity]:
    """
    Resolve the caller, or None for anonymous requests.

    Never raises for missing, expired, revoked or forged credentials.
    """
    resolver = CredentialResolver.from_config(config, uow)
    return await resolver.resolve_first(*credentials)


async def get_current_identity(
    identity: Optional[Identity] = Depends(get_optional_identity),
) -> Identity:
    """
    Dependency requiring an authenticated caller.

    Raises:
        ClientError: 401 if no credential resolves
    """
    if identity is None:
        raise ClientError(
            Error("UNAUTHENTICATED", "Authentication required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    return identity
