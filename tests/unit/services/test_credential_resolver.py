from datetime import timedelta
from types import SimpleNamespace

import pytest

from src.api.utils.jwt import create_dev_session_token
from src.app.services.credential_resolver import (
    CredentialResolver,
    DevSessionCredential,
    DevSessionCredentialSource,
    SessionCredential,
    SessionCredentialSource,
)
from src.app.services.tokens import hash_token
from src.domain.base import utcnow
from src.domain.entities import Session, UserRole
from tests.fixtures.entities import make_profile, make_tenant

SECRET = "unit-dev-secret"


def _session(profile, **fields) -> Session:
    fields.setdefault("expires_at", utcnow() + timedelta(days=1))
    return Session(
        user_id=profile.id,
        tenant_id=profile.tenant_id,
        token_hash=hash_token("raw-token"),
        **fields,
    )


def _dev_token(profile, secret=SECRET, ttl=timedelta(hours=1)) -> str:
    return create_dev_session_token(
        {
            "user_id": str(profile.id),
            "email": profile.email,
            "role": profile.role.value,
            "tenant_id": str(profile.tenant_id),
            "team_id": None,
        },
        secret,
        ttl,
    )


@pytest.mark.asyncio
async def test_live_session_resolves(mock_uow):
    # Arrange
    profile = make_profile(make_tenant(), UserRole.SALES_PERSON)
    mock_uow.sessions.get_by_token_hash.return_value = _session(profile)
    mock_uow.users.get_by_id.return_value = profile

    # Act
    identity = await SessionCredentialSource(mock_uow).resolve(SessionCredential("raw-token"))

    # Assert
    assert identity.user_id == profile.id
    assert identity.role == UserRole.SALES_PERSON
    assert identity.tenant_id == profile.tenant_id
    assert identity.source == "session"
    mock_uow.sessions.get_by_token_hash.assert_awaited_once_with(hash_token("raw-token"))


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "fields",
    [
        {"revoked": True},
        {"expires_at": utcnow() - timedelta(seconds=1)},
    ],
)
async def test_dead_sessions_do_not_resolve(mock_uow, fields):
    profile = make_profile(make_tenant())
    mock_uow.sessions.get_by_token_hash.return_value = _session(profile, **fields)
    mock_uow.users.get_by_id.return_value = profile

    identity = await SessionCredentialSource(mock_uow).resolve(SessionCredential("raw-token"))

    assert identity is None


@pytest.mark.asyncio
async def test_unknown_session_does_not_resolve(mock_uow):
    mock_uow.sessions.get_by_token_hash.return_value = None

    assert await SessionCredentialSource(mock_uow).resolve(SessionCredential("nope")) is None


@pytest.mark.asyncio
async def test_dev_source_inert_when_disabled():
    """
    Given a correctly signed dev token
    When dev mode is disabled
    Then nothing resolves
    """
    profile = make_profile(make_tenant())
    source = DevSessionCredentialSource(enabled=False, secret=SECRET)

    assert await source.resolve(DevSessionCredential(_dev_token(profile))) is None


@pytest.mark.asyncio
async def test_dev_source_when_enabled():
    profile = make_profile(make_tenant(), UserRole.ADMIN)
    source = DevSessionCredentialSource(enabled=True, secret=SECRET)

    identity = await source.resolve(DevSessionCredential(_dev_token(profile)))

    assert identity.user_id == profile.id
    assert identity.role == UserRole.ADMIN
    assert identity.source == "dev"


@pytest.mark.asyncio
async def test_dev_source_rejects_forged_and_expired():
    profile = make_profile(make_tenant())
    source = DevSessionCredentialSource(enabled=True, secret=SECRET)

    forged = _dev_token(profile, secret="other-secret")
    expired = _dev_token(profile, ttl=timedelta(seconds=-10))

    assert await source.resolve(DevSessionCredential(forged)) is None
    assert await source.resolve(DevSessionCredential(expired)) is None
    assert await source.resolve(DevSessionCredential("not-a-jwt")) is None


@pytest.mark.asyncio
async def test_resolver_tries_credentials_in_order(mock_uow):
    profile = make_profile(make_tenant())
    mock_uow.sessions.get_by_token_hash.return_value = None
    config = SimpleNamespace(DEV_MODE=True, DEV_SESSION_SECRET=SECRET)
    resolver = CredentialResolver.from_config(config, mock_uow)

    identity = await resolver.resolve_first(
        SessionCredential("stale"), DevSessionCredential(_dev_token(profile))
    )

    assert identity.source == "dev"
    assert await resolver.resolve(None) is None


@pytest.mark.asyncio
async def test_resolver_without_dev_mode(mock_uow):
    profile = make_profile(make_tenant())
    config = SimpleNamespace(DEV_MODE=False, DEV_SESSION_SECRET=SECRET)
    resolver = CredentialResolver.from_config(config, mock_uow)

    assert await resolver.resolve_first(DevSessionCredential(_dev_token(profile))) is None
