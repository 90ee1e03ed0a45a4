import pytest
from unittest.mock import AsyncMock, MagicMock

REPOSITORIES = (
    "tenants",
    "teams",
    "users",
    "sessions",
    "invite_tokens",
    "magic_links",
    "referrals",
    "permissions",
    "audit_events",
)


def _echo(entity):
    return entity


@pytest.fixture
def mock_uow():
    """
    UnitOfWork double with every repository method awaitable.

    create/update hand back their argument; lookups that would otherwise
    return a truthy mock default to "nothing found".
    """
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    for name in REPOSITORIES:
        repo = AsyncMock()
        repo.create.side_effect = _echo
        repo.update.side_effect = _echo
        setattr(uow, name, repo)

    uow.users.get_by_username.return_value = None
    uow.users.get_by_email_and_tenant.return_value = None
    uow.users.get_by_email.return_value = []
    uow.teams.get_default_by_tenant_id.return_value = None
    uow.invite_tokens.get_pending_by_tenant_and_email.return_value = None
    uow.magic_links.count_active_by_email.return_value = 0
    uow.referrals.get_by_referee_id.return_value = None
    uow.referrals.get_by_referrer_id.return_value = []
    uow.permissions.get_by_user_and_team.return_value = []
    return uow
