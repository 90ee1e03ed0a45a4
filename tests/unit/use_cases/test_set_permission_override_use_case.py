from uuid import uuid4

import pytest

from src.app.services.identity import Identity
from src.app.use_cases.permissions import (
    ClearPermissionOverrideUseCase,
    SetPermissionOverrideUseCase,
)
from src.domain.entities import (
    PermissionAction,
    PermissionModule,
    PermissionPolarity,
    UserPermission,
    UserRole,
)
from tests.fixtures.entities import make_profile, make_team, make_tenant


def _identity(profile) -> Identity:
    return Identity(
        user_id=profile.id, email=profile.email, role=profile.role, tenant_id=profile.tenant_id
    )


@pytest.fixture
def acme():
    return make_tenant()


@pytest.fixture
def team(acme):
    return make_team(acme)


@pytest.fixture
def admin(acme, team):
    return make_profile(acme, UserRole.ADMIN, team_id=team.id)


@pytest.fixture
def bob(acme, team):
    return make_profile(acme, UserRole.SALES_PERSON, team_id=team.id)


@pytest.fixture
def uow(mock_uow, acme, team, bob):
    mock_uow.users.get_by_id.return_value = bob
    mock_uow.teams.get_by_id.return_value = team
    mock_uow.tenants.get_by_id.return_value = acme
    mock_uow.permissions.get_one.return_value = None
    return mock_uow


@pytest.mark.asyncio
async def test_first_override_creates_record(uow, admin, bob, team):
    """
    Given no override for bob on analytics:export
    When an ADMIN denies it
    Then a DENIED record is created and audited
    """
    # Act
    result = await SetPermissionOverrideUseCase(uow).execute(
        _identity(admin), bob.id, team.id, "analytics", "export", granted=False
    )

    # Assert
    assert result.is_ok()
    assert result.value.permission == "analytics:export"
    assert result.value.polarity == "DENIED"

    record = uow.permissions.create.call_args.args[0]
    assert record.user_id == bob.id
    assert record.team_id == team.id
    assert record.polarity == PermissionPolarity.DENIED
    uow.permissions.update.assert_not_awaited()

    audit = uow.audit_events.create.call_args.args[0]
    assert audit.action == "permission_set"
    assert audit.event_metadata["target_user_id"] == str(bob.id)
    uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_second_override_flips_polarity(uow, admin, bob, team):
    existing = UserPermission(
        user_id=bob.id,
        team_id=team.id,
        module=PermissionModule.ANALYTICS,
        action=PermissionAction.EXPORT,
        polarity=PermissionPolarity.DENIED,
    )
    uow.permissions.get_one.return_value = existing

    result = await SetPermissionOverrideUseCase(uow).execute(
        _identity(admin), bob.id, team.id, "ANALYTICS", "EXPORT", granted=True
    )

    assert result.value.polarity == "GRANTED"
    assert existing.polarity == PermissionPolarity.GRANTED
    uow.permissions.update.assert_awaited_once_with(existing)
    uow.permissions.create.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.parametrize("module, action", [("rockets", "view"), ("sales", "launch")])
async def test_unknown_permission(uow, admin, bob, team, module, action):
    result = await SetPermissionOverrideUseCase(uow).execute(
        _identity(admin), bob.id, team.id, module, action, granted=True
    )

    assert result.error.code == "INVALID_PERMISSION"
    uow.users.get_by_id.assert_not_awaited()


@pytest.mark.asyncio
async def test_team_from_other_tenant(uow, admin, bob):
    uow.teams.get_by_id.return_value = make_team(make_tenant(name="Globex", slug="globex"))

    result = await SetPermissionOverrideUseCase(uow).execute(
        _identity(admin), bob.id, uuid4(), "sales", "view", granted=True
    )

    assert result.error.code == "TEAM_NOT_FOUND"


@pytest.mark.asyncio
async def test_employee_cannot_manage(uow, acme, bob, team):
    employee = make_profile(acme, UserRole.EMPLOYEE)

    result = await SetPermissionOverrideUseCase(uow).execute(
        _identity(employee), bob.id, team.id, "sales", "view", granted=True
    )

    assert result.error.code == "INSUFFICIENT_PERMISSION"
    uow.permissions.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_foreign_admin_denied(uow, bob, team):
    gina = make_profile(make_tenant(name="Globex", slug="globex"), UserRole.ADMIN)

    result = await SetPermissionOverrideUseCase(uow).execute(
        _identity(gina), bob.id, team.id, "sales", "view", granted=True
    )

    assert result.error.code == "CROSS_TENANT"


@pytest.mark.asyncio
async def test_clear_existing_override(uow, admin, bob, team):
    existing = UserPermission(
        user_id=bob.id,
        team_id=team.id,
        module=PermissionModule.SALES,
        action=PermissionAction.EDIT,
        polarity=PermissionPolarity.DENIED,
    )
    uow.permissions.get_one.return_value = existing

    result = await ClearPermissionOverrideUseCase(uow).execute(
        _identity(admin), bob.id, team.id, "sales", "edit"
    )

    assert result.value == {"status": "cleared", "permission": "sales:edit"}
    uow.permissions.delete.assert_awaited_once_with(existing)
    assert uow.audit_events.create.call_args.args[0].action == "permission_cleared"
    uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_clear_missing_override(uow, admin, bob, team):
    result = await ClearPermissionOverrideUseCase(uow).execute(
        _identity(admin), bob.id, team.id, "sales", "edit"
    )

    assert result.value["status"] == "unchanged"
    uow.permissions.delete.assert_not_awaited()
    uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_override_outside_target_team_rejected(uow, acme, admin, bob):
    """
    Given bob belongs to the main team
    When an ADMIN writes an override scoped to another acme team
    Then it is rejected, since access checks never read that team
    """
    # Arrange
    other_team = make_team(acme)
    uow.teams.get_by_id.return_value = other_team

    # Act
    result = await SetPermissionOverrideUseCase(uow).execute(
        _identity(admin), bob.id, other_team.id, "sales", "view", granted=False
    )

    # Assert
    assert result.error.code == "TEAM_MISMATCH"
    uow.permissions.create.assert_not_awaited()
    uow.commit.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.parametrize("use_case_class", [SetPermissionOverrideUseCase, ClearPermissionOverrideUseCase])
async def test_admin_cannot_override_peer_admin(uow, acme, admin, team, use_case_class):
    peer = make_profile(acme, UserRole.ADMIN, team_id=team.id)
    uow.users.get_by_id.return_value = peer
    args = (_identity(admin), peer.id, team.id, "team_management", "manage")
    if use_case_class is SetPermissionOverrideUseCase:
        args += (False,)

    result = await use_case_class(uow).execute(*args)

    assert result.error.code == "INSUFFICIENT_ROLE"
    uow.permissions.create.assert_not_awaited()
    uow.permissions.delete.assert_not_awaited()


@pytest.mark.asyncio
async def test_admin_cannot_grant_self(uow, admin, team):
    uow.users.get_by_id.return_value = admin

    result = await SetPermissionOverrideUseCase(uow).execute(
        _identity(admin), admin.id, team.id, "billing", "manage", granted=True
    )

    assert result.error.code == "CANNOT_CHANGE_OWN_PERMISSIONS"
    uow.permissions.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_super_admin_overrides_admin(uow, acme, admin, team):
    root = make_profile(acme, UserRole.SUPER_ADMIN, team_id=team.id)
    uow.users.get_by_id.return_value = admin

    result = await SetPermissionOverrideUseCase(uow).execute(
        _identity(root), admin.id, team.id, "billing", "manage", granted=True
    )

    assert result.is_ok()
    assert result.value.polarity == "GRANTED"


@pytest.mark.asyncio
async def test_super_admin_overrides_self(uow, acme, team):
    root = make_profile(acme, UserRole.SUPER_ADMIN, team_id=team.id)
    uow.users.get_by_id.return_value = root

    result = await SetPermissionOverrideUseCase(uow).execute(
        _identity(root), root.id, team.id, "sales", "export", granted=False
    )

    assert result.is_ok()
