from uuid import uuid4

import pytest

from src.app.services.permission_engine import PermissionEngine, UserPermissions
from src.domain.entities import (
    PermissionAction,
    PermissionModule,
    PermissionPolarity,
    UserPermission,
    UserRole,
)
from src.domain.permissions import ALL_PERMISSIONS, role_default_permissions
from tests.fixtures.entities import make_profile, make_team, make_tenant

M = PermissionModule
A = PermissionAction


def _override(user_id, team_id, module, action, polarity):
    return UserPermission(
        user_id=user_id, team_id=team_id, module=module, action=action, polarity=polarity
    )


def test_super_admin_holds_every_permission():
    assert role_default_permissions(UserRole.SUPER_ADMIN) == ALL_PERMISSIONS


def test_customer_defaults_are_narrow():
    permissions = UserPermissions(role_permissions=role_default_permissions(UserRole.CUSTOMER))

    assert permissions.is_allowed(M.REFERRALS, A.VIEW)
    assert permissions.is_allowed(M.DASHBOARD, A.VIEW)
    assert not permissions.is_allowed(M.CUSTOMERS, A.VIEW)
    assert not permissions.is_allowed(M.SETTINGS, A.EDIT)


def test_denial_beats_grant_and_role():
    key = (M.CUSTOMERS, A.VIEW)
    permissions = UserPermissions(
        role_permissions=frozenset({key}),
        custom_permissions=frozenset({key}),
        denied_permissions=frozenset({key}),
    )

    assert permissions.is_allowed(*key) is False
    assert permissions.as_map()["customers:view"] is False


def test_map_covers_every_pair():
    permissions = UserPermissions(role_permissions=frozenset({(M.BILLING, A.VIEW)}))

    mapping = permissions.as_map()

    assert len(mapping) == len(ALL_PERMISSIONS)
    assert mapping["billing:view"] is True
    assert sum(mapping.values()) == 1


@pytest.mark.asyncio
async def test_evaluate_layers_overrides(mock_uow):
    """
    Given an EMPLOYEE with a grant on billing:view and a denial on customers:view
    When permissions are evaluated for the team
    Then billing:view is allowed and customers:view is not
    """
    # Arrange
    tenant = make_tenant()
    team = make_team(tenant)
    employee = make_profile(tenant, UserRole.EMPLOYEE, team_id=team.id)
    mock_uow.permissions.get_by_user_and_team.return_value = [
        _override(employee.id, team.id, M.BILLING, A.VIEW, PermissionPolarity.GRANTED),
        _override(employee.id, team.id, M.CUSTOMERS, A.VIEW, PermissionPolarity.DENIED),
    ]

    # Act
    permissions = await PermissionEngine(mock_uow).evaluate(
        employee.id, team.id, role=UserRole.EMPLOYEE
    )

    # Assert
    assert permissions.is_allowed(M.BILLING, A.VIEW)
    assert not permissions.is_allowed(M.CUSTOMERS, A.VIEW)
    assert permissions.is_allowed(M.SALES, A.VIEW)
    assert permissions.custom_permissions == frozenset({(M.BILLING, A.VIEW)})
    assert permissions.denied_permissions == frozenset({(M.CUSTOMERS, A.VIEW)})
    mock_uow.permissions.get_by_user_and_team.assert_awaited_once_with(employee.id, team.id)
    mock_uow.users.get_by_id.assert_not_awaited()


@pytest.mark.asyncio
async def test_evaluate_loads_role_when_not_given(mock_uow):
    tenant = make_tenant()
    admin = make_profile(tenant, UserRole.ADMIN)
    mock_uow.users.get_by_id.return_value = admin

    allowed = await PermissionEngine(mock_uow).is_allowed(
        admin.id, None, M.TEAM_MANAGEMENT, A.MANAGE
    )

    assert allowed is True


@pytest.mark.asyncio
async def test_evaluate_unknown_user_is_empty(mock_uow):
    mock_uow.users.get_by_id.return_value = None

    permissions = await PermissionEngine(mock_uow).evaluate(uuid4(), None)

    assert permissions == UserPermissions()
    assert not any(permissions.as_map().values())
