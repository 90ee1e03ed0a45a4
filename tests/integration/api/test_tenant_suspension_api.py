import re
from datetime import timedelta

import pytest

from src.api.utils.jwt import create_dev_session_token
from tests.fixtures.json_loader import TestDataLoader
from tests.fixtures.seed import seed_tenant, seed_user

ADMIN_HEADERS = {"X-Admin-API-Key": "integration-admin-key"}


def _dev_cookie_for(user) -> dict:
    token = create_dev_session_token(
        {
            "user_id": str(user.id),
            "email": user.email,
            "role": user.role,
            "tenant_id": str(user.tenant_id),
            "team_id": str(user.team_id),
        },
        "integration-dev-secret",
        timedelta(hours=1),
    )
    return {"Cookie": f"dev_session={token}"}


@pytest.mark.asyncio
async def test_suspension_revokes_sessions(client, db_session):
    """
    Given a tenant with two signed-in users
    When the tenant is suspended
    Then both sessions stop resolving on the very next request
    """
    # Arrange
    acme = await seed_tenant(db_session, "acme")
    admin = await seed_user(db_session, acme, "admin")
    bob = await seed_user(db_session, acme, "bob")
    assert (await client.get("/me", headers=bob.auth)).status_code == 200

    # Act
    response = await client.post(f"/admin/tenants/{acme.id}/suspend", headers=ADMIN_HEADERS)

    # Assert
    assert response.status_code == 200
    assert response.json()["status"] == "SUSPENDED"
    assert response.json()["sessions_revoked"] == 2
    assert (await client.get("/me", headers=bob.auth)).status_code == 401
    assert (await client.get("/me", headers=admin.auth)).status_code == 401


@pytest.mark.asyncio
async def test_suspension_leaves_other_tenants_alone(client, db_session):
    acme = await seed_tenant(db_session, "acme")
    globex = await seed_tenant(db_session, "globex")
    await seed_user(db_session, acme, "bob")
    gina = await seed_user(db_session, globex, "globex_admin")

    response = await client.post(f"/admin/tenants/{acme.id}/suspend", headers=ADMIN_HEADERS)

    assert response.json()["sessions_revoked"] == 1
    assert (await client.get("/me", headers=gina.auth)).status_code == 200


@pytest.mark.asyncio
async def test_check_tenant_access_follows_status(dev_client, db_session):
    # Arrange
    acme = await seed_tenant(db_session, "acme")
    bob = await seed_user(db_session, acme, "bob")
    cookie = _dev_cookie_for(bob)
    payload = {"tenant_id": str(acme.id)}

    # Act
    before = await dev_client.post("/auth/check-tenant-access", json=payload, headers=cookie)
    await dev_client.post(f"/admin/tenants/{acme.id}/suspend", headers=ADMIN_HEADERS)
    during = await dev_client.post("/auth/check-tenant-access", json=payload, headers=cookie)
    await dev_client.post(f"/admin/tenants/{acme.id}/restore", headers=ADMIN_HEADERS)
    after = await dev_client.post("/auth/check-tenant-access", json=payload, headers=cookie)

    # Assert
    assert before.json()["has_access"] is True
    assert during.status_code == 200
    assert during.json()["has_access"] is False
    assert during.json()["message"] == "This organization is currently suspended"
    assert after.json()["has_access"] is True


@pytest.mark.asyncio
async def test_check_tenant_access_other_tenant(dev_client, db_session):
    acme = await seed_tenant(db_session, "acme")
    globex = await seed_tenant(db_session, "globex")
    bob = await seed_user(db_session, acme, "bob")

    response = await dev_client.post(
        "/auth/check-tenant-access",
        json={"tenant_id": str(globex.id)},
        headers=_dev_cookie_for(bob),
    )

    assert response.json()["has_access"] is False


@pytest.mark.asyncio
async def test_check_tenant_access_requires_tenant_id(dev_client, db_session):
    acme = await seed_tenant(db_session, "acme")
    bob = await seed_user(db_session, acme, "bob")

    response = await dev_client.post(
        "/auth/check-tenant-access", json={}, headers=_dev_cookie_for(bob)
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "TENANT_ID_REQUIRED"


@pytest.mark.asyncio
async def test_suspended_tenant_blocks_sign_in(client, db_session, outbox):
    acme = await seed_tenant(db_session, "acme")
    await seed_user(db_session, acme, "bob")
    await client.post(f"/admin/tenants/{acme.id}/suspend", headers=ADMIN_HEADERS)

    scoped = await client.post(
        "/auth/magic-link/send", json={"email": "bob@acme.com", "tenant_slug": "acme"}
    )
    assert scoped.status_code == 200
    assert outbox.sent == []

    await client.post("/auth/magic-link/send", json={"email": "bob@acme.com"})
    token = re.search(r"token=([A-Za-z0-9_-]+)", outbox.sent[0]["body"]).group(1)
    verified = await client.post(
        "/auth/magic-link/verify", json={"token": token, "email": "bob@acme.com"}
    )

    assert verified.status_code == 403
    assert verified.json()["error"]["code"] == "TENANT_SUSPENDED"


@pytest.mark.asyncio
async def test_suspended_tenant_blocks_invite_acceptance(client, db_session):
    acme = await seed_tenant(db_session, "acme")
    admin = await seed_user(db_session, acme, "admin")
    created = await client.post(
        "/invitations", json=TestDataLoader.get("invites", "new_hire"), headers=admin.auth
    )
    token = created.json()["token"]
    await client.post(f"/admin/tenants/{acme.id}/suspend", headers=ADMIN_HEADERS)

    validated = await client.post("/invitations/validate", json={"token": token})
    accepted = await client.post("/invitations/accept", json={"token": token})

    assert validated.json()["is_valid"] is False
    assert accepted.status_code == 403
    assert accepted.json()["error"]["code"] == "TENANT_SUSPENDED"

    # The claim was rolled back with the rest of the transaction
    revalidated = await client.post("/invitations/validate", json={"token": token})
    assert revalidated.json()["is_used"] is False


@pytest.mark.asyncio
async def test_suspend_unknown_tenant(client, db_session):
    response = await client.post(
        "/admin/tenants/00000000-0000-0000-0000-000000000000/suspend", headers=ADMIN_HEADERS
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "TENANT_NOT_FOUND"
