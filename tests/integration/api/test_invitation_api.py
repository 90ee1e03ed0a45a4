from datetime import datetime, timedelta

import pytest
from sqlmodel import select

from src.app.services.tokens import generate_token, hash_token
from src.domain.base import utcnow
from src.domain.entities import AuditEvent, InviteToken, UserProfile, UserRole
from tests.fixtures.json_loader import TestDataLoader
from tests.fixtures.seed import seed_tenant, seed_user


@pytest.mark.asyncio
async def test_invite_round_trip(client, db_session, outbox):
    """
    Given an ADMIN of an active tenant
    When they invite an address, and the invitee validates then accepts
    Then the invitee lands in the tenant with the invited role and is signed in
    """
    # Arrange
    acme = await seed_tenant(db_session, "acme")
    admin = await seed_user(db_session, acme, "admin")
    payload = TestDataLoader.get("invites", "new_hire")

    # Act - create
    created = await client.post("/invitations", json=payload, headers=admin.auth)

    # Assert - create
    assert created.status_code == 201
    invite = created.json()
    assert invite["email"] == "newhire@acme.com"
    assert invite["role"] == "EMPLOYEE"
    assert invite["email_sent"] is True
    assert invite["accept_url"] == f"http://app.test/auth/join?token={invite['token']}"

    expires_at = datetime.fromisoformat(invite["expires_at"])
    assert timedelta(days=6, hours=23) < expires_at - utcnow() <= timedelta(days=7)

    assert len(outbox.sent) == 1
    assert outbox.sent[0]["to"] == "newhire@acme.com"
    assert invite["token"] in outbox.sent[0]["body"]

    # Only the hash is persisted
    stored = (await db_session.exec(select(InviteToken))).one()
    assert stored.token_hash == hash_token(invite["token"])
    assert stored.token_hash != invite["token"]

    # Act - validate
    validated = await client.post("/invitations/validate", json={"token": invite["token"]})

    # Assert - validate
    assert validated.status_code == 200
    body = validated.json()
    assert body["is_valid"] is True
    assert body["email"] == "newhire@acme.com"
    assert body["tenant"]["slug"] == "acme"
    assert body["invited_by_name"] == "Ada Admin"

    # Act - accept
    accepted = await client.post(
        "/invitations/accept",
        json={"token": invite["token"], "first_name": "New", "last_name": "Hire"},
    )

    # Assert - accept
    assert accepted.status_code == 200
    result = accepted.json()
    assert result["user"]["email"] == "newhire@acme.com"
    assert result["user"]["role"] == "EMPLOYEE"
    assert result["user"]["tenant_id"] == str(acme.id)
    assert result["tenant"]["slug"] == "acme"

    me = await client.get(
        "/me", headers={"Authorization": f"Bearer {result['session_token']}"}
    )
    assert me.status_code == 200
    assert me.json()["user"]["email"] == "newhire@acme.com"
    assert me.json()["source"] == "session"

    actions = (await db_session.exec(select(AuditEvent.action))).all()
    assert "invite_sent" in actions
    assert "invite_accepted" in actions


@pytest.mark.asyncio
async def test_second_accept_is_gone(client, db_session):
    """
    Given an invitation that was already accepted
    When it is accepted again
    Then 410 INVITE_ALREADY_USED and no second profile exists
    """
    # Arrange
    acme = await seed_tenant(db_session, "acme")
    admin = await seed_user(db_session, acme, "admin")
    created = await client.post(
        "/invitations", json=TestDataLoader.get("invites", "new_hire"), headers=admin.auth
    )
    token = created.json()["token"]
    first = await client.post("/invitations/accept", json={"token": token})
    assert first.status_code == 200

    # Act
    second = await client.post("/invitations/accept", json={"token": token})

    # Assert
    assert second.status_code == 410
    assert second.json()["error"]["code"] == "INVITE_ALREADY_USED"

    profiles = (
        await db_session.exec(select(UserProfile).where(UserProfile.email == "newhire@acme.com"))
    ).all()
    assert len(profiles) == 1

    validated = await client.post("/invitations/validate", json={"token": token})
    assert validated.json()["is_valid"] is False
    assert validated.json()["is_used"] is True


@pytest.mark.asyncio
async def test_expired_invite_is_gone(client, db_session):
    # Arrange
    acme = await seed_tenant(db_session, "acme")
    admin = await seed_user(db_session, acme, "admin")
    token = generate_token()
    db_session.add(
        InviteToken(
            token_hash=hash_token(token),
            email="late@acme.com",
            role=UserRole.CUSTOMER,
            invited_by=admin.id,
            tenant_id=acme.id,
            expires_at=utcnow() - timedelta(minutes=1),
        )
    )
    await db_session.commit()

    # Act
    validated = await client.post("/invitations/validate", json={"token": token})
    accepted = await client.post("/invitations/accept", json={"token": token})

    # Assert
    assert validated.json()["is_valid"] is False
    assert validated.json()["is_expired"] is True
    assert accepted.status_code == 410
    assert accepted.json()["error"]["code"] == "INVITE_EXPIRED"


@pytest.mark.asyncio
async def test_unknown_invite_token(client, db_session):
    validated = await client.post("/invitations/validate", json={"token": "nope"})
    accepted = await client.post("/invitations/accept", json={"token": "nope"})

    assert validated.status_code == 200
    assert validated.json()["is_valid"] is False
    assert validated.json()["message"] == "Invalid invitation token"
    assert accepted.status_code == 404
    assert accepted.json()["error"]["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_non_admin_cannot_invite(client, db_session):
    acme = await seed_tenant(db_session, "acme")
    bob = await seed_user(db_session, acme, "bob")

    response = await client.post(
        "/invitations", json=TestDataLoader.get("invites", "new_hire"), headers=bob.auth
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "INSUFFICIENT_ROLE"


@pytest.mark.asyncio
async def test_duplicate_pending_invite_conflicts(client, db_session):
    acme = await seed_tenant(db_session, "acme")
    admin = await seed_user(db_session, acme, "admin")
    payload = TestDataLoader.get("invites", "new_hire")

    first = await client.post("/invitations", json=payload, headers=admin.auth)
    second = await client.post("/invitations", json=payload, headers=admin.auth)

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json()["error"]["code"] == "INVITE_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_create_invite_requires_authentication(client, db_session):
    response = await client.post("/invitations", json=TestDataLoader.get("invites", "new_hire"))

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHENTICATED"
