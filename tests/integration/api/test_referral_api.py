import pytest
from sqlmodel import select

from src.domain.entities import ReferralRelationship, TenantStatus
from tests.fixtures.json_loader import TestDataLoader
from tests.fixtures.seed import seed_tenant, seed_user


async def _signup(client, ref: str, key: str):
    payload = TestDataLoader.get("referral_signups", key)
    payload["ref"] = ref
    return await client.post("/referrals/signup", json=payload)


@pytest.mark.asyncio
async def test_anonymous_visit_redirects_to_signup(client, db_session):
    """
    Given SALES_PERSON bob in an active tenant
    When an anonymous visitor opens /bob
    Then they are sent to signup as a prospective CUSTOMER
    """
    acme = await seed_tenant(db_session, "acme")
    await seed_user(db_session, acme, "bob")

    response = await client.get("/bob")

    assert response.status_code == 307
    assert response.headers["location"] == (
        "/signup?ref=bob&type=referral&target_role=CUSTOMER&referrer_role=SALES_PERSON"
    )


@pytest.mark.asyncio
async def test_visit_username_is_case_insensitive(client, db_session):
    acme = await seed_tenant(db_session, "acme")
    await seed_user(db_session, acme, "bob")

    response = await client.get("/BoB")

    assert response.status_code == 307
    assert response.headers["location"].startswith("/signup?ref=bob&")


@pytest.mark.asyncio
async def test_unknown_username_redirects_with_error(client, db_session):
    await seed_tenant(db_session, "acme")

    response = await client.get("/nonexistent")

    assert response.status_code == 307
    assert response.headers["location"] == "/?error=invalid-referral-link"


@pytest.mark.asyncio
async def test_ineligible_referrers_look_unknown(client, db_session):
    acme = await seed_tenant(db_session, "acme")
    globex = await seed_tenant(db_session, "globex", status=TenantStatus.SUSPENDED)
    await seed_user(db_session, acme, "admin")
    await seed_user(db_session, globex, "carol")

    admin_visit = await client.get("/ada")
    suspended_visit = await client.get("/carol")

    assert admin_visit.headers["location"] == "/?error=invalid-referral-link"
    assert suspended_visit.headers["location"] == "/?error=invalid-referral-link"


@pytest.mark.asyncio
async def test_signed_in_visit_redirects_to_dashboard(client, db_session):
    acme = await seed_tenant(db_session, "acme")
    await seed_user(db_session, acme, "bob")
    carol = await seed_user(db_session, acme, "carol")

    response = await client.get("/bob", headers=carol.auth)

    assert response.status_code == 307
    assert response.headers["location"] == "/dashboard?ref=bob&referrer=bob&type=referral"

    # Visiting records nothing
    relationships = (await db_session.exec(select(ReferralRelationship))).all()
    assert relationships == []


@pytest.mark.asyncio
async def test_signup_chain_builds_lineage(client, db_session):
    """
    Given A refers B and B refers C
    Then C's lineage is [A, B], rows (A, B) and (B, C) exist in the tenant
    and A's tree shows both tiers
    """
    # Arrange
    acme = await seed_tenant(db_session, "acme")
    bob = await seed_user(db_session, acme, "bob")

    # Act
    dave = await _signup(client, "bob", "dave")
    dave_body = dave.json()
    erin = await _signup(client, dave_body["user"]["username"], "erin")
    erin_body = erin.json()

    # Assert
    assert dave.status_code == 201
    assert dave_body["user"]["role"] == "CUSTOMER"
    assert dave_body["user"]["tenant_id"] == str(acme.id)
    assert dave_body["user"]["lineage_path"] == [str(bob.id)]
    assert dave_body["referrer_username"] == "bob"

    assert erin.status_code == 201
    assert erin_body["user"]["lineage_path"] == [str(bob.id), dave_body["user"]["id"]]
    assert dave_body["user"]["team_id"] == str(acme.team_id)

    relationships = (await db_session.exec(select(ReferralRelationship))).all()
    pairs = {(str(r.referrer_id), str(r.referee_id)) for r in relationships}
    assert pairs == {
        (str(bob.id), dave_body["user"]["id"]),
        (dave_body["user"]["id"], erin_body["user"]["id"]),
    }
    assert all(r.tenant_id == acme.id for r in relationships)

    tree = await client.get(f"/referrals/tree/{bob.id}", headers=bob.auth)
    assert tree.status_code == 200
    body = tree.json()
    assert body["total_referrals"] == 1
    assert body["total_downline"] == 2
    assert body["levels"] == [{"level": 1, "count": 1}, {"level": 2, "count": 1}]
    assert body["tree"][0]["user"]["id"] == dave_body["user"]["id"]
    assert body["tree"][0]["children"][0]["user"]["id"] == erin_body["user"]["id"]

    link = await client.get("/referrals/my-link", headers=bob.auth)
    assert link.status_code == 200
    assert link.json()["referral_link"] == "http://app.test/bob"
    assert link.json()["total_referrals"] == 1


@pytest.mark.asyncio
async def test_signup_rejects_existing_email(client, db_session):
    acme = await seed_tenant(db_session, "acme")
    await seed_user(db_session, acme, "bob")

    first = await _signup(client, "bob", "dave")
    second = await _signup(client, "bob", "dave")

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json()["error"]["code"] == "USER_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_signup_with_unknown_referrer(client, db_session):
    await seed_tenant(db_session, "acme")

    response = await _signup(client, "nobody", "dave")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "INVALID_REFERRAL"


@pytest.mark.asyncio
async def test_admin_has_no_referral_link(client, db_session):
    acme = await seed_tenant(db_session, "acme")
    admin = await seed_user(db_session, acme, "admin")

    response = await client.get("/referrals/my-link", headers=admin.auth)

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "ROLE_NOT_ELIGIBLE"


@pytest.mark.asyncio
async def test_accept_referral_rules(client, db_session):
    # Arrange
    acme = await seed_tenant(db_session, "acme")
    bob = await seed_user(db_session, acme, "bob")
    carol = await seed_user(db_session, acme, "carol")

    # Act
    accepted = await client.post("/referrals/accept", json={"ref": "bob"}, headers=carol.auth)
    again = await client.post("/referrals/accept", json={"ref": "bob"}, headers=carol.auth)
    self_ref = await client.post("/referrals/accept", json={"ref": "bob"}, headers=bob.auth)
    cycle = await client.post("/referrals/accept", json={"ref": "carol"}, headers=bob.auth)

    # Assert
    assert accepted.status_code == 201
    assert accepted.json()["lineage_path"] == [str(bob.id)]
    assert again.status_code == 409
    assert again.json()["error"]["code"] == "REFERRAL_ALREADY_EXISTS"
    assert self_ref.status_code == 400
    assert self_ref.json()["error"]["code"] == "SELF_REFERRAL"
    assert cycle.status_code == 400
    assert cycle.json()["error"]["code"] == "REFERRAL_CYCLE"


@pytest.mark.asyncio
async def test_referrals_stay_inside_tenant(client, db_session):
    acme = await seed_tenant(db_session, "acme")
    globex = await seed_tenant(db_session, "globex")
    bob = await seed_user(db_session, acme, "bob")
    gina = await seed_user(db_session, globex, "globex_admin")

    accepted = await client.post("/referrals/accept", json={"ref": "bob"}, headers=gina.auth)
    tree = await client.get(f"/referrals/tree/{bob.id}", headers=gina.auth)

    assert accepted.status_code == 403
    assert accepted.json()["error"]["code"] == "CROSS_TENANT"
    assert tree.status_code == 403
    assert tree.json()["error"]["code"] == "CROSS_TENANT"
