from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.domain.entities import AuditEvent, Membership, TenantInvitation, TenantRole
from tests.fixtures.factories import (
    add_member,
    auth_headers,
    create_invitation,
    create_tenant,
    create_user,
)


@pytest.mark.asyncio
async def test_reinvite_keeps_single_pending_row(client: AsyncClient, db_session, notifier):
    """Scenario A

    Given tenant X with owner user1 and admin user2
    When user1 invites a@b.com as member and user2 re-invites as admin
    Then a single invitation row remains with role=admin, inviter=user2
    And the token has changed
    """
    tenant_id = await create_tenant(db_session, "Tenant X")
    user1 = await create_user(db_session, "user1@x.com")
    user2 = await create_user(db_session, "user2@x.com")
    await add_member(db_session, user1, tenant_id, TenantRole.owner)
    await add_member(db_session, user2, tenant_id, TenantRole.admin)

    first = await client.post(
        f"/tenants/{tenant_id}/invitations",
        json={"email": "a@b.com", "role": "member"},
        headers=auth_headers(user1),
    )
    assert first.status_code == 201

    second = await client.post(
        f"/tenants/{tenant_id}/invitations",
        json={"email": "A@B.com", "role": "admin"},
        headers=auth_headers(user2),
    )
    assert second.status_code == 201
    assert second.json()["id"] == first.json()["id"]
    assert second.json()["token"] != first.json()["token"]

    result = await db_session.exec(select(TenantInvitation))
    invitations = result.all()
    assert len(invitations) == 1
    assert invitations[0].role == TenantRole.admin
    assert invitations[0].invited_by == user2
    assert invitations[0].email == "a@b.com"

    assert [n.renewed for n in notifier.sent] == [False, True]
    assert notifier.sent[1].token == invitations[0].token

    result = await db_session.exec(
        select(AuditEvent).where(AuditEvent.action == "invitation_renewed")
    )
    assert len(result.all()) == 1


@pytest.mark.asyncio
async def test_accept_then_accept_again(client: AsyncClient, db_session, notifier):
    """Scenario D

    Given a pending invitation for a@b.com
    When the matching user accepts it
    Then a membership is created and the invitation is accepted
    And accepting the same token again fails with INVITATION_NOT_FOUND
    """
    tenant_id = await create_tenant(db_session, "Acme")
    owner = await create_user(db_session, "owner@acme.com")
    await add_member(db_session, owner, tenant_id, TenantRole.owner)
    invitee = await create_user(db_session, "a@b.com")

    invite = await client.post(
        f"/tenants/{tenant_id}/invitations",
        json={"email": "a@b.com", "role": "admin"},
        headers=auth_headers(owner),
    )
    assert invite.status_code == 201
    token = notifier.sent[0].token

    response = await client.post(
        "/invitations/accept", json={"token": token}, headers=auth_headers(invitee)
    )
    assert response.status_code == 200
    assert response.json()["success"] is True

    result = await db_session.exec(
        select(Membership).where(
            Membership.user_id == invitee, Membership.tenant_id == tenant_id
        )
    )
    membership = result.one()
    assert membership.role == TenantRole.admin
    assert membership.invited_by == owner
    assert membership.joined_at is not None

    result = await db_session.exec(select(TenantInvitation))
    invitation = result.one()
    assert invitation.accepted_at is not None
    assert membership.invited_at == invitation.created_at

    again = await client.post(
        "/invitations/accept", json={"token": token}, headers=auth_headers(invitee)
    )
    assert again.status_code == 404
    assert again.json()["error"]["code"] == "INVITATION_NOT_FOUND"


@pytest.mark.asyncio
async def test_accept_with_other_email_is_forbidden(client: AsyncClient, db_session):
    tenant_id = await create_tenant(db_session, "Acme")
    owner = await create_user(db_session, "owner@acme.com")
    await add_member(db_session, owner, tenant_id, TenantRole.owner)
    intruder = await create_user(db_session, "b@x.io")
    token = await create_invitation(db_session, tenant_id, owner, "a@x.io")

    response = await client.post(
        "/invitations/accept", json={"token": token}, headers=auth_headers(intruder)
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "EMAIL_MISMATCH"

    result = await db_session.exec(select(Membership).where(Membership.user_id == intruder))
    assert result.all() == []


@pytest.mark.asyncio
async def test_accept_requires_bearer_token(client: AsyncClient):
    response = await client.post("/invitations/accept", json={"token": "x"})

    assert response.status_code in (401, 403)


@pytest.mark.asyncio
async def test_accept_expired_invitation(client: AsyncClient, db_session):
    tenant_id = await create_tenant(db_session, "Acme")
    owner = await create_user(db_session, "owner@acme.com")
    invitee = await create_user(db_session, "a@x.io")
    token = await create_invitation(
        db_session, tenant_id, owner, "a@x.io", expires_in=timedelta(days=-1)
    )

    response = await client.post(
        "/invitations/accept", json={"token": token}, headers=auth_headers(invitee)
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "INVITATION_NOT_FOUND"


@pytest.mark.asyncio
async def test_anonymous_reject(client: AsyncClient, db_session):
    tenant_id = await create_tenant(db_session, "Acme")
    owner = await create_user(db_session, "owner@acme.com")
    token = await create_invitation(db_session, tenant_id, owner, "a@x.io")

    response = await client.post("/invitations/reject", json={"token": token})
    assert response.status_code == 200

    result = await db_session.exec(select(TenantInvitation))
    assert result.one().rejected_at is not None

    again = await client.post("/invitations/reject", json={"token": token})
    assert again.status_code == 404


@pytest.mark.asyncio
async def test_reject_by_other_user_is_forbidden(client: AsyncClient, db_session):
    tenant_id = await create_tenant(db_session, "Acme")
    owner = await create_user(db_session, "owner@acme.com")
    other = await create_user(db_session, "b@x.io")
    token = await create_invitation(db_session, tenant_id, owner, "a@x.io")

    response = await client.post(
        "/invitations/reject", json={"token": token}, headers=auth_headers(other)
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "EMAIL_MISMATCH"


@pytest.mark.asyncio
async def test_invite_existing_member_conflicts(client: AsyncClient, db_session):
    tenant_id = await create_tenant(db_session, "Acme")
    owner = await create_user(db_session, "owner@acme.com")
    member = await create_user(db_session, "member@acme.com")
    await add_member(db_session, owner, tenant_id, TenantRole.owner)
    await add_member(db_session, member, tenant_id, TenantRole.member)

    response = await client.post(
        f"/tenants/{tenant_id}/invitations",
        json={"email": "Member@Acme.com"},
        headers=auth_headers(owner),
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "ALREADY_MEMBER"


@pytest.mark.asyncio
async def test_invite_with_invalid_role(client: AsyncClient, db_session):
    tenant_id = await create_tenant(db_session, "Acme")
    owner = await create_user(db_session, "owner@acme.com")
    await add_member(db_session, owner, tenant_id, TenantRole.owner)

    response = await client.post(
        f"/tenants/{tenant_id}/invitations",
        json={"email": "a@x.io", "role": "superuser"},
        headers=auth_headers(owner),
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_ROLE"


@pytest.mark.asyncio
async def test_member_cannot_invite(client: AsyncClient, db_session):
    tenant_id = await create_tenant(db_session, "Acme")
    member = await create_user(db_session, "member@acme.com")
    await add_member(db_session, member, tenant_id, TenantRole.member)

    response = await client.post(
        f"/tenants/{tenant_id}/invitations",
        json={"email": "a@x.io"},
        headers=auth_headers(member),
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "INSUFFICIENT_ROLE"


@pytest.mark.asyncio
async def test_invite_into_inactive_tenant(client: AsyncClient, db_session):
    tenant_id = await create_tenant(db_session, "Dormant", is_active=False)
    owner = await create_user(db_session, "owner@acme.com")
    await add_member(db_session, owner, tenant_id, TenantRole.owner)

    response = await client.post(
        f"/tenants/{tenant_id}/invitations",
        json={"email": "a@x.io"},
        headers=auth_headers(owner),
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "TENANT_INACTIVE"


@pytest.mark.asyncio
async def test_list_pending_and_expired(client: AsyncClient, db_session):
    tenant_id = await create_tenant(db_session, "Acme")
    owner = await create_user(db_session, "owner@acme.com")
    await add_member(db_session, owner, tenant_id, TenantRole.owner)
    await create_invitation(db_session, tenant_id, owner, "fresh@x.io")
    await create_invitation(
        db_session, tenant_id, owner, "stale@x.io", expires_in=timedelta(days=-1)
    )

    pending = await client.get(
        f"/tenants/{tenant_id}/invitations", headers=auth_headers(owner)
    )
    assert pending.status_code == 200
    assert [inv["email"] for inv in pending.json()] == ["fresh@x.io"]

    expired = await client.get(
        f"/tenants/{tenant_id}/invitations",
        params={"status": "expired"},
        headers=auth_headers(owner),
    )
    assert expired.status_code == 200
    assert [inv["email"] for inv in expired.json()] == ["stale@x.io"]
    assert expired.json()[0]["status"] == "expired"

    invalid = await client.get(
        f"/tenants/{tenant_id}/invitations",
        params={"status": "accepted"},
        headers=auth_headers(owner),
    )
    assert invalid.status_code == 400


@pytest.mark.asyncio
async def test_my_pending_invitations(client: AsyncClient, db_session):
    acme = await create_tenant(db_session, "Acme")
    globex = await create_tenant(db_session, "Globex")
    owner = await create_user(db_session, "owner@acme.com")
    invitee = await create_user(db_session, "a@x.io")
    await create_invitation(db_session, acme, owner, "a@x.io")
    await create_invitation(db_session, globex, owner, "a@x.io")
    await create_invitation(db_session, globex, owner, "someone@x.io")

    response = await client.get("/invitations/mine", headers=auth_headers(invitee))

    assert response.status_code == 200
    assert sorted(inv["tenant_id"] for inv in response.json()) == sorted(
        [str(acme), str(globex)]
    )


@pytest.mark.asyncio
async def test_cancel_invitation(client: AsyncClient, db_session):
    tenant_id = await create_tenant(db_session, "Acme")
    owner = await create_user(db_session, "owner@acme.com")
    await add_member(db_session, owner, tenant_id, TenantRole.owner)

    invite = await client.post(
        f"/tenants/{tenant_id}/invitations",
        json={"email": "a@x.io"},
        headers=auth_headers(owner),
    )
    invitation_id = invite.json()["id"]

    response = await client.delete(
        f"/tenants/{tenant_id}/invitations/{invitation_id}", headers=auth_headers(owner)
    )
    assert response.status_code == 200

    result = await db_session.exec(select(TenantInvitation))
    assert result.all() == []

    again = await client.delete(
        f"/tenants/{tenant_id}/invitations/{invitation_id}", headers=auth_headers(owner)
    )
    assert again.status_code == 404


@pytest.mark.asyncio
async def test_cancel_accepted_invitation_conflicts(client: AsyncClient, db_session):
    tenant_id = await create_tenant(db_session, "Acme")
    owner = await create_user(db_session, "owner@acme.com")
    invitee = await create_user(db_session, "a@x.io")
    await add_member(db_session, owner, tenant_id, TenantRole.owner)
    token = await create_invitation(db_session, tenant_id, owner, "a@x.io")

    accepted = await client.post(
        "/invitations/accept", json={"token": token}, headers=auth_headers(invitee)
    )
    assert accepted.status_code == 200

    result = await db_session.exec(select(TenantInvitation))
    invitation_id = result.one().id

    response = await client.delete(
        f"/tenants/{tenant_id}/invitations/{invitation_id}", headers=auth_headers(owner)
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "NOT_CANCELLABLE"
