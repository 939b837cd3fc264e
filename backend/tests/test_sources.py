"""Tests for the knowledge source API."""
import uuid
from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from contentops.models.user import UserRole
from tests.factories import auth_headers, create_source, create_user, create_workspace

pytestmark = pytest.mark.anyio


async def test_create_source(client: AsyncClient, admin_auth, workspace):
    admin_user, headers = admin_auth
    payload = {
        "workspace_id": str(workspace.id),
        "title": "Founder interview",
        "content": "We lost most trials in the first week.",
        "summary": "Onboarding drives churn",
        "insights": ["first week matters"],
        "tags": ["churn", "onboarding"],
        "source": "https://example.com/interview",
    }
    resp = await client.post("/api/v1/sources", json=payload, headers=headers)
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["type"] == "text"
    assert data["title"] == "Founder interview"
    assert data["insights"] == ["first week matters"]
    assert data["tags"] == ["churn", "onboarding"]
    assert data["user_id"] == str(admin_user.id)
    assert data["workspace_id"] == str(workspace.id)


async def test_create_source_requires_content(client: AsyncClient, admin_auth, workspace):
    _, headers = admin_auth
    payload = {"workspace_id": str(workspace.id), "title": "Empty", "content": ""}
    resp = await client.post("/api/v1/sources", json=payload, headers=headers)
    assert resp.status_code == 422


async def test_viewer_cannot_create_source(client: AsyncClient, db_session: AsyncSession, workspace):
    viewer = await create_user(db_session, UserRole.VIEWER)
    payload = {"workspace_id": str(workspace.id), "title": "Notes", "content": "text"}
    resp = await client.post("/api/v1/sources", json=payload, headers=auth_headers(viewer))
    assert resp.status_code == 403


async def test_list_sources_newest_first_and_scoped(
    client: AsyncClient, db_session: AsyncSession, admin_auth, workspace,
):
    admin_user, headers = admin_auth
    now = datetime.now(timezone.utc)
    await create_source(db_session, workspace, admin_user, title="Older", created_at=now - timedelta(days=2))
    await create_source(db_session, workspace, admin_user, title="Newer", created_at=now)
    other_ws = await create_workspace(db_session, admin_user)
    await create_source(db_session, other_ws, admin_user, title="Elsewhere")

    resp = await client.get("/api/v1/sources", params={"workspace_id": str(workspace.id)}, headers=headers)
    assert resp.status_code == 200
    body = resp.json()
    assert [s["title"] for s in body["data"]] == ["Newer", "Older"]
    assert body["pagination"]["total"] == 2


async def test_list_sources_search(client: AsyncClient, db_session: AsyncSession, admin_auth, workspace):
    admin_user, headers = admin_auth
    await create_source(db_session, workspace, admin_user, title="Pricing survey")
    await create_source(db_session, workspace, admin_user, title="Hiring notes")
    resp = await client.get(
        "/api/v1/sources", params={"workspace_id": str(workspace.id), "search": "pricing"}, headers=headers,
    )
    assert [s["title"] for s in resp.json()["data"]] == ["Pricing survey"]


async def test_list_sources_non_member(client: AsyncClient, writer_auth, workspace):
    _, headers = writer_auth
    resp = await client.get("/api/v1/sources", params={"workspace_id": str(workspace.id)}, headers=headers)
    assert resp.status_code == 403


async def test_get_source(client: AsyncClient, db_session: AsyncSession, admin_auth, workspace):
    admin_user, headers = admin_auth
    source = await create_source(db_session, workspace, admin_user)
    resp = await client.get(f"/api/v1/sources/{source.id}", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["title"] == "Interview notes"


async def test_get_source_not_found(client: AsyncClient, admin_auth):
    _, headers = admin_auth
    resp = await client.get(f"/api/v1/sources/{uuid.uuid4()}", headers=headers)
    assert resp.status_code == 404


async def test_get_source_non_member(client: AsyncClient, db_session: AsyncSession, admin_auth, writer_auth, workspace):
    admin_user, _ = admin_auth
    _, writer_headers = writer_auth
    source = await create_source(db_session, workspace, admin_user)
    resp = await client.get(f"/api/v1/sources/{source.id}", headers=writer_headers)
    assert resp.status_code == 403


async def test_update_source(client: AsyncClient, db_session: AsyncSession, admin_auth, workspace):
    admin_user, headers = admin_auth
    source = await create_source(db_session, workspace, admin_user)
    resp = await client.put(
        f"/api/v1/sources/{source.id}",
        json={"summary": "Onboarding time is the main complaint", "tags": ["research", "onboarding"]},
        headers=headers,
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["summary"] == "Onboarding time is the main complaint"
    assert data["tags"] == ["research", "onboarding"]
    assert data["title"] == "Interview notes"


async def test_delete_source_detaches_it_from_content(
    client: AsyncClient, db_session: AsyncSession, admin_auth, workspace,
):
    admin_user, headers = admin_auth
    kept = await create_source(db_session, workspace, admin_user, title="Kept")
    dropped = await create_source(db_session, workspace, admin_user, title="Dropped")
    created = await client.post("/api/v1/contents", json={
        "workspace_id": str(workspace.id),
        "title": "Research roundup",
        "platform": "newsletter",
        "source_ids": [str(kept.id), str(dropped.id)],
    }, headers=headers)
    content_id = created.json()["data"]["id"]

    deleted = await client.delete(f"/api/v1/sources/{dropped.id}", headers=headers)
    assert deleted.status_code == 200

    missing = await client.get(f"/api/v1/sources/{dropped.id}", headers=headers)
    assert missing.status_code == 404
    content = await client.get(f"/api/v1/contents/{content_id}", headers=headers)
    assert content.json()["data"]["source_ids"] == [str(kept.id)]
