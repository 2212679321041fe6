"""Integration tests for projects: visibility, editing, team and deletion."""

from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.tracker.models import (
    Project,
    ProjectMeeting,
    ProjectMembership,
    ProjectMessage,
    User,
    UserNote,
    utc_now,
)
from tests.factories import ProjectMeetingFactory, ProjectMessageFactory, UserNoteFactory
from tests.helpers import add_member, create_project, project_payload

pytestmark = pytest.mark.integration


async def kept_membership_id(db_session: AsyncSession, project_id: int, user_id: int) -> int:
    result = await db_session.execute(
        select(ProjectMembership.id).where(
            ProjectMembership.project_id == project_id,
            ProjectMembership.user_id == user_id,
        )
    )
    return result.scalar_one()


class TestCreateProject:
    async def test_manager_creates_project(
        self, manager_client: AsyncClient, manager_user: User, tekkie_user: User
    ):
        response = await manager_client.post(
            "/api/projects", json=project_payload(team=[manager_user.id, tekkie_user.id])
        )

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "active"
        assert body["createdBy"] == manager_user.id
        assert body["createdByName"] == manager_user.name
        assert body["updatedBy"] is None
        assert sorted(body["team"]) == sorted([manager_user.id, tekkie_user.id])
        assert {member["id"] for member in body["teamMembers"]} == set(body["team"])
        assert body["techStack"]["backend"] == "FastAPI"
        assert body["messages"] == []
        assert 0 <= body["progress"] <= 100

    async def test_tekkie_cannot_create(self, tekkie_client: AsyncClient):
        response = await tekkie_client.post("/api/projects", json=project_payload())
        assert response.status_code == 403

    async def test_unknown_team_member_is_400(self, manager_client: AsyncClient):
        response = await manager_client.post("/api/projects", json=project_payload(team=[9999]))
        assert response.status_code == 400
        assert "9999" in response.json()["detail"]

    async def test_end_before_start_is_400(self, manager_client: AsyncClient):
        response = await manager_client.post(
            "/api/projects",
            json=project_payload(startDate="2024-06-01T00:00:00Z", endDate="2024-01-01T00:00:00Z"),
        )
        assert response.status_code == 400
        assert "endDate must not be before startDate" in response.json()["detail"]

    async def test_missing_required_field_is_400(self, manager_client: AsyncClient):
        payload = project_payload()
        del payload["requirements"]
        response = await manager_client.post("/api/projects", json=payload)
        assert response.status_code == 400
        assert response.json()["detail"].startswith("Validation error: requirements")


class TestVisibility:
    async def test_tekkie_sees_project_only_after_joining(
        self,
        tekkie_client: AsyncClient,
        db_session: AsyncSession,
        manager_user: User,
        tekkie_user: User,
    ):
        project = await create_project(db_session, manager_user)

        assert (await tekkie_client.get(f"/api/projects/{project.id}")).status_code == 403

        await add_member(db_session, project, tekkie_user)

        response = await tekkie_client.get(f"/api/projects/{project.id}")
        assert response.status_code == 200
        assert tekkie_user.id in response.json()["team"]

    async def test_list_includes_every_project(
        self, tekkie_client: AsyncClient, db_session: AsyncSession, manager_user: User
    ):
        first = await create_project(db_session, manager_user)
        second = await create_project(
            db_session, manager_user, created_at=utc_now() + timedelta(seconds=5)
        )

        response = await tekkie_client.get("/api/projects")

        assert response.status_code == 200
        ids = [project["id"] for project in response.json()]
        # Newest first
        assert ids == [second.id, first.id]
        assert all("messages" not in project for project in response.json())

    async def test_client_details_hidden_from_tekkies(
        self,
        tekkie_client: AsyncClient,
        manager_client: AsyncClient,
        db_session: AsyncSession,
        manager_user: User,
        tekkie_user: User,
    ):
        project = await create_project(db_session, manager_user, team=[tekkie_user])

        as_tekkie = (await tekkie_client.get(f"/api/projects/{project.id}")).json()
        as_manager = (await manager_client.get(f"/api/projects/{project.id}")).json()

        for field in ("clientContact", "clientPhone", "clientEmail", "estimatedBudget"):
            assert as_tekkie[field] is None
            assert as_manager[field] is not None
        assert as_tekkie["client"] == as_manager["client"]

    async def test_unknown_project_is_404(self, manager_client: AsyncClient):
        response = await manager_client.get("/api/projects/9999")
        assert response.status_code == 404
        assert response.json()["detail"] == "Project not found"

    async def test_detail_includes_messages(
        self, manager_client: AsyncClient, db_session: AsyncSession, manager_user: User
    ):
        project = await create_project(db_session, manager_user)
        db_session.add(
            ProjectMessageFactory.build(
                project_id=project.id, user_id=manager_user.id, content="Kickoff done"
            )
        )
        await db_session.commit()

        body = (await manager_client.get(f"/api/projects/{project.id}")).json()

        assert [m["content"] for m in body["messages"]] == ["Kickoff done"]
        assert body["messages"][0]["userName"] == manager_user.name


class TestUpdateProject:
    async def test_requirements_only_editable_by_creator(
        self,
        db_session: AsyncSession,
        login_as,
        manager_user: User,
    ):
        other_manager = User(
            name="Second PM",
            email="second.pm@example.com",
            password_hash=manager_user.password_hash,
            role="PROJECT_MANAGER",
        )
        db_session.add(other_manager)
        await db_session.commit()
        project = await create_project(db_session, manager_user)
        creator = await login_as(manager_user)
        other = await login_as(other_manager)

        denied = await other.patch(
            f"/api/projects/{project.id}", json={"requirements": "Rewritten"}
        )
        assert denied.status_code == 403

        allowed = await creator.patch(
            f"/api/projects/{project.id}", json={"requirements": "Rewritten"}
        )
        assert allowed.status_code == 200
        assert allowed.json()["requirements"] == "Rewritten"
        assert allowed.json()["updatedBy"] == manager_user.id
        assert allowed.json()["updatedByName"] == manager_user.name

    async def test_admin_may_edit_requirements(
        self, admin_client: AsyncClient, db_session: AsyncSession, manager_user: User
    ):
        project = await create_project(db_session, manager_user)
        response = await admin_client.patch(
            f"/api/projects/{project.id}", json={"suggestions": "Add tests"}
        )
        assert response.status_code == 200
        assert response.json()["suggestions"] == "Add tests"

    async def test_tekkie_cannot_edit_project_details(
        self,
        tekkie_client: AsyncClient,
        db_session: AsyncSession,
        manager_user: User,
        tekkie_user: User,
    ):
        project = await create_project(db_session, manager_user, team=[tekkie_user])
        response = await tekkie_client.patch(
            f"/api/projects/{project.id}", json={"status": "completed"}
        )
        assert response.status_code == 403

    async def test_team_is_replaced(
        self,
        manager_client: AsyncClient,
        db_session: AsyncSession,
        manager_user: User,
        tekkie_user: User,
        other_tekkie: User,
    ):
        third = User(
            name="Charlie Dev",
            email="charlie@example.com",
            password_hash=manager_user.password_hash,
            role="TEKKIE",
        )
        db_session.add(third)
        await db_session.commit()
        project = await create_project(db_session, manager_user, team=[tekkie_user, third])
        kept_before = await kept_membership_id(db_session, project.id, tekkie_user.id)

        response = await manager_client.patch(
            f"/api/projects/{project.id}", json={"team": [tekkie_user.id, other_tekkie.id]}
        )

        assert response.status_code == 200
        assert sorted(response.json()["team"]) == sorted([tekkie_user.id, other_tekkie.id])
        result = await db_session.execute(
            select(ProjectMembership.user_id).where(ProjectMembership.project_id == project.id)
        )
        assert sorted(result.scalars().all()) == sorted([tekkie_user.id, other_tekkie.id])

        # The member on both teams keeps its original row
        assert await kept_membership_id(db_session, project.id, tekkie_user.id) == kept_before

    async def test_bad_team_leaves_project_untouched(
        self,
        manager_client: AsyncClient,
        db_session: AsyncSession,
        manager_user: User,
        tekkie_user: User,
    ):
        project = await create_project(db_session, manager_user, team=[tekkie_user])

        response = await manager_client.patch(
            f"/api/projects/{project.id}", json={"name": "Renamed", "team": [9999]}
        )

        assert response.status_code == 400
        detail = (await manager_client.get(f"/api/projects/{project.id}")).json()
        assert detail["name"] == project.name
        assert detail["team"] == [tekkie_user.id]

    async def test_null_required_field_is_400(
        self, manager_client: AsyncClient, db_session: AsyncSession, manager_user: User
    ):
        project = await create_project(db_session, manager_user)
        response = await manager_client.patch(f"/api/projects/{project.id}", json={"name": None})
        assert response.status_code == 400
        assert response.json()["detail"] == "name cannot be null"

    async def test_end_before_existing_start_is_400(
        self, manager_client: AsyncClient, db_session: AsyncSession, manager_user: User
    ):
        project = await create_project(db_session, manager_user)
        before_start = (project.start_date - timedelta(days=1)).isoformat()
        response = await manager_client.patch(
            f"/api/projects/{project.id}", json={"endDate": before_start}
        )
        assert response.status_code == 400

    async def test_optional_field_can_be_cleared(
        self, manager_client: AsyncClient, db_session: AsyncSession, manager_user: User
    ):
        project = await create_project(db_session, manager_user, github_link="https://git.example.com/x")
        response = await manager_client.patch(
            f"/api/projects/{project.id}", json={"githubLink": None}
        )
        assert response.status_code == 200
        assert response.json()["githubLink"] is None

    async def test_update_unknown_project_is_404(self, manager_client: AsyncClient):
        response = await manager_client.patch("/api/projects/9999", json={"status": "completed"})
        assert response.status_code == 404


class TestDeleteProject:
    async def test_delete_leaves_no_orphans(
        self,
        manager_client: AsyncClient,
        db_session: AsyncSession,
        manager_user: User,
        tekkie_user: User,
    ):
        project = await create_project(db_session, manager_user, team=[tekkie_user])
        db_session.add(ProjectMessageFactory.build(project_id=project.id, user_id=tekkie_user.id))
        db_session.add(ProjectMeetingFactory.build(project_id=project.id))
        db_session.add(UserNoteFactory.build(project_id=project.id, user_id=tekkie_user.id))
        await db_session.commit()

        response = await manager_client.delete(f"/api/projects/{project.id}")

        assert response.status_code == 200
        assert response.json() == {"message": "Project deleted successfully"}
        for model in (ProjectMembership, ProjectMessage, ProjectMeeting, UserNote):
            result = await db_session.execute(
                select(func.count()).select_from(model).where(model.project_id == project.id)
            )
            assert result.scalar_one() == 0
        result = await db_session.execute(
            select(func.count()).select_from(Project).where(Project.id == project.id)
        )
        assert result.scalar_one() == 0

    async def test_tekkie_cannot_delete(
        self,
        tekkie_client: AsyncClient,
        db_session: AsyncSession,
        manager_user: User,
        tekkie_user: User,
    ):
        project = await create_project(db_session, manager_user, team=[tekkie_user])
        assert (await tekkie_client.delete(f"/api/projects/{project.id}")).status_code == 403

    async def test_delete_unknown_project_is_404(self, manager_client: AsyncClient):
        assert (await manager_client.delete("/api/projects/9999")).status_code == 404


class TestSummary:
    async def test_counts_by_status(
        self, tekkie_client: AsyncClient, db_session: AsyncSession, manager_user: User
    ):
        now = utc_now()
        # Ten days in, with slack so the request lands inside day ten
        halfway_start = now - timedelta(days=10) + timedelta(hours=1)
        await create_project(
            db_session,
            manager_user,
            start_date=halfway_start,
            end_date=halfway_start + timedelta(days=20),
        )
        await create_project(
            db_session,
            manager_user,
            status="completed",
            start_date=now - timedelta(days=40),
            end_date=now - timedelta(days=20),
        )
        await create_project(
            db_session,
            manager_user,
            status="delayed",
            start_date=now + timedelta(days=10),
            end_date=now + timedelta(days=20),
        )

        response = await tekkie_client.get("/api/projects/summary")

        assert response.status_code == 200
        # Progress: 50, 100 and 0
        assert response.json() == {
            "total": 3,
            "active": 1,
            "completed": 1,
            "delayed": 1,
            "averageProgress": 50,
        }

    async def test_empty_summary(self, tekkie_client: AsyncClient):
        response = await tekkie_client.get("/api/projects/summary")
        assert response.json()["total"] == 0
        assert response.json()["averageProgress"] == 0
