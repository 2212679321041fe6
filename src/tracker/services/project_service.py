"""Project service - projects, team membership and project activity.

Every permission decision goes through `core.access_policy`; every read is
enriched with team, progress and creator/updater names here.
"""

from collections.abc import Iterable
from datetime import datetime
from typing import Any

from pydantic.alias_generators import to_camel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.tracker.core import access_policy
from src.tracker.core.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from src.tracker.core.logging import get_logger
from src.tracker.core.progress import average_progress, calculate_progress
from src.tracker.models import (
    Project,
    ProjectMeeting,
    ProjectMessage,
    ProjectStatus,
    User,
    UserNote,
    utc_now,
)
from src.tracker.repositories import (
    MeetingRepository,
    MembershipRepository,
    MessageRepository,
    NoteRepository,
    ProjectRepository,
    UserRepository,
)
from src.tracker.schemas.project import (
    NON_COLUMN_FIELDS,
    RESTRICTED_FIELDS,
    MeetingCreate,
    MeetingRead,
    MessageRead,
    NoteRead,
    NoteUpsert,
    ProjectCreate,
    ProjectDetail,
    ProjectRead,
    ProjectSummary,
    ProjectUpdate,
)
from src.tracker.schemas.user import UserRead

logger = get_logger(__name__)

CLIENT_DETAIL_FIELDS = ("client_contact", "client_phone", "client_email", "estimated_budget")

# Columns declared NOT NULL; a patch may change them but not clear them
NON_NULLABLE_FIELDS = frozenset(
    {"name", "client", "start_date", "end_date", "manager", "requirements", "status"}
)


class ProjectService:
    def __init__(
        self,
        project_repo: ProjectRepository,
        membership_repo: MembershipRepository,
        user_repo: UserRepository,
        message_repo: MessageRepository,
        meeting_repo: MeetingRepository,
        note_repo: NoteRepository,
        session: AsyncSession,
    ):
        self.project_repo = project_repo
        self.membership_repo = membership_repo
        self.user_repo = user_repo
        self.message_repo = message_repo
        self.meeting_repo = meeting_repo
        self.note_repo = note_repo
        self.session = session

    # Lookups and enrichment

    async def _get_project_or_404(self, project_id: int) -> Project:
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFoundError("Project not found")
        return project

    async def _get_viewable(self, project_id: int, actor: User) -> tuple[Project, list[int]]:
        """Project and its team ids; 404 if absent, 403 if the actor may not see it."""
        project = await self._get_project_or_404(project_id)
        team_ids = await self.membership_repo.get_team_ids(project_id)
        if not access_policy.can_view_project(actor, team_ids):
            raise ForbiddenError("You must be part of the project team")
        return project, team_ids

    async def _validate_user_ids(self, user_ids: Iterable[int]) -> set[int]:
        wanted = set(user_ids)
        found = {user.id for user in await self.user_repo.get_many(wanted)}
        missing = sorted(wanted - found)
        if missing:
            raise ValidationError(f"Unknown team member ids: {missing}")
        return wanted

    def _to_read_fields(
        self,
        project: Project,
        team_ids: list[int],
        users: dict[int, User],
        actor: User,
        now: datetime,
    ) -> dict[str, Any]:
        data = project.model_dump()
        data["team"] = team_ids
        data["team_members"] = [
            UserRead.model_validate(users[user_id]) for user_id in team_ids if user_id in users
        ]
        data["progress"] = calculate_progress(project.start_date, project.end_date, now)
        creator = users.get(project.created_by)
        data["created_by_name"] = creator.name if creator else None
        updater = users.get(project.updated_by) if project.updated_by is not None else None
        data["updated_by_name"] = updater.name if updater else None
        if not access_policy.can_view_client_details(actor):
            for field in CLIENT_DETAIL_FIELDS:
                data[field] = None
        return data

    async def _load_users_for(self, projects: list[Project], teams: dict[int, list[int]]) -> dict[int, User]:
        user_ids: set[int] = set()
        for project in projects:
            user_ids.update(teams.get(project.id, []))  # type: ignore[arg-type]
            user_ids.add(project.created_by)
            if project.updated_by is not None:
                user_ids.add(project.updated_by)
        return {user.id: user for user in await self.user_repo.get_many(user_ids)}  # type: ignore[misc]

    async def _to_detail(self, project: Project, actor: User) -> ProjectDetail:
        teams = await self.membership_repo.get_team_map([project.id])  # type: ignore[list-item]
        users = await self._load_users_for([project], teams)
        data = self._to_read_fields(project, teams[project.id], users, actor, utc_now())  # type: ignore[index]
        data["messages"] = await self._messages_for(project.id)  # type: ignore[arg-type]
        return ProjectDetail.model_validate(data)

    # Projects

    async def list_projects(self, actor: User) -> list[ProjectRead]:
        """Every project, enriched; no message stream in the list view."""
        projects = await self.project_repo.list_all()
        teams = await self.membership_repo.get_team_map(p.id for p in projects)  # type: ignore[misc]
        users = await self._load_users_for(projects, teams)
        now = utc_now()
        return [
            ProjectRead.model_validate(
                self._to_read_fields(project, teams[project.id], users, actor, now)  # type: ignore[index]
            )
            for project in projects
        ]

    async def get_project(self, project_id: int, actor: User) -> ProjectDetail:
        project, _ = await self._get_viewable(project_id, actor)
        return await self._to_detail(project, actor)

    async def summary(self) -> ProjectSummary:
        """Status counts and mean progress across all projects."""
        projects = await self.project_repo.list_all()
        now = utc_now()
        counts = {status: 0 for status in ProjectStatus}
        for project in projects:
            counts[ProjectStatus(project.status)] += 1
        return ProjectSummary(
            total=len(projects),
            active=counts[ProjectStatus.ACTIVE],
            completed=counts[ProjectStatus.COMPLETED],
            delayed=counts[ProjectStatus.DELAYED],
            average_progress=average_progress(
                [calculate_progress(p.start_date, p.end_date, now) for p in projects]
            ),
        )

    async def create_project(self, data: ProjectCreate, actor: User) -> ProjectDetail:
        """New projects always start `active`, owned by the creating user."""
        team = await self._validate_user_ids(data.team)
        project = Project(
            **data.model_dump(exclude={"team", "tech_stack"}),
            tech_stack=data.tech_stack.model_dump(by_alias=True) if data.tech_stack else None,
            status=ProjectStatus.ACTIVE.value,
            created_by=actor.id,  # type: ignore[arg-type]
        )
        try:
            self.project_repo.add(project)
            await self.session.flush()
            self.membership_repo.add_members(project.id, sorted(team))  # type: ignore[arg-type]
            await self.session.commit()
            await self.session.refresh(project)
        except Exception:
            await self.session.rollback()
            raise
        logger.info("Project created", project_id=project.id, team_size=len(team))
        return await self._to_detail(project, actor)

    async def update_project(self, project_id: int, patch: ProjectUpdate, actor: User) -> ProjectDetail:
        """Apply a partial update and reconcile the team in one transaction.

        Raises:
            NotFoundError: no such project.
            ForbiddenError: requirements/suggestions by someone other than the
                creator or an admin, or any other field by a non-manager.
            ValidationError: null for a required field, endDate before
                startDate, or unknown team member ids.
        """
        project = await self._get_project_or_404(project_id)
        fields = set(patch.model_fields_set)

        restricted = fields & RESTRICTED_FIELDS
        if restricted and not access_policy.can_edit_restricted_fields(actor, project):
            raise ForbiddenError("Only the project creator can edit requirements and suggestions")
        if (fields - RESTRICTED_FIELDS or not fields) and not access_policy.can_manage_project_meta(
            actor
        ):
            raise ForbiddenError("Only admins and project managers can edit project details")

        for field in sorted(fields & NON_NULLABLE_FIELDS):
            if getattr(patch, field) is None:
                raise ValidationError(f"{to_camel(field)} cannot be null")

        for field in fields - NON_COLUMN_FIELDS:
            value = getattr(patch, field)
            if field == "tech_stack" and value is not None:
                value = value.model_dump(by_alias=True)
            elif field == "status":
                value = value.value
            setattr(project, field, value)

        if project.end_date < project.start_date:
            raise ValidationError("endDate must not be before startDate")

        project.updated_at = utc_now()
        project.updated_by = actor.id

        desired_team: set[int] | None = None
        if "team" in fields and patch.team is not None:
            desired_team = await self._validate_user_ids(patch.team)

        try:
            self.project_repo.add(project)
            if desired_team is not None:
                current = set(await self.membership_repo.get_team_ids(project_id))
                await self.membership_repo.remove_members(project_id, current - desired_team)
                self.membership_repo.add_members(project_id, sorted(desired_team - current))
            await self.session.commit()
            await self.session.refresh(project)
        except Exception:
            await self.session.rollback()
            raise
        logger.info("Project updated", project_id=project_id, fields=sorted(fields))
        return await self._to_detail(project, actor)

    async def delete_project(self, project_id: int) -> None:
        await self._get_project_or_404(project_id)
        try:
            await self.project_repo.delete_cascade(project_id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        logger.info("Project deleted", project_id=project_id)

    # Messages

    async def _messages_for(self, project_id: int) -> list[MessageRead]:
        rows = await self.message_repo.list_for_project(project_id)
        return [
            MessageRead.model_validate({**message.model_dump(), "user_name": user_name})
            for message, user_name in rows
        ]

    async def list_messages(self, project_id: int, actor: User) -> list[MessageRead]:
        await self._get_viewable(project_id, actor)
        return await self._messages_for(project_id)

    async def add_message(self, project_id: int, actor: User, content: str) -> MessageRead:
        await self._get_project_or_404(project_id)
        team_ids = await self.membership_repo.get_team_ids(project_id)
        if not access_policy.can_post_message(actor, team_ids):
            raise ForbiddenError("You must be part of the project team")

        message = ProjectMessage(project_id=project_id, user_id=actor.id, content=content)  # type: ignore[arg-type]
        try:
            self.message_repo.add(message)
            await self.session.commit()
            await self.session.refresh(message)
        except Exception:
            await self.session.rollback()
            raise
        return MessageRead.model_validate({**message.model_dump(), "user_name": actor.name})

    # Meetings

    async def list_meetings(self, project_id: int, actor: User) -> list[MeetingRead]:
        await self._get_viewable(project_id, actor)
        meetings = await self.meeting_repo.list_for_project(project_id)
        return [MeetingRead.model_validate(meeting) for meeting in meetings]

    async def add_meeting(self, project_id: int, actor: User, data: MeetingCreate) -> MeetingRead:
        await self._get_project_or_404(project_id)
        team_ids = await self.membership_repo.get_team_ids(project_id)
        if not access_policy.can_post_message(actor, team_ids):
            raise ForbiddenError("You must be part of the project team")

        meeting = ProjectMeeting(project_id=project_id, date=data.date, feedback=data.feedback)
        try:
            self.meeting_repo.add(meeting)
            await self.session.commit()
            await self.session.refresh(meeting)
        except Exception:
            await self.session.rollback()
            raise
        return MeetingRead.model_validate(meeting)

    # Notes

    async def _check_note_target(self, project_id: int, user_id: int, actor: User) -> None:
        await self._get_viewable(project_id, actor)
        if await self.user_repo.get_by_id(user_id) is None:
            raise NotFoundError("User not found")

    async def get_note(self, project_id: int, user_id: int, actor: User) -> NoteRead:
        """The stored note, or an empty one if the user has not written any."""
        await self._check_note_target(project_id, user_id, actor)
        note = await self.note_repo.get_for(project_id, user_id)
        if note is None:
            return NoteRead(project_id=project_id, user_id=user_id)
        return NoteRead.model_validate(note)

    async def upsert_note(
        self, project_id: int, user_id: int, actor: User, data: NoteUpsert
    ) -> NoteRead:
        """Update the (project, user) note if present, else insert it."""
        if not access_policy.can_edit_note(actor, user_id):
            raise ForbiddenError("You can only edit your own notes")
        await self._check_note_target(project_id, user_id, actor)

        changes = data.model_dump(exclude_unset=True)
        note = await self.note_repo.get_for(project_id, user_id)
        if note is None:
            note = UserNote(project_id=project_id, user_id=user_id, **changes)
        else:
            for field, value in changes.items():
                setattr(note, field, value)
        try:
            self.note_repo.add(note)
            await self.session.commit()
            await self.session.refresh(note)
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError("Note was created concurrently; retry the request") from e
        except Exception:
            await self.session.rollback()
            raise
        return NoteRead.model_validate(note)
