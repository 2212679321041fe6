"""Tests for role-based access rules."""

import pytest

from src.tracker.core import access_policy
from src.tracker.models import Project, Role, User

pytestmark = pytest.mark.unit


def make_user(user_id: int, role: Role) -> User:
    return User(id=user_id, name="u", email=f"u{user_id}@example.com", password_hash="x", role=role.value)


ADMIN = make_user(1, Role.ADMIN)
MANAGER = make_user(2, Role.PROJECT_MANAGER)
TEKKIE = make_user(3, Role.TEKKIE)
OTHER_TEKKIE = make_user(4, Role.TEKKIE)


class TestProjectVisibility:
    """ADMIN and PROJECT_MANAGER see everything; TEKKIE only their teams."""

    @pytest.mark.parametrize("user", [ADMIN, MANAGER])
    def test_managers_see_every_project(self, user: User):
        assert access_policy.can_view_project(user, [])

    def test_tekkie_sees_own_team(self):
        assert access_policy.can_view_project(TEKKIE, [TEKKIE.id])

    def test_tekkie_does_not_see_other_teams(self):
        assert not access_policy.can_view_project(TEKKIE, [OTHER_TEKKIE.id])

    def test_posting_follows_visibility(self):
        assert access_policy.can_post_message(TEKKIE, {3, 4})
        assert not access_policy.can_post_message(TEKKIE, set())


class TestRestrictedFields:
    def test_creator_may_edit(self):
        project = Project(created_by=MANAGER.id)
        assert access_policy.can_edit_restricted_fields(MANAGER, project)

    def test_admin_may_edit_any(self):
        project = Project(created_by=MANAGER.id)
        assert access_policy.can_edit_restricted_fields(ADMIN, project)

    def test_other_manager_may_not_edit(self):
        other_manager = make_user(9, Role.PROJECT_MANAGER)
        project = Project(created_by=MANAGER.id)
        assert not access_policy.can_edit_restricted_fields(other_manager, project)


class TestRoleGates:
    def test_only_admin_manages_users(self):
        assert access_policy.can_manage_users(ADMIN)
        assert not access_policy.can_manage_users(MANAGER)
        assert not access_policy.can_manage_users(TEKKIE)

    def test_project_meta_needs_manager_role(self):
        assert access_policy.can_manage_project_meta(ADMIN)
        assert access_policy.can_manage_project_meta(MANAGER)
        assert not access_policy.can_manage_project_meta(TEKKIE)

    def test_client_details_hidden_from_tekkies(self):
        assert access_policy.can_view_client_details(MANAGER)
        assert not access_policy.can_view_client_details(TEKKIE)


class TestNotes:
    def test_tekkie_edits_own_note_only(self):
        assert access_policy.can_edit_note(TEKKIE, TEKKIE.id)
        assert not access_policy.can_edit_note(TEKKIE, OTHER_TEKKIE.id)

    @pytest.mark.parametrize("user", [ADMIN, MANAGER])
    def test_managers_edit_any_note(self, user: User):
        assert access_policy.can_edit_note(user, TEKKIE.id)


def test_unknown_role_is_rejected():
    user = User(id=5, name="x", email="x@example.com", password_hash="x", role="GUEST")
    with pytest.raises(ValueError):
        access_policy.can_view_project(user, [5])
