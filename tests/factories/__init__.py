"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import UserFactory, ProjectFactory, ...
"""

from tests.factories.base import BaseFactory, utc_now
from tests.factories.project import (
    ProjectFactory,
    ProjectMeetingFactory,
    ProjectMembershipFactory,
    ProjectMessageFactory,
    UserNoteFactory,
)
from tests.factories.user import (
    DEFAULT_TEST_PASSWORD,
    UserFactory,
    UserSessionFactory,
    default_password_hash,
)

__all__ = [
    # Base
    "BaseFactory",
    "utc_now",
    # User
    "UserFactory",
    "UserSessionFactory",
    "DEFAULT_TEST_PASSWORD",
    "default_password_hash",
    # Project
    "ProjectFactory",
    "ProjectMembershipFactory",
    "ProjectMessageFactory",
    "ProjectMeetingFactory",
    "UserNoteFactory",
]
